"""Domain enums for typedoc-ingest."""
from enum import Enum, IntEnum


class ReflectionKind(IntEnum):
    """TypeDoc reflection kinds (bit flags as found in the JSON output)."""
    PROJECT = 1
    MODULE = 2
    NAMESPACE = 4
    ENUM = 8
    ENUM_MEMBER = 16
    VARIABLE = 32
    FUNCTION = 64
    CLASS = 128
    INTERFACE = 256
    CONSTRUCTOR = 512
    PROPERTY = 1024
    METHOD = 2048
    CALL_SIGNATURE = 4096
    INDEX_SIGNATURE = 8192
    CONSTRUCTOR_SIGNATURE = 16384
    PARAMETER = 32768
    TYPE_LITERAL = 65536
    TYPE_PARAMETER = 131072
    ACCESSOR = 262144
    GET_SIGNATURE = 524288
    SET_SIGNATURE = 1048576
    TYPE_ALIAS = 2097152
    REFERENCE = 4194304


class TypeKind(str, Enum):
    """Type expression variants understood by the type walker."""
    INTRINSIC = "intrinsic"
    LITERAL = "literal"
    REFERENCE = "reference"
    REFLECTION = "reflection"
    ARRAY = "array"
    UNION = "union"
    INTERSECTION = "intersection"
    TYPE_OPERATOR = "typeOperator"
    TUPLE = "tuple"
    CONDITIONAL = "conditional"
    MAPPED = "mapped"
    INDEXED_ACCESS = "indexedAccess"


class PageType(str, Enum):
    """Page record types."""
    MARKDOWN = "markdown"
    TYPEDOC = "typedoc"
    TSDOC = "tsdoc"


class ReflectionPageKind(str, Enum):
    """What a generated reflection page documents."""
    FUNCTION = "function"
    CONSTANTS = "constants"
