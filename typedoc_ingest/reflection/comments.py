"""Comment, category and summary lookups on TypeDoc reflections."""

from typing import Any

from typedoc_ingest.domain.enums import ReflectionKind


def find_category(container: dict[str, Any], ref_id: int) -> str | None:
    """Find the category title of a reflection within its container.

    Looks for the group listing ``ref_id``, then for the category inside
    that group listing it. Falls back to the container's own categories
    (TypeDoc emits those when categories are not nested in groups).

    Args:
        container: Reflection holding ``groups`` / ``categories``.
        ref_id: Id of the reflection to categorize.

    Returns:
        The category title or None.
    """
    for group in container.get('groups') or []:
        if ref_id not in _child_ids(group):
            continue
        category = _find_listing(group.get('categories'), ref_id)
        if category:
            return category.get('title')
        break

    category = _find_listing(container.get('categories'), ref_id)
    return category.get('title') if category else None


def find_summary(reflection: dict[str, Any]) -> str | None:
    """Find a reflection's summary."""
    return find_tag(reflection, '@summary')


def find_description(reflection: dict[str, Any]) -> str | None:
    """Find a reflection's description."""
    return find_tag(reflection, '@description')


def find_examples(reflection: dict[str, Any]) -> list[str]:
    """Find a reflection's examples."""
    return find_tags(reflection, '@example')


def find_tags(reflection: dict[str, Any], tag: str) -> list[str]:
    """Join the content of every block tag named ``tag``."""
    comment = reflection.get('comment') or {}
    return [join_tag(b) for b in comment.get('blockTags') or [] if b.get('tag') == tag]


def find_tag(reflection: dict[str, Any], tag: str) -> str | None:
    """Join the content of the first block tag named ``tag``.

    For ``@summary`` the comment's summary text takes precedence.
    """
    comment = reflection.get('comment') or {}
    if tag == '@summary' and comment.get('summary'):
        return join_comment_parts(comment['summary'])

    for block in comment.get('blockTags') or []:
        if block.get('tag') == tag:
            return join_tag(block)
    return None


def find_fn(container: dict[str, Any], name: str | None = None) -> dict[str, Any] | None:
    """Find the exported function child of a module reflection.

    Args:
        container: Module reflection.
        name: Function name to match; defaults to the module's own name.
    """
    fn_name = container.get('name') if name is None else name
    for child in container.get('children') or []:
        if child.get('kind') == ReflectionKind.FUNCTION and child.get('name') == fn_name:
            return child
    return None


def find_fn_summary(fn: dict[str, Any]) -> str | None:
    return find_fn_tag(fn, '@summary')


def find_fn_description(fn: dict[str, Any]) -> str | None:
    return find_fn_tag(fn, '@description')


def find_fn_returns(fn: dict[str, Any]) -> str | None:
    return find_fn_tag(fn, '@returns')


def find_fn_examples(fn: dict[str, Any]) -> list[str]:
    return find_fn_tags(fn, '@example')


def find_fn_tags(fn: dict[str, Any], tag: str) -> list[str]:
    """Collect ``tag`` contents across all of a function's signatures."""
    found: list[str] = []
    for signature in fn.get('signatures') or []:
        found.extend(find_tags(signature, tag))
    return found


def find_fn_tag(fn: dict[str, Any], tag: str) -> str | None:
    """Return the first non-empty ``tag`` content among a function's signatures."""
    for signature in fn.get('signatures') or []:
        found = find_tag(signature, tag)
        if found:
            return found
    return None


def join_tag(block: dict[str, Any]) -> str:
    return join_comment_parts(block.get('content') or [])


def join_comment_parts(parts: list[dict[str, Any]]) -> str:
    return ''.join(p.get('text', '') for p in parts)


def _child_ids(listing: dict[str, Any]) -> list[int]:
    # Groups and categories list their members by id in TypeDoc JSON
    return listing.get('children') or []


def _find_listing(listings: list[dict[str, Any]] | None, ref_id: int) -> dict[str, Any] | None:
    for listing in listings or []:
        if ref_id in _child_ids(listing):
            return listing
    return None
