"""Tests for reference recovery."""

import copy
import logging

import pytest

from typedoc_ingest.reflection.index import build_index
from typedoc_ingest.reflection.recovery import (
    ReferenceRecovery,
    collect_refs,
    complete_reflection,
    recover,
)
from typedoc_ingest.reflection.type_walker import UnsupportedTypeKindError, walk_type


def module(project, name):
    return next(c for c in project['children'] if c['name'] == name)


def ids(reflections):
    return [r['id'] for r in reflections]


def reachable_refs(reflection):
    """All reference ids reachable from a reflection's subtree."""
    return set(collect_refs(reflection))


def subtree_ids(reflection):
    return set(build_index(reflection)) | {reflection['id']}


class TestCollectRefs:
    """Tests for collect_refs."""

    def test_signature_refs(self, project):
        assert collect_refs(module(project, 'addDays')) == [16, 6, 11]

    def test_child_type_refs(self, project):
        assert collect_refs(module(project, 'types')) == [13]

    def test_signature_return_type(self):
        fn = {'id': 1, 'signatures': [{'id': 2, 'type': {'type': 'reference', 'target': 9}}]}
        assert collect_refs(fn) == [9]

    def test_inherited_from_and_extended_types_are_direct_edges(self):
        reflection = {
            'id': 1,
            'inheritedFrom': {'type': 'reference', 'target': 3},
            'extendedTypes': [
                {'type': 'reference', 'target': 4, 'typeArguments': [{'type': 'reference', 'target': 5}]},
            ],
        }
        # extendedTypes are not walked, so their type arguments are not edges
        assert collect_refs(reflection) == [3, 4]

    def test_type_parameter_defaults(self):
        reflection = {
            'id': 1,
            'typeParameters': [{'id': 2, 'type': {'type': 'reference', 'target': 7},
                                'default': {'type': 'reference', 'target': 8}}],
        }
        assert collect_refs(reflection) == [7, 8]

    def test_deduplicates(self):
        reflection = {
            'id': 1,
            'children': [
                {'id': 2, 'type': {'type': 'reference', 'target': 9}},
                {'id': 3, 'type': {'type': 'reference', 'target': 9}},
            ],
        }
        assert collect_refs(reflection) == [9]

    def test_unsupported_kind_propagates(self):
        reflection = {'id': 1, 'type': {'type': 'predicate', 'name': 'x'}}
        with pytest.raises(UnsupportedTypeKindError):
            collect_refs(reflection)


class TestRecover:
    """Tests for the recovery fixpoint."""

    def test_recovers_sibling_module_type(self, project):
        root = module(project, 'addDays')
        recovered = recover(root, build_index(root), build_index(project))
        assert 11 in ids(recovered)

    def test_recovers_transitive_references(self, project):
        root = module(project, 'addDays')
        recovered = recover(root, build_index(root), build_index(project))
        assert ids(recovered) == [16, 11, 13]

    def test_recovered_nodes_are_global_nodes(self, project):
        global_index = build_index(project)
        root = module(project, 'addDays')
        recovered = recover(root, build_index(root), global_index)
        assert all(r is global_index[r['id']] for r in recovered)

    def test_local_index_grows_with_descendants(self, project):
        root = module(project, 'addDays')
        local_index = build_index(root)
        recover(root, local_index, build_index(project))
        # Options' property (12) and Locale's property (14) come along
        assert {11, 12, 13, 14, 16} <= set(local_index)

    def test_fixpoint_is_idempotent(self, project):
        global_index = build_index(project)
        root = module(project, 'addDays')
        local_index = build_index(root)
        recover(root, local_index, global_index)
        assert recover(root, local_index, global_index) == []

    def test_completed_reflection_adds_nothing(self, project):
        global_index = build_index(project)
        root = module(project, 'addDays')
        completed = complete_reflection(root, recover(root, build_index(root), global_index))
        assert recover(completed, build_index(completed), global_index) == []

    def test_self_contained(self, project):
        global_index = build_index(project)
        for root in project['children']:
            completed = complete_reflection(root, recover(root, build_index(root), global_index))
            present = subtree_ids(completed)
            for ref_id in reachable_refs(completed):
                if ref_id in global_index:
                    assert ref_id in present

    def test_no_duplicates(self, project):
        global_index = build_index(project)
        for root in project['children']:
            local_ids = set(build_index(root))
            recovered = recover(root, build_index(root), global_index)
            assert len(ids(recovered)) == len(set(ids(recovered)))
            assert not local_ids & set(ids(recovered))

    def test_local_references_not_recovered(self, project):
        root = module(project, 'types')
        assert recover(root, build_index(root), build_index(project)) == []

    def test_dangling_reference_skipped(self, project):
        root = module(project, 'setDefaultOptions')
        recovered = recover(root, build_index(root), build_index(project))
        assert recovered == []

    def test_unresolved_ids_recorded(self, project):
        root = module(project, 'setDefaultOptions')
        recovery = ReferenceRecovery(root, build_index(project))
        recovery.run()
        assert recovery.unresolved == {999}

    def test_signature_type_parameter_is_unresolved(self, project):
        # Type parameters hang off signatures, not children, so the index never holds them
        root = module(project, 'addDays')
        recovery = ReferenceRecovery(root, build_index(project))
        recovery.run()
        assert 6 not in build_index(project)
        assert recovery.unresolved == {6}
        assert ids(recovery.recovered) == [16, 11, 13]

    def test_unresolved_logged(self, project, caplog):
        root = module(project, 'setDefaultOptions')
        with caplog.at_level(logging.DEBUG, logger='typedoc_ingest.reflection.recovery'):
            ReferenceRecovery(root, build_index(project)).run()
        assert '999' in caplog.text

    def test_self_reference_not_recovered(self):
        node = {'id': 1, 'name': 'Tree', 'kind': 256, 'children': [
            {'id': 2, 'name': 'parent', 'kind': 1024, 'type': {'type': 'reference', 'target': 1}},
        ]}
        project = {'id': 0, 'children': [node]}
        assert recover(node, build_index(node), build_index(project)) == []

    def test_cyclic_references_terminate(self):
        a = {'id': 1, 'name': 'A', 'kind': 256, 'children': [
            {'id': 2, 'name': 'b', 'kind': 1024, 'type': {'type': 'reference', 'target': 3}},
        ]}
        b = {'id': 3, 'name': 'B', 'kind': 256, 'children': [
            {'id': 4, 'name': 'a', 'kind': 1024, 'type': {'type': 'reference', 'target': 1}},
        ]}
        fn_module = {'id': 10, 'name': 'fn', 'kind': 2, 'children': [
            {'id': 11, 'name': 'fn', 'kind': 64, 'signatures': [
                {'id': 12, 'parameters': [{'id': 13, 'type': {'type': 'reference', 'target': 1}}]},
            ]},
        ]}
        project = {'id': 0, 'children': [{'id': 20, 'children': [a, b]}, fn_module]}
        recovered = recover(fn_module, build_index(fn_module), build_index(project))
        assert ids(recovered) == [1, 3]

    def test_recovered_descendant_not_refetched(self):
        # Outer contains Inner; recovering Outer makes Inner known
        inner = {'id': 3, 'name': 'Inner', 'kind': 256}
        outer = {'id': 2, 'name': 'Outer', 'kind': 4, 'children': [inner]}
        fn_module = {'id': 10, 'name': 'fn', 'kind': 2, 'children': [
            {'id': 11, 'name': 'fn', 'kind': 64, 'signatures': [
                {'id': 12, 'parameters': [
                    {'id': 13, 'type': {'type': 'reference', 'target': 2}},
                    {'id': 14, 'type': {'type': 'reference', 'target': 3}},
                ]},
            ]},
        ]}
        project = {'id': 0, 'children': [outer, fn_module]}
        recovered = recover(fn_module, build_index(fn_module), build_index(project))
        assert ids(recovered) == [2]

    def test_does_not_mutate_global_tree(self, project):
        before = copy.deepcopy(project)
        global_index = build_index(project)
        for root in project['children']:
            recover(root, build_index(root), global_index)
        assert project == before


class TestCompleteReflection:
    """Tests for complete_reflection."""

    def test_appends_recovered_children(self, project):
        root = module(project, 'addDays')
        completed = complete_reflection(root, [{'id': 99}])
        assert ids(completed['children']) == [2, 99]

    def test_original_untouched(self, project):
        root = module(project, 'addDays')
        complete_reflection(root, [{'id': 99}])
        assert ids(root['children']) == [2]

    def test_reflection_without_children(self):
        assert complete_reflection({'id': 1}, [])['children'] == []


def test_walker_and_collector_agree_on_type(project):
    found = []
    walk_type(module(project, 'types')['children'][0]['children'][0]['type'], found.append)
    assert found == [13]
