"""Shared test fixtures."""

import json

import pytest


# ── Sample TypeDoc Reflections ───────────────────────────────────────────

def _text(text: str) -> list[dict]:
    return [{'kind': 'text', 'text': text}]


def make_project() -> dict:
    """A small TypeDoc project: three function modules, a types module, a constants module."""
    return {
        'id': 0,
        'name': 'date-fns',
        'kind': 1,
        'children': [
            {
                'id': 1,
                'name': 'addDays',
                'kind': 2,
                'sources': [{'fileName': 'src/addDays/index.ts', 'line': 1}],
                'children': [
                    {
                        'id': 2,
                        'name': 'addDays',
                        'kind': 64,
                        'signatures': [
                            {
                                'id': 3,
                                'name': 'addDays',
                                'kind': 4096,
                                'comment': {
                                    'summary': _text('Add the specified number of days to the given date.'),
                                    'blockTags': [
                                        {'tag': '@description', 'content': _text('Add days.')},
                                        {'tag': '@example', 'content': _text('addDays(date, 10)')},
                                    ],
                                },
                                'typeParameter': [
                                    {'id': 6, 'name': 'DateType', 'kind': 131072,
                                     'type': {'type': 'reference', 'target': 16, 'name': 'DateLike'}},
                                ],
                                'parameters': [
                                    {'id': 4, 'name': 'date', 'kind': 32768,
                                     'type': {'type': 'reference', 'name': 'DateType', 'target': 6}},
                                    {'id': 5, 'name': 'options', 'kind': 32768,
                                     'type': {'type': 'reference', 'target': 11, 'name': 'Options'}},
                                ],
                                'type': {'type': 'intrinsic', 'name': 'Date'},
                            },
                        ],
                    },
                ],
                'groups': [
                    {'title': 'Functions', 'children': [2],
                     'categories': [{'title': 'Day Helpers', 'children': [2]}]},
                ],
            },
            {
                'id': 10,
                'name': 'types',
                'kind': 2,
                'sources': [{'fileName': 'src/types.ts', 'line': 1}],
                'children': [
                    {
                        'id': 11,
                        'name': 'Options',
                        'kind': 256,
                        'children': [
                            {'id': 12, 'name': 'locale', 'kind': 1024,
                             'type': {'type': 'reference', 'target': 13, 'name': 'Locale'}},
                        ],
                    },
                    {
                        'id': 13,
                        'name': 'Locale',
                        'kind': 256,
                        'children': [
                            {'id': 14, 'name': 'code', 'kind': 1024,
                             'type': {'type': 'intrinsic', 'name': 'string'}},
                        ],
                    },
                    {
                        'id': 15,
                        'name': 'Day',
                        'kind': 2097152,
                        'type': {'type': 'union', 'types': [
                            {'type': 'literal', 'value': 0},
                            {'type': 'literal', 'value': 1},
                        ]},
                    },
                    {
                        'id': 16,
                        'name': 'DateLike',
                        'kind': 2097152,
                        'type': {'type': 'union', 'types': [
                            {'type': 'reference', 'name': 'Date', 'package': 'typescript'},
                            {'type': 'intrinsic', 'name': 'number'},
                        ]},
                    },
                ],
            },
            {
                'id': 20,
                'name': 'constants',
                'kind': 2,
                'sources': [{'fileName': 'src/constants/index.ts', 'line': 1}],
                'comment': {'summary': _text('Useful constants.')},
                'children': [
                    {'id': 21, 'name': 'daysInWeek', 'kind': 32,
                     'type': {'type': 'literal', 'value': 7},
                     'comment': {'summary': _text('Days in 1 week.')}},
                ],
            },
            {
                'id': 30,
                'name': 'fp',
                'kind': 2,
                'sources': [{'fileName': 'src/fp/index.ts', 'line': 1}],
                'children': [
                    {'id': 31, 'name': 'placeholder', 'kind': 32,
                     'type': {'type': 'intrinsic', 'name': 'string'}},
                ],
            },
            {
                'id': 40,
                'name': 'setDefaultOptions',
                'kind': 2,
                'sources': [{'fileName': 'src/setDefaultOptions/index.ts', 'line': 1}],
                'children': [
                    {
                        'id': 41,
                        'name': 'setDefaultOptions',
                        'kind': 64,
                        'signatures': [
                            {
                                'id': 42,
                                'name': 'setDefaultOptions',
                                'kind': 4096,
                                'comment': {
                                    'summary': [],
                                    'blockTags': [
                                        {'tag': '@summary', 'content': _text('Set default options.')},
                                        {'tag': '@pure', 'content': _text('false')},
                                    ],
                                },
                                'parameters': [
                                    {'id': 43, 'name': 'options', 'kind': 32768,
                                     'type': {'type': 'reference', 'target': 999, 'name': 'Missing'}},
                                ],
                                'type': {'type': 'intrinsic', 'name': 'void'},
                            },
                        ],
                    },
                ],
            },
        ],
    }


@pytest.fixture
def project():
    """A fresh TypeDoc project reflection."""
    return make_project()


@pytest.fixture
def docs_dir(tmp_path):
    """A config directory with package.json, TypeDoc JSON, a markdown file and config."""
    package_dir = tmp_path / 'pkg'
    package_dir.mkdir()
    (package_dir / 'package.json').write_text(json.dumps({'name': 'date-fns', 'version': '3.0.0'}))
    (tmp_path / 'docs.json').write_text(json.dumps(make_project()))
    (tmp_path / 'gettingStarted.md').write_text('# Getting Started\n\nInstall it.\n', encoding='utf-8')

    config = {
        'package': 'pkg',
        'json': 'docs.json',
        'categories': ['General', 'Day Helpers', 'Constants', 'Misc'],
        'files': [
            {
                'type': 'markdown',
                'slug': 'gettingStarted',
                'category': 'General',
                'title': 'Getting Started',
                'summary': 'Introduction',
                'path': 'gettingStarted.md',
            },
        ],
        'kinds_map': {
            'src/constants/index.ts': {'kind': 'constants', 'category': 'Constants'},
        },
    }
    (tmp_path / 'config.json').write_text(json.dumps(config))
    return tmp_path


@pytest.fixture
def config_path(docs_dir):
    return str(docs_dir / 'config.json')
