"""Tests for managed location adapters and the registry."""

import json

import pytest

from prepare_release.adapters import (
    CodeqlConfigAdapter,
    ManagedLocationRegistry,
    ManifestAdapter,
    TagprWorkflowAdapter,
    default_registry,
)
from prepare_release.adapters.workflow import (
    collapse_blank_lines,
    is_checkout_line,
)
from prepare_release.models import ManifestFormatError, RewriteOutcome

from conftest import TAGPR_WORKFLOW


# ==============================================================================
# Registry
# ==============================================================================

def test_default_registry_order():
    registry = default_registry()

    assert [adapter.file for adapter in registry] == [
        'package.json',
        '.github/codeql/codeql-config.yml',
        '.github/workflows/tagpr.yml',
    ]
    assert len(registry) == 3
    assert registry.managed_files == frozenset({
        'package.json',
        '.github/codeql/codeql-config.yml',
        '.github/workflows/tagpr.yml',
    })


def test_registry_rejects_duplicate_files():
    with pytest.raises(ValueError, match='registered twice'):
        ManagedLocationRegistry([ManifestAdapter(), ManifestAdapter()])


# ==============================================================================
# package.json
# ==============================================================================

class TestManifestAdapter:

    def test_renames_and_removes_private(self):
        content = json.dumps({'name': 'my-devcode', 'version': '0.0.0', 'private': True})

        result = ManifestAdapter().transform(content, 'my-devcode', '@scope/pkg')

        assert json.loads(result) == {'name': '@scope/pkg', 'version': '0.0.0'}

    def test_stable_formatting_and_field_order(self):
        content = '{"private": true, "scripts": {"build": "tsc"}, "name": "dev", "keywords": []}'

        result = ManifestAdapter().transform(content, 'dev', 'pkg')

        assert result == (
            '{\n'
            '  "scripts": {\n'
            '    "build": "tsc"\n'
            '  },\n'
            '  "name": "pkg",\n'
            '  "keywords": []\n'
            '}\n'
        )

    def test_non_ascii_is_preserved(self):
        content = '{"name": "dev", "private": true, "description": "café"}'

        result = ManifestAdapter().transform(content, 'dev', 'pkg')

        assert '"description": "café"' in result

    def test_fixed_point_on_second_run(self):
        adapter = ManifestAdapter()
        once = adapter.transform('{"name": "dev", "private": true}', 'dev', 'pkg')

        assert adapter.transform(once, 'dev', 'pkg') == once

    def test_malformed_json_raises(self):
        with pytest.raises(ManifestFormatError):
            ManifestAdapter().transform('{oops', 'dev', 'pkg')

    def test_missing_file_is_an_error(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ManifestAdapter().rewrite(tmp_path, 'dev', 'pkg')


# ==============================================================================
# CodeQL config
# ==============================================================================

class TestCodeqlConfigAdapter:

    def test_replaces_devcode_in_first_name_line(self):
        content = 'name: "CodeQL config for my-devcode"\n\npaths:\n  - src\n'

        result = CodeqlConfigAdapter().transform(content, 'my-devcode', '@scope/pkg')

        assert result == 'name: "CodeQL config for @scope/pkg"\n\npaths:\n  - src\n'

    def test_only_first_name_line_is_touched(self):
        content = (
            '# my-devcode analysis\n'
            '  name: my-devcode my-devcode\n'
            'queries:\n'
            '  - name: my-devcode-extra\n'
        )

        result = CodeqlConfigAdapter().transform(content, 'my-devcode', 'pkg')

        before = content.split('\n')
        after = result.split('\n')
        assert after[1] == '  name: pkg my-devcode'
        assert [line for i, line in enumerate(after) if i != 1] == \
               [line for i, line in enumerate(before) if i != 1]

    def test_no_name_line_leaves_content_alone(self):
        content = 'paths:\n  - my-devcode\n'

        assert CodeqlConfigAdapter().transform(content, 'my-devcode', 'pkg') == content

    def test_crlf_line_endings_survive(self):
        content = 'name: my-devcode\r\npaths:\r\n  - src\r\n'

        result = CodeqlConfigAdapter().transform(content, 'my-devcode', 'pkg')

        assert result == 'name: pkg\r\npaths:\r\n  - src\r\n'

    def test_missing_file_is_noop(self, tmp_path):
        outcome = CodeqlConfigAdapter().rewrite(tmp_path, 'my-devcode', 'pkg')

        assert outcome is RewriteOutcome.MISSING
        assert not (tmp_path / '.github').exists()

    def test_rewrite_writes_file(self, devcode_project):
        outcome = CodeqlConfigAdapter().rewrite(devcode_project, 'my-devcode', '@scope/pkg')

        path = devcode_project / '.github' / 'codeql' / 'codeql-config.yml'
        assert outcome is RewriteOutcome.UPDATED
        assert path.read_text(encoding='utf-8').startswith('name: "CodeQL config for @scope/pkg"')

    def test_dry_run_does_not_write(self, devcode_project):
        path = devcode_project / '.github' / 'codeql' / 'codeql-config.yml'
        before = path.read_bytes()

        outcome = CodeqlConfigAdapter().rewrite(
            devcode_project, 'my-devcode', '@scope/pkg', dry_run=True
        )

        assert outcome is RewriteOutcome.UPDATED
        assert path.read_bytes() == before

    def test_second_run_is_unchanged(self, devcode_project):
        adapter = CodeqlConfigAdapter()
        adapter.rewrite(devcode_project, 'my-devcode', '@scope/pkg')

        assert adapter.rewrite(devcode_project, 'my-devcode', '@scope/pkg') is RewriteOutcome.UNCHANGED


# ==============================================================================
# tagpr workflow
# ==============================================================================

class TestTagprWorkflowAdapter:

    def transform(self, content):
        return TagprWorkflowAdapter().transform(content, 'my-devcode', '@scope/pkg')

    def test_full_workflow(self):
        result = self.transform(TAGPR_WORKFLOW)

        assert 'secrets.GITHUB_TOKEN' not in result
        assert '# TODO' not in result
        assert (
            '      - uses: actions/checkout@v6\n'
            '        with:\n'
            '          token: ${{ secrets.PAT_FOR_TAGPR }}\n'
            '      - uses: Songmu/tagpr@v1\n'
        ) in result
        assert 'GITHUB_TOKEN: ${{ secrets.PAT_FOR_TAGPR }}' in result

    def test_replaces_every_secret_reference(self):
        content = (
            'a:\n  GITHUB_TOKEN: ${{ secrets.GITHUB_TOKEN }}\n'
            'b:\n  GITHUB_TOKEN: ${{ secrets.GITHUB_TOKEN }}\n'
        )

        result = self.transform(content)

        assert result.count('GITHUB_TOKEN: ${{ secrets.PAT_FOR_TAGPR }}') == 2

    def test_sentinel_not_after_checkout_is_removed(self):
        content = (
            'steps:\n'
            '  - run: echo hi\n'
            '    # TODO: After replace-devcode, add token: ${{ secrets.PAT_FOR_TAGPR }}\n'
            '  - run: echo bye\n'
        )

        result = self.transform(content)

        assert result == 'steps:\n  - run: echo hi\n  - run: echo bye\n'
        assert 'with:' not in result

    def test_other_sentinels_of_the_family_are_removed(self):
        content = (
            'jobs:\n'
            '  # TODO: After replace-devcode, enable the release job\n'
            '  release:\n'
            '    runs-on: ubuntu-latest  # TODO: After replace-devcode, pin runner\n'
        )

        result = self.transform(content)

        assert result == 'jobs:\n  release:\n    runs-on: ubuntu-latest\n'

    def test_blank_line_runs_are_collapsed(self):
        result = self.transform('a:\n\n\n\nb:\n')

        assert result == 'a:\n\nb:\n'
        assert '\n\n\n' not in result

    def test_second_run_is_fixed_point(self):
        once = self.transform(TAGPR_WORKFLOW)

        assert self.transform(once) == once

    def test_unrelated_content_is_unchanged(self):
        content = 'name: lint\njobs:\n  lint:\n    steps:\n      - uses: actions/checkout@v4\n'

        assert self.transform(content) == content

    def test_missing_file_is_noop(self, tmp_path):
        assert TagprWorkflowAdapter().rewrite(tmp_path, 'd', 'p') is RewriteOutcome.MISSING


@pytest.mark.parametrize('line,expected', [
    ('      - uses: actions/checkout@v6', True),
    ('    uses: actions/checkout@v12\r', True),
    ('      - uses: actions/checkout@main', False),
    ('      - uses: actions/checkout@v4.1.0', False),
    ('      - uses: actions/setup-node@v4', False),
])
def test_is_checkout_line(line, expected):
    assert is_checkout_line(line) is expected


def test_collapse_blank_lines_crlf():
    assert collapse_blank_lines('a\r\n\r\n\r\n\r\nb\r\n') == 'a\r\n\r\nb\r\n'


def test_collapse_blank_lines_mixed_endings():
    content = 'x: 1\r\na:\n\n\n\nb:\r\n\r\n\r\nc:\n'

    result = collapse_blank_lines(content)

    assert result == 'x: 1\r\na:\n\nb:\r\n\r\nc:\n'
    assert '\n\n\n' not in result
    assert '\r\n\r\n\r\n' not in result


def test_workflow_with_mixed_endings_has_no_long_blank_runs():
    result = TagprWorkflowAdapter().transform('x: 1\r\na:\n\n\n\nb:\n', 'd', 'p')

    assert result == 'x: 1\r\na:\n\nb:\n'


def test_text_after_checkout_sentinel_is_kept():
    content = (
        '      - uses: actions/checkout@v6\n'
        '        # TODO: After replace-devcode, add token: ${{ secrets.PAT_FOR_TAGPR }} # fetch tags\n'
    )

    result = TagprWorkflowAdapter().transform(content, 'd', 'p')

    assert result == (
        '      - uses: actions/checkout@v6\n'
        '        with:\n'
        '          token: ${{ secrets.PAT_FOR_TAGPR }} # fetch tags\n'
    )
