"""Shared fixtures for prepare_release tests."""

import json
from pathlib import Path

import pytest


TAGPR_WORKFLOW = """\
name: tagpr
on:
  push:
    branches: [main]
jobs:
  tagpr:
    runs-on: ubuntu-latest
    steps:
      - uses: actions/checkout@v6
        # TODO: After replace-devcode, add token: ${{ secrets.PAT_FOR_TAGPR }}
      - uses: Songmu/tagpr@v1
        env:
          GITHUB_TOKEN: ${{ secrets.GITHUB_TOKEN }}
"""

CODEQL_CONFIG = 'name: "CodeQL config for my-devcode"\n\npaths:\n  - src\n'


def write_manifest(root: Path, manifest: dict) -> Path:
    path = root / 'package.json'
    path.write_text(json.dumps(manifest), encoding='utf-8')
    return path


@pytest.fixture
def devcode_project(tmp_path):
    """A devcode project named my-devcode with all managed files present."""
    write_manifest(tmp_path, {'name': 'my-devcode', 'version': '0.0.0', 'private': True})

    workflows = tmp_path / '.github' / 'workflows'
    workflows.mkdir(parents=True)
    (workflows / 'tagpr.yml').write_text(TAGPR_WORKFLOW, encoding='utf-8')

    codeql = tmp_path / '.github' / 'codeql'
    codeql.mkdir(parents=True)
    (codeql / 'codeql-config.yml').write_text(CODEQL_CONFIG, encoding='utf-8')

    src = tmp_path / 'src'
    src.mkdir()
    (src / 'index.ts').write_text('console.log("Hello from my-devcode!");\n', encoding='utf-8')

    return tmp_path
