"""Shared pytest fixtures for the formtree test suite.

Provides reusable fixtures for:
- A sample metadata tree (landing page + signup form)
- A renderer whose submissions are collected in a list
- The same metadata written to YAML / JSON files
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import yaml

from formtree.config import Config
from formtree.meta.models import MetaTree
from formtree.render.renderer import FormRenderer


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------

SAMPLE_META: dict[str, Any] = {
    "_": {
        "items": [
            {"type": "header", "text": "Welcome", "level": 2},
            {
                "type": "para",
                "items": [
                    {"type": "segment", "text": "Please fill in "},
                    {"type": "link", "text": "the signup form", "ref": "signup"},
                ],
            },
        ],
    },
    "signup": {
        "type": "form",
        "attr": {"id": "signup-form"},
        "items": [
            {"type": "input", "text": "Name", "required": True, "attr": {"name": "name"}},
            {
                "type": "input",
                "text": "Email",
                "chkFn": "email",
                "errMsgFn": "{value} is not an e-mail address",
                "attr": {"name": "email"},
            },
            {
                "type": "input",
                "text": "Comments",
                "subType": "textarea",
                "attr": {"name": "comments"},
            },
            {
                "type": "multiSelect",
                "text": "Colors",
                "required": True,
                "attr": {"name": "colors"},
                "items": [
                    {"key": "red", "text": "Red"},
                    {"key": "green", "text": "Green"},
                    {"key": "blue", "text": "Blue"},
                ],
            },
            {
                "type": "uniSelect",
                "text": "Size",
                "required": True,
                "attr": {"name": "size"},
                "items": [
                    {"key": "s", "text": "Small"},
                    {"key": "l", "text": "Large"},
                ],
            },
            {"type": "submit", "text": "Sign up"},
        ],
    },
}


@pytest.fixture
def sample_meta() -> dict[str, Any]:
    """A deep copy of the sample metadata as plain data."""
    return json.loads(json.dumps(SAMPLE_META))


@pytest.fixture
def meta_tree(sample_meta: dict[str, Any]) -> MetaTree:
    return MetaTree.from_dict(sample_meta)


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------

@pytest.fixture
def submissions() -> list[dict[str, Any]]:
    """Collects every mapping handed to the submitter."""
    return []


@pytest.fixture
def renderer(meta_tree: MetaTree, submissions: list[dict[str, Any]]) -> FormRenderer:
    return FormRenderer(meta_tree, Config(), submitter=submissions.append)


@pytest.fixture
def make_renderer():
    """Factory: renderer over raw metadata plus the list its submissions land in."""

    def factory(raw: dict[str, Any], **config: Any) -> tuple[FormRenderer, list[dict[str, Any]]]:
        collected: list[dict[str, Any]] = []
        tree = MetaTree.from_dict(raw)
        return FormRenderer(tree, Config(**config), submitter=collected.append), collected

    return factory


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

@pytest.fixture
def meta_yaml_file(tmp_path: Path, sample_meta: dict[str, Any]) -> Path:
    path = tmp_path / "forms.yaml"
    path.write_text(yaml.safe_dump(sample_meta, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture
def meta_json_file(tmp_path: Path, sample_meta: dict[str, Any]) -> Path:
    path = tmp_path / "forms.json"
    path.write_text(json.dumps(sample_meta, indent=2), encoding="utf-8")
    return path
