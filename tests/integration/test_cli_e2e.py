"""End-to-end tests for the ``formtree`` command line.

These tests drive ``formtree.cli.main`` against the sample metadata written to
disk.  HTTP submission is exercised through an ``httpx.MockTransport`` so no
server is needed.
"""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from formtree.cli import main


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

VALID_FIELDS = [
    "--set", "name=Ada",
    "--set", "email=ada@example.org",
    "--set", "colors=red",
    "--set", "colors=blue",
    "--set", "size=l",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep FORMTREE_* variables of the calling shell out of the tests."""
    for name in (
        "FORMTREE_DEFAULT_REF",
        "FORMTREE_N_UNI_SELECT",
        "FORMTREE_N_MULTI_SELECT",
        "FORMTREE_PAGE_URL",
        "FORMTREE_SUBMIT_URL",
        "FORMTREE_SUBMIT_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# render
# ---------------------------------------------------------------------------


@pytest.mark.integration
class TestRenderCommand:
    def test_writes_page(self, meta_yaml_file: Path, tmp_path: Path, capsys) -> None:
        out = tmp_path / "site" / "signup.html"
        code = main(["render", str(meta_yaml_file), "--ref", "signup", "-o", str(out)])

        assert code == 0
        html = out.read_text(encoding="utf-8")
        assert html.startswith("<!DOCTYPE html>")
        assert 'id="signup-form"' in html
        assert 'type="checkbox"' in html
        assert 'type="radio"' in html
        assert "Rendered" in capsys.readouterr().out

    def test_prints_default_page(self, meta_json_file: Path, capsys) -> None:
        code = main(["render", str(meta_json_file), "--title", "Home"])

        assert code == 0
        out = capsys.readouterr().out
        assert "<title>Home</title>" in out
        assert "Welcome" in out
        assert "ref=signup" in out

    def test_ref_overrides_url(self, meta_yaml_file: Path, capsys) -> None:
        code = main(
            ["render", str(meta_yaml_file), "--url", "http://app.test/?ref=_", "--ref", "signup"]
        )

        assert code == 0
        assert "<form" in capsys.readouterr().out

    def test_url_selects_ref(self, meta_yaml_file: Path, capsys) -> None:
        code = main(["render", str(meta_yaml_file), "--url", "http://app.test/?ref=signup"])

        assert code == 0
        assert "<form" in capsys.readouterr().out

    def test_unknown_ref_renders_placeholder(self, meta_yaml_file: Path, capsys) -> None:
        code = main(["render", str(meta_yaml_file), "--ref", "nowhere"])

        assert code == 0
        assert "Path /nowhere not found" in capsys.readouterr().out

    def test_malformed_url(self, meta_yaml_file: Path, capsys) -> None:
        code = main(["render", str(meta_yaml_file), "--url", "http://app.test:port/"])

        assert code == 1
        assert "Error:" in capsys.readouterr().out

    def test_missing_meta_file(self, tmp_path: Path, capsys) -> None:
        code = main(["render", str(tmp_path / "missing.yaml")])

        assert code == 1
        assert "not found" in capsys.readouterr().out

    def test_config_file(self, meta_yaml_file: Path, tmp_path: Path, capsys) -> None:
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"default_ref": "signup"}), encoding="utf-8")

        code = main(["--config", str(config_path), "render", str(meta_yaml_file)])

        assert code == 0
        assert "<form" in capsys.readouterr().out

    def test_invalid_config_file(self, meta_yaml_file: Path, tmp_path: Path) -> None:
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"n_uni_select": -3}), encoding="utf-8")

        assert main(["--config", str(config_path), "render", str(meta_yaml_file)]) == 1


# ---------------------------------------------------------------------------
# submit
# ---------------------------------------------------------------------------


@pytest.mark.integration
class TestSubmitCommand:
    def test_accepted(self, meta_yaml_file: Path, capsys) -> None:
        code = main(["submit", str(meta_yaml_file), "--ref", "signup", *VALID_FIELDS])

        assert code == 0
        out = capsys.readouterr().out
        assert "Form accepted" in out
        assert '"Ada"' in out
        assert '"blue"' in out

    def test_rejected(self, meta_yaml_file: Path, capsys) -> None:
        code = main(
            ["submit", str(meta_yaml_file), "--ref", "signup", "--set", "email=not-an-address"]
        )

        assert code == 1
        out = capsys.readouterr().out
        assert "Validation errors" in out
        assert "must be specified" in out
        assert "Form accepted" not in out

    def test_unknown_field_is_reported(
        self, meta_yaml_file: Path, monkeypatch: pytest.MonkeyPatch, capsys
    ) -> None:
        warnings: list[str] = []
        monkeypatch.setattr("formtree.cli.print_warning", warnings.append)

        code = main(
            ["submit", str(meta_yaml_file), "--ref", "signup", *VALID_FIELDS, "--set", "age=3"]
        )

        assert code == 0
        assert warnings == ["No field named 'age'"]
        assert "Form accepted" in capsys.readouterr().out

    def test_bad_pair(self, meta_yaml_file: Path, capsys) -> None:
        code = main(["submit", str(meta_yaml_file), "--ref", "signup", "--set", "name"])

        assert code == 1
        assert "NAME=VALUE" in capsys.readouterr().out

    def test_page_without_form(self, meta_yaml_file: Path, capsys) -> None:
        code = main(["submit", str(meta_yaml_file)])

        assert code == 1
        assert "No form found" in capsys.readouterr().out

    def test_post(self, meta_yaml_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        received = []

        def handler(request: httpx.Request) -> httpx.Response:
            received.append((str(request.url), json.loads(request.content)))
            return httpx.Response(200, json={"ok": True})

        real_client = httpx.Client
        monkeypatch.setattr(
            httpx,
            "Client",
            lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs),
        )

        code = main(
            [
                "submit", str(meta_yaml_file), "--ref", "signup",
                "--post", "http://api.test/signup", *VALID_FIELDS,
            ]
        )

        assert code == 0
        assert received == [
            (
                "http://api.test/signup",
                {
                    "name": "Ada",
                    "email": "ada@example.org",
                    "comments": "",
                    "colors": ["red", "blue"],
                    "size": "l",
                },
            )
        ]

    def test_post_server_error(self, meta_yaml_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        real_client = httpx.Client
        monkeypatch.setattr(
            httpx,
            "Client",
            lambda **kwargs: real_client(
                transport=httpx.MockTransport(lambda r: httpx.Response(503)), **kwargs
            ),
        )

        code = main(
            [
                "submit", str(meta_yaml_file), "--ref", "signup",
                "--post", "http://api.test/signup", *VALID_FIELDS,
            ]
        )

        assert code == 1
