"""Command-line front end: ``formtree render`` and ``formtree submit``."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

import httpx

from formtree.config import Config
from formtree.dom import Element
from formtree.meta import load_meta
from formtree.page import PageRenderer
from formtree.render import FormRenderer
from formtree.submit import submitter_from_config
from formtree.utils import (
    console,
    print_error,
    print_field_errors,
    print_success,
    print_summary_table,
    print_warning,
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="formtree",
        description="Render metadata-driven forms and commit them from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  formtree render forms.yaml --ref signup -o signup.html\n"
            "  formtree submit forms.yaml --ref signup --set email=a@b.io --set colors=red\n"
        ),
    )
    parser.add_argument("--config", type=Path, default=None, help="JSON config file")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_common(p: argparse.ArgumentParser) -> None:
        p.add_argument("meta", type=Path, help="Metadata file (.yaml, .yml or .json)")
        p.add_argument("--url", default=None, help="Page URL; its 'ref' parameter selects the node")
        p.add_argument("--ref", default=None, help="Top-level node to render (overrides --url)")

    render_p = sub.add_parser("render", help="Write the rendered page as HTML")
    add_common(render_p)
    render_p.add_argument("--output", "-o", type=Path, default=None, help="Output HTML file")
    render_p.add_argument("--title", default=None, help="Page title")

    submit_p = sub.add_parser("submit", help="Fill in and commit the first form")
    add_common(submit_p)
    submit_p.add_argument(
        "--set", dest="fields", action="append", default=[], metavar="NAME=VALUE",
        help="Field value; repeat a name to pick several choices",
    )
    submit_p.add_argument("--post", default=None, help="POST the committed mapping to this URL")
    return parser


def _page_url(args: argparse.Namespace, config: Config) -> str:
    url = args.url or config.page_url
    if args.ref:
        url = str(httpx.URL(url).copy_set_param("ref", args.ref))
    return url


def _parse_fields(pairs: Sequence[str]) -> dict[str, list[str]]:
    fields: dict[str, list[str]] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise ValueError(f"Expected NAME=VALUE, got: {pair!r}")
        fields.setdefault(name, []).append(value)
    return fields


def fill_form(form_el: Element, fields: dict[str, list[str]]) -> list[str]:
    """Apply ``{name: [values]}`` to the controls of *form_el*.

    Returns the names that matched no control.
    """
    unmatched = []
    for name, values in fields.items():
        controls = [el for el in form_el.find_all("input", "select", "textarea") if el.name == name]
        if not controls:
            unmatched.append(name)
        for control in controls:
            if control.tag == "select":
                control.choose(*values)
            elif control.type in ("checkbox", "radio"):
                control.set_checked(control.value in values)
            else:
                control.fill(values[-1])
    return unmatched


def _cmd_render(args: argparse.Namespace, renderer: FormRenderer) -> int:
    body = renderer.go(_page_url(args, renderer.config))
    pages = PageRenderer()
    if args.output:
        out = pages.write_page(body, args.output, args.title)
        print_summary_table(
            {
                "Page": renderer.page_url,
                "Forms": str(len(body.find_all("form"))),
                "Fields": str(len(body.find_by_class("field"))),
                "Output": str(out),
            },
            title="Rendered",
        )
    else:
        console.print(pages.render_page(body, args.title), markup=False, highlight=False, soft_wrap=True)
    return 0


def _cmd_submit(args: argparse.Namespace, renderer: FormRenderer) -> int:
    body = renderer.go(_page_url(args, renderer.config))
    forms = body.find_all("form")
    if not forms:
        print_error(f"No form found at {renderer.page_url}")
        return 1

    accepted: list[dict[str, Any]] = []
    deliver = renderer.submitter

    def capture(results: dict[str, Any]) -> None:
        accepted.append(results)
        deliver(results)

    renderer.submitter = capture
    form_el = forms[0]
    for name in fill_form(form_el, _parse_fields(args.fields)):
        print_warning(f"No field named {name!r}")
    form_el.trigger("submit")

    if not accepted:
        print_field_errors(
            {
                err.id or "?": err.text_content().strip()
                for err in body.find_by_class("error")
                if err.text_content().strip()
            }
        )
        return 1
    print_success("Form accepted")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point for ``formtree`` / ``python -m formtree``."""
    args = _build_parser().parse_args(argv)

    # MetaLoadError and pydantic.ValidationError are both ValueErrors
    try:
        config = Config.load(args.config) if args.config else Config.from_env()
        if getattr(args, "post", None):
            config = config.model_copy(update={"submit_url": args.post})
        meta = load_meta(args.meta)
    except (FileNotFoundError, ValueError) as exc:
        print_error(f"Error: {exc}")
        return 1

    renderer = FormRenderer(meta, config, submitter_from_config(config))
    try:
        if args.command == "render":
            return _cmd_render(args, renderer)
        return _cmd_submit(args, renderer)
    except (ValueError, httpx.HTTPError, httpx.InvalidURL) as exc:
        print_error(f"Error: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
