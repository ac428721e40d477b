"""Jinja2 rendering of widget trees to HTML.

Provides the PageRenderer class which turns an ``Element`` tree into markup
through a recursive template macro, and wraps a rendered ``body`` in a full
HTML document.  Templates are kept inline and loaded through a ``DictLoader``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from jinja2 import DictLoader, Environment, select_autoescape

from formtree.dom import VOID_TAGS, Element


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

_ELEMENT_TEMPLATE = """\
{% macro render_element(el) -%}
<{{ el.tag }}{{ live_attrs(el)|xmlattr }}>
{%- if el.tag not in void_tags -%}
{{ live_text(el) }}{% for child in el.children %}{{ render_element(child) }}{% endfor %}</{{ el.tag }}>
{%- endif %}
{%- endmacro %}
{{ render_element(element) }}"""

_PAGE_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{{ title }}</title>
  <style>
    .field { margin: 0.5em 0; }
    .fieldset { display: flex; gap: 0.5em; align-items: center; }
    .error { color: red; min-height: 1em; }
  </style>
</head>
{% include "element.html.j2" %}
</html>
"""


# ---------------------------------------------------------------------------
# PageRenderer
# ---------------------------------------------------------------------------


class PageRenderer:
    """Renders widget trees as HTML fragments or complete pages."""

    def __init__(self, title: str = "formtree") -> None:
        self.title = title
        self.env = Environment(
            loader=DictLoader(
                {"element.html.j2": _ELEMENT_TEMPLATE, "page.html.j2": _PAGE_TEMPLATE}
            ),
            autoescape=select_autoescape(default=True, default_for_string=True),
            keep_trailing_newline=True,
        )
        self.env.globals["void_tags"] = VOID_TAGS
        self.env.globals["live_attrs"] = _live_attrs
        self.env.globals["live_text"] = _live_text

    def render_element(self, element: Element) -> str:
        """Markup for *element* and its descendants."""
        template = self.env.get_template("element.html.j2")
        return template.render(element=element).strip()

    def render_page(self, body: Element, title: Optional[str] = None) -> str:
        """A complete HTML document whose ``<body>`` is *body*."""
        template = self.env.get_template("page.html.j2")
        return template.render(element=body, title=title or self.title)

    def write_page(self, body: Element, path: str | Path, title: Optional[str] = None) -> Path:
        """Render a page and write it to *path*; parent directories are created."""
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(self.render_page(body, title), encoding="utf-8")
        return out


# ---------------------------------------------------------------------------
# Live control state
# ---------------------------------------------------------------------------

def _live_attrs(el: Element) -> dict[str, Any]:
    """Attributes with the current control state folded in."""
    attrs: dict[str, Any] = dict(el.attrs)
    if el.tag == "input":
        if el.type in ("checkbox", "radio"):
            attrs["checked"] = "checked" if el.checked else None
        else:
            attrs["value"] = el.value or None
    elif el.tag == "option":
        attrs["selected"] = "selected" if el.selected else None
    return attrs


def _live_text(el: Element) -> str:
    return el.value if el.tag == "textarea" else el.text


_default = PageRenderer()


def render_html(element: Element) -> str:
    return _default.render_element(element)


def render_page(body: Element, title: Optional[str] = None) -> str:
    return _default.render_page(body, title)
