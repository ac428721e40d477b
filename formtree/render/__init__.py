"""formtree rendering engine.

Resolves paths against a metadata tree, dispatches nodes to per-type
renderers and binds field validation to the resulting widgets.

Usage::

    from formtree.meta import load_meta
    from formtree.render import FormRenderer

    renderer = FormRenderer(load_meta("forms.yaml"))
    body = renderer.go("http://localhost/?ref=signup")
"""

from formtree.render.paths import NOT_FOUND, make_id, normalize_path, resolve
from formtree.render.renderer import FormRenderer, FormState
from formtree.render.renderers import RENDERERS
from formtree.render.validation import (
    FieldResult,
    bind,
    validate_choices,
    validate_value,
)

__all__ = [
    "NOT_FOUND",
    "RENDERERS",
    "FieldResult",
    "FormRenderer",
    "FormState",
    "bind",
    "make_id",
    "normalize_path",
    "resolve",
    "validate_choices",
    "validate_value",
]
