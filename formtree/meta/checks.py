"""Named validation capabilities for file-based metadata.

Metadata written in Python can attach any callable as ``chkFn`` / ``errMsgFn``.
Metadata loaded from YAML or JSON cannot, so it refers to checks by name
(``chkFn: email``) and to message formatters by template
(``errMsgFn: "{value} is not a valid e-mail address"``).
"""

from __future__ import annotations

import re
from typing import Any, Callable

CheckFn = Callable[[Any], bool]
ErrMsgFn = Callable[[Any, Any], str]


class UnknownCheckError(ValueError):
    """Raised when metadata names a check that is not registered."""


def _matches(pattern: str) -> CheckFn:
    regex = re.compile(pattern)

    def check(value: Any) -> bool:
        return bool(regex.fullmatch(str(value)))

    return check


def _is_number(value: Any) -> bool:
    try:
        float(str(value))
    except ValueError:
        return False
    return True


CHECKS: dict[str, CheckFn] = {
    "email": _matches(r"[^@\s]+@[^@\s]+\.[A-Za-z]{2,}"),
    "integer": _matches(r"[-+]?\d+"),
    "number": _is_number,
    "phone": _matches(r"\+?[\d\s().-]{7,}"),
    "zip": _matches(r"\d{5}(-\d{4})?"),
    "name": _matches(r"[A-Za-z][A-Za-z .'-]*"),
}


def register_check(name: str, fn: CheckFn) -> None:
    """Make *fn* available to metadata as ``chkFn: <name>``."""
    CHECKS[name] = fn


def lookup_check(declared: Any) -> CheckFn | None:
    """Resolve a ``chkFn`` declaration to a callable.

    Accepts ``None``, a callable, a registered name, or a mapping
    ``{"pattern": <regex>}``.
    """
    if declared is None or callable(declared):
        return declared
    if isinstance(declared, dict) and "pattern" in declared:
        return _matches(declared["pattern"])
    if isinstance(declared, str):
        try:
            return CHECKS[declared]
        except KeyError:
            raise UnknownCheckError(f"Unknown check: {declared!r}") from None
    raise UnknownCheckError(f"Unsupported chkFn declaration: {declared!r}")


def message_template(template: str) -> ErrMsgFn:
    """Turn ``"bad {value} for {text}"`` into an ``errMsgFn``."""

    def format_message(value: Any, node: Any) -> str:
        return template.format(value=value, text=getattr(node, "text", "") or "")

    return format_message


def lookup_message(declared: Any) -> ErrMsgFn | None:
    """Resolve an ``errMsgFn`` declaration (callable or template string)."""
    if declared is None or callable(declared):
        return declared
    if isinstance(declared, str):
        return message_template(declared)
    raise UnknownCheckError(f"Unsupported errMsgFn declaration: {declared!r}")
