"""Field validation and its binding to widget events.

``validate_value`` and ``validate_choices`` are pure functions of the raw
input and the node's metadata.  ``bind`` is the adapter that reads widget
state when an event fires and writes the resulting message into the field's
error element, which it holds by reference.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from formtree.dom import Element, Event
from formtree.meta.models import MetaNode


@dataclass(frozen=True)
class FieldResult:
    """Outcome of validating one field: a value or an error message."""

    value: Any = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error


def required_message(node: MetaNode) -> str:
    return f"The field {node.text} must be specified"


def invalid_message(value: Any, node: MetaNode) -> str:
    if node.err_msg_fn is not None:
        return node.err_msg_fn(value, node)
    return f"invalid value {value}"


def validate_value(raw: Any, node: MetaNode) -> FieldResult:
    """Validate a single raw value.

    An empty value (after trimming) is always reported as missing, whatever
    check the node declares.
    """
    value = str(raw if raw is not None else "").strip()
    if not value:
        return FieldResult(error=required_message(node))
    if node.chk_fn is not None and not node.chk_fn(value):
        return FieldResult(error=invalid_message(value, node))
    return FieldResult(value=value)


def validate_choices(values: Sequence[str], node: MetaNode) -> FieldResult:
    """Validate a multi-choice selection: at least one entry is required."""
    if not values:
        return FieldResult(error=required_message(node))
    return FieldResult(value=list(values))


def read_widget(widget: Element, node: MetaNode) -> FieldResult:
    """Validate the current state of *widget*."""
    if "fieldset" in widget.classes:
        chosen = [inp.value for inp in widget.find_all("input") if inp.checked]
        return validate_choices(chosen, node)
    if widget.tag == "select" and widget.multiple:
        return validate_choices([opt.value for opt in widget.selected_options()], node)
    return validate_value(widget.value, node)


def bind(node: MetaNode, widget: Element, error_slot: Element, event_type: str) -> None:
    """Re-validate *widget* on *event_type* and show the result in *error_slot*.

    Nothing is bound unless the node declares a check or is required.
    """
    if not node.validates:
        return

    def on_event(event: Event) -> None:
        error_slot.text = read_widget(widget, node).error

    widget.on(event_type, on_event)
