"""Minimal widget tree used as the rendering target.

An ``Element`` carries a tag, string attributes, its own text, ordered
children and, for form controls, live state (value, checked, selected).
Handlers registered with ``on`` run synchronously from ``trigger``; events
bubble to ancestors except ``blur`` and ``focus``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Mapping, Optional

VOID_TAGS = frozenset({"br", "hr", "img", "input", "link", "meta"})
CONTROL_TAGS = ("input", "select", "textarea")
NON_BUBBLING_EVENTS = frozenset({"blur", "focus"})
_UNSERIALIZED_INPUTS = frozenset({"button", "file", "image", "reset", "submit"})


@dataclass
class Event:
    """A dispatched event; ``current_target`` changes while bubbling."""

    type: str
    target: "Element"
    current_target: Optional["Element"] = None
    propagation_stopped: bool = field(default=False)

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


Handler = Callable[[Event], Any]


class Element:
    """A node of the rendered widget tree."""

    def __init__(
        self,
        tag: str,
        attrs: Optional[Mapping[str, Any]] = None,
        text: str = "",
    ) -> None:
        self.tag = tag
        self.attrs: dict[str, str] = {}
        self.text = text
        self.children: list[Element] = []
        self.parent: Optional[Element] = None
        self._handlers: dict[str, list[Handler]] = {}
        self._value: Optional[str] = None
        for key, value in (attrs or {}).items():
            self.set_attr(key, value)
        self.checked = "checked" in self.attrs
        self.selected = "selected" in self.attrs

    def __repr__(self) -> str:
        ident = f"#{self.id}" if self.id else ""
        return f"<Element {self.tag}{ident} children={len(self.children)}>"

    # -- Attributes --------------------------------------------------------

    def set_attr(self, key: str, value: Any) -> None:
        """Set an attribute; ``None``/``False`` remove it, ``True`` sets a boolean attribute."""
        if value is None or value is False:
            self.attrs.pop(key, None)
        elif value is True:
            self.attrs[key] = key
        else:
            self.attrs[key] = str(value)

    @property
    def id(self) -> Optional[str]:
        return self.attrs.get("id")

    @property
    def name(self) -> Optional[str]:
        return self.attrs.get("name")

    @property
    def type(self) -> str:
        """Input type (``text`` for inputs without one)."""
        return self.attrs.get("type", "text" if self.tag == "input" else "")

    @property
    def classes(self) -> list[str]:
        return self.attrs.get("class", "").split()

    @property
    def multiple(self) -> bool:
        return "multiple" in self.attrs

    # -- Tree --------------------------------------------------------------

    def append(self, *children: Element) -> Element:
        """Append children in order and return the last one."""
        for child in children:
            child.parent = self
            self.children.append(child)
        return children[-1] if children else self

    def iter_descendants(self) -> Iterator[Element]:
        """Depth-first, document-order traversal excluding ``self``."""
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def find_all(self, *tags: str) -> list[Element]:
        return [el for el in self.iter_descendants() if el.tag in tags]

    def find_by_class(self, class_name: str) -> list[Element]:
        return [el for el in self.iter_descendants() if class_name in el.classes]

    def get_by_id(self, element_id: str) -> Optional[Element]:
        if self.id == element_id:
            return self
        for el in self.iter_descendants():
            if el.id == element_id:
                return el
        return None

    def closest(self, tag: str) -> Optional[Element]:
        """Nearest element with *tag*, starting at ``self``."""
        node: Optional[Element] = self
        while node is not None and node.tag != tag:
            node = node.parent
        return node

    def root(self) -> Element:
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def text_content(self) -> str:
        return self.text + "".join(child.text_content() for child in self.children)

    # -- Control state -----------------------------------------------------

    @property
    def value(self) -> str:
        if self.tag == "select":
            chosen = self.selected_options()
            return chosen[0].value if chosen else ""
        if self.tag == "option":
            return self.attrs.get("value", self.text)
        if self._value is not None:
            return self._value
        if self.tag == "textarea":
            return self.text
        if self.tag == "input" and self.type in ("checkbox", "radio"):
            return self.attrs.get("value", "on")
        return self.attrs.get("value", "")

    @value.setter
    def value(self, value: Any) -> None:
        if self.tag == "select":
            for option in self.find_all("option"):
                option.selected = option.value == str(value)
        else:
            self._value = str(value)

    def selected_options(self) -> list[Element]:
        """Selected ``option`` children; a single select falls back to its first option."""
        options = self.find_all("option")
        chosen = [opt for opt in options if opt.selected]
        if not chosen and options and not self.multiple:
            return options[:1]
        return chosen

    # -- Events ------------------------------------------------------------

    def on(self, event_type: str, handler: Handler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def handlers(self, event_type: str) -> list[Handler]:
        return list(self._handlers.get(event_type, ()))

    def trigger(self, event_type: str) -> Event:
        """Dispatch *event_type* at this element, bubbling where applicable."""
        event = Event(event_type, self)
        node: Optional[Element] = self
        while node is not None:
            event.current_target = node
            for handler in node.handlers(event_type):
                handler(event)
            if event.propagation_stopped or event_type in NON_BUBBLING_EVENTS:
                break
            node = node.parent
        return event

    # -- Simulated user interaction ---------------------------------------

    def fill(self, value: Any) -> None:
        """Type *value* into a text control and leave it (``change`` then ``blur``)."""
        self.value = value
        self.trigger("change")
        self.trigger("blur")

    def set_checked(self, checked: bool = True) -> None:
        """Toggle a checkbox or radio button and fire ``change``.

        Checking a radio button unchecks the other radios sharing its name
        within the same form (or the same tree when outside a form).
        """
        if checked and self.type == "radio" and self.name:
            scope = self.closest("form") or self.root()
            for other in scope.find_all("input"):
                if other is not self and other.type == "radio" and other.name == self.name:
                    other.checked = False
        self.checked = checked
        self.trigger("change")

    def choose(self, *values: str) -> None:
        """Select the options of a select control whose values are in *values*."""
        wanted = {str(v) for v in values}
        for option in self.find_all("option"):
            option.selected = option.value in wanted
        self.trigger("change")

    def click(self) -> Event:
        return self.trigger("click")


def serialize_array(container: Element) -> list[tuple[str, str]]:
    """Return ``(name, value)`` pairs for the successful controls in *container*.

    Unnamed or disabled controls, buttons, and unchecked checkboxes/radios
    are skipped; a select contributes one pair per selected option.
    """
    pairs: list[tuple[str, str]] = []
    for el in container.iter_descendants():
        if el.tag not in CONTROL_TAGS or not el.name or "disabled" in el.attrs:
            continue
        if el.tag == "input":
            if el.type in _UNSERIALIZED_INPUTS:
                continue
            if el.type in ("checkbox", "radio") and not el.checked:
                continue
        if el.tag == "select":
            pairs.extend((el.name, opt.value) for opt in el.selected_options())
        else:
            pairs.append((el.name, el.value))
    return pairs
