"""Per-type node renderers.

A renderer has the signature ``(renderer, node, path, slot) -> None`` and
appends exactly one top-level element for *node* (which is ``meta[path]``)
to *slot*.  Container types recurse through ``FormRenderer.render_items``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Sequence

from formtree.dom import Element, Event
from formtree.meta.models import ChoiceNode, MetaNode
from formtree.render.paths import Token, make_id
from formtree.render.validation import bind

if TYPE_CHECKING:
    from formtree.render.renderer import FormRenderer

RendererFn = Callable[["FormRenderer", MetaNode, Sequence[Token], Element], None]


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def field_id(node: MetaNode, path: Sequence[Token]) -> str:
    """Explicit ``attr.id`` or an id derived from the path."""
    explicit = node.attr.get("id")
    return str(explicit) if explicit is not None else make_id(path)


def error_slot(element_id: str) -> Element:
    return Element("div", {"class": "error", "id": f"{element_id}-err"})


def _field(slot: Element, element_id: str, label: str) -> Element:
    """Append a ``div.field`` with its label; return the control holder."""
    wrapper = slot.append(Element("div", {"class": "field"}))
    wrapper.append(Element("label", {"for": element_id}, text=label))
    return wrapper.append(Element("div"))


# ---------------------------------------------------------------------------
# Type routines
# ---------------------------------------------------------------------------

def block(renderer: FormRenderer, node: MetaNode, path: Sequence[Token], slot: Element) -> None:
    renderer.render_items("div", node, path, slot)


def form(renderer: FormRenderer, node: MetaNode, path: Sequence[Token], slot: Element) -> None:
    with renderer.form_scope() as state:
        form_el = renderer.render_items("form", node, path, slot)

    def on_submit(event: Event) -> None:
        renderer.commit(form_el, state.multi_valued)

    form_el.on("submit", on_submit)


def header(renderer: FormRenderer, node: MetaNode, path: Sequence[Token], slot: Element) -> None:
    slot.append(Element(f"h{node.level}", node.attr, text=node.text or ""))


def input_(renderer: FormRenderer, node: MetaNode, path: Sequence[Token], slot: Element) -> None:
    element_id = field_id(node, path)
    holder = _field(slot, element_id, node.label)
    attrs = {**node.attr, "id": element_id}
    if node.sub_type == "textarea":
        control = Element("textarea", attrs)
    else:
        control = Element("input", {**attrs, "type": node.sub_type})
    holder.append(control)
    error = holder.append(error_slot(element_id))
    bind(node, control, error, "blur")


def link(renderer: FormRenderer, node: MetaNode, path: Sequence[Token], slot: Element) -> None:
    attrs = {**node.attr, "href": renderer.ref_url(node.ref)}
    slot.append(Element("a", attrs, text=node.text or ""))


def _choices(
    renderer: FormRenderer,
    node: ChoiceNode,
    path: Sequence[Token],
    slot: Element,
    *,
    multiple: bool,
) -> None:
    element_id = field_id(node, path)
    holder = _field(slot, element_id, node.label)
    if len(node.items) > renderer.threshold(node):
        widget = Element("select", {"name": node.name, "id": element_id, "multiple": multiple})
        for choice in node.items:
            widget.append(Element("option", {"value": choice.key}, text=choice.label))
    else:
        widget = Element("div", {"class": "fieldset"})
        input_type = "checkbox" if multiple else "radio"
        for index, choice in enumerate(node.items):
            choice_id = f"{element_id}-{index}"
            widget.append(
                Element("label", {"for": choice_id}, text=choice.label),
                Element(
                    "input",
                    {"name": node.name, "id": choice_id, "value": choice.key, "type": input_type},
                ),
            )
    holder.append(widget)
    error = holder.append(error_slot(element_id))
    bind(node, widget, error, "change")
    if multiple and node.name:
        renderer.register_multi_valued(node.name)


def multi_select(
    renderer: FormRenderer, node: MetaNode, path: Sequence[Token], slot: Element
) -> None:
    _choices(renderer, node, path, slot, multiple=True)


def uni_select(
    renderer: FormRenderer, node: MetaNode, path: Sequence[Token], slot: Element
) -> None:
    _choices(renderer, node, path, slot, multiple=False)


def para(renderer: FormRenderer, node: MetaNode, path: Sequence[Token], slot: Element) -> None:
    renderer.render_items("p", node, path, slot)


def segment(renderer: FormRenderer, node: MetaNode, path: Sequence[Token], slot: Element) -> None:
    if node.text is not None:
        slot.append(Element("span", node.attr, text=node.text))
    else:
        renderer.render_items("span", node, path, slot)


def submit(renderer: FormRenderer, node: MetaNode, path: Sequence[Token], slot: Element) -> None:
    wrapper = slot.append(Element("div"))
    button = wrapper.append(
        Element("button", {**node.attr, "type": "submit"}, text=node.text or "Submit")
    )

    def on_click(event: Event) -> None:
        form_el = button.closest("form")
        if form_el is not None:
            form_el.trigger("submit")

    button.on("click", on_click)


# map from type to type routine
RENDERERS: dict[str, RendererFn] = {
    "block": block,
    "form": form,
    "header": header,
    "input": input_,
    "link": link,
    "multiSelect": multi_select,
    "para": para,
    "segment": segment,
    "submit": submit,
    "uniSelect": uni_select,
}
