"""The form tree renderer.

``FormRenderer`` owns a metadata tree and turns the node addressed by a path
into a widget tree in one synchronous pass.  Forms rendered by it validate and
serialize themselves on ``submit`` and hand the result to the renderer's
submission consumer.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Sequence

import httpx

from formtree.config import Config
from formtree.dom import Element, serialize_array
from formtree.meta.models import OPTIONS_KEY, MetaNode, MetaTree, node_type, parse_node
from formtree.render.paths import NOT_FOUND, PARENT, Token, make_id, resolve
from formtree.render.renderers import RENDERERS, RendererFn
from formtree.submit import Submitter, console_submitter


@dataclass
class FormState:
    """Render-time bookkeeping for one form."""

    multi_valued: set[str] = field(default_factory=set)


class FormRenderer:
    """Render metadata nodes into ``Element`` trees.

    Args:
        meta: The metadata tree; never modified.
        config: Thresholds, default ref and page URL.  Defaults to ``Config()``.
        submitter: Receives the mapping produced by every accepted commit.
    """

    def __init__(
        self,
        meta: MetaTree,
        config: Optional[Config] = None,
        submitter: Optional[Submitter] = None,
    ) -> None:
        self.meta = meta
        self.config = config or Config()
        self.submitter = submitter or console_submitter
        self.page_url = self.config.page_url
        self.renderers: dict[str, RendererFn] = dict(RENDERERS)
        self._forms: list[FormState] = []

    # -- Entry points ------------------------------------------------------

    def go(self, page_url: Optional[str] = None) -> Element:
        """Render the node named by the page URL's ``ref`` parameter into a new ``body``."""
        if page_url is not None:
            self.page_url = page_url
        ref = httpx.URL(self.page_url).params.get("ref") or self.config.default_ref
        return self.render([ref])

    def render(self, path: Sequence[Token], slot: Optional[Element] = None) -> Element:
        """Render ``meta[path]`` into *slot* (a new ``body`` if omitted) and return *slot*."""
        if slot is None:
            slot = Element("body")
        node = self.access(path)
        if not isinstance(node, MetaNode):
            slot.append(Element("p", text=f"Path {make_id(path)} not found"))
        else:
            self.dispatch(node, path, slot)
        return slot

    def dispatch(self, node: Any, path: Sequence[Token], slot: Element) -> None:
        """Call the renderer registered for the node's type.

        Unknown types produce a placeholder paragraph in *slot*; rendering of
        siblings and ancestors is unaffected.
        """
        if not isinstance(node, MetaNode):
            node = parse_node(node)
        kind = node_type(node)
        fn = self.renderers.get(kind)
        if fn is None:
            slot.append(Element("p", text=f"type {kind} not supported"))
            return
        fn(self, node, list(path), slot)

    # -- Helpers for type routines ----------------------------------------

    def access(self, path: Sequence[Token]) -> Any:
        return resolve(self.meta.root, path)

    def parent_type(self, path: Sequence[Token]) -> str:
        """Type of ``meta[path + [".."]]``, for routines that depend on their context."""
        return node_type(self.access([*path, PARENT]))

    def render_items(
        self, tag: str, node: MetaNode, path: Sequence[Token], slot: Element
    ) -> Element:
        """Append ``<tag attr>`` to *slot* and render each child of *node* into it."""
        element = slot.append(Element(tag, node.attr))
        for index in range(len(getattr(node, "items", ()))):
            self.render([*path, "items", index], element)
        return element

    def threshold(self, node: MetaNode) -> int:
        """Number of choices above which a choice node renders as a select list.

        A truthy ``_options.N_UNI_SELECT`` overrides the configured thresholds
        of both choice types.
        """
        override = self.access([OPTIONS_KEY, "N_UNI_SELECT"])
        if override is not NOT_FOUND and override:
            return override
        if node_type(node) == "multiSelect":
            return self.config.n_multi_select
        return self.config.n_uni_select

    def ref_url(self, ref: str) -> str:
        """The page URL with its ``ref`` query parameter set to *ref*."""
        return str(httpx.URL(self.page_url).copy_set_param("ref", ref))

    @contextmanager
    def form_scope(self) -> Iterator[FormState]:
        state = FormState()
        self._forms.append(state)
        try:
            yield state
        finally:
            self._forms.pop()

    def register_multi_valued(self, name: str) -> None:
        """Mark *name* as list-valued in the innermost form being rendered."""
        if self._forms:
            self._forms[-1].multi_valued.add(name)

    # -- Commit ------------------------------------------------------------

    def commit(
        self, form_el: Element, multi_valued: frozenset[str] | set[str] = frozenset()
    ) -> Optional[dict[str, Any]]:
        """Validate every field of *form_el* and serialize it if all are valid.

        Returns the serialized mapping (after handing it to the submitter), or
        ``None`` when any error element on the page shows a message, including
        errors left by other forms or by fields outside any form.
        """
        for control in form_el.find_all("input", "select", "textarea"):
            control.trigger("blur")
        for control in form_el.find_all("input", "select"):
            control.trigger("change")

        if any(err.text_content().strip() for err in form_el.root().find_by_class("error")):
            return None

        results: dict[str, Any] = {}
        for name, value in serialize_array(form_el):
            if name in multi_valued:
                results.setdefault(name, []).append(value)
            else:
                results[name] = value
        self.submitter(results)
        return results
