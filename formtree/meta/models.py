"""Pydantic v2 models for the declarative metadata tree.

Every node type the renderer understands has its own model; all of them share
``MetaNode`` as base payload (text, attributes, validation capabilities).  The
``Node`` union discriminates on ``type`` (absent or empty means ``"block"``)
and routes any other type string to ``UnsupportedNode`` so that a single
unknown node never makes the whole tree unloadable.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Annotated, Any, Callable, Iterator, Literal, Mapping, Optional, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
)

from formtree.config import DEFAULT_REF
from formtree.meta.checks import lookup_check, lookup_message


OPTIONS_KEY = "_options"

ChkFn = Annotated[Optional[Callable[[Any], bool]], BeforeValidator(lookup_check)]
ErrMsgFn = Annotated[Optional[Callable[[Any, Any], str]], BeforeValidator(lookup_message)]


# ---------------------------------------------------------------------------
# Base models
# ---------------------------------------------------------------------------

class MetaNode(BaseModel):
    """Fields shared by every metadata node."""

    model_config = ConfigDict(
        extra="allow", populate_by_name=True, frozen=True, arbitrary_types_allowed=True
    )

    type: str = Field(default="block")
    text: Optional[str] = Field(default=None, description="Display text or label")
    attr: dict[str, Any] = Field(
        default_factory=dict, description="Attributes copied onto the rendered widget"
    )
    required: bool = Field(default=False)
    chk_fn: ChkFn = Field(default=None, alias="chkFn")
    err_msg_fn: ErrMsgFn = Field(default=None, alias="errMsgFn")

    @property
    def validates(self) -> bool:
        """True if a validator has to be bound for this node."""
        return self.chk_fn is not None or self.required

    @property
    def label(self) -> str:
        text = self.text or ""
        return text + "*" if self.required else text


class ContainerNode(MetaNode):
    """A node whose ``items`` are further metadata nodes."""

    items: list["Node"] = Field(default_factory=list)


class Choice(BaseModel):
    """One selectable entry of a ``multiSelect`` / ``uniSelect`` node."""

    model_config = ConfigDict(extra="allow", frozen=True)

    key: Annotated[str, BeforeValidator(str)]
    text: Optional[str] = None

    @property
    def label(self) -> str:
        return self.text if self.text is not None else self.key


# ---------------------------------------------------------------------------
# Node variants
# ---------------------------------------------------------------------------

class BlockNode(ContainerNode):
    # empty or null type means block
    type: Annotated[Literal["block"], BeforeValidator(lambda v: v or "block")] = "block"


class FormNode(ContainerNode):
    type: Literal["form"] = "form"


class ParaNode(ContainerNode):
    type: Literal["para"] = "para"


class SegmentNode(ContainerNode):
    """Inline text; renders ``text`` if declared, otherwise its children."""

    type: Literal["segment"] = "segment"


class HeaderNode(MetaNode):
    type: Literal["header"] = "header"
    level: int = Field(default=1, ge=1, le=6)


class InputNode(MetaNode):
    type: Literal["input"] = "input"
    sub_type: str = Field(default="text", alias="subType")


class LinkNode(MetaNode):
    type: Literal["link"] = "link"
    ref: str = Field(default=DEFAULT_REF)


class ChoiceNode(MetaNode):
    items: list[Choice] = Field(default_factory=list)

    @property
    def name(self) -> Optional[str]:
        return self.attr.get("name")


class MultiSelectNode(ChoiceNode):
    type: Literal["multiSelect"] = "multiSelect"


class UniSelectNode(ChoiceNode):
    type: Literal["uniSelect"] = "uniSelect"


class SubmitNode(MetaNode):
    type: Literal["submit"] = "submit"


class UnsupportedNode(MetaNode):
    """Any node whose ``type`` has no renderer; kept so it can be reported."""

    type: str


NODE_TYPES: dict[str, type[MetaNode]] = {
    "block": BlockNode,
    "form": FormNode,
    "header": HeaderNode,
    "input": InputNode,
    "link": LinkNode,
    "multiSelect": MultiSelectNode,
    "para": ParaNode,
    "segment": SegmentNode,
    "submit": SubmitNode,
    "uniSelect": UniSelectNode,
}


def node_type(node: Any) -> str:
    """Return the declared type of *node*, defaulting to ``"block"``."""
    if isinstance(node, Mapping):
        return node.get("type") or "block"
    return getattr(node, "type", None) or "block"


def _node_tag(value: Any) -> str:
    kind = node_type(value)
    return kind if kind in NODE_TYPES else "unsupported"


Node = Annotated[
    Union[
        Annotated[BlockNode, Tag("block")],
        Annotated[FormNode, Tag("form")],
        Annotated[HeaderNode, Tag("header")],
        Annotated[InputNode, Tag("input")],
        Annotated[LinkNode, Tag("link")],
        Annotated[MultiSelectNode, Tag("multiSelect")],
        Annotated[ParaNode, Tag("para")],
        Annotated[SegmentNode, Tag("segment")],
        Annotated[SubmitNode, Tag("submit")],
        Annotated[UniSelectNode, Tag("uniSelect")],
        Annotated[UnsupportedNode, Tag("unsupported")],
    ],
    Discriminator(_node_tag),
]

ContainerNode.model_rebuild()
for _model in (BlockNode, FormNode, ParaNode, SegmentNode):
    _model.model_rebuild()

_NODE_ADAPTER: TypeAdapter[MetaNode] = TypeAdapter(Node)


def parse_node(raw: Any) -> MetaNode:
    """Validate a raw mapping (or an existing node) into its node variant."""
    return _NODE_ADAPTER.validate_python(raw)


# ---------------------------------------------------------------------------
# Options & tree
# ---------------------------------------------------------------------------

class MetaOptions(BaseModel):
    """The reserved ``_options`` entry of a metadata tree."""

    model_config = ConfigDict(extra="allow", frozen=True)

    N_UNI_SELECT: Optional[int] = None
    N_MULTI_SELECT: Optional[int] = None


class MetaTree:
    """Read-only metadata tree: top-level ref names mapped to nodes.

    The renderer receives a ``MetaTree`` explicitly and resolves paths against
    ``root``, which also exposes the ``_options`` entry.
    """

    def __init__(
        self,
        nodes: Mapping[str, MetaNode],
        options: MetaOptions | None = None,
    ) -> None:
        self._nodes = dict(nodes)
        self._options = options or MetaOptions()
        self._root = MappingProxyType({**self._nodes, OPTIONS_KEY: self._options})

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "MetaTree":
        """Build a tree from plain data (e.g. parsed YAML/JSON or a Python dict)."""
        nodes: dict[str, MetaNode] = {}
        options: MetaOptions | None = None
        for key, value in raw.items():
            if key == OPTIONS_KEY:
                options = MetaOptions.model_validate(value or {})
            else:
                nodes[str(key)] = parse_node(value)
        return cls(nodes, options)

    @property
    def root(self) -> Mapping[str, Any]:
        return self._root

    @property
    def options(self) -> MetaOptions:
        return self._options

    def refs(self) -> list[str]:
        """Names of the top-level nodes, in declaration order."""
        return list(self._nodes)

    def __getitem__(self, ref: str) -> MetaNode:
        return self._nodes[ref]

    def __contains__(self, ref: object) -> bool:
        return ref in self._nodes

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)
