"""formtree: metadata-driven form rendering.

Usage::

    from formtree import FormRenderer, MetaTree, render_page

    tree = MetaTree.from_dict({"_": {"type": "header", "text": "Hello"}})
    body = FormRenderer(tree).go()
    print(render_page(body))
"""

from formtree.config import Config
from formtree.dom import Element
from formtree.meta import MetaTree, load_meta
from formtree.page import render_html, render_page
from formtree.render import FormRenderer

__all__ = [
    "Config",
    "Element",
    "FormRenderer",
    "MetaTree",
    "load_meta",
    "render_html",
    "render_page",
]
