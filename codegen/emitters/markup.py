"""
Markup structure shared by the HTML and Tailwind emitters.

Both targets nest the same elements (div/span/img); they only differ in how
properties are written (inline style vs class list).
"""

import html
import re
from typing import TYPE_CHECKING, Optional

from codegen.emitters.base import (
    Emitter, StyleDescriptor, TextSpans, indent_string, placeholder_url,
)
from codegen.extractors import retrieve_top_fill
from codegen.layout import LayoutDecision
from codegen.nodes import ImagePaint, SceneNode, TextSegment

if TYPE_CHECKING:
    from codegen.builder import StyleBuilder

SELF_CLOSING_TAGS = ("img",)


def layer_class_name(name: str) -> str:
    """Layer name turned into a usable class name ("Card / Title" -> "card-title")."""
    slug = re.sub(r'[^a-zA-Z0-9]+', '-', name).strip('-').lower()
    return slug


def escape_jsx_braces(text: str) -> str:
    """Braces start expressions in JSX children, so they are written as string literals."""
    return re.sub(r'[{}]', lambda m: "{'" + m.group(0) + "'}", text)


class MarkupEmitter(Emitter):

    def class_attribute(self, jsx: bool) -> str:
        return "className" if jsx else "class"

    def background_image_styles(self, node: SceneNode) -> StyleDescriptor:
        """Background for an image-filled element that cannot be an <img>."""
        return {}

    def text_content(self, segment: TextSegment) -> str:
        text = html.escape(segment.characters, quote=False)
        return text.replace("\n", "<br/>")

    def _tag_and_src(self, node: SceneNode, children: str):
        if not children and isinstance(retrieve_top_fill(node.fills), ImagePaint):
            return "img", f' src="{placeholder_url(node)}"'
        return "div", ""

    def container(self, builder: "StyleBuilder", children: str,
                  extra: Optional[StyleDescriptor] = None,
                  layout: Optional[LayoutDecision] = None) -> str:
        node = builder.node
        # ignore the element when its size is zero or less; rounding errors can
        # produce values like -0.000004
        if node.width <= 0 or node.height <= 0:
            return children

        styles = dict(extra or {})
        tag, src = self._tag_and_src(node, children)
        if tag == "div" and isinstance(retrieve_top_fill(node.fills), ImagePaint):
            styles.update(self.background_image_styles(node))

        attributes = builder.build(styles)
        if not attributes:
            return children

        jsx = builder.context.jsx
        if children:
            return f"\n<{tag}{attributes}{src}>{indent_string(children)}\n</{tag}>"
        if tag in SELF_CLOSING_TAGS or jsx:
            return f"\n<{tag}{attributes}{src} />"
        return f"\n<{tag}{attributes}{src}></{tag}>"

    def text(self, builder: "StyleBuilder", content: Optional[str],
             spans: Optional[TextSpans] = None) -> str:
        jsx = builder.context.jsx
        if spans is not None:
            content = "".join(
                f"<span{self.serialize_attributes(styles, '', builder.context)}>"
                f"{escape_jsx_braces(text) if jsx else text}</span>"
                for text, styles in spans
            )
        elif content and jsx:
            content = escape_jsx_braces(content)
        return f"\n<div{builder.build()}>{content or ''}</div>"

    def line(self, builder: "StyleBuilder") -> str:
        return f"\n<div{builder.build()}></div>"

    def image(self, builder: "StyleBuilder") -> str:
        node = builder.node
        return f'\n<img{builder.build()} src="{placeholder_url(node)}" />'
