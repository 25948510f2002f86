# Pre-pass over an answer tree: lift code blocks and math out as Verbatim nodes
# so the generic walk never reformats their payload.

from __future__ import annotations

import re

from .nodes import Element, Text, Verbatim, find_first, has_class, is_text

CODE_BLOCK_CLASS = "md-code-block"
CODE_INFO_CLASS = "md-code-block-infostring"
DISPLAY_MATH_CLASS = "katex-display"
INLINE_MATH_CLASS = "katex"
TEX_ENCODING = "application/x-tex"

LANG_CLASS_RE = re.compile(r"^(?:language|lang)-(\S+)$")
BACKTICK_RUN_RE = re.compile(r"`+")


def extract_verbatim(node, copies=None):
    # Returns a working copy of node: Element/Text everywhere, Verbatim where
    # a code block or math expression was recognised. A node reached again
    # (shared or cyclic) maps to the copy already made for it, so the
    # renderer's visited guard still sees one identity.
    if copies is None:
        copies = {}
    key = node.identity()
    if key in copies:
        return copies[key]
    if isinstance(node, Verbatim):
        return node

    if is_text(node):
        copy = Text(node.text_content())
    else:
        copy = _lift(node)
    if copy is not None:
        copies[key] = copy
        return copy

    attrs = {}
    for name in ("href", "src", "alt", "title", "start", "class"):
        value = node.attribute(name)
        if value is not None:
            attrs[name] = value
    copy = Element(node.tag_name(), attrs=attrs)
    copies[key] = copy
    copy.contents = [extract_verbatim(child, copies) for child in node.children()]
    return copy


def _lift(node):
    tag = node.tag_name()
    if has_class(node, CODE_BLOCK_CLASS):
        return code_block_from_container(node)
    if tag == "pre":
        return code_block_from_pre(node)
    if has_class(node, DISPLAY_MATH_CLASS) or (tag == "math" and node.attribute("display") == "block"):
        return Verbatim("display_math", payload=tex_source(node))
    if has_class(node, INLINE_MATH_CLASS) or tag == "math":
        return Verbatim("inline_math", payload=tex_source(node))
    return None


def code_block_from_container(node) -> Verbatim:
    info_node = find_first(node, lambda n: has_class(n, CODE_INFO_CLASS))
    pre = find_first(node, lambda n: n.tag_name() == "pre")
    info = info_node.text_content().strip() if info_node is not None else ""
    payload = pre.text_content() if pre is not None else ""
    return Verbatim("code", payload=payload, info=info)


def code_block_from_pre(node) -> Verbatim:
    return Verbatim("code", payload=node.text_content(), info=code_language(node))


def code_language(pre) -> str:
    # <pre class="language-x"> or <pre><code class="language-x">
    candidates = [pre]
    code = find_first(pre, lambda n: n.tag_name() == "code")
    if code is not None:
        candidates.append(code)
    for candidate in candidates:
        for cls in (candidate.attribute("class") or "").split():
            m = LANG_CLASS_RE.match(cls)
            if m:
                return m.group(1)
    return ""


def tex_source(node) -> str:
    annotation = find_first(
        node,
        lambda n: n.tag_name() == "annotation" and n.attribute("encoding") == TEX_ENCODING,
    )
    if annotation is not None:
        return annotation.text_content().strip()
    return node.text_content().strip()


def fence_for(payload: str) -> str:
    longest = max((len(run) for run in BACKTICK_RUN_RE.findall(payload)), default=0)
    return "`" * max(3, longest + 1)


def render_verbatim(node: Verbatim) -> str:
    if node.kind == "code":
        fence = fence_for(node.payload)
        return f"\n{fence}{node.info}\n{node.payload}\n{fence}\n"
    if node.kind == "display_math":
        return f"\n$$\n{node.payload}\n$$\n"
    return f"${node.payload}$"
