from ingest.html_to_markdown import node_to_markdown
from ingest.nodes import Element, Text, Verbatim
from ingest.verbatim import extract_verbatim, fence_for, render_verbatim

CODE_BLOCK = (
    '<div class="md-code-block">'
    '<div class="md-code-block-banner">'
    '<span class="md-code-block-infostring">{lang}</span>'
    "</div>"
    "<pre>{code}</pre>"
    "</div>"
)

INLINE_MATH = (
    '<span class="katex"><span class="katex-mathml"><math><semantics>'
    "<mrow><mi>x</mi></mrow>"
    '<annotation encoding="application/x-tex">{tex}</annotation>'
    '</semantics></math></span><span class="katex-html">rendered</span></span>'
)


def test_code_block_text_is_kept_byte_for_byte(html_node):
    code = "x = a * b  # |`y`|\n## not a heading\n| a | b |"
    root = html_node(CODE_BLOCK.format(lang="python", code=code))

    assert node_to_markdown(root) == f"```python\n{code}\n```"


def test_code_block_markup_inside_pre_is_not_reformatted(html_node):
    root = html_node(
        '<div class="md-code-block"><pre><span class="k">def</span> f():\n'
        "    return <b>1</b></pre></div>"
    )

    assert node_to_markdown(root) == "```\ndef f():\n    return 1\n```"


def test_missing_language_and_code_become_empty():
    block = extract_verbatim(Element("div", {"class": "md-code-block"}))

    assert isinstance(block, Verbatim)
    assert block.kind == "code"
    assert block.info == ""
    assert block.payload == ""
    assert render_verbatim(block) == "\n```\n\n```\n"


def test_fence_grows_past_backtick_runs():
    assert fence_for("plain") == "```"
    assert fence_for("``` nested ```") == "````"

    out = render_verbatim(Verbatim("code", payload="```js\nx\n```", info="md"))
    assert out == "\n````md\n```js\nx\n```\n````\n"


def test_bare_pre_uses_language_class(html_node):
    root = html_node('<pre><code class="language-js">let a = 1;</code></pre>')

    assert node_to_markdown(root) == "```js\nlet a = 1;\n```"


def test_inline_math_uses_tex_annotation(html_node):
    root = html_node("<p>Area " + INLINE_MATH.format(tex=r"\pi r^2") + "</p>")

    out = node_to_markdown(root)
    assert r"$\pi r^2$" in out
    assert "rendered" not in out


def test_display_math_gets_its_own_block(html_node):
    root = html_node(
        '<p>Before</p><span class="katex-display">'
        + INLINE_MATH.format(tex="x^2 + y^2")
        + "</span><p>After</p>"
    )

    assert node_to_markdown(root) == "Before\n\n$$\nx^2 + y^2\n$$\nAfter"


def test_extraction_copies_and_leaves_input_untouched(html_node):
    root = html_node(CODE_BLOCK.format(lang="sh", code="ls"))

    working = extract_verbatim(root)

    assert isinstance(working, Element)
    assert isinstance(working.contents[0], Verbatim)
    assert working.contents[0].info == "sh"
    assert root.element.find("pre") is not None


def test_plain_elements_are_copied_with_link_attributes():
    link = Element("a", {"href": "u", "title": "t", "onclick": "x()"}, [Text("go")])

    copied = extract_verbatim(link)

    assert copied is not link
    assert copied.attrs == {"href": "u", "title": "t"}
    assert copied.contents[0].text_content() == "go"


def test_shared_node_maps_to_one_copy():
    shared = Element("p", contents=[Text("x")])

    working = extract_verbatim(Element("div", contents=[shared, shared]))

    first, second = working.contents
    assert first is second
    assert first is not shared
