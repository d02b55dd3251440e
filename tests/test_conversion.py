"""
Tests for Markdown ↔ editable markup conversion.

Covers the compiler stages, the tree walker rules and round-trips between the
two directions.
"""

import unittest
from unittest.mock import patch

from redraft.conversion import (
    EMPTY_MARKUP,
    MarkdownToMarkupCompiler,
    MarkupTreeWalker,
    markdown_to_markup,
    markup_to_markdown,
    parse_markup,
)


CANONICAL_DOCUMENT = """# Title

Intro with **bold**, *italic* and `code`.

## Section

- one
- two

1. first
2. second

> quoted

```
x = 1
y = 2
```

---

See [docs](https://example.com)."""


class TestMarkdownToMarkupCompiler(unittest.TestCase):
    """Test the staged Markdown compiler."""

    def setUp(self):
        self.compiler = MarkdownToMarkupCompiler()

    def test_empty_input_compiles_to_empty_paragraph(self):
        """Test that empty documents still give the cursor a block."""
        self.assertEqual(self.compiler.compile(""), EMPTY_MARKUP)
        self.assertEqual(self.compiler.compile("   \n\n"), EMPTY_MARKUP)
        self.assertEqual(self.compiler.compile(None), EMPTY_MARKUP)

    def test_heading_paragraph_and_list(self):
        """Test a small document end to end."""
        markup = self.compiler.compile("# Title\n\nSome **bold** text\n\n- a\n- b")

        self.assertEqual(
            markup,
            "<h1>Title</h1>\n<p>Some <strong>bold</strong> text</p>\n<ul><li>a</li><li>b</li></ul>"
        )

    def test_heading_levels(self):
        """Test that longer heading markers are matched first."""
        markup = self.compiler.compile("# One\n## Two\n### Three\n#### Four")

        self.assertEqual(markup, "<h1>One</h1>\n<h2>Two</h2>\n<h3>Three</h3>\n<h4>Four</h4>")

    def test_bold_italic_nesting(self):
        """Test triple emphasis becomes nested strong/em."""
        self.assertEqual(self.compiler.compile("***both***"), "<p><strong><em>both</em></strong></p>")

    def test_inline_rules(self):
        """Test strikethrough and inline code."""
        markup = self.compiler.compile("~~old~~ and `pip install`")

        self.assertEqual(markup, "<p><del>old</del> and <code>pip install</code></p>")

    def test_contiguous_bullets_form_one_list(self):
        """Test that adjacent bullet lines are grouped into a single list."""
        soup = parse_markup(self.compiler.compile("- a\n- b\n- c"))

        self.assertEqual(len(soup.find_all("ul")), 1)
        self.assertEqual(len(soup.find_all("li")), 3)

    def test_numbered_list(self):
        """Test numbered lines become an ordered list."""
        markup = self.compiler.compile("1. first\n2. second")

        self.assertEqual(markup, "<ol><li>first</li><li>second</li></ol>")

    def test_adjacent_blockquotes_merge(self):
        """Test that consecutive quote lines share one blockquote."""
        soup = parse_markup(self.compiler.compile("> one\n> two"))

        self.assertEqual(len(soup.find_all("blockquote")), 1)
        self.assertEqual(len(soup.find_all("p")), 2)

    def test_link(self):
        """Test links keep their target."""
        markup = self.compiler.compile("[site](https://example.com)")

        self.assertEqual(markup, '<p><a href="https://example.com">site</a></p>')

    def test_link_target_cannot_break_out_of_attribute(self):
        """Test quotes in a link target stay inside the href."""
        markup = self.compiler.compile('[x](https://a.io/" onmouseover="x)')

        link = parse_markup(markup).find("a")
        self.assertEqual(link.attrs, {"href": 'https://a.io/" onmouseover="x'})

    def test_horizontal_rule(self):
        """Test a dashed line becomes a rule."""
        self.assertEqual(self.compiler.compile("above\n\n---\n\nbelow"), "<p>above</p>\n<hr>\n<p>below</p>")

    def test_multiline_code_block_is_preserved(self):
        """Test that fenced code keeps its lines inside one pre block."""
        markup = self.compiler.compile("```\nx = 1\ny = 2\n```")

        self.assertEqual(markup, "<pre><code>x = 1\ny = 2</code></pre>")

    def test_code_block_content_is_not_formatted(self):
        """Test that Markdown syntax inside code is left alone."""
        markup = self.compiler.compile("```\n# not a heading\n**raw** <tag>\n```")

        self.assertEqual(markup, "<pre><code># not a heading\n**raw** &lt;tag&gt;</code></pre>")

    def test_html_is_escaped(self):
        """Test that raw HTML in Markdown is shown as text."""
        markup = self.compiler.compile("a < b & <script>")

        self.assertEqual(markup, "<p>a &lt; b &amp; &lt;script&gt;</p>")

    def test_crlf_line_endings(self):
        """Test Windows line endings are normalized."""
        self.assertEqual(self.compiler.compile("# T\r\n\r\nbody"), "<h1>T</h1>\n<p>body</p>")

    def test_malformed_constructs_degrade_to_text(self):
        """Test that unclosed emphasis stays literal."""
        self.assertEqual(self.compiler.compile("**unclosed"), "<p>**unclosed</p>")

    def test_stray_placeholder_stays_literal(self):
        """Test that placeholder-like text without a code block is kept."""
        self.assertIn("%%CODEBLOCK7%%", self.compiler.compile("%%CODEBLOCK7%%"))

    def test_module_helper(self):
        """Test the shared compiler helper."""
        self.assertEqual(markdown_to_markup("# T"), "<h1>T</h1>")


class TestMarkupTreeWalker(unittest.TestCase):
    """Test the markup → Markdown walker."""

    def setUp(self):
        self.walker = MarkupTreeWalker()

    def test_empty_markup(self):
        """Test empty and placeholder-only snapshots serialize to nothing."""
        self.assertEqual(self.walker.serialize(""), "")
        self.assertEqual(self.walker.serialize(None), "")
        self.assertEqual(self.walker.serialize(EMPTY_MARKUP), "")

    def test_inline_formatting(self):
        """Test bold, italic and strikethrough tag variants."""
        markup = "<p><b>b</b> <strong>s</strong> <i>i</i> <em>e</em> <s>x</s> <strike>y</strike> <del>z</del></p>"

        self.assertEqual(self.walker.serialize(markup), "**b** **s** *i* *e* ~~x~~ ~~y~~ ~~z~~")

    def test_headings_and_paragraphs(self):
        """Test block separation with blank lines."""
        markup = "<h2>Sub</h2><p>first</p><p>second</p>"

        self.assertEqual(self.walker.serialize(markup), "## Sub\n\nfirst\n\nsecond")

    def test_line_break(self):
        """Test that br becomes a newline."""
        self.assertEqual(self.walker.serialize("<p>one<br>two</p>"), "one\ntwo")

    def test_lists(self):
        """Test unordered and ordered lists."""
        self.assertEqual(self.walker.serialize("<ul><li>a</li><li>b</li></ul>"), "- a\n- b")
        self.assertEqual(self.walker.serialize("<ol><li>a</li><li>b</li></ol>"), "1. a\n2. b")

    def test_blockquote(self):
        """Test each quoted line gets a marker."""
        markup = "<blockquote><p>one</p><p>two</p></blockquote>"

        self.assertEqual(self.walker.serialize(markup), "> one\n> two")

    def test_code(self):
        """Test inline code and code blocks."""
        self.assertEqual(self.walker.serialize("<p>run <code>ls</code></p>"), "run `ls`")
        self.assertEqual(
            self.walker.serialize("<pre><code>a = 1\nb = 2</code></pre>"),
            "```\na = 1\nb = 2\n```"
        )

    def test_link_and_rule(self):
        """Test links and horizontal rules."""
        self.assertEqual(self.walker.serialize('<p><a href="https://x.io">x</a></p>'), "[x](https://x.io)")
        self.assertEqual(self.walker.serialize("<p>a</p><hr><p>b</p>"), "a\n\n---\n\nb")

    def test_unknown_tags_pass_children_through(self):
        """Test that div, span and underline keep only their text."""
        markup = '<div>plain <span style="color:red">red</span> <u>under</u></div>'

        self.assertEqual(self.walker.serialize(markup), "plain red under")

    def test_divs_end_lines(self):
        """Test browser-generated div lines stay on separate lines."""
        markup = "<p>line one</p><div>line two</div><div>line three</div>"

        self.assertEqual(self.walker.serialize(markup), "line one\n\nline two\nline three")

    def test_div_ending_in_break_adds_no_extra_line(self):
        """Test a div already ending in a newline is left as is."""
        self.assertEqual(self.walker.serialize("<div>a<br></div><div>b</div>"), "a\nb")

    def test_comments_are_skipped(self):
        """Test that HTML comments never reach the Markdown."""
        self.assertEqual(self.walker.serialize("<!-- note --><p>text</p>"), "text")

    def test_blank_runs_collapse(self):
        """Test that empty paragraphs do not pile up blank lines."""
        markup = "<p>a</p><p><br></p><p><br></p><p>b</p>"

        self.assertEqual(self.walker.serialize(markup), "a\n\nb")

    def test_accepts_parsed_node(self):
        """Test serializing an already parsed tree."""
        self.assertEqual(self.walker.serialize(parse_markup("<h1>T</h1>")), "# T")

    def test_deep_nesting_falls_back_to_text(self):
        """Test that a recursion failure still yields the text content."""
        with patch.object(self.walker, "_walk", side_effect=RecursionError):
            self.assertEqual(self.walker.serialize("<p>deep <b>text</b></p>"), "deep text")

    def test_module_helper(self):
        """Test the shared walker helper."""
        self.assertEqual(markup_to_markdown("<p><b>x</b></p>"), "**x**")


class TestRoundTrip(unittest.TestCase):
    """Test that the two directions agree on the supported dialect."""

    def setUp(self):
        self.compiler = MarkdownToMarkupCompiler()
        self.walker = MarkupTreeWalker()

    def test_canonical_document_round_trips(self):
        """Test a document using every construct survives compile + serialize."""
        markup = self.compiler.compile(CANONICAL_DOCUMENT)

        self.assertEqual(self.walker.serialize(markup), CANONICAL_DOCUMENT)

    def test_compile_is_stable_after_round_trip(self):
        """Test compile(serialize(compile(md))) equals compile(md)."""
        documents = [
            CANONICAL_DOCUMENT,
            "***both*** and ~~gone~~",
            "a < b & c > d",
            "line one\nline two",
            "> one\n> two",
        ]
        for markdown in documents:
            with self.subTest(markdown=markdown):
                markup = self.compiler.compile(markdown)
                self.assertEqual(self.compiler.compile(self.walker.serialize(markup)), markup)

    def test_escaped_text_round_trips(self):
        """Test that angle brackets and ampersands come back unchanged."""
        markup = self.compiler.compile("a < b & c")

        self.assertEqual(self.walker.serialize(markup), "a < b & c")


if __name__ == '__main__':
    unittest.main(verbosity=2)
