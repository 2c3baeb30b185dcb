"""
Tests for the standalone-line whitespace pass.
"""

import pytest

from stache.template.lexer import tokenize_template
from stache.template.standalone import strip_standalone
from stache.template.tokens import TagKind, TokenType
from tests.infrastructure import render_template


def values(tokens):
    return [t.value for t in tokens if t.type != TokenType.EOF]


class TestStandaloneFilter:
    """Token-level behavior of the pass."""

    def test_standalone_section_line_is_reduced_to_tag(self):
        tokens = strip_standalone(tokenize_template("  {{#a}}  \nbody\n"))
        assert values(tokens) == ["a", "body", "\n"]

    def test_inline_tag_is_kept_with_its_whitespace(self):
        tokens = strip_standalone(tokenize_template(" x {{#a}}\n"))
        assert values(tokens) == [" x ", "a", "\n"]

    def test_variable_is_never_standalone(self):
        tokens = strip_standalone(tokenize_template("  {{a}}\n"))
        assert values(tokens) == ["  ", "a", "\n"]

    def test_two_tags_on_a_line_are_not_standalone(self):
        tokens = strip_standalone(tokenize_template("{{#a}}{{/a}}\n"))
        assert values(tokens) == ["a", "a", "\n"]

    def test_crlf_terminator_is_removed(self):
        tokens = strip_standalone(tokenize_template("|\r\n{{#a}}\r\n{{/a}}\r\n|"))
        assert values(tokens) == ["|", "\r\n", "a", "a", "|"]

    def test_last_line_without_terminator(self):
        tokens = strip_standalone(tokenize_template("x\n  {{! done }}"))
        assert values(tokens) == ["x", "\n", " done "]

    def test_partial_records_indent(self):
        tokens = strip_standalone(tokenize_template(" \t{{>item}}\n"))
        partial = tokens[0]

        assert partial.kind == TagKind.PARTIAL
        assert partial.indent == " \t"

    def test_inline_partial_has_no_indent(self):
        tokens = strip_standalone(tokenize_template(" > {{>item}}\n"))
        partial = [t for t in tokens if t.is_tag][0]
        assert partial.indent == ""

    def test_eof_is_preserved(self):
        tokens = strip_standalone(tokenize_template("{{#a}}\n{{/a}}"))
        assert tokens[-1].type == TokenType.EOF


class TestStandaloneRendering:
    """Rendered output around standalone tags."""

    @pytest.mark.parametrize("template, data, expected", [
        ("| A\n{{#bool}}\n| B\n{{/bool}}\n| C", {"bool": True}, "| A\n| B\n| C"),
        ("| A\n  {{^bool}}\n| B\n  {{/bool}}\n| C", {"bool": False}, "| A\n| B\n| C"),
        ("Begin.\n{{! Comment Block! }}\nEnd.", {}, "Begin.\nEnd."),
        ("Begin.\n{{=@ @=}}\nEnd.", {}, "Begin.\nEnd."),
        ("{{#bool}}\n#{{/bool}}\n/", {"bool": True}, "#\n/"),
    ])
    def test_standalone_lines_disappear(self, template, data, expected):
        assert render_template(template, data) == expected

    def test_multiline_comment_is_standalone(self):
        template = "Begin.\n  {{!\n    Something's going on here...\n  }}\nEnd."
        assert render_template(template) == "Begin.\nEnd."

    def test_standalone_partial_indents_every_line(self):
        result = render_template(
            "\\\n  {{>partial}}\n/\n",
            {"content": "<\n->"},
            {"partial": "|\n{{{content}}}\n|\n"},
        )
        assert result == "\\\n  |\n  <\n->\n  |\n/\n"
