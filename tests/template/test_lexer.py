"""
Tests for the template lexer.

Covers tokenization of:
- plain text and line terminators
- every tag kind and its sigil
- set-delimiter tags and the delimiter state they change
- position tracking and lexical errors
"""

import pytest

from stache import ParseError
from stache.template.lexer import TemplateLexer, tokenize_template
from stache.template.tokens import Delimiters, LexerError, TagKind, TokenType


def kinds(tokens):
    return [t.kind if t.is_tag else t.type for t in tokens]


class TestTemplateLexer:
    """Basic lexer behavior."""

    def test_empty_template(self):
        """An empty template yields only EOF."""
        tokens = TemplateLexer("").tokenize()

        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF
        assert tokens[0].position == 0
        assert tokens[0].line == 1
        assert tokens[0].column == 1

    def test_plain_text(self):
        text = "Hello, {world}!"
        tokens = tokenize_template(text)

        assert kinds(tokens) == [TokenType.TEXT, TokenType.EOF]
        assert tokens[0].value == text

    def test_text_is_split_at_line_terminators(self):
        tokens = tokenize_template("a\nb\r\nc")

        assert [t.value for t in tokens] == ["a", "\n", "b", "\r\n", "c", ""]
        assert kinds(tokens) == [
            TokenType.TEXT, TokenType.NEWLINE,
            TokenType.TEXT, TokenType.NEWLINE,
            TokenType.TEXT, TokenType.EOF,
        ]

    def test_lone_carriage_return_is_text(self):
        tokens = tokenize_template("a\rb")
        assert kinds(tokens) == [TokenType.TEXT, TokenType.EOF]

    def test_positions(self):
        tokens = tokenize_template("ab\n  {{x}}")
        tag = tokens[3]

        assert tag.kind == TagKind.VARIABLE
        assert (tag.position, tag.line, tag.column) == (5, 2, 3)
        assert tag.end == 10

    @pytest.mark.parametrize("source, kind, value", [
        ("{{name}}", TagKind.VARIABLE, "name"),
        ("{{{name}}}", TagKind.UNESCAPED, "name"),
        ("{{&name}}", TagKind.UNESCAPED, "name"),
        ("{{#name}}", TagKind.SECTION_OPEN, "name"),
        ("{{^name}}", TagKind.INVERTED_OPEN, "name"),
        ("{{/name}}", TagKind.SECTION_CLOSE, "name"),
        ("{{>name}}", TagKind.PARTIAL, "name"),
        ("{{! note }}", TagKind.COMMENT, " note "),
    ])
    def test_tag_kinds(self, source, kind, value):
        tokens = tokenize_template(source)

        assert len(tokens) == 2
        assert tokens[0].kind == kind
        assert tokens[0].value == value

    def test_padding_is_trimmed(self):
        tokens = tokenize_template("{{# a.b }}{{{ c }}}{{& d }}")
        assert [t.value for t in tokens[:-1]] == ["a.b", "c", "d"]

    def test_multiline_comment_is_one_token(self):
        tokens = tokenize_template("{{!\nline one\nline two\n}}after")

        assert kinds(tokens) == [TagKind.COMMENT, TokenType.TEXT, TokenType.EOF]
        assert tokens[1].line == 4

    def test_empty_comment(self):
        tokens = tokenize_template("{{!}}")
        assert tokens[0].kind == TagKind.COMMENT
        assert tokens[0].value == ""


class TestSetDelimiters:

    def test_delimiters_change_for_following_tags(self):
        tokens = tokenize_template("{{=<% %>=}}<%name%>{{name}}")

        assert tokens[0].kind == TagKind.SET_DELIMITER
        assert tokens[1].kind == TagKind.VARIABLE
        assert tokens[1].value == "name"
        assert tokens[1].delimiters == Delimiters("<%", "%>")
        assert tokens[2].type == TokenType.TEXT
        assert tokens[2].value == "{{name}}"

    def test_tag_records_delimiters_in_effect(self):
        tokens = tokenize_template("{{=| |=}}|#a||/a|")

        assert tokens[0].delimiters == Delimiters()
        assert tokens[1].delimiters == Delimiters("|", "|")

    def test_padding_inside_definition(self):
        lexer = TemplateLexer("{{=   @   @   =}}")
        lexer.tokenize()
        assert lexer.delimiters == Delimiters("@", "@")

    def test_triple_mustache_with_custom_delimiters(self):
        tokens = tokenize_template("{{=<% %>=}}<%{name}%>")
        assert tokens[1].kind == TagKind.UNESCAPED
        assert tokens[1].value == "name"

    def test_initial_delimiters(self):
        tokens = tokenize_template("[[a]] {{a}}", Delimiters("[[", "]]"))
        assert kinds(tokens) == [TagKind.VARIABLE, TokenType.TEXT, TokenType.EOF]

    @pytest.mark.parametrize("source", [
        "{{=<%=}}",
        "{{=<% %> x=}}",
        "{{=<= =>=}}",
    ])
    def test_invalid_definition(self, source):
        with pytest.raises(LexerError, match="Invalid delimiter"):
            tokenize_template(source)


class TestLexerErrors:

    def test_unclosed_tag(self):
        with pytest.raises(LexerError) as exc_info:
            tokenize_template("line\n  {{name")

        assert exc_info.value.line == 2
        assert exc_info.value.column == 3
        assert exc_info.value.position == 7
        assert str(exc_info.value).endswith("at 2:3")

    def test_unclosed_triple_mustache(self):
        with pytest.raises(LexerError, match="Unclosed"):
            tokenize_template("{{{name}}")

    @pytest.mark.parametrize("source", ["{{}}", "{{ }}", "{{#}}", "{{/ }}", "{{>}}"])
    def test_empty_tag(self, source):
        with pytest.raises(LexerError, match="Empty tag"):
            tokenize_template(source)

    def test_lexer_error_is_parse_error(self):
        with pytest.raises(ParseError):
            tokenize_template("{{")
