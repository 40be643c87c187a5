"""
Tests for the stylesheet tokenizer.
"""

import pytest

from scripts.cssblocks.lexer import Lexer, TokenType, tokenize


class CountingText(str):
    """Text that totals how many characters its searches pass over."""

    scanned = 0

    def find(self, sub, start=0, *args):
        index = super().find(sub, start, *args)
        self.scanned += (index if index != -1 else len(self)) - start
        return index


class TestTokenize:

    @pytest.mark.parametrize("value", [None, "", 42, ["a"]])
    def test_empty_or_non_text_input(self, value):
        """Non-text and empty input produce no tokens"""
        assert tokenize(value) == []

    def test_comment_splits_text(self):
        """Comments are tokens of their own between text runs"""
        assert tokenize("a{}/* c */b") == ["a{}", "/* c */", "b"]

    def test_adjacent_comments(self):
        """Back-to-back comments stay separate"""
        assert tokenize("/* a *//* b */") == ["/* a */", "/* b */"]

    def test_comment_with_inner_stars(self):
        """Stars inside a comment do not end it early"""
        assert tokenize("/** a * b **/x") == ["/** a * b **/", "x"]
        assert tokenize("/*/ x */") == ["/*/ x */"]

    def test_import_url_statement(self):
        """@import url(...) is one token including the semicolon"""
        assert tokenize("@import url(a.css);\nbody{}") == ["@import url(a.css);", "\nbody{}"]

    def test_import_quoted_statement(self):
        """Quoted @import ends at the closing quote"""
        assert tokenize("@import 'x.css' screen;") == ["@import 'x.css'", " screen;"]
        assert tokenize('@import "y.css";a') == ['@import "y.css";', "a"]

    def test_bare_import_is_text(self):
        """An @import without url() or quotes stays literal text"""
        assert tokenize("@import foo;") == ["@import foo;"]

    def test_unterminated_comment_is_text(self):
        """An unclosed comment becomes a text run to the end"""
        assert tokenize("a /* b") == ["a ", "/* b"]

    def test_text_stops_before_markers(self):
        """Text runs end right before the next comment or @import"""
        assert tokenize("a@import 'b';c/*d*/") == ["a", "@import 'b';", "c", "/*d*/"]

    def test_tokens_cover_input(self):
        """Joined tokens reproduce the source exactly"""
        source = "@charset 'utf-8';\n/*! block a */\n@import url(\"x\");\np{}/* open"
        assert "".join(tokenize(source)) == source


class TestLexer:

    def test_token_types(self):
        """Each token is classified as comment, import or text"""
        lexer = Lexer("x/* c */@import 'a';")
        assert [token.token_type for token in lexer.tokens] == [
            TokenType.TEXT,
            TokenType.COMMENT,
            TokenType.IMPORT,
        ]

    def test_token_positions(self):
        """Tokens record the line and column they start at"""
        lexer = Lexer("ab\ncd/* x */\n@import 'a';")
        comment = lexer.tokens[1]
        assert (comment.line, comment.column) == (2, 3)
        text = lexer.tokens[2]
        assert (text.line, text.column) == (2, 10)
        statement = lexer.tokens[3]
        assert (statement.line, statement.column) == (3, 1)

    def test_tokenize_disabled(self):
        """With tokenize off nothing is scanned until asked"""
        lexer = Lexer("a/* b */", config={"tokenize": False, "enable_logger": False})
        assert lexer.tokens == []
        assert [token.value for token in lexer.tokenize()] == ["a", "/* b */"]

    def test_token_type_lookup(self):
        """Token types resolve by name"""
        assert TokenType.get_token_type("IMPORT") is TokenType.IMPORT
        with pytest.raises(ValueError):
            TokenType.get_token_type("SELECTOR")


class TestLinearScan:

    @pytest.mark.parametrize("unit", ["/* ", "@import url(", "@import 'a"])
    def test_unterminated_openers_are_scanned_once(self, unit):
        """Repeated openers that never close do not rescan the rest of the input"""
        text = CountingText(unit * 2000)
        values = Lexer(text, config={"enable_logger": False}).values
        assert "".join(values) == text
        assert text.scanned <= 3 * len(text)

    def test_comment_closes_at_first_close(self):
        """Comments do not nest and an opener after the last close is text"""
        source = "/* a *//* b " * 3
        assert tokenize(source) == ["/* a */", "/* b /* a */", "/* b /* a */", "/* b "]
