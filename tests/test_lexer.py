import pytest

from front_end import C_DIALECT, JAVA_DIALECT, Token, TokenKind, get_dialect, tokenize


def kinds_and_lexemes(tokens):
	return [(t.kind, t.lexeme) for t in tokens]


def test_simple_declaration():
	tokens = tokenize("int x = 5;")
	assert kinds_and_lexemes(tokens) == [
		(TokenKind.KEYWORD, "int"),
		(TokenKind.IDENTIFIER, "x"),
		(TokenKind.OPERATOR, "="),
		(TokenKind.NUMBER, "5"),
		(TokenKind.SEPARATOR, ";"),
	]
	assert all(t.line == 1 for t in tokens)


def test_line_numbers_follow_newlines_and_comments():
	source = "int a;\n// note\nint b; /* multi\nline\ncomment */ int c;\n\nc = a;"
	tokens = tokenize(source)
	lines = [t.line for t in tokens]
	assert lines == sorted(lines)
	assert [t.line for t in tokens if t.kind == TokenKind.IDENTIFIER] == [1, 3, 5, 7, 7]


def test_comments_produce_no_tokens():
	assert tokenize("// only a comment") == []
	assert tokenize("/* block */") == []


def test_unterminated_block_comment_consumes_to_end():
	tokens = tokenize("x /* never closed\nint y;")
	assert kinds_and_lexemes(tokens) == [(TokenKind.IDENTIFIER, "x")]


def test_string_literal_with_escaped_quote():
	tokens = tokenize('s = "a\\"b";')
	assert tokens[2] == Token(TokenKind.STRING_LITERAL, '"a\\"b"', 1)
	assert tokens[3].lexeme == ";"


def test_unterminated_literals_keep_scanned_text():
	assert kinds_and_lexemes(tokenize('"abc')) == [(TokenKind.STRING_LITERAL, '"abc')]
	assert kinds_and_lexemes(tokenize("'a")) == [(TokenKind.CHAR_LITERAL, "'a")]


def test_char_literal():
	assert kinds_and_lexemes(tokenize("'\\n'")) == [(TokenKind.CHAR_LITERAL, "'\\n'")]


def test_multiline_string_keeps_start_line():
	tokens = tokenize('"one\ntwo" x')
	assert tokens[0].line == 1
	assert tokens[1].line == 2


def test_numbers_are_lenient():
	assert kinds_and_lexemes(tokenize("1.2.3 42 3.")) == [
		(TokenKind.NUMBER, "1.2.3"),
		(TokenKind.NUMBER, "42"),
		(TokenKind.NUMBER, "3."),
	]


def test_identifiers_start_with_letter_or_underscore():
	assert kinds_and_lexemes(tokenize("_tmp1 a2b")) == [
		(TokenKind.IDENTIFIER, "_tmp1"),
		(TokenKind.IDENTIFIER, "a2b"),
	]


def test_two_character_operators_preferred():
	tokens = tokenize("a <= b && c->d != e")
	ops = [t.lexeme for t in tokens if t.kind == TokenKind.OPERATOR]
	assert ops == ["<=", "&&", "->", "!="]


def test_maximal_munch_capped_at_two_characters():
	tokens = tokenize("a <<= b")
	assert [t.lexeme for t in tokens] == ["a", "<<", "=", "b"]


def test_dot_is_a_separator():
	tokens = tokenize("s.x")
	assert tokens[1] == Token(TokenKind.SEPARATOR, ".", 1)


def test_unknown_characters_never_fail():
	tokens = tokenize("a $ b é")
	assert kinds_and_lexemes(tokens) == [
		(TokenKind.IDENTIFIER, "a"),
		(TokenKind.UNKNOWN, "$"),
		(TokenKind.IDENTIFIER, "b"),
		(TokenKind.UNKNOWN, "é"),
	]


def test_dialect_changes_classification():
	assert tokenize("String s", "c")[0].kind == TokenKind.IDENTIFIER
	assert tokenize("String s", "java")[0].kind == TokenKind.KEYWORD
	assert tokenize("printf", C_DIALECT)[0].kind == TokenKind.KEYWORD
	assert tokenize("printf", JAVA_DIALECT)[0].kind == TokenKind.IDENTIFIER
	assert tokenize("@Override", "java")[0] == Token(TokenKind.SEPARATOR, "@", 1)
	assert tokenize("@", "c")[0].kind == TokenKind.UNKNOWN
	assert tokenize("#", "java")[0].kind == TokenKind.UNKNOWN


def test_include_line_tokens():
	tokens = tokenize("#include <stdio.h>")
	assert kinds_and_lexemes(tokens) == [
		(TokenKind.SEPARATOR, "#"),
		(TokenKind.KEYWORD, "include"),
		(TokenKind.OPERATOR, "<"),
		(TokenKind.KEYWORD, "stdio"),
		(TokenKind.SEPARATOR, "."),
		(TokenKind.KEYWORD, "h"),
		(TokenKind.OPERATOR, ">"),
	]


def test_tokenize_is_idempotent():
	source = "int main() {\n  int x = 1; // c\n  return x;\n}"
	assert tokenize(source) == tokenize(source)


def test_concatenation_at_clean_boundary():
	assert tokenize("int a;") + tokenize("int b;") == tokenize("int a;int b;")


def test_unknown_dialect_rejected():
	with pytest.raises(ValueError):
		get_dialect("cobol")
	assert get_dialect("JAVA") is JAVA_DIALECT
