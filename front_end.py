"""Instructional C/Java front end: lexical, syntax and semantic analysis with plain-text reports."""

from __future__ import annotations

import argparse
import copy
import logging
import sys
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import ClassVar, Dict, FrozenSet, List, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Diagnostic infrastructure


EOF_LINE = "EOF"
NO_LINE = "N/A"

Line = Union[int, str]


class Severity(Enum):
	WARNING = auto()
	ERROR = auto()


@dataclass
class Diagnostic:
	severity: Severity
	message: str
	line: Line = NO_LINE
	hint: Optional[str] = None


class DiagnosticEngine:
	def __init__(self) -> None:
		self._items: List[Diagnostic] = []

	@property
	def errors(self) -> List[Diagnostic]:
		return [d for d in self._items if d.severity == Severity.ERROR]

	@property
	def warnings(self) -> List[Diagnostic]:
		return [d for d in self._items if d.severity == Severity.WARNING]

	def report(self, severity: Severity, message: str, line: Line = NO_LINE, hint: Optional[str] = None) -> None:
		self._items.append(Diagnostic(severity, message, line, hint))

	def error(self, message: str, line: Line = NO_LINE, hint: Optional[str] = None) -> None:
		self.report(Severity.ERROR, message, line, hint)

	def warning(self, message: str, line: Line = NO_LINE) -> None:
		self.report(Severity.WARNING, message, line)


# ---------------------------------------------------------------------------
# Dialects


C_KEYWORDS: FrozenSet[str] = frozenset(
	{
		# data types
		"int", "float", "double", "char", "void", "long", "short", "signed", "unsigned", "bool", "_Bool",
		# control flow
		"if", "else", "switch", "case", "default", "break", "continue", "for", "while", "do", "goto", "return",
		# storage classes and qualifiers
		"auto", "static", "extern", "register", "const", "volatile",
		# derived types
		"struct", "union", "enum", "typedef",
		"sizeof", "inline", "restrict",
		# preprocessor words
		"include", "define", "undef", "ifdef", "ifndef", "endif", "elif", "pragma", "error", "warning",
		# standard library functions
		"printf", "scanf", "fprintf", "fscanf", "sprintf", "sscanf",
		"getchar", "putchar", "gets", "puts", "fgets", "fputs",
		"fopen", "fclose", "fread", "fwrite", "fseek", "ftell",
		"malloc", "calloc", "realloc", "free",
		"strlen", "strcmp", "strcpy", "strcat", "strncpy", "strncat",
		"strchr", "strstr", "strtok", "strspn", "strcspn",
		"memcpy", "memmove", "memset", "memcmp", "memchr",
		"atoi", "atof", "atol", "strtol", "strtod",
		"toupper", "tolower", "isalpha", "isdigit", "isalnum",
		"abs", "sqrt", "pow", "ceil", "floor", "sin", "cos", "tan",
		"exit", "abort", "system", "getenv",
		"rand", "srand", "time",
		# runtime names
		"main", "argc", "argv", "NULL", "EOF", "FILE",
		# header names, for #include lines
		"stdio", "stdlib", "string", "math", "ctype", "stdbool", "stdint", "limits", "assert", "errno", "h",
	}
)

C_OPERATORS: FrozenSet[str] = frozenset(
	{
		"+", "-", "*", "/", "%", "=", "==", "!=", "<", ">", "<=", ">=", "&&", "||", "!",
		"++", "--", "+=", "-=", "*=", "/=", "%=", "&", "|", "^", "~", "<<", ">>", "->", ".",
		"&=", "|=", "^=", "<<=", ">>=",
	}
)

C_SEPARATORS: FrozenSet[str] = frozenset({"(", ")", "{", "}", "[", "]", ";", ",", ".", ":", "#", "?"})

JAVA_KEYWORDS: FrozenSet[str] = frozenset(
	{
		"abstract", "assert", "boolean", "break", "byte", "case", "catch", "char", "class", "const",
		"continue", "default", "do", "double", "else", "enum", "extends", "final", "finally", "float",
		"for", "goto", "if", "implements", "import", "instanceof", "int", "interface", "long", "native",
		"new", "package", "private", "protected", "public", "return", "short", "static", "strictfp",
		"super", "switch", "synchronized", "this", "throw", "throws", "transient", "try", "void",
		"volatile", "while",
		"true", "false", "null", "String",
	}
)

JAVA_OPERATORS: FrozenSet[str] = frozenset(
	{
		"+", "-", "*", "/", "%", "=", "==", "!=", "<", ">", "<=", ">=", "&&", "||", "!",
		"++", "--", "+=", "-=", "*=", "/=", "%=", "&", "|", "^", "~", "<<", ">>",
		"&=", "|=", "^=", "->", "::",
	}
)

JAVA_SEPARATORS: FrozenSet[str] = frozenset({"(", ")", "{", "}", "[", "]", ";", ",", ".", "@", ":", "?"})

# Types that open a declaration in the syntax stage.
C_DECLARATION_TYPES: FrozenSet[str] = frozenset({"int", "float", "double", "char", "void"})
JAVA_DECLARATION_TYPES: FrozenSet[str] = frozenset(
	{"int", "float", "double", "char", "void", "boolean", "byte", "short", "long", "String"}
)

# Names assumed to come from the standard library or runtime of either language family.
BUILTIN_IDENTIFIERS: FrozenSet[str] = frozenset(
	{
		"printf", "scanf", "main", "stdio", "stdlib", "string", "math",
		"System", "Scanner", "String", "Math", "Object", "Integer",
		"Double", "Float", "Boolean", "Character", "out", "in", "err",
		"java", "util", "io", "lang", "ArrayList", "List", "Map", "Set",
		"println", "print", "next", "nextInt", "nextLine", "nextDouble",
		"length", "size", "add", "remove", "get", "set", "toString",
		"equals", "hashCode", "close",
	}
)


@dataclass(frozen=True)
class Dialect:
	name: str
	keywords: FrozenSet[str]
	operators: FrozenSet[str]
	separators: FrozenSet[str]
	declaration_types: FrozenSet[str]
	builtins: FrozenSet[str] = BUILTIN_IDENTIFIERS


C_DIALECT = Dialect("c", C_KEYWORDS, C_OPERATORS, C_SEPARATORS, C_DECLARATION_TYPES)
JAVA_DIALECT = Dialect("java", JAVA_KEYWORDS, JAVA_OPERATORS, JAVA_SEPARATORS, JAVA_DECLARATION_TYPES)

DIALECTS: Dict[str, Dialect] = {d.name: d for d in (C_DIALECT, JAVA_DIALECT)}

DialectLike = Union[str, Dialect]


def get_dialect(dialect: DialectLike) -> Dialect:
	if isinstance(dialect, Dialect):
		return dialect
	try:
		return DIALECTS[dialect.lower()]
	except KeyError:
		raise ValueError(f"Unknown dialect '{dialect}'. Expected one of: {', '.join(sorted(DIALECTS))}") from None


# ---------------------------------------------------------------------------
# Lexer


class TokenKind(Enum):
	KEYWORD = auto()
	IDENTIFIER = auto()
	NUMBER = auto()
	STRING_LITERAL = auto()
	CHAR_LITERAL = auto()
	OPERATOR = auto()
	SEPARATOR = auto()
	UNKNOWN = auto()


@dataclass(frozen=True)
class Token:
	kind: TokenKind
	lexeme: str
	line: int

	def is_a(self, kind: TokenKind, lexeme: Optional[str] = None) -> bool:
		return self.kind == kind and (lexeme is None or self.lexeme == lexeme)


def _is_letter(ch: str) -> bool:
	return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_digit(ch: str) -> bool:
	return "0" <= ch <= "9"


class Lexer:
	"""Single forward scan over the source. Never fails: unknown characters become UNKNOWN tokens."""

	def __init__(self, source: str, dialect: DialectLike = C_DIALECT) -> None:
		self.source = source
		self.dialect = get_dialect(dialect)
		self.length = len(source)
		self.index = 0
		self.line = 1

	def tokenize(self) -> List[Token]:
		self.index = 0
		self.line = 1
		tokens: List[Token] = []
		while not self._is_eof():
			ch = self._peek()
			if ch.isspace():
				# Newlines are counted in _advance.
				self._advance()
			elif ch == "/" and self._peek_next() == "/":
				self._consume_line_comment()
			elif ch == "/" and self._peek_next() == "*":
				self._consume_block_comment()
			elif ch == '"':
				tokens.append(self._consume_quoted('"', TokenKind.STRING_LITERAL))
			elif ch == "'":
				tokens.append(self._consume_quoted("'", TokenKind.CHAR_LITERAL))
			elif _is_digit(ch):
				tokens.append(self._consume_number())
			elif _is_letter(ch):
				tokens.append(self._consume_identifier())
			elif ch in self.dialect.separators:
				tokens.append(Token(TokenKind.SEPARATOR, self._advance(), self.line))
			else:
				tokens.append(self._consume_operator())
		logger.debug("lexed %d tokens (%s dialect, %d lines)", len(tokens), self.dialect.name, self.line)
		return tokens

	def _consume_line_comment(self) -> None:
		while not self._is_eof() and self._peek() != "\n":
			self._advance()

	def _consume_block_comment(self) -> None:
		self._advance()
		self._advance()
		while not self._is_eof():
			if self._peek() == "*" and self._peek_next() == "/":
				self._advance()
				self._advance()
				return
			self._advance()

	def _consume_quoted(self, quote: str, kind: TokenKind) -> Token:
		start = self.index
		start_line = self.line
		self._advance()  # opening quote
		while not self._is_eof() and self._peek() != quote:
			if self._advance() == "\\" and not self._is_eof():
				self._advance()
		if not self._is_eof():
			self._advance()  # closing quote
		return Token(kind, self.source[start:self.index], start_line)

	def _consume_number(self) -> Token:
		start = self.index
		while not self._is_eof() and (_is_digit(self._peek()) or self._peek() == "."):
			self._advance()
		return Token(TokenKind.NUMBER, self.source[start:self.index], self.line)

	def _consume_identifier(self) -> Token:
		start = self.index
		while not self._is_eof() and (_is_letter(self._peek()) or _is_digit(self._peek())):
			self._advance()
		word = self.source[start:self.index]
		kind = TokenKind.KEYWORD if word in self.dialect.keywords else TokenKind.IDENTIFIER
		return Token(kind, word, self.line)

	def _consume_operator(self) -> Token:
		line = self.line
		ch = self._advance()
		next_ch = self._peek() if not self._is_eof() else ""
		candidate = ch + next_ch
		# Maximal munch is capped at two characters.
		if next_ch and candidate in self.dialect.operators:
			self._advance()
			return Token(TokenKind.OPERATOR, candidate, line)
		if ch in self.dialect.operators:
			return Token(TokenKind.OPERATOR, ch, line)
		return Token(TokenKind.UNKNOWN, ch, line)

	def _advance(self) -> str:
		ch = self.source[self.index]
		self.index += 1
		if ch == "\n":
			self.line += 1
		return ch

	def _peek(self) -> str:
		return self.source[self.index]

	def _peek_next(self) -> str:
		if self.index + 1 >= self.length:
			return ""
		return self.source[self.index + 1]

	def _is_eof(self) -> bool:
		return self.index >= self.length


def tokenize(source: str, dialect: DialectLike = C_DIALECT) -> List[Token]:
	return Lexer(source, dialect).tokenize()


# ---------------------------------------------------------------------------
# Analysis results


class ConstructKind(Enum):
	PREPROCESSOR = auto()
	VARIABLE_DECLARATION = auto()
	FUNCTION_DECLARATION = auto()
	IF_STATEMENT = auto()
	WHILE_STATEMENT = auto()
	FOR_STATEMENT = auto()
	RETURN_STATEMENT = auto()
	FUNCTION_CALL = auto()
	ASSIGNMENT = auto()


@dataclass(frozen=True)
class ConstructTag:
	kind: ConstructKind
	name: Optional[str] = None
	line: Optional[int] = None


@dataclass
class SymbolEntry:
	name: str
	type_name: str
	line: int
	initialized: bool = False
	used: bool = False


@dataclass
class FunctionEntry:
	name: str
	return_type: str
	line: int
	used: bool = False
	parameters: List[Tuple[str, str]] = field(default_factory=list)


@dataclass
class SyntaxSuccess:
	tags: List[ConstructTag]
	message: str = "Syntax analysis completed successfully!"
	success: ClassVar[bool] = True


@dataclass
class SemanticSuccess:
	symbols: Dict[str, SymbolEntry]
	functions: Dict[str, FunctionEntry]
	warnings: List[Diagnostic]
	message: str = "Semantic analysis completed successfully!"
	success: ClassVar[bool] = True


@dataclass
class Failure:
	stage: str
	errors: List[Diagnostic]
	warnings: List[Diagnostic] = field(default_factory=list)
	success: ClassVar[bool] = False


SyntaxResult = Union[SyntaxSuccess, Failure]
SemanticResult = Union[SemanticSuccess, Failure]


# ---------------------------------------------------------------------------
# Syntax analyzer


class SyntaxAnalyzer:
	"""Recursive-descent walk over the token stream that records a flat sequence of construct tags.

	Expressions are not parsed: only bracket balance and statement boundaries are checked.
	A failed expectation reports a diagnostic and leaves the cursor where it is.
	"""

	def __init__(self, tokens: Sequence[Token], dialect: DialectLike = C_DIALECT) -> None:
		self.tokens = list(tokens)
		self.dialect = get_dialect(dialect)
		self.index = 0
		self.diagnostics = DiagnosticEngine()
		self.tags: List[ConstructTag] = []

	def analyze(self) -> SyntaxResult:
		self.index = 0
		self.diagnostics = DiagnosticEngine()
		self.tags = []
		try:
			while not self._is_at_end():
				self._parse_statement()
		except Exception as exc:
			logger.exception("internal fault during syntax analysis at token %d", self.index)
			self.diagnostics.error(str(exc) or exc.__class__.__name__, NO_LINE)
		errors = self.diagnostics.errors
		logger.debug("syntax analysis finished: %d tags, %d errors", len(self.tags), len(errors))
		if errors:
			return Failure(stage="syntax", errors=errors)
		return SyntaxSuccess(tags=list(self.tags))

	# Statements ---------------------------------------------------------------

	def _parse_statement(self) -> None:
		token = self._current()
		if token is None:
			return
		if token.is_a(TokenKind.SEPARATOR, "#"):
			self._parse_preprocessor()
		elif token.kind == TokenKind.KEYWORD:
			if token.lexeme in self.dialect.declaration_types:
				self._parse_declaration()
			elif token.lexeme == "if":
				self._parse_if()
			elif token.lexeme == "while":
				self._parse_while()
			elif token.lexeme == "for":
				self._parse_for()
			elif token.lexeme == "return":
				self._parse_return()
			else:
				self._advance()
		elif token.kind == TokenKind.IDENTIFIER:
			self._parse_assignment_or_call()
		else:
			self._advance()

	def _parse_preprocessor(self) -> None:
		hash_token = self._expect(TokenKind.SEPARATOR, "#")
		line = hash_token.line if hash_token else None
		if self._match(TokenKind.KEYWORD, "include"):
			self._advance()
			if self._match(TokenKind.STRING_LITERAL):
				self._advance()
			elif self._match(TokenKind.OPERATOR, "<"):
				self._advance()
				while self._current() is not None and self._current().line == line and not self._match(TokenKind.OPERATOR, ">"):
					self._advance()
				if self._match(TokenKind.OPERATOR, ">") and self._current().line == line:
					self._advance()
		self._record(ConstructKind.PREPROCESSOR, line=line)

	def _parse_declaration(self) -> None:
		self._advance()
		if not self._match(TokenKind.IDENTIFIER):
			return
		identifier = self._advance()
		if self._match(TokenKind.SEPARATOR, "("):
			self._parse_function_declaration(identifier)
		else:
			self._parse_variable_declaration(identifier)

	def _parse_function_declaration(self, identifier: Token) -> None:
		self._expect(TokenKind.SEPARATOR, "(")
		# Parameter headers are scanned, not parsed; any token inside is consumed.
		while self._current() is not None and not self._match(TokenKind.SEPARATOR, ")"):
			self._advance()
		self._expect(TokenKind.SEPARATOR, ")")
		if self._match(TokenKind.SEPARATOR, "{"):
			self._advance()
			self._parse_block()
		elif self._match(TokenKind.SEPARATOR, ";"):
			self._advance()
		self._record(ConstructKind.FUNCTION_DECLARATION, identifier.lexeme, identifier.line)

	def _parse_variable_declaration(self, identifier: Token) -> None:
		if self._match(TokenKind.OPERATOR, "="):
			self._advance()
			self._parse_expression()
		while self._match(TokenKind.SEPARATOR, ","):
			self._advance()
			if self._match(TokenKind.IDENTIFIER):
				self._advance()
				if self._match(TokenKind.OPERATOR, "="):
					self._advance()
					self._parse_expression()
		self._expect(TokenKind.SEPARATOR, ";")
		self._record(ConstructKind.VARIABLE_DECLARATION, identifier.lexeme, identifier.line)

	def _parse_if(self) -> None:
		keyword = self._expect(TokenKind.KEYWORD, "if")
		self._parse_condition()
		self._parse_body()
		if self._match(TokenKind.KEYWORD, "else"):
			self._advance()
			self._parse_body()
		self._record(ConstructKind.IF_STATEMENT, line=keyword.line if keyword else None)

	def _parse_while(self) -> None:
		keyword = self._expect(TokenKind.KEYWORD, "while")
		self._parse_condition()
		self._parse_body()
		self._record(ConstructKind.WHILE_STATEMENT, line=keyword.line if keyword else None)

	def _parse_for(self) -> None:
		keyword = self._expect(TokenKind.KEYWORD, "for")
		self._expect(TokenKind.SEPARATOR, "(")
		if not self._match(TokenKind.SEPARATOR, ";"):
			self._parse_expression()
		self._expect(TokenKind.SEPARATOR, ";")
		if not self._match(TokenKind.SEPARATOR, ";"):
			self._parse_expression()
		self._expect(TokenKind.SEPARATOR, ";")
		if not self._match(TokenKind.SEPARATOR, ")"):
			self._parse_expression()
		self._expect(TokenKind.SEPARATOR, ")")
		self._parse_body()
		self._record(ConstructKind.FOR_STATEMENT, line=keyword.line if keyword else None)

	def _parse_return(self) -> None:
		keyword = self._expect(TokenKind.KEYWORD, "return")
		if not self._match(TokenKind.SEPARATOR, ";"):
			self._parse_expression()
		self._expect(TokenKind.SEPARATOR, ";")
		self._record(ConstructKind.RETURN_STATEMENT, line=keyword.line if keyword else None)

	def _parse_assignment_or_call(self) -> None:
		identifier = self._advance()
		if self._match(TokenKind.SEPARATOR, "("):
			self._advance()
			while self._current() is not None and not self._match(TokenKind.SEPARATOR, ")"):
				if self._match(TokenKind.SEPARATOR, ","):
					self._advance()
					continue
				self._parse_expression()
				if not self._match(TokenKind.SEPARATOR, ",") and not self._match(TokenKind.SEPARATOR, ")"):
					break
			self._expect(TokenKind.SEPARATOR, ")")
			self._expect(TokenKind.SEPARATOR, ";")
			self._record(ConstructKind.FUNCTION_CALL, identifier.lexeme, identifier.line)
		elif self._match(TokenKind.OPERATOR):
			self._advance()
			self._parse_expression()
			self._expect(TokenKind.SEPARATOR, ";")
			self._record(ConstructKind.ASSIGNMENT, identifier.lexeme, identifier.line)

	def _parse_condition(self) -> None:
		self._expect(TokenKind.SEPARATOR, "(")
		self._parse_expression()
		self._expect(TokenKind.SEPARATOR, ")")

	def _parse_body(self) -> None:
		if self._match(TokenKind.SEPARATOR, "{"):
			self._advance()
			self._parse_block()
		else:
			self._parse_statement()

	def _parse_block(self) -> None:
		while self._current() is not None and not self._match(TokenKind.SEPARATOR, "}"):
			self._parse_statement()
		self._expect(TokenKind.SEPARATOR, "}")

	def _parse_expression(self) -> None:
		depth = 0
		while self._current() is not None:
			token = self._current()
			if token.kind == TokenKind.SEPARATOR:
				if token.lexeme == "(":
					depth += 1
				elif token.lexeme == ")":
					if depth == 0:
						break
					depth -= 1
				elif token.lexeme in (";", ",", "{", "}") and depth == 0:
					break
			self._advance()

	# Utility parsing helpers -------------------------------------------------

	def _current(self) -> Optional[Token]:
		if self._is_at_end():
			return None
		return self.tokens[self.index]

	def _advance(self) -> Token:
		token = self.tokens[self.index]
		self.index += 1
		return token

	def _match(self, kind: TokenKind, lexeme: Optional[str] = None) -> bool:
		token = self._current()
		return token is not None and token.is_a(kind, lexeme)

	def _expect(self, kind: TokenKind, lexeme: Optional[str] = None) -> Optional[Token]:
		if self._match(kind, lexeme):
			return self._advance()
		got = self._current()
		expected = f"{kind.name} '{lexeme}'" if lexeme else kind.name
		actual = f"{got.kind.name} '{got.lexeme}'" if got else "end of file"
		self.diagnostics.error(
			f"Expected {expected}, but got {actual}",
			got.line if got else EOF_LINE,
			hint=self._hint_for_expect(lexeme),
		)
		return None

	def _record(self, kind: ConstructKind, name: Optional[str] = None, line: Optional[int] = None) -> None:
		self.tags.append(ConstructTag(kind, name, line))

	def _is_at_end(self) -> bool:
		return self.index >= len(self.tokens)

	def _hint_for_expect(self, expected: Optional[str]) -> Optional[str]:
		if expected == ";":
			return "Statements and declarations must end with ';'."
		if expected == "}":
			return "Blocks end with '}'. Check for a missing closing brace or an extra '{' earlier."
		if expected == ")":
			return "Missing ')'. Conditions and calls need balanced parentheses, e.g. if (a > 0) { ... }"
		if expected == "(":
			return "Missing '('. Conditions require parentheses, e.g. while (i < n) { ... }"
		return None


def validate_syntax(tokens: Sequence[Token], dialect: DialectLike = C_DIALECT) -> SyntaxResult:
	return SyntaxAnalyzer(tokens, dialect).analyze()


# ---------------------------------------------------------------------------
# Semantic analyzer


GLOBAL_SCOPE = "global"

VALUE_TYPES: FrozenSet[str] = frozenset(
	{"int", "float", "double", "char", "void", "boolean", "byte", "short", "long", "String"}
)

# Words never reported as undeclared, whichever token kind the dialect gave them.
SKIP_WORDS: FrozenSet[str] = frozenset(
	{
		"int", "float", "double", "char", "void", "if", "else", "while",
		"for", "return", "break", "continue", "printf", "scanf", "include", "main",
		"import", "package", "class", "public", "private", "protected", "static",
		"new", "this", "super", "boolean", "byte", "short", "long", "String",
		"true", "false", "null",
	}
)


class SemanticAnalyzer:
	"""Flat, single-scope symbol and type checks run as ordered passes over the token stream.

	The analyzer does not consume the syntax stage's output; it rescans the tokens itself.
	All tables and diagnostics are reset at the start of every :meth:`analyze` call.
	"""

	def __init__(self, tokens: Sequence[Token], dialect: DialectLike = C_DIALECT) -> None:
		self.tokens = list(tokens)
		self.dialect = get_dialect(dialect)
		self.current_scope = GLOBAL_SCOPE
		self.symbols: Dict[str, SymbolEntry] = {}
		self.functions: Dict[str, FunctionEntry] = {}
		self.diagnostics = DiagnosticEngine()

	def analyze(self) -> SemanticResult:
		self.current_scope = GLOBAL_SCOPE
		self.symbols = {}
		self.functions = {}
		self.diagnostics = DiagnosticEngine()

		self._build_symbol_table()
		self._check_type_compatibility()
		self._check_undeclared_variables()
		self._check_function_calls()
		self._check_unused_variables()

		errors = self.diagnostics.errors
		warnings = self.diagnostics.warnings
		logger.debug(
			"semantic analysis finished: %d symbols, %d functions, %d errors, %d warnings",
			len(self.symbols),
			len(self.functions),
			len(errors),
			len(warnings),
		)
		if errors:
			return Failure(stage="semantic", errors=errors, warnings=warnings)
		return SemanticSuccess(
			symbols=copy.deepcopy(self.symbols),
			functions=copy.deepcopy(self.functions),
			warnings=warnings,
		)

	# Passes -------------------------------------------------------------------

	def _build_symbol_table(self) -> None:
		i = 0
		n = len(self.tokens)
		while i < n:
			token = self.tokens[i]
			if self._is_import(token):
				i = self._skip_statement(i)
				continue
			if token.is_a(TokenKind.SEPARATOR, "#"):
				i = self._skip_header(i)
				continue
			if not self._is_value_type(token):
				i += 1
				continue
			i += 1
			if i >= n or self.tokens[i].kind != TokenKind.IDENTIFIER:
				continue
			identifier = self.tokens[i]
			i += 1
			if i < n and self.tokens[i].is_a(TokenKind.SEPARATOR, "("):
				i = self._declare_function(token, identifier, i)
			else:
				self._declare_variable(token, identifier, i)

	def _declare_function(self, type_token: Token, identifier: Token, open_paren: int) -> int:
		i = open_paren + 1
		parameters: List[Tuple[str, str]] = []
		while i < len(self.tokens) and not self.tokens[i].is_a(TokenKind.SEPARATOR, ")"):
			if self._is_value_type(self.tokens[i]) and i + 1 < len(self.tokens) and self.tokens[i + 1].kind == TokenKind.IDENTIFIER:
				parameters.append((self.tokens[i].lexeme, self.tokens[i + 1].lexeme))
			i += 1
		if identifier.lexeme in self.functions:
			self.diagnostics.error(f"Function '{identifier.lexeme}' is already declared", identifier.line)
		else:
			self.functions[identifier.lexeme] = FunctionEntry(
				name=identifier.lexeme,
				return_type=type_token.lexeme,
				line=identifier.line,
				parameters=parameters,
			)
		return i

	def _declare_variable(self, type_token: Token, identifier: Token, after: int) -> None:
		key = self._key(identifier.lexeme)
		if key in self.symbols:
			self.diagnostics.error(f"Variable '{identifier.lexeme}' is already declared in this scope", identifier.line)
		else:
			self.symbols[key] = SymbolEntry(name=identifier.lexeme, type_name=type_token.lexeme, line=identifier.line)
		if after < len(self.tokens) and self.tokens[after].is_a(TokenKind.OPERATOR, "="):
			self.symbols[key].initialized = True

	def _check_type_compatibility(self) -> None:
		i = 0
		n = len(self.tokens)
		while i < n:
			token = self.tokens[i]
			symbol = self._resolve(token.lexeme) if token.kind == TokenKind.IDENTIFIER else None
			if symbol is None:
				i += 1
				continue
			if not (i + 1 < n and self.tokens[i + 1].is_a(TokenKind.OPERATOR, "=")):
				symbol.used = True
				i += 1
				continue
			i += 2
			if i < n:
				self._check_assigned_value(token, symbol, self.tokens[i])
				symbol.initialized = True
				while i < n and not self.tokens[i].is_a(TokenKind.SEPARATOR, ";"):
					self._mark_used(self.tokens[i])
					i += 1
			i += 1

	def _check_assigned_value(self, target: Token, symbol: SymbolEntry, value: Token) -> None:
		if value.kind == TokenKind.NUMBER:
			if symbol.type_name == "int" and "." in value.lexeme:
				self.diagnostics.warning(f"Implicit conversion from float to int for variable '{target.lexeme}'", target.line)
		elif value.kind == TokenKind.CHAR_LITERAL:
			if symbol.type_name != "char":
				self.diagnostics.error(
					f"Type mismatch: Cannot assign char to {symbol.type_name} variable '{target.lexeme}'", target.line
				)
		elif value.kind == TokenKind.STRING_LITERAL:
			if symbol.type_name not in ("char", "String"):
				self.diagnostics.warning(
					f"Assigning string literal to {symbol.type_name} variable '{target.lexeme}'", target.line
				)
		elif value.kind == TokenKind.IDENTIFIER:
			self._mark_used(value)

	def _check_undeclared_variables(self) -> None:
		i = 0
		n = len(self.tokens)
		while i < n:
			token = self.tokens[i]
			if self._is_import(token):
				i = self._skip_statement(i)
				continue
			if token.is_a(TokenKind.SEPARATOR, "#"):
				i = self._skip_header(i)
				continue
			if token.kind != TokenKind.IDENTIFIER:
				i += 1
				continue
			if i + 1 < n and self.tokens[i + 1].is_a(TokenKind.SEPARATOR, "."):
				# Qualified references like System.out.println are opaque.
				while i < n and (self.tokens[i].kind == TokenKind.IDENTIFIER or self.tokens[i].is_a(TokenKind.SEPARATOR, ".")):
					i += 1
				continue
			if token.lexeme not in SKIP_WORDS and token.lexeme not in self.dialect.builtins:
				self._check_reference(i)
			i += 1

	def _check_reference(self, i: int) -> None:
		token = self.tokens[i]
		if i > 0:
			previous = self.tokens[i - 1]
			if self._is_value_type(previous) or previous.is_a(TokenKind.SEPARATOR, "."):
				return
		if i + 1 < len(self.tokens) and self.tokens[i + 1].is_a(TokenKind.SEPARATOR, "("):
			if token.lexeme not in self.functions:
				self.diagnostics.error(f"Function '{token.lexeme}' is not declared", token.line)
		elif self._resolve(token.lexeme) is None and token.lexeme not in self.functions:
			self.diagnostics.error(f"Variable '{token.lexeme}' is not declared", token.line)

	def _check_function_calls(self) -> None:
		for token, following in zip(self.tokens, self.tokens[1:]):
			if token.kind == TokenKind.IDENTIFIER and following.is_a(TokenKind.SEPARATOR, "(") and token.lexeme in self.functions:
				self.functions[token.lexeme].used = True

	def _check_unused_variables(self) -> None:
		for symbol in self.symbols.values():
			if symbol.initialized and not symbol.used:
				self.diagnostics.warning(f"Variable '{symbol.name}' is declared but never used", symbol.line)

	# Helpers ------------------------------------------------------------------

	def _key(self, name: str, scope: Optional[str] = None) -> str:
		return f"{scope or self.current_scope}:{name}"

	def _resolve(self, name: str) -> Optional[SymbolEntry]:
		return self.symbols.get(self._key(name)) or self.symbols.get(self._key(name, GLOBAL_SCOPE))

	def _mark_used(self, token: Token) -> None:
		if token.kind != TokenKind.IDENTIFIER:
			return
		symbol = self._resolve(token.lexeme)
		if symbol is not None:
			symbol.used = True

	def _is_value_type(self, token: Token) -> bool:
		return token.kind == TokenKind.KEYWORD and token.lexeme in VALUE_TYPES

	def _is_import(self, token: Token) -> bool:
		return token.kind == TokenKind.KEYWORD and token.lexeme in ("import", "include")

	def _skip_statement(self, i: int) -> int:
		while i < len(self.tokens) and not self.tokens[i].is_a(TokenKind.SEPARATOR, ";"):
			i += 1
		return i + 1

	def _skip_header(self, i: int) -> int:
		"""Skip a `#...>` directive; the skip never leaves the directive's line."""
		line = self.tokens[i].line
		while i < len(self.tokens) and self.tokens[i].line == line:
			if self.tokens[i].is_a(TokenKind.OPERATOR, ">"):
				return i + 1
			i += 1
		return i


def check_semantics(tokens: Sequence[Token], dialect: DialectLike = C_DIALECT) -> SemanticResult:
	return SemanticAnalyzer(tokens, dialect).analyze()


# ---------------------------------------------------------------------------
# Reports


RULE = "=" * 60
THIN_RULE = "-" * 60


def _format_diagnostics(diagnostics: Sequence[Diagnostic]) -> List[str]:
	lines: List[str] = []
	for index, diag in enumerate(diagnostics, start=1):
		lines.append(f"{index}. Line {diag.line}: {diag.message}")
		if diag.hint:
			lines.append(f"   hint: {diag.hint}")
	return lines


def format_lexical_report(tokens: Sequence[Token]) -> str:
	if not tokens:
		return "No tokens found."
	out = ["LEXICAL ANALYSIS RESULTS", RULE, "", f"Total Tokens: {len(tokens)}", ""]
	by_kind: Dict[TokenKind, List[Token]] = {}
	for token in tokens:
		by_kind.setdefault(token.kind, []).append(token)
	for kind, group in by_kind.items():
		out.append("")
		out.append(f"{kind.name}s ({len(group)}):")
		out.append(THIN_RULE)
		out.extend(f'  Line {t.line}: "{t.lexeme}"' for t in group)
	return "\n".join(out) + "\n"


def format_syntax_report(result: SyntaxResult) -> str:
	if isinstance(result, SyntaxSuccess):
		out = ["SYNTAX ANALYSIS RESULTS", RULE, "", f"✓ {result.message}", "", "Parse Tree Nodes:", THIN_RULE]
		counts: Dict[ConstructKind, int] = {}
		for tag in result.tags:
			counts[tag.kind] = counts.get(tag.kind, 0) + 1
		out.extend(f"  {kind.name}: {count}" for kind, count in counts.items())
		if result.tags:
			out.extend(["", "Construct Sequence:", THIN_RULE])
			for index, tag in enumerate(result.tags, start=1):
				where = f"Line {tag.line}" if tag.line is not None else "Line -"
				name = f" {tag.name}" if tag.name else ""
				out.append(f"  {index}. {where}: {tag.kind.name}{name}")
		return "\n".join(out) + "\n"
	out = ["SYNTAX ANALYSIS ERRORS", RULE, "", f"Found {len(result.errors)} error(s):", ""]
	out.extend(_format_diagnostics(result.errors))
	return "\n".join(out) + "\n"


def format_semantic_report(result: SemanticResult) -> str:
	out = ["SEMANTIC ANALYSIS RESULTS", RULE, ""]
	if isinstance(result, SemanticSuccess):
		out.extend([f"✓ {result.message}", "", "Symbol Table:", THIN_RULE])
		if result.symbols:
			for symbol in result.symbols.values():
				out.append(f"  {symbol.name} ({symbol.type_name}) - Line {symbol.line}")
				out.append(f"    Initialized: {'Yes' if symbol.initialized else 'No'}")
				out.append(f"    Used: {'Yes' if symbol.used else 'No'}")
		else:
			out.append("  No variables found")
		if result.functions:
			out.extend(["", "Functions:", THIN_RULE])
			for func in result.functions.values():
				params = ", ".join(f"{ptype} {pname}" for ptype, pname in func.parameters)
				out.append(f"  {func.name}({params}) -> {func.return_type} - Line {func.line}")
				out.append(f"    Used: {'Yes' if func.used else 'No'}")
	else:
		out.append(f"Found {len(result.errors)} error(s):")
		out.append("")
		out.extend(_format_diagnostics(result.errors))
	if result.warnings:
		out.extend(["", "Warnings:", THIN_RULE])
		out.extend(_format_diagnostics(result.warnings))
	return "\n".join(out) + "\n"


def format_report(result: Union[Sequence[Token], SyntaxResult, SemanticResult]) -> str:
	if isinstance(result, SyntaxSuccess):
		return format_syntax_report(result)
	if isinstance(result, SemanticSuccess):
		return format_semantic_report(result)
	if isinstance(result, Failure):
		return format_syntax_report(result) if result.stage == "syntax" else format_semantic_report(result)
	return format_lexical_report(result)


# ---------------------------------------------------------------------------
# Analysis pipeline


@dataclass
class AnalysisArtifacts:
	dialect: str
	tokens: List[Token]
	syntax: Optional[SyntaxResult]
	semantic: Optional[SemanticResult]
	duration_ms: float

	@property
	def success(self) -> bool:
		return self.semantic is not None and self.semantic.success

	def report(self) -> str:
		sections = [format_lexical_report(self.tokens)]
		if self.syntax is not None:
			sections.append(format_syntax_report(self.syntax))
		if self.semantic is not None:
			sections.append(format_semantic_report(self.semantic))
		return "\n".join(sections)


class FrontEndEngine:
	"""Runs the stages in order, gating each on its predecessor the way the interactive host does."""

	def __init__(self, dialect: DialectLike = C_DIALECT) -> None:
		self.dialect = get_dialect(dialect)

	def run(self, source: str) -> AnalysisArtifacts:
		start = time.perf_counter()
		tokens = tokenize(source, self.dialect)
		syntax: Optional[SyntaxResult] = None
		semantic: Optional[SemanticResult] = None
		if tokens:
			syntax = validate_syntax(tokens, self.dialect)
			if syntax.success:
				semantic = check_semantics(tokens, self.dialect)
			else:
				logger.info("syntax stage failed; semantic stage skipped")
		duration_ms = (time.perf_counter() - start) * 1000
		return AnalysisArtifacts(
			dialect=self.dialect.name,
			tokens=tokens,
			syntax=syntax,
			semantic=semantic,
			duration_ms=duration_ms,
		)


# ---------------------------------------------------------------------------
# Command line


STAGES = ("lex", "syntax", "semantic", "all")


def build_arg_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="front-end", description="Lex, validate and check C-like or Java-like source files.")
	parser.add_argument("source", type=Path, help="source file to analyze")
	parser.add_argument("--dialect", choices=sorted(DIALECTS), default=C_DIALECT.name, help="language family (default: c)")
	parser.add_argument("--stage", choices=STAGES, default="all", help="stage to run (default: all)")
	parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
	return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
	args = build_arg_parser().parse_args(argv)
	logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s: %(message)s")
	try:
		source = args.source.read_text(encoding="utf-8")
	except OSError as exc:
		print(f"Error reading {args.source}: {exc}", file=sys.stderr)
		return 2

	if args.stage == "all":
		artifacts = FrontEndEngine(args.dialect).run(source)
		print(artifacts.report())
		print(f"Tokens: {len(artifacts.tokens)} | Time: {artifacts.duration_ms:.2f} ms")
		return 0 if artifacts.success else 1

	tokens = tokenize(source, args.dialect)
	if args.stage == "lex":
		print(format_lexical_report(tokens))
		return 0
	result = validate_syntax(tokens, args.dialect) if args.stage == "syntax" else check_semantics(tokens, args.dialect)
	print(format_report(result))
	return 0 if result.success else 1


if __name__ == "__main__":
	sys.exit(main())
