from typing import Any, List, Optional, NotRequired, TypedDict
from enum import Enum, auto
from dataclasses import dataclass
import re
from scripts.cssblocks.utils import resolve_config
from scripts.cssblocks.logger import Logger


class TokenType(Enum):
    COMMENT = auto()
    IMPORT = auto()
    TEXT = auto()

    @classmethod
    def get_token_type(cls, type: str):
        for token_type in cls:
            if token_type.name == type:
                return token_type
        raise ValueError(f"Unknown token type: {type}")


@dataclass
class Token:
    token_type: TokenType
    value: str
    line: int
    column: int


COMMENT_OPEN = "/*"
COMMENT_CLOSE = "*/"
IMPORT_OPEN = "@import"

# where a literal text run has to stop
MARKER_START_REGEX = re.compile(r"/\*|@import\s")
# the body of an @import runs to its closer on the same line
IMPORT_URL_PREFIX_REGEX = re.compile(r"@import\s+url\s*\(")
IMPORT_QUOTED_PREFIX_REGEX = re.compile(r"@import\s+(['\"])")


class LexerConfig(TypedDict):
    tokenize: NotRequired[bool]
    enable_logger: NotRequired[bool]


class LexerConfigRequired(TypedDict):
    tokenize: bool
    enable_logger: bool


DEFAULT_CONFIG: LexerConfigRequired = {
    "tokenize": True,
    "enable_logger": True,
}


class Lexer:
    """Splits stylesheet text into comment, ``@import`` and literal text tokens.

    Tokens cover the whole input in order, so joining their values gives back
    the original text. Anything that is not a string tokenizes to nothing.
    """

    def __init__(self, input: Any, config: Optional[LexerConfig] = None):
        self.input = input if isinstance(input, str) else ""
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = Logger(config={"name": "Lexer Logger", "is_enabled": self.config["enable_logger"]}).logger
        self.position = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []
        self._found: dict[str, tuple[int, int]] = {}
        if not isinstance(input, str):
            self.logger.debug(f"Expected text input, got {type(input).__name__}; nothing to tokenize")
        if self.config["tokenize"]:
            self.tokenize()

    @property
    def has_more_chars(self):
        return self.position < len(self.input)

    @property
    def values(self) -> List[str]:
        return [token.value for token in self.tokens]

    def _starts_with(self, prefix: str) -> bool:
        return self.input.startswith(prefix, self.position)

    def _advance(self, steps=1) -> str:
        start = self.position
        self.position = min(self.position + steps, len(self.input))
        chunk = self.input[start : self.position]
        newlines = chunk.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(chunk) - chunk.rfind("\n")
        else:
            self.column += len(chunk)
        return chunk

    def _add_token(self, token_type: TokenType, length: int):
        line, column = self.line, self.column
        value = self._advance(length)
        self.logger.debug(f"Adding token {token_type} with value {value!r} at line {line}, column {column}")
        self.tokens.append(Token(token_type, value, line, column))

    def tokenize(self) -> List[Token]:
        self.logger.info("Starting tokenization")
        self.position, self.line, self.column = 0, 1, 1
        self.tokens = []
        self._found = {}
        while self.has_more_chars:
            if self._handle_comment():
                continue
            if self._handle_import():
                continue
            self._handle_text()
        self.logger.info(f"Tokenization complete, {len(self.tokens)} token(s)")
        return self.tokens

    def _find(self, needle: str, start: int) -> int:
        """First index of `needle` at or after `start`, or -1.

        Lookups are remembered per needle. Scanning only moves forward, so a
        remembered hit past `start`, or a remembered miss from an earlier
        start, still answers the question and the input is searched once.
        """
        cached = self._found.get(needle)
        if cached is not None:
            searched_from, index = cached
            if searched_from <= start and (index == -1 or index >= start):
                return index
        index = self.input.find(needle, start)
        self._found[needle] = (start, index)
        return index

    def _handle_comment(self) -> bool:
        if not self._starts_with(COMMENT_OPEN):
            return False
        end = self._find(COMMENT_CLOSE, self.position + len(COMMENT_OPEN))
        if end == -1:
            self.logger.debug(f"Unterminated comment at line {self.line}, column {self.column}, treating as text")
            return False
        self._add_token(TokenType.COMMENT, end + len(COMMENT_CLOSE) - self.position)
        return True

    def _handle_import(self) -> bool:
        if not self._starts_with(IMPORT_OPEN):
            return False
        end = self._match_import(IMPORT_URL_PREFIX_REGEX, ")")
        if end is None:
            end = self._match_import(IMPORT_QUOTED_PREFIX_REGEX)
        if end is None:
            return False
        self._add_token(TokenType.IMPORT, end - self.position)
        return True

    def _match_import(self, prefix: re.Pattern, closer: Optional[str] = None) -> Optional[int]:
        match = prefix.match(self.input, self.position)
        if match is None:
            return None
        closer = closer or match.group(1)
        body = match.end()
        # at least one character, then the closer, all before the line ends
        close = self._find(closer, body + 1)
        newline = self._find("\n", body)
        if close == -1 or (newline != -1 and newline < close):
            return None
        end = close + 1
        if self.input.startswith(";", end):
            end += 1
        return end

    def _handle_text(self):
        # a run always takes its first char, which may be an opener that failed to close
        next_marker = MARKER_START_REGEX.search(self.input, self.position + 1)
        end = next_marker.start() if next_marker else len(self.input)
        self._add_token(TokenType.TEXT, end - self.position)


def tokenize(text: Any, config: Optional[LexerConfig] = None) -> List[str]:
    return Lexer(text, config={**(config or {}), "tokenize": True}).values
