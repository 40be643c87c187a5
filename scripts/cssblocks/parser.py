from typing import List, Optional, NotRequired, Sequence, TypedDict
import re
from scripts.cssblocks.lexer import Token, TokenType
from scripts.cssblocks.nodes import BlockNode, ImportNode, Node, StringNode
from scripts.cssblocks.utils import resolve_config
from scripts.cssblocks.logger import Logger


class ParseException(Exception):
    def __init__(self, message: str, token: Optional[Token] = None):
        self.message = message
        self.token = token
        if token:
            message = f"{message} at line {token.line}, column {token.column}" + f", {token=}"
        super().__init__(message)


class BlockNestingError(ParseException):
    """An endblock marker with no open block, or naming the wrong one."""


class IncompleteParseError(ParseException):
    """Input ended while blocks were still open."""


MARKER_PREFIX = "/*!"
IMPORT_PREFIX = "@import "

ENDBLOCK_REGEX = re.compile(r"/\*!\s*endblock(?:\s*|\s+(.+?)\s*)\*/")
IMPORT_REGEX = re.compile(r"@import\s+url\s*\((['\"]?)(.+?)\1\);?|@import\s+(['\"])(.+?)\3;?")


def _marker_regex(key: str) -> re.Pattern:
    return re.compile(r"/\*!\s*" + key + r"\s+(.+?)\s*\*/")


BLOCK_REGEX = _marker_regex("block")
IMPORT_MARKER_REGEX = _marker_regex("import")
DEFINE_REGEX = _marker_regex("define")


def match_marker(regex: re.Pattern, text: str) -> Optional[str]:
    match = regex.fullmatch(text)
    return match.group(1) if match else None


def match_import(text: str) -> Optional[str]:
    match = IMPORT_REGEX.fullmatch(text)
    if not match:
        return None
    return match.group(2) or match.group(4)


class ParserConfig(TypedDict):
    parse: NotRequired[bool]
    enable_logger: NotRequired[bool]


class ParserConfigRequired(TypedDict):
    parse: bool
    enable_logger: bool


DEFAULT_CONFIG: ParserConfigRequired = {"parse": True, "enable_logger": True}


class Parser:
    """Builds the block tree from lexer tokens in a single left-to-right pass.

    Open named blocks are kept on an explicit stack; the innermost one is the
    target for text, nested blocks and comment imports. ``@import`` statements
    always land on the root.
    """

    def __init__(self, tokens: Sequence[Token | str], config: Optional[ParserConfig] = None):
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = Logger(config={"name": "Parser Logger", "is_enabled": self.config["enable_logger"]}).logger
        self.logger.info("Parser initialized")
        self.tokens = [self._as_token(token) for token in tokens]
        self.root = BlockNode(children=[])
        self.block_stack: List[BlockNode] = []
        self.parsed_tree: List[BlockNode] = []
        if self.config["parse"]:
            self.parsed_tree = self.parse_tokens()
            self.logger.debug("Tokens parsed into tree")

    @staticmethod
    def _as_token(token: Token | str) -> Token:
        if isinstance(token, Token):
            return token
        return Token(TokenType.TEXT, str(token), 0, 0)

    @property
    def current_block(self) -> BlockNode:
        return self.block_stack[-1] if self.block_stack else self.root

    def parse_tokens(self) -> List[BlockNode]:
        self.root = BlockNode(children=[])
        self.block_stack = []
        for token in self.tokens:
            self._parse(token)
        if self.block_stack:
            names = ", ".join(block.id or "" for block in self.block_stack)
            self.block_stack = []
            self._fail(IncompleteParseError(f"Block not finished: {names}"))
        return [self.root]

    def _fail(self, error: ParseException):
        self.logger.error(error)
        raise error

    def _parse(self, token: Token):
        rule = token.value
        if rule.startswith(MARKER_PREFIX) and self._parse_marker(token):
            return
        if rule.startswith(IMPORT_PREFIX) and self._parse_import_statement(token):
            return
        self.logger.debug(f"Adding text to block {self.current_block.id!r}")
        self.current_block.add_string(rule)

    def _parse_marker(self, token: Token) -> bool:
        rule = token.value

        if (name := match_marker(BLOCK_REGEX, rule)) is not None:
            block = BlockNode(id=name, children=[])
            self.current_block.add_child(block)
            self.block_stack.append(block)
            self.logger.debug(f"Opened block {name!r} at depth {len(self.block_stack)}")
            return True

        if (end := ENDBLOCK_REGEX.fullmatch(rule)) is not None:
            self._close_block(end.group(1), token)
            return True

        if (name := match_marker(IMPORT_MARKER_REGEX, rule)) is not None:
            self.current_block.add_child(ImportNode(id=name))
            self.logger.debug(f"Added import {name!r} to block {self.current_block.id!r}")
            return True

        if (name := match_marker(DEFINE_REGEX, rule)) is not None:
            if self.root.id is None:
                self.root.id = name
                self.logger.debug(f"Document defined as {name!r}")
            else:
                self.logger.debug(f"Ignoring define {name!r}, document is already {self.root.id!r}")
            return True

        return False

    def _close_block(self, name: Optional[str], token: Token):
        if not self.block_stack:
            self._fail(BlockNestingError("Block indent error: endblock without an open block", token))
        current = self.block_stack[-1]
        if name and name != current.id:
            self.block_stack = []
            self._fail(
                BlockNestingError(f"Block indent error: endblock {name!r} closes block {current.id!r}", token)
            )
        self.block_stack.pop()
        self.logger.debug(f"Closed block {current.id!r}")

    def _parse_import_statement(self, token: Token) -> bool:
        path = match_import(token.value)
        if not path:
            return False
        self.root.add_child(ImportNode(id=path))
        self.logger.debug(f"Added @import {path!r} to document root")
        return True

    def find_nodes(self, id: Optional[str] = None, node_type: Optional[type] = None) -> List[Node]:
        results = []
        pending = list(reversed(self.parsed_tree))
        while pending:
            node = pending.pop()
            if id is not None and getattr(node, "id", None) == id:
                results.append(node)
            elif node_type is not None and isinstance(node, node_type):
                results.append(node)
            if isinstance(node, BlockNode):
                pending.extend(reversed(node.children))
        return results

    def print_tree(self):
        pending = [(node, 0) for node in reversed(self.parsed_tree)]
        while pending:
            node, indent = pending.pop()
            print(self._describe(node, indent))
            if isinstance(node, BlockNode):
                pending.extend((child, indent + 1) for child in reversed(node.children))

    def _describe(self, node: Node, indent: int = 0) -> str:
        if isinstance(node, BlockNode):
            return f"{'  ' * indent}Block: {node.id if node.id is not None else '<anonymous>'}"
        elif isinstance(node, ImportNode):
            return f"{'  ' * indent}Import: {node.id}"
        elif isinstance(node, StringNode):
            return f"{'  ' * indent}String: {node.code!r}"
        return f"{'  ' * indent}Unknown Node Type: {type(node)}"


def build(tokens: Sequence[Token | str], config: Optional[ParserConfig] = None) -> List[BlockNode]:
    return Parser(tokens, config={**(config or {}), "parse": True}).parsed_tree
