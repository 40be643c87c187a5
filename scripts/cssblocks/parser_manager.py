from typing import Any, List, Optional, NotRequired, TypedDict
from scripts.cssblocks.lexer import Lexer, LexerConfig
from scripts.cssblocks.nodes import BlockNode
from scripts.cssblocks.parser import Parser, ParserConfig
from scripts.cssblocks.utils import resolve_config


class ParserManagerConfig(TypedDict):
    lexer_config: NotRequired[LexerConfig]
    parser_config: NotRequired[ParserConfig]


class ParserManagerConfigRequired(TypedDict):
    lexer_config: LexerConfig
    parser_config: ParserConfig


DEFAULT_CONFIG: ParserManagerConfigRequired = {
    "lexer_config": {},
    "parser_config": {},
}


class ParserManager:
    def __init__(self, input: Any, config: Optional[ParserManagerConfig] = None):
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.input = input
        self.lexer = Lexer(input=input, config={**self.config["lexer_config"], "tokenize": True})
        self.parser: Parser | None = None
        self.tree: List[BlockNode] = []
        # no tokens means no document, not an empty root
        if self.lexer.tokens:
            self.parser = Parser(tokens=self.lexer.tokens, config={**self.config["parser_config"], "parse": True})
            self.tree = self.parser.parsed_tree


def parse(input: Any, config: Optional[ParserManagerConfig] = None) -> List[BlockNode]:
    """Parse marked-up stylesheet text into a one-element forest holding the root block.

    Returns an empty list for non-text or empty input. Raises
    ``BlockNestingError`` or ``IncompleteParseError`` on unbalanced block markers.
    """
    return ParserManager(input, config=config).tree
