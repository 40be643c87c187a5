"""Block/import marker parsing and printing for composable stylesheets."""

from .nodes import BlockNode, ImportNode, Node, StringNode
from .lexer import Lexer, LexerConfig, Token, TokenType, tokenize
from .parser import (
    BlockNestingError,
    IncompleteParseError,
    ParseException,
    Parser,
    ParserConfig,
    build,
)
from .parser_manager import ParserManager, ParserManagerConfig, parse
from .walker import iter_nodes, walk
from .formatter import Keep, Replace, Skip, StyleFormatter, stringify
from .composer import collect_blocks, collect_imports, compose

__all__ = [
    "BlockNode",
    "ImportNode",
    "Node",
    "StringNode",
    "Lexer",
    "LexerConfig",
    "Token",
    "TokenType",
    "tokenize",
    "BlockNestingError",
    "IncompleteParseError",
    "ParseException",
    "Parser",
    "ParserConfig",
    "build",
    "ParserManager",
    "ParserManagerConfig",
    "parse",
    "iter_nodes",
    "walk",
    "Keep",
    "Replace",
    "Skip",
    "StyleFormatter",
    "stringify",
    "collect_blocks",
    "collect_imports",
    "compose",
]
