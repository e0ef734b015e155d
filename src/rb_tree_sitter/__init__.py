from .ast_walker import ASTWalker
from .node_types import CallSite, ParseResult
from .parser import ParseError, RubyParser
from .ruby_patterns import RubyPatterns

__all__ = ["ASTWalker", "CallSite", "ParseError", "ParseResult", "RubyParser", "RubyPatterns"]
