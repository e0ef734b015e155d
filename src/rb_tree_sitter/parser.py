import logging
from pathlib import Path

import tree_sitter_ruby as tsr
from tree_sitter import Language, Parser

from .ast_walker import ASTWalker
from .node_types import ParseResult

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Raised when a file cannot be read as Ruby source."""


class RubyParser:
    """Thin wrapper around the tree-sitter Ruby grammar"""

    def __init__(self):
        self.language = Language(tsr.language())
        self.parser = Parser(self.language)

    def parse_string(self, source: str) -> ParseResult:
        tree = self.parser.parse(source.encode("utf-8"))
        errors = self._collect_errors(tree.root_node)
        if errors:
            logger.debug(f"{len(errors)} syntax error(s) in parsed source")
        return ParseResult(tree=tree, source=source, errors=errors)

    def parse_file(self, file_path: Path) -> ParseResult:
        try:
            source = Path(file_path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(f"Cannot read {file_path}: {e}") from e
        return self.parse_string(source)

    @staticmethod
    def _collect_errors(root) -> list[str]:
        if not root.has_error:
            return []
        errors = []
        for node in ASTWalker.iter_nodes(root):
            if node.is_error:
                line, col = node.start_point
                errors.append(f"Syntax error at {line + 1}:{col + 1}")
            elif node.is_missing:
                line, col = node.start_point
                errors.append(f"Missing '{node.type}' at {line + 1}:{col + 1}")
        return errors
