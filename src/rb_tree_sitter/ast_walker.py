from tree_sitter import Node
from typing import Iterator, Optional, List


class ASTWalker:
    """Utilities for traversing and searching the Ruby AST"""

    @staticmethod
    def iter_nodes(node: Node) -> Iterator[Node]:
        """Iterate over the subtree in document order without recursion"""
        stack = [node]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))

    @staticmethod
    def find_parent_of_type(node: Node, type_name: str) -> Optional[Node]:
        """Find the first parent node of a specific type"""
        current = node.parent
        while current:
            if current.type == type_name:
                return current
            current = current.parent
        return None

    @staticmethod
    def find_all_by_type(node: Node, type_name: str) -> List[Node]:
        """Find all descendant nodes of a specific type"""
        return [n for n in ASTWalker.iter_nodes(node) if n.type == type_name]

    @staticmethod
    def get_text(node: Node, source: bytes | str) -> str:
        """Source text of a node; tree-sitter offsets are UTF-8 byte offsets."""
        if isinstance(source, str):
            source = source.encode("utf-8")
        return source[node.start_byte : node.end_byte].decode("utf-8")
