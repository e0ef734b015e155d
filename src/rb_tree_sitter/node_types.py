from dataclasses import dataclass, field
from typing import List, Optional
from tree_sitter import Tree, Node


@dataclass
class ParseResult:
    """Result of a tree-sitter parse operation"""
    tree: Tree
    source: str
    errors: List[str] = field(default_factory=list)


@dataclass
class CallSite:
    """View over a Ruby method call node.

    Spans are 0-based byte offsets into the UTF-8 encoded source.
    """
    node: Node
    receiver: Optional[Node]
    operator: Optional[str]  # '.', '&.', '::' or None for receiverless calls
    method_name: str
    method_node: Node
    arguments: List[Node]
    parenthesized: bool
    has_block: bool
    has_block_pass: bool

    @property
    def is_bang(self) -> bool:
        return self.method_name.endswith("!")

    @property
    def rewrite_span(self) -> tuple[int, int]:
        """Method name through the end of the call (receiver excluded)."""
        return (self.method_node.start_byte, self.node.end_byte)
