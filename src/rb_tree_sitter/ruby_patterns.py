"""Ruby-specific AST pattern recognition."""

from tree_sitter import Node

from .ast_walker import ASTWalker
from .node_types import CallSite

BLOCK_NODE_TYPES = ("block", "do_block")
REGEXP_CONSTRUCTORS = ("new", "compile")
CALL_OPERATORS = (".", "&.", "::")


class RubyPatterns:
    """Recognize Ruby-specific patterns in the AST."""

    @staticmethod
    def call_site(node: Node, source: bytes | str) -> CallSite | None:
        """Build a CallSite view for a `call` node.

        Returns None for nodes that are not method calls with a named method
        (e.g. `foo.()`).
        """
        if node.type != "call":
            return None

        method_node = node.child_by_field_name("method")
        if method_node is None:
            return None

        receiver = node.child_by_field_name("receiver")
        operator_node = node.child_by_field_name("operator")
        if operator_node is None and receiver is not None:
            operator_node = next((c for c in node.children if c.type in CALL_OPERATORS), None)
        operator = ASTWalker.get_text(operator_node, source) if operator_node is not None else None

        arguments_node = node.child_by_field_name("arguments")
        arguments = []
        parenthesized = False
        has_block_pass = False
        if arguments_node is not None:
            parenthesized = bool(arguments_node.children) and arguments_node.children[0].type == "("
            for child in arguments_node.named_children:
                if child.type == "comment":
                    continue
                if child.type == "block_argument":
                    has_block_pass = True
                    continue
                arguments.append(child)

        has_block = node.child_by_field_name("block") is not None or any(
            child.type in BLOCK_NODE_TYPES for child in node.children
        )

        return CallSite(
            node=node,
            receiver=receiver,
            operator=operator,
            method_name=ASTWalker.get_text(method_node, source),
            method_node=method_node,
            arguments=arguments,
            parenthesized=parenthesized,
            has_block=has_block,
            has_block_pass=has_block_pass,
        )

    @staticmethod
    def is_regexp_constructor(node: Node, source: bytes | str) -> bool:
        """Check for `Regexp.new(x)` / `Regexp.compile(x)` with a single plain argument."""
        call = RubyPatterns.call_site(node, source)
        if call is None or call.receiver is None:
            return False
        if call.receiver.type != "constant" or ASTWalker.get_text(call.receiver, source) != "Regexp":
            return False
        if call.operator != "." or call.method_name not in REGEXP_CONSTRUCTORS:
            return False
        return len(call.arguments) == 1 and not call.has_block and not call.has_block_pass

    @staticmethod
    def has_interpolation(node: Node) -> bool:
        """Check if a string/regex literal contains `#{...}` (or `#@var`) interpolation."""
        return any(
            n.type == "interpolation" for child in node.children for n in ASTWalker.iter_nodes(child)
        )

    @staticmethod
    def has_comment(node: Node, start_byte: int = 0) -> bool:
        """Check for a comment in the node's subtree starting at or after `start_byte`."""
        return any(n.type == "comment" and n.start_byte >= start_byte for n in ASTWalker.iter_nodes(node))

    @staticmethod
    def is_inside_error(node: Node) -> bool:
        """Check if a node sits inside a tree-sitter ERROR region."""
        return node.is_error or ASTWalker.find_parent_of_type(node, "ERROR") is not None
