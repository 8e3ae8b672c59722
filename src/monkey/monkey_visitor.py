"""
Read-only traversal of Monkey ASTs.

Downstream consumers (an evaluator, a pretty printer, a linter) walk the tree
produced by the parser without modifying it. This module gives them two tools:

Classes:
    NodeVisitor: Dispatches each node to a `visit_<kind>` method. A subclass that
        forgets a node kind fails loudly with NotImplementedError instead of
        silently skipping it.

Functions:
    walk(node): Yields a node and every descendant, depth-first, in source order.

Example:
    >>> class IdentCollector(NodeVisitor):
    ...     def __init__(self) -> None:
    ...         self.names: list[str] = []
    ...     def visit_identifier(self, node: Identifier) -> None:
    ...         self.names.append(node.value)
    ...     def visit_program(self, node: Program) -> None:
    ...         self.generic_visit(node)
"""

from collections.abc import Iterator
from typing import Any

from monkey.monkey_ast import Node


class NodeVisitor:
    """Base class for AST consumers.

    `visit(node)` calls `self.visit_<node.kind>(node)` and returns its result.
    There is no fallback: every kind the consumer can meet needs a method, or
    it must opt into recursion through `generic_visit`.
    """

    def visit(self, node: Node) -> Any:
        """Invokes the visit method matching the node's kind.

        Args:
            node: The node to visit.

        Returns:
            Whatever the matching `visit_<kind>` method returns.

        Raises:
            TypeError: If `node` is not an AST node.
            NotImplementedError: If there is no method for the node's kind.
        """
        if not isinstance(node, Node):
            raise TypeError(f"Expected an AST node, got {type(node).__name__}")
        method_name = f"visit_{node.kind}"
        visitor = getattr(self, method_name, None)
        if visitor is None:
            raise NotImplementedError(
                f"{type(self).__name__} has no visitor for node kind '{node.kind}'"
            )
        return visitor(node)

    def generic_visit(self, node: Node) -> None:
        """Visits each child of `node` in source order."""
        for child in node.children():
            self.visit(child)


def walk(node: Node) -> Iterator[Node]:
    """Yields `node` and all of its descendants, parents before children."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))
