"""Graph container and depth-first topological sort."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ._result import SortResult

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)


class Node[T]:
    """A vertex of the dependency graph.

    A node stores an immutable payload and the ordered list of nodes it
    depends on. Nodes compare and hash by identity, so two nodes holding
    equal payloads are distinct vertices.

    Nodes are created through ``Graph.create``.
    """

    __slots__ = ("_dependencies", "_value")

    def __init__(self, value: T) -> None:
        self._value = value
        self._dependencies: list[Node[T]] = []

    @property
    def value(self) -> T:
        """The payload stored by this node."""
        return self._value

    @property
    def dependencies(self) -> tuple[Node[T], ...]:
        """Nodes this node depends on, in declaration order."""
        return tuple(self._dependencies)

    def depends_on(self, other: Node[T]) -> None:
        """Declare that this node depends on ``other``.

        ``other`` (and everything it depends on) is ordered before this node.
        Duplicate declarations and self-dependencies are accepted; cycles are
        only detected when the graph is sorted.

        Args:
            other: The node this node depends on.

        """
        self._dependencies.append(other)

    def __repr__(self) -> str:
        return f"Node({self._value!r})"


class Graph[T]:
    """A directed dependency graph built for a single sort.

    Nodes are kept in creation order, which is also the order in which the
    traversal starts from them. ``sort`` always empties the graph, so a graph
    has to be rebuilt before it can be sorted again.

    Example:
        >>> graph = Graph[str]()
        >>> a = graph.create("a")
        >>> b = graph.create("b")
        >>> b.depends_on(a)
        >>> graph.sort().values()
        ['a', 'b']

    """

    __slots__ = ("_nodes",)

    def __init__(self) -> None:
        self._nodes: list[Node[T]] = []

    def create(self, value: T) -> Node[T]:
        """Create a node without dependencies and add it to the graph.

        Args:
            value: The payload the node should store.

        Returns:
            The created node, used to declare dependencies.

        """
        node = Node(value)
        self._nodes.append(node)
        return node

    def clear(self) -> None:
        """Remove all nodes from the graph."""
        self._nodes.clear()

    def sort(self) -> SortResult[T]:
        """Sort the graph topologically and empty it.

        Returns:
            A successful result holding every node after all of its
            dependencies, or a failed result naming the closing edge of a
            cycle. An empty graph sorts successfully to an empty order.

        """
        if not self._nodes:
            return SortResult.success([])

        logger.debug("Sorting graph with %d nodes", len(self._nodes))
        try:
            result = self._visit()
        finally:
            self.clear()

        if result.cycle is not None:
            logger.debug("Cyclic dependency between %r and %r", result.cycle.node, result.cycle.ancestor)
        else:
            logger.debug("Sorted %d nodes", len(result.sorted_nodes))
        return result

    def _visit(self) -> SortResult[T]:
        finished: set[Node[T]] = set()
        pending: set[Node[T]] = set()
        order: list[Node[T]] = []

        for root in self._nodes:
            if root in finished:
                continue

            pending.add(root)
            # Each frame is a node plus the position in its dependency list
            stack: list[tuple[Node[T], Iterator[Node[T]]]] = [(root, iter(root._dependencies))]  # noqa: SLF001
            while stack:
                node, remaining = stack[-1]
                for dep in remaining:
                    if dep in finished:
                        continue
                    if dep in pending:
                        return SortResult.failure(dep, node)
                    pending.add(dep)
                    stack.append((dep, iter(dep._dependencies)))  # noqa: SLF001
                    break
                else:
                    stack.pop()
                    pending.discard(node)
                    finished.add(node)
                    order.append(node)

        return SortResult.success(order)

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node[T]]:
        """Iterate over nodes in creation order."""
        return iter(self._nodes)

    def __contains__(self, node: object) -> bool:
        """Check whether ``node`` (by identity) belongs to the graph."""
        return any(n is node for n in self._nodes)
