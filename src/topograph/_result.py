"""Result types returned by a topological sort."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._graph import Node


@dataclass(frozen=True, slots=True)
class CyclicDependency[T]:
    """The closing edge of a dependency cycle.

    Only the two endpoints of the edge that closed the loop are recorded,
    not the full membership of the cycle.

    Attributes:
        node: The node that was reached again while still pending.
        ancestor: The most recently entered pending node at that moment,
            i.e. the node whose dependency list led back to ``node``.

    """

    node: Node[T]
    ancestor: Node[T]

    def values(self) -> tuple[T, T]:
        """Return the payloads of both witnesses as ``(node, ancestor)``."""
        return self.node.value, self.ancestor.value


@dataclass(frozen=True, slots=True)
class SortResult[T]:
    """Outcome of a single ``Graph.sort`` call.

    Success is an explicit flag. An empty graph sorts successfully to an
    empty order, while a non-empty cyclic graph also yields an empty order
    but reports failure together with the cycle witnesses.

    Attributes:
        is_success: Whether a valid topological order was found.
        sorted_nodes: Nodes ordered so that each node follows everything it
            depends on. Empty on failure.
        cycle: The closing edge of the detected cycle, ``None`` on success.

    """

    is_success: bool
    sorted_nodes: tuple[Node[T], ...] = field(default_factory=tuple)
    cycle: CyclicDependency[T] | None = None

    @classmethod
    def success(cls, nodes: list[Node[T]]) -> SortResult[T]:
        return cls(is_success=True, sorted_nodes=tuple(nodes))

    @classmethod
    def failure(cls, node: Node[T], ancestor: Node[T]) -> SortResult[T]:
        return cls(is_success=False, cycle=CyclicDependency(node=node, ancestor=ancestor))

    @property
    def cyclic_a(self) -> Node[T] | None:
        """First cycle witness (the node found again), if any."""
        return self.cycle.node if self.cycle is not None else None

    @property
    def cyclic_b(self) -> Node[T] | None:
        """Second cycle witness (the nearest pending ancestor), if any."""
        return self.cycle.ancestor if self.cycle is not None else None

    def values(self) -> list[T]:
        """Return the payloads of the sorted nodes, in order."""
        return [node.value for node in self.sorted_nodes]
