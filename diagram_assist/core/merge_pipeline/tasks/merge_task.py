"""
Merge task combining a proposal with the current diagram state.

Identifier-keyed: a proposal with an existing identifier replaces that element
in place (full overwrite), any other proposal is appended. Applying the same
proposal twice yields the same state as applying it once.

Dependencies: merge_pipeline.models
System role: Third stage of the merge pipeline
"""

import logging
from dataclasses import dataclass
from typing import Generic, Iterable, Iterator, TypeVar

from ..models import Connection, DiagramState, Shape

logger = logging.getLogger(__name__)

T = TypeVar("T", Shape, Connection)


class OrderedIdMap(Generic[T]):
    """Insertion-ordered map from element identifier to element."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: dict[str, T] = {}
        for item in items:
            self._items[item.id] = item

    def __contains__(self, element_id: object) -> bool:
        return element_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items.values())

    def put(self, item: T) -> bool:
        """
        Insert or replace by identifier.

        Replacing keeps the original slot, so ordering stays deterministic.

        Returns:
            bool: True when an existing entry was replaced
        """
        replaced = item.id in self._items
        self._items[item.id] = item
        return replaced

    def values(self) -> tuple[T, ...]:
        return tuple(self._items.values())


@dataclass(frozen=True)
class MergeResult:
    """Merged state plus what the merge did."""

    state: DiagramState
    shapes_added: int = 0
    shapes_updated: int = 0
    connections_added: int = 0
    connections_updated: int = 0


class MergeTask:
    """Merge deduplicated proposals into the current diagram."""

    def merge(
        self,
        current: DiagramState,
        shapes: list[Shape],
        connections: list[Connection],
    ) -> MergeResult:
        """
        Produce a new state from the current one and the proposals.

        Args:
            current: Diagram state held by the editor (not modified)
            shapes: Deduplicated proposed shapes
            connections: Deduplicated proposed connections

        Returns:
            MergeResult: New state and added/updated counters
        """
        shape_map: OrderedIdMap[Shape] = OrderedIdMap(current.shapes)
        connection_map: OrderedIdMap[Connection] = OrderedIdMap(current.connections)

        shapes_updated = sum(1 for shape in shapes if shape_map.put(shape))
        connections_updated = sum(
            1 for connection in connections if connection_map.put(connection)
        )

        result = MergeResult(
            state=DiagramState(shapes=shape_map.values(), connections=connection_map.values()),
            shapes_added=len(shapes) - shapes_updated,
            shapes_updated=shapes_updated,
            connections_added=len(connections) - connections_updated,
            connections_updated=connections_updated,
        )

        logger.debug(
            f"{__name__}:merge - shapes={len(shape_map)} connections={len(connection_map)} "
            f"added={result.shapes_added} updated={result.shapes_updated}"
        )
        return result
