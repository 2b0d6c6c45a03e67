"""
Position placement task.

Two-phase greedy layout: shapes sitting at the origin get the first free cell
of a fixed grid, then every shape is nudged right by one grid step until its
snapped cell is not shared with an earlier shape. The goal is "never exactly
overlap", not an optimal layout.

Dependencies: merge_pipeline.models, merge_pipeline.configs
System role: Fifth stage of the merge pipeline
"""

import logging
import math
from dataclasses import dataclass

from ..configs import MergePipelineSettings
from ..models import DiagramState, Position, Shape

logger = logging.getLogger(__name__)

Cell = tuple[float, float]


@dataclass(frozen=True)
class PlacementResult:
    """State with non-overlapping positions plus how many shapes moved."""

    state: DiagramState
    placed: int = 0
    nudged: int = 0


class PlacementTask:
    """Assign non-overlapping positions to shapes."""

    def __init__(self, settings: MergePipelineSettings) -> None:
        """
        Initialize placement task with grid configuration.

        Args:
            settings: Pipeline settings (grid step, offset, max column, snap, coordinate limit)
        """
        self._step = settings.grid_step
        self._offset = settings.grid_offset
        self._max_x = settings.grid_max_x
        self._snap_resolution = settings.snap_resolution
        self._max_coordinate = settings.max_coordinate

    def snap(self, position: Position) -> Cell:
        """Snap a position to the overlap-check resolution, rounding halves up."""
        resolution = self._snap_resolution
        return (
            math.floor(position.x / resolution + 0.5) * resolution,
            math.floor(position.y / resolution + 0.5) * resolution,
        )

    def _is_placed(self, position: Position) -> bool:
        if position.is_origin:
            return False
        return all(
            math.isfinite(value) and abs(value) <= self._max_coordinate
            for value in (position.x, position.y)
        )

    def _first_free_cell(self, occupied: set[Cell]) -> Position:
        x, y = self._offset, self._offset
        while self.snap(Position(x=x, y=y)) in occupied:
            x += self._step
            if x > self._max_x:
                x = self._offset
                y += self._step
        return Position(x=x, y=y)

    def place(self, state: DiagramState) -> PlacementResult:
        """
        Resolve missing and overlapping positions.

        Shapes are processed in state order; the occupied set lives only for
        this call. Shapes at the origin, or at a non-finite or out-of-range
        coordinate, count as unplaced.

        Args:
            state: Diagram state after reference checking

        Returns:
            PlacementResult: State with adjusted positions
        """
        occupied: set[Cell] = set()
        shapes: list[Shape] = []
        placed = nudged = 0

        for shape in state.shapes:
            position = shape.position
            if not self._is_placed(position):
                position = self._first_free_cell(occupied)
                placed += 1

            cell = self.snap(position)
            if cell in occupied:
                nudged += 1
            while cell in occupied:
                position = Position(x=position.x + self._step, y=position.y)
                cell = self.snap(position)
            occupied.add(cell)

            if position != shape.position:
                shape = shape.model_copy(update={"position": position})
            shapes.append(shape)

        if placed or nudged:
            logger.debug(f"{__name__}:place - placed={placed} nudged={nudged}")

        return PlacementResult(
            state=state.model_copy(update={"shapes": tuple(shapes)}),
            placed=placed,
            nudged=nudged,
        )
