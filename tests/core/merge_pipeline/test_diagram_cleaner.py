"""Tests for whole-diagram audit and cleaning."""

import logging

from diagram_assist.core.merge_pipeline import (
    DiagramState,
    clean_and_validate,
    clean_diagram,
    validate_diagram,
)
from diagram_assist.core.merge_pipeline.models import Connection, RelationshipKind, Shape


def _unlabeled(shape_id: str) -> Shape:
    # Bypasses validation to model states persisted before labels were enforced
    return Shape.model_construct(id=shape_id, label="")


def _messy_state() -> DiagramState:
    return DiagramState.model_construct(
        shapes=(
            Shape(id="a", label="A"),
            Shape(id="b", label="B"),
            Shape(id="a", label="A2"),
            _unlabeled("blank"),
        ),
        connections=(
            Connection(id="c1", source="a", target="b"),
            Connection(id="c2", source="a", target="b", kind=RelationshipKind.DEPENDENCY),
            Connection(id="c3", source="a", target="ghost"),
            Connection(id="c4", source="b", target="blank"),
        ),
    )


class TestValidateDiagram:
    """Tests for validate_diagram."""

    def test_consistent_state_is_valid(self, current_state) -> None:
        """A clean state has no errors or warnings."""
        result = validate_diagram(current_state)
        assert result.valid
        assert result.errors == []
        assert result.warnings == []

    def test_reports_every_problem(self) -> None:
        """Duplicate ids, bad labels and orphans are errors; repeated pairs warn."""
        result = validate_diagram(_messy_state())

        assert not result.valid
        assert result.errors == [
            "Duplicate shape IDs found: a",
            "1 shapes have invalid labels: blank",
            "1 orphaned connections found (reference non-existent shapes)",
        ]
        assert result.warnings == ["1 duplicate connections found"]

    def test_custom_placeholder_label(self) -> None:
        """A configured placeholder is treated as invalid too."""
        state = DiagramState(shapes=(Shape(id="x", label="TBD"),))
        assert not validate_diagram(state, unnamed_label="TBD").valid


class TestCleanDiagram:
    """Tests for clean_diagram and clean_and_validate."""

    def test_clean_fixes_everything(self) -> None:
        """Cleaning leaves a state that validates."""
        cleaned = clean_diagram(_messy_state())

        assert [(s.id, s.label) for s in cleaned.shapes] == [("a", "A2"), ("b", "B")]
        assert [c.id for c in cleaned.connections] == ["c2"]
        assert validate_diagram(cleaned).valid

    def test_clean_state_unchanged(self, current_state) -> None:
        """Consistent states come back equal."""
        assert clean_diagram(current_state) == current_state

    def test_clean_and_validate_logs_errors(self, caplog) -> None:
        """Audit findings are logged before cleaning."""
        with caplog.at_level(logging.INFO):
            cleaned = clean_and_validate(_messy_state())

        assert validate_diagram(cleaned).valid
        assert "Duplicate shape IDs found: a" in caplog.text
        assert "duplicate connections found" in caplog.text
