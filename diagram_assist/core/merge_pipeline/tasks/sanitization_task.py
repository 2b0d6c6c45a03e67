"""
Sanitization task for raw generator records.

Turns each untrusted record into a well-formed Shape or Connection, or drops it
with a warning. Records whose label is missing, blank or the placeholder are
rejected outright rather than given a synthetic label.

Dependencies: pydantic, merge_pipeline.extraction
System role: First stage of the merge pipeline
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from diagram_assist.core.exceptions import ElementWarning, InvalidShapeError
from diagram_assist.observability.log_utils import describe_record, log_with_context

from .. import extraction as rules
from ..configs import MergePipelineSettings
from ..models import (
    Attribute,
    Connection,
    Operation,
    Parameter,
    Position,
    RelationshipKind,
    Shape,
    ShapeKind,
    Visibility,
)

logger = logging.getLogger(__name__)

SHAPE_RECORD_KINDS = frozenset({"class", "node", "shape"})
CONNECTION_RECORD_KINDS = frozenset({"relationship", "edge", "connection"})

_SHAPE_KIND_ALIASES = {
    "class": ShapeKind.CLASS,
    "abstractclass": ShapeKind.ABSTRACT_CLASS,
    "interface": ShapeKind.INTERFACE,
    "enum": ShapeKind.ENUM,
    "enumeration": ShapeKind.ENUM,
    "record": ShapeKind.RECORD,
}


@dataclass
class SanitizationResult:
    """Survivors of sanitization, in input order, plus warnings."""

    shapes: list[Shape] = field(default_factory=list)
    connections: list[Connection] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def _coerce_id(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int)):
        text = str(value).strip()
        return text or None
    return None


def _coerce_number(value: Any, limit: float) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    if not math.isfinite(number) or abs(number) > limit:
        return None
    return number


def _coerce_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


class SanitizationTask:
    """Normalize raw proposal records into shapes and connections."""

    def __init__(self, settings: MergePipelineSettings) -> None:
        """
        Initialize sanitization task.

        Args:
            settings: Pipeline settings (placeholder label, default multiplicity, coordinate limit)
        """
        self._unnamed_label = settings.unnamed_label
        self._default_multiplicity = settings.default_multiplicity
        self._max_coordinate = settings.max_coordinate

    def sanitize(self, records: list[Any]) -> SanitizationResult:
        """
        Sanitize every record of a proposal.

        Args:
            records: Raw element records

        Returns:
            SanitizationResult: Valid shapes and connections plus warnings
        """
        result = SanitizationResult()

        for index, record in enumerate(records):
            try:
                element = self.sanitize_record(record, index, notes=result.warnings)
            except ElementWarning as e:
                log_with_context(
                    logger,
                    logging.DEBUG,
                    f"{__name__}:sanitize - DROPPED",
                    index=index,
                    record=describe_record(record),
                    reason=e.message,
                )
                result.warnings.append(e.message)
                continue

            if isinstance(element, Shape):
                result.shapes.append(element)
            else:
                result.connections.append(element)

        return result

    def sanitize_record(
        self,
        record: Any,
        index: int,
        notes: list[str] | None = None,
    ) -> Shape | Connection:
        """
        Sanitize a single record.

        Args:
            record: Raw element record
            index: Position of the record in the proposal
            notes: Receives non-fatal warnings (dropped members, unknown kinds)

        Returns:
            Shape | Connection: The normalized element

        Raises:
            ElementWarning: When the record must be dropped
        """
        if record is None:
            raise ElementWarning(f"Element at index {index} is empty, skipping", index=index)
        if not isinstance(record, dict):
            raise ElementWarning(
                f"Element at index {index} is not a record ({type(record).__name__}), skipping",
                index=index,
            )

        kind = rules.RECORD_KIND.extract(record)
        kind_key = kind.strip().lower() if isinstance(kind, str) else None
        warnings: list[str] = []

        if kind_key in SHAPE_RECORD_KINDS:
            element = self._build_shape(record, index, warnings)
        elif kind_key in CONNECTION_RECORD_KINDS:
            element = self._build_connection(record, index, warnings)
        else:
            raise ElementWarning(f"Unknown element type at index {index}: {kind}", index=index)

        # Non-fatal warnings only count once the element itself survived
        if notes is not None:
            notes.extend(warnings)
        return element

    def _payload(self, record: dict, index: int, noun: str) -> dict:
        payload = rules.RECORD_PAYLOAD.extract(record)
        if not isinstance(payload, dict):
            raise ElementWarning(f"{noun} at index {index} missing data field, skipping", index=index)
        return payload

    def _build_shape(self, record: dict, index: int, warnings: list[str]) -> Shape:
        payload = self._payload(record, index, "Shape")

        shape_id = _coerce_id(rules.SHAPE_ID.extract(payload, fallback=record))
        if not shape_id:
            raise ElementWarning(f"Shape at index {index} missing ID, skipping", index=index)

        label = rules.SHAPE_LABEL.extract(payload)
        if not isinstance(label, str) or not label.strip() or label.strip() == self._unnamed_label:
            raise InvalidShapeError(
                f'Shape "{shape_id}" has invalid label "{label if label is not None else ""}", '
                "rejected (will not be added to diagram)",
                index=index,
                element_id=shape_id,
            )

        kind = self._shape_kind(rules.SHAPE_KIND.extract(payload), shape_id, warnings)
        try:
            return Shape(
                id=shape_id,
                kind=kind,
                label=label.strip(),
                position=self._position(rules.SHAPE_POSITION.extract(payload)),
                attributes=self._attributes(
                    rules.SHAPE_ATTRIBUTES.extract(payload, default=[]), shape_id, warnings
                ),
                operations=self._operations(
                    rules.SHAPE_OPERATIONS.extract(payload, default=[]), shape_id, warnings
                ),
                is_abstract=_coerce_flag(rules.SHAPE_ABSTRACT.extract(payload)),
            )
        except ValidationError as e:
            raise ElementWarning(
                f'Shape "{shape_id}" is malformed ({e.error_count()} errors), skipping',
                index=index,
                element_id=shape_id,
            ) from e

    def _build_connection(self, record: dict, index: int, warnings: list[str]) -> Connection:
        payload = self._payload(record, index, "Connection")

        connection_id = _coerce_id(rules.CONNECTION_ID.extract(payload, fallback=record))
        if not connection_id:
            raise ElementWarning(f"Connection at index {index} missing ID, skipping", index=index)

        source = _coerce_id(rules.CONNECTION_SOURCE.extract(payload))
        target = _coerce_id(rules.CONNECTION_TARGET.extract(payload))
        if not source or not target:
            raise ElementWarning(
                f'Connection "{connection_id}" missing source or target, skipping',
                index=index,
                element_id=connection_id,
            )

        label = rules.CONNECTION_LABEL.extract(payload, default="")
        return Connection(
            id=connection_id,
            source=source,
            target=target,
            kind=self._relationship_kind(
                rules.CONNECTION_KIND.extract(payload), connection_id, warnings
            ),
            source_multiplicity=str(
                rules.CONNECTION_SOURCE_MULTIPLICITY.extract(payload, default=self._default_multiplicity)
            ),
            target_multiplicity=str(
                rules.CONNECTION_TARGET_MULTIPLICITY.extract(payload, default=self._default_multiplicity)
            ),
            label=label if isinstance(label, str) else str(label),
        )

    def _shape_kind(self, value: Any, shape_id: str, warnings: list[str]) -> ShapeKind:
        if value is None:
            return ShapeKind.CLASS
        key = "".join(ch for ch in str(value).lower() if ch.isalnum())
        kind = _SHAPE_KIND_ALIASES.get(key)
        if kind is None:
            warnings.append(f'Shape "{shape_id}" has unknown kind "{value}", using class')
            return ShapeKind.CLASS
        return kind

    def _relationship_kind(
        self, value: Any, connection_id: str, warnings: list[str]
    ) -> RelationshipKind:
        if value is None:
            return RelationshipKind.ASSOCIATION
        try:
            return RelationshipKind(str(value).strip().lower())
        except ValueError:
            warnings.append(
                f'Connection "{connection_id}" has unknown relationship type "{value}", '
                "using association"
            )
            return RelationshipKind.ASSOCIATION

    def _position(self, value: Any) -> Position:
        if not isinstance(value, dict):
            return Position()
        x = _coerce_number(value.get("x"), self._max_coordinate)
        y = _coerce_number(value.get("y"), self._max_coordinate)
        if x is None or y is None:
            return Position()
        return Position(x=x, y=y)

    def _visibility(self, value: Any, default: Visibility) -> Visibility:
        if isinstance(value, str):
            try:
                return Visibility(value.strip().lower())
            except ValueError:
                pass
        return default

    def _attributes(self, items: Any, shape_id: str, warnings: list[str]) -> list[Attribute]:
        if not isinstance(items, list):
            return []

        attributes = []
        for position, item in enumerate(items, start=1):
            if isinstance(item, str):
                item = {"name": item}
            name = item.get("name") if isinstance(item, dict) else None
            if not isinstance(name, str) or not name.strip():
                warnings.append(f'Shape "{shape_id}" attribute {position} has no name, dropped')
                continue

            default_value = rules.MEMBER_DEFAULT.extract(item)
            attributes.append(
                Attribute(
                    id=_coerce_id(item.get("id")) or f"attr-{shape_id}-{position}",
                    name=name.strip(),
                    type=str(rules.MEMBER_TYPE.extract(item, default="String")),
                    visibility=self._visibility(item.get("visibility"), Visibility.PRIVATE),
                    is_static=_coerce_flag(rules.MEMBER_STATIC.extract(item)),
                    is_final=_coerce_flag(rules.MEMBER_FINAL.extract(item)),
                    default_value=None if default_value is None else str(default_value),
                )
            )
        return attributes

    def _parameters(self, items: Any) -> list[Parameter]:
        if not isinstance(items, list):
            return []

        parameters = []
        for item in items:
            if isinstance(item, str):
                item = {"name": item}
            name = item.get("name") if isinstance(item, dict) else None
            if not isinstance(name, str) or not name.strip():
                continue
            default_value = rules.MEMBER_DEFAULT.extract(item)
            parameters.append(
                Parameter(
                    name=name.strip(),
                    type=str(rules.MEMBER_TYPE.extract(item, default="Object")),
                    default_value=None if default_value is None else str(default_value),
                )
            )
        return parameters

    def _operations(self, items: Any, shape_id: str, warnings: list[str]) -> list[Operation]:
        if not isinstance(items, list):
            return []

        operations = []
        for position, item in enumerate(items, start=1):
            if isinstance(item, str):
                item = {"name": item}
            name = item.get("name") if isinstance(item, dict) else None
            if not isinstance(name, str) or not name.strip():
                warnings.append(f'Shape "{shape_id}" operation {position} has no name, dropped')
                continue

            operations.append(
                Operation(
                    id=_coerce_id(item.get("id")) or f"method-{shape_id}-{position}",
                    name=name.strip(),
                    return_type=str(rules.OPERATION_RETURN_TYPE.extract(item, default="void")),
                    visibility=self._visibility(item.get("visibility"), Visibility.PUBLIC),
                    parameters=self._parameters(rules.OPERATION_PARAMETERS.extract(item, default=[])),
                    is_static=_coerce_flag(rules.MEMBER_STATIC.extract(item)),
                    is_abstract=_coerce_flag(rules.MEMBER_ABSTRACT.extract(item)),
                )
            )
        return operations
