"""
Shared test fixtures and configuration for entire test suite.

Provides: pipeline settings, pipeline instances, sample diagram states and
raw proposal record builders in the shapes different generator versions emit.
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

from typing import Any

import pytest

from diagram_assist.core.merge_pipeline import DiagramMergePipeline, MergePipelineSettings
from diagram_assist.core.merge_pipeline.models import (
    Attribute,
    Connection,
    DiagramState,
    Position,
    RelationshipKind,
    Shape,
)


def build_shape_record(
    shape_id: str | None,
    label: Any,
    attributes: list | None = None,
    position: dict | None = None,
    nested: bool = False,
    **extra: Any,
) -> dict:
    """
    Build a raw shape record.

    Args:
        shape_id: Identifier (omitted when None)
        label: Label value placed in the payload
        attributes: Raw attribute list
        position: Raw position mapping
        nested: Put label/attributes under payload["data"] (reactflow style)
        **extra: Additional payload fields

    Returns:
        dict: Record with element_type/element_data keys
    """
    body: dict = {"label": label}
    if attributes is not None:
        body["attributes"] = attributes
    body.update(extra)

    payload: dict = {"data": body} if nested else dict(body)
    if shape_id is not None:
        payload["id"] = shape_id
    if position is not None:
        payload["position"] = position
    return {"element_type": "class", "element_data": payload}


def build_connection_record(
    connection_id: str | None,
    source: str | None,
    target: str | None,
    kind: str | None = None,
    **extra: Any,
) -> dict:
    """Build a raw connection record using the legacy type/data keys."""
    payload: dict = dict(extra)
    if connection_id is not None:
        payload["id"] = connection_id
    if source is not None:
        payload["source"] = source
    if target is not None:
        payload["target"] = target
    if kind is not None:
        payload["relationshipType"] = kind
    return {"type": "relationship", "data": payload}


@pytest.fixture
def pipeline_settings() -> MergePipelineSettings:
    """Provide default pipeline settings, independent of the environment."""
    return MergePipelineSettings(
        unnamed_label="Unnamed Class",
        default_multiplicity="1",
        max_elements=500,
        grid_step=300,
        grid_offset=100,
        grid_max_x=1500,
        snap_resolution=50,
        max_coordinate=1_000_000,
    )


@pytest.fixture
def pipeline(pipeline_settings: MergePipelineSettings) -> DiagramMergePipeline:
    """Provide a pipeline configured with default settings."""
    return DiagramMergePipeline(settings=pipeline_settings)


@pytest.fixture
def customer_shape() -> Shape:
    """Provide an existing, positioned Customer shape."""
    return Shape(
        id="customer",
        label="Customer",
        position=Position(x=100, y=100),
        attributes=(Attribute(id="attr-customer-1", name="email"),),
    )


@pytest.fixture
def order_shape() -> Shape:
    """Provide an existing, positioned Order shape."""
    return Shape(
        id="order",
        label="Order",
        position=Position(x=400, y=100),
        attributes=(
            Attribute(id="attr-order-1", name="total", type="BigDecimal"),
            Attribute(id="attr-order-2", name="createdAt", type="Instant"),
        ),
    )


@pytest.fixture
def current_state(customer_shape: Shape, order_shape: Shape) -> DiagramState:
    """Provide a consistent diagram state with two shapes and one connection."""
    return DiagramState(
        shapes=(customer_shape, order_shape),
        connections=(
            Connection(
                id="customer-order",
                source="customer",
                target="order",
                kind=RelationshipKind.ASSOCIATION,
                target_multiplicity="0..*",
            ),
        ),
    )


@pytest.fixture
def shape_record():
    """Provide the raw shape record builder."""
    return build_shape_record


@pytest.fixture
def connection_record():
    """Provide the raw connection record builder."""
    return build_connection_record
