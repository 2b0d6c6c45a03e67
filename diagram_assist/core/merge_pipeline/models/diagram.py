"""
Diagram domain models for the merge pipeline.

Shapes (class-diagram nodes), connections (edges) and the diagram state that
the editor owns. Every model is frozen: the pipeline builds new values and
never mutates the caller's state.

Dependencies: pydantic
System role: Data structures shared by every pipeline stage
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

UNNAMED_LABEL = "Unnamed Class"

_MODEL_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class Visibility(str, Enum):
    """Member visibility marker."""

    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"


class ShapeKind(str, Enum):
    """Discriminator naming what a shape represents."""

    CLASS = "class"
    ABSTRACT_CLASS = "abstract_class"
    INTERFACE = "interface"
    ENUM = "enum"
    RECORD = "record"


class RelationshipKind(str, Enum):
    """Kind of relationship a connection expresses."""

    ASSOCIATION = "association"
    AGGREGATION = "aggregation"
    COMPOSITION = "composition"
    INHERITANCE = "inheritance"
    REALIZATION = "realization"
    DEPENDENCY = "dependency"
    GENERALIZATION = "generalization"


class Position(BaseModel):
    """2-D canvas position. The origin means "no real position given"."""

    model_config = _MODEL_CONFIG

    x: float = Field(default=0, allow_inf_nan=False)
    y: float = Field(default=0, allow_inf_nan=False)

    @property
    def is_origin(self) -> bool:
        return self.x == 0 and self.y == 0


class Attribute(BaseModel):
    """Named attribute of a shape."""

    model_config = _MODEL_CONFIG

    id: str
    name: str = Field(min_length=1)
    type: str = "String"
    visibility: Visibility = Visibility.PRIVATE
    is_static: bool = False
    is_final: bool = False
    default_value: str | None = None


class Parameter(BaseModel):
    """Operation parameter."""

    model_config = _MODEL_CONFIG

    name: str = Field(min_length=1)
    type: str = "Object"
    default_value: str | None = None


class Operation(BaseModel):
    """Named operation (method) of a shape."""

    model_config = _MODEL_CONFIG

    id: str
    name: str = Field(min_length=1)
    return_type: str = "void"
    visibility: Visibility = Visibility.PUBLIC
    parameters: tuple[Parameter, ...] = ()
    is_static: bool = False
    is_abstract: bool = False


class Shape(BaseModel):
    """
    A diagram node.

    A shape always carries a real label: empty, blank and placeholder labels
    fail validation, so such a shape can never be constructed.
    """

    model_config = _MODEL_CONFIG

    id: str = Field(min_length=1)
    kind: ShapeKind = ShapeKind.CLASS
    label: str
    position: Position = Field(default_factory=Position)
    attributes: tuple[Attribute, ...] = ()
    operations: tuple[Operation, ...] = ()
    is_abstract: bool = False

    @field_validator("label")
    @classmethod
    def _label_is_real(cls, value: str) -> str:
        if not value.strip() or value.strip() == UNNAMED_LABEL:
            raise ValueError(f"Invalid shape label: {value!r}")
        return value

    @property
    def signature(self) -> str:
        """Content key: normalised label plus sorted attribute names."""
        names = ",".join(sorted(attribute.name for attribute in self.attributes))
        return f"{self.label.strip().lower()}:{names}"


class Connection(BaseModel):
    """A diagram edge between two shapes."""

    model_config = _MODEL_CONFIG

    id: str = Field(min_length=1)
    source: str = Field(min_length=1)
    target: str = Field(min_length=1)
    kind: RelationshipKind = RelationshipKind.ASSOCIATION
    source_multiplicity: str = "1"
    target_multiplicity: str = "1"
    label: str = ""

    @property
    def key(self) -> tuple[str, str, str]:
        """Duplicate-detection key: endpoints plus relationship kind."""
        return (self.source, self.target, self.kind.value)


class DiagramState(BaseModel):
    """Ordered shapes and connections held by one editor session."""

    model_config = _MODEL_CONFIG

    shapes: tuple[Shape, ...] = ()
    connections: tuple[Connection, ...] = ()

    @classmethod
    def empty(cls) -> "DiagramState":
        return cls()

    def shape_ids(self) -> set[str]:
        return {shape.id for shape in self.shapes}

    def connection_ids(self) -> set[str]:
        return {connection.id for connection in self.connections}
