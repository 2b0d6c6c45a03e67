"""
Field extraction rules for inconsistent generator payloads.

Different generator versions put the same logical value in different places
(flat, or nested one level under ``data``). Each logical field is described by
an ordered list of key paths; the first path holding a present value wins.

Dependencies: None
System role: Tolerant field lookup used by the sanitization task
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

_MISSING = object()


def _is_present(value: Any, skip_empty: bool) -> bool:
    if value is None or value == "":
        return False
    if skip_empty and isinstance(value, (list, tuple, dict)) and not value:
        return False
    return True


def lookup(source: Any, path: str) -> Any:
    """
    Follow a dotted key path through nested mappings.

    Args:
        source: Root mapping
        path: Dotted path such as "data.label"

    Returns:
        Any: The value found, or a private sentinel when any step is missing
    """
    current = source
    for key in path.split("."):
        if not isinstance(current, Mapping) or key not in current:
            return _MISSING
        current = current[key]
    return current


@dataclass(frozen=True)
class FieldRule:
    """
    Ordered lookup rule for one logical field.

    Attributes:
        name: Logical field name, used in warnings
        paths: Key paths tried in order against the primary source
        fallback_paths: Key paths tried afterwards against the fallback source
        skip_empty: Treat empty lists/dicts as absent
    """

    name: str
    paths: tuple[str, ...]
    fallback_paths: tuple[str, ...] = field(default=())
    skip_empty: bool = False

    def extract(self, source: Any, fallback: Any = None, default: Any = None) -> Any:
        """
        Return the first present value, or ``default`` when none is.

        Args:
            source: Primary mapping (usually the element payload)
            fallback: Secondary mapping (usually the enclosing record)
            default: Value returned when no path matches
        """
        for path in self.paths:
            value = lookup(source, path)
            if value is not _MISSING and _is_present(value, self.skip_empty):
                return value
        if fallback is not None:
            for path in self.fallback_paths:
                value = lookup(fallback, path)
                if value is not _MISSING and _is_present(value, self.skip_empty):
                    return value
        return default

    def is_declared(self, source: Any) -> bool:
        """Whether any path holds a non-null value in ``source``, empty or not."""
        return any(lookup(source, path) not in (_MISSING, None) for path in self.paths)


# Proposal envelope
ELEMENT_LIST = FieldRule("elements", ("elements", "elements_generated"), skip_empty=True)

# Record level
RECORD_KIND = FieldRule("element_type", ("element_type", "type"))
RECORD_PAYLOAD = FieldRule("element_data", ("element_data", "data"))

# Shape payload
SHAPE_ID = FieldRule("id", ("id",), fallback_paths=("id",))
SHAPE_LABEL = FieldRule("label", ("data.label", "label", "name", "data.name"))
SHAPE_ATTRIBUTES = FieldRule("attributes", ("data.attributes", "attributes"))
SHAPE_OPERATIONS = FieldRule(
    "methods", ("data.methods", "methods", "data.operations", "operations")
)
SHAPE_POSITION = FieldRule("position", ("position", "data.position"))
SHAPE_KIND = FieldRule(
    "nodeType", ("data.nodeType", "nodeType", "data.classType", "classType")
)
SHAPE_ABSTRACT = FieldRule("isAbstract", ("data.isAbstract", "isAbstract"))

# Connection payload
CONNECTION_ID = FieldRule("id", ("id",), fallback_paths=("id",))
CONNECTION_SOURCE = FieldRule("source", ("source", "from"))
CONNECTION_TARGET = FieldRule("target", ("target", "to"))
CONNECTION_KIND = FieldRule(
    "relationshipType", ("data.relationshipType", "relationshipType", "type")
)
CONNECTION_SOURCE_MULTIPLICITY = FieldRule(
    "sourceMultiplicity", ("data.sourceMultiplicity", "sourceMultiplicity")
)
CONNECTION_TARGET_MULTIPLICITY = FieldRule(
    "targetMultiplicity", ("data.targetMultiplicity", "targetMultiplicity")
)
CONNECTION_LABEL = FieldRule("label", ("data.label", "label"))

# Member level (attributes, operations, parameters)
MEMBER_TYPE = FieldRule("type", ("type", "dataType"))
OPERATION_RETURN_TYPE = FieldRule("returnType", ("returnType", "return_type", "type"))
OPERATION_PARAMETERS = FieldRule("parameters", ("parameters", "params"))
MEMBER_STATIC = FieldRule("isStatic", ("isStatic", "is_static"))
MEMBER_FINAL = FieldRule("isFinal", ("isFinal", "is_final"))
MEMBER_ABSTRACT = FieldRule("isAbstract", ("isAbstract", "is_abstract"))
MEMBER_DEFAULT = FieldRule("defaultValue", ("defaultValue", "default_value"))
