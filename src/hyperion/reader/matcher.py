"""
Field matcher validating the field names of a document node.

A schema is an immutable value: the set of fields that must occur exactly
once and the set of fields that may occur. Registering a field returns a
new schema, so the schemas of the readers can be built once and shared.
The schema is closed: any field that is neither required nor allowed
makes the node invalid.

Example:
    >>> schema = FieldSchema().require_exactly_once("code").allow("title")
    >>> schema.matches(["code", "title"])
    True
    >>> schema.matches(["code", "titel"])
    False
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import FrozenSet, List

from hyperion.core.exceptions.custom_exceptions import DocumentFormatError


@dataclass(frozen=True)
class FieldSchema:
    """
    Declared contract of the fields of one node kind.

    Attributes:
        required (FrozenSet[str]): Fields that must occur exactly once
        allowed (FrozenSet[str]): Optional fields
    """

    required: FrozenSet[str] = field(default_factory=frozenset)
    allowed: FrozenSet[str] = field(default_factory=frozenset)

    def _check_new(self, name: str) -> None:
        if not name:
            raise ValueError("field name must not be empty")
        if name in self.required or name in self.allowed:
            raise ValueError(f"field '{name}' is already registered")

    def require_exactly_once(self, name: str) -> "FieldSchema":
        """
        Register a mandatory field.

        Raises:
            ValueError: If the field is already registered
        """
        self._check_new(name)
        return FieldSchema(self.required | {name}, self.allowed)

    def allow(self, name: str) -> "FieldSchema":
        """
        Register an optional field.

        Raises:
            ValueError: If the field is already registered
        """
        self._check_new(name)
        return FieldSchema(self.required, self.allowed | {name})

    def unknown_fields(self, names: List[str]) -> List[str]:
        known = self.required | self.allowed
        return sorted({name for name in names if name not in known})

    def missing_fields(self, names: List[str]) -> List[str]:
        counts = Counter(names)
        return sorted(name for name in self.required if counts[name] != 1)

    def matches(self, names: List[str]) -> bool:
        """
        Check the field names present on a node.

        Args:
            names: Field names of the node (sorted by the caller)

        Returns:
            bool: True when every required field occurs exactly once and
                every field is required or allowed
        """
        counts = Counter(names)
        if any(counts[name] != 1 for name in self.required):
            return False
        return all(
            (name in self.required) or (name in self.allowed and count == 1)
            for name, count in counts.items()
        )

    def validate(self, names: List[str], node_kind: str) -> None:
        """
        Raise a DocumentFormatError when the names do not match.

        Args:
            names: Field names of the node
            node_kind: Human-readable node kind used in the message

        Raises:
            DocumentFormatError: With the unknown and the missing fields
        """
        if self.matches(names):
            return
        unknown = self.unknown_fields(names)
        missing = self.missing_fields(names)
        raise DocumentFormatError(
            f"The {node_kind} fields are not correct!",
            error_code="FIELDS_MISMATCH",
            details={
                "node": node_kind,
                "fields": sorted(names),
                "unknown": unknown,
                "missing": missing,
            },
        )
