"""
Base class of the document node readers.

Every reader validates one node of the generic document tree (mappings,
lists and scalars as produced by the YAML or JSON parser) and adds the
typed object it builds to the owner it was constructed with. Readers never
run tasks.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from hyperion.core.exceptions.custom_exceptions import DocumentFormatError
from hyperion.core.logging.logger import get_logger


class NodeReader(ABC):
    """
    Abstract base class for all node readers.

    Subclasses implement read() and use the helpers below to check the
    shape and the value types of a node.
    """

    node_kind: str = "node"

    def __init__(self):
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def read(self, node: Any) -> None:
        """
        Validate the node and add the resulting object to the owner.

        Raises:
            DocumentFormatError: If the node is not valid
        """
        pass

    def require_mapping(self, node: Any) -> Dict[str, Any]:
        """
        Check that the node is a mapping with text keys.

        YAML reads unquoted keys such as ``on``, ``no`` or ``2`` as booleans
        and numbers, which are never valid field names.
        """
        if not isinstance(node, dict):
            raise DocumentFormatError(
                f"The {self.node_kind} must be a mapping!",
                error_code="INVALID_NODE_TYPE",
                details={"node": self.node_kind, "found": type(node).__name__},
            )
        invalid = [key for key in node if not isinstance(key, str)]
        if invalid:
            raise DocumentFormatError(
                f"The {self.node_kind} field names must be strings!",
                error_code="INVALID_FIELD_NAME",
                details={"node": self.node_kind, "fields": [repr(k) for k in invalid]},
            )
        return node

    def _type_error(self, field_name: str, expected: str, value: Any):
        return DocumentFormatError(
            f"The field '{field_name}' of the {self.node_kind} must be {expected}!",
            error_code="INVALID_FIELD_TYPE",
            details={"field": field_name, "found": type(value).__name__},
        )

    def require_list(self, value: Any, field_name: str) -> List[Any]:
        if not isinstance(value, list):
            raise self._type_error(field_name, "a list", value)
        return value

    def require_text(self, value: Any, field_name: str) -> str:
        """
        Convert a scalar field value to text.

        Numbers are accepted and converted since YAML reads unquoted
        versions such as ``3.12`` as floats. Booleans, mappings and lists
        are rejected.
        """
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        raise self._type_error(field_name, "a string", value)

    def require_bool(self, value: Any, field_name: str) -> bool:
        if not isinstance(value, bool):
            raise self._type_error(field_name, "a boolean", value)
        return value

    def require_int(self, value: Any, field_name: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise self._type_error(field_name, "an integer", value)
        return value
