"""
Readers for the ``model`` part of a document.

The model is a mapping of names to either scalars or lists of scalars:

    model:
      version: 1.2.3
      targets:
        - linux
        - darwin
"""

from typing import Any, List

from hyperion.components.model import Model
from hyperion.core.exceptions.custom_exceptions import DocumentFormatError
from hyperion.data.attributes import Attribute, AttributeMap, AttributeValue
from hyperion.execution.templating import RESERVED_NAMES
from hyperion.reader.base import NodeReader


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ValueError(type(value).__name__)


class AttributeMapReader(NodeReader):
    """Adds one attribute per field of a mapping node"""

    node_kind = "model"

    def __init__(self, attribute_map: AttributeMap):
        super().__init__()
        self.attribute_map = attribute_map

    def read(self, node: Any) -> None:
        for name, value in self.require_mapping(node).items():
            if name in RESERVED_NAMES:
                raise DocumentFormatError(
                    f"The model attribute name '{name}' is reserved!",
                    error_code="RESERVED_ATTRIBUTE_NAME",
                    details={"attribute": name, "reserved": sorted(RESERVED_NAMES)},
                )
            self.attribute_map.add(Attribute(name, self._convert(name, value)))

    def _convert(self, name: Any, value: Any) -> AttributeValue:
        try:
            if isinstance(value, list):
                items: List[str] = [_scalar_text(item) for item in value]
                return items
            return _scalar_text(value)
        except ValueError as e:
            raise DocumentFormatError(
                f"The model attribute '{name}' must be a string or a list!",
                error_code="INVALID_ATTRIBUTE",
                details={"attribute": str(name), "found": str(e)},
            ) from e


class ModelReader(NodeReader):
    """Fills the document model from the ``model`` node"""

    node_kind = "model"

    def __init__(self, model: Model):
        super().__init__()
        self.model = model

    def read(self, node: Any) -> None:
        attribute_map = AttributeMap()
        AttributeMapReader(attribute_map).read(node)
        self.model.data.add_all(attribute_map)
        self.logger.debug("Read model", attributes=attribute_map.names())
