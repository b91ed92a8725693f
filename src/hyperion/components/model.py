"""
Model with document-wide data available to every task.
"""

from typing import Dict

from hyperion.data.attributes import AttributeMap, AttributeValue


class Model:
    """
    Document-scoped attributes.

    The model is filled while the document is read and treated as read-only
    while tasks run. Task results never overwrite model attributes; they
    live in the task group's variables, which take precedence when task
    code is rendered.

    Attributes:
        data (AttributeMap): String or list-of-strings attributes
    """

    def __init__(self) -> None:
        self.data = AttributeMap()

    def to_dict(self) -> Dict[str, AttributeValue]:
        return self.data.to_dict()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Model):
            return NotImplemented
        return self.data == other.data

    def __repr__(self) -> str:
        return f"Model({self.data.to_dict()!r})"
