"""
Primitive value containers shared by the document model and the tasks.
"""

from .attributes import Attribute, AttributeMap, AttributeValue
from .variable import DEFAULT_VARIABLE_NAME, Variable

__all__ = [
    "Attribute",
    "AttributeMap",
    "AttributeValue",
    "Variable",
    "DEFAULT_VARIABLE_NAME",
]
