"""
Attribute containers for the document model.

An attribute is a named value that is either a single string or an ordered
list of strings. Attributes are collected in an AttributeMap which keeps
insertion order so variable listings and rendered templates stay
deterministic.

Classes:
    Attribute: A named string or list-of-strings value
    AttributeMap: Ordered, name-unique collection of attributes

Example:
    >>> data = AttributeMap()
    >>> data.add(Attribute("version", "1.2.3"))
    >>> data.add(Attribute("targets", ["linux", "darwin"]))
    >>> data.to_dict()
    {'version': '1.2.3', 'targets': ['linux', 'darwin']}
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Union

AttributeValue = Union[str, List[str]]


@dataclass(frozen=True)
class Attribute:
    """
    A named value of the model.

    Attributes:
        name (str): Non-empty attribute name
        value (Union[str, List[str]]): Either a string or a list of strings

    Raises:
        ValueError: If the name is empty or the value has another type
    """

    name: str
    value: AttributeValue

    def __post_init__(self):
        if not self.name:
            raise ValueError("attribute name must not be empty")
        if isinstance(self.value, list):
            if not all(isinstance(item, str) for item in self.value):
                raise ValueError(
                    f"attribute '{self.name}' must be a list of strings"
                )
            # keep the frozen instance safe against outside mutation
            object.__setattr__(self, "value", list(self.value))
        elif not isinstance(self.value, str):
            raise ValueError(f"attribute '{self.name}' must be a string or a list")

    def is_list(self) -> bool:
        """Whether the attribute holds a list of strings"""
        return isinstance(self.value, list)


class AttributeMap:
    """
    Ordered collection of attributes with unique names.

    Adding an attribute whose name already exists replaces the stored value
    while keeping its original position.
    """

    def __init__(self) -> None:
        self._attributes: Dict[str, Attribute] = {}

    def add(self, attribute: Attribute) -> None:
        self._attributes[attribute.name] = attribute

    def add_all(self, other: "AttributeMap") -> None:
        for attribute in other:
            self.add(attribute)

    def get(self, name: str) -> Optional[Attribute]:
        return self._attributes.get(name)

    def names(self) -> List[str]:
        return list(self._attributes)

    def to_dict(self) -> Dict[str, AttributeValue]:
        """Plain mapping of names to values (lists are copied)"""
        return {
            name: list(attribute.value) if attribute.is_list() else attribute.value
            for name, attribute in self._attributes.items()
        }

    def __contains__(self, name: object) -> bool:
        return name in self._attributes

    def __iter__(self) -> Iterator[Attribute]:
        return iter(list(self._attributes.values()))

    def __len__(self) -> int:
        return len(self._attributes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttributeMap):
            return NotImplemented
        return list(self._attributes.items()) == list(other._attributes.items())

    def __repr__(self) -> str:
        return f"AttributeMap({self.to_dict()!r})"
