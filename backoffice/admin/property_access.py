"""
Property path reader.

Reads dotted property paths such as ``author.address.city`` or
``tags[0].name`` from objects and mappings. Used to resolve the
``associated_property`` option of relation fields.

Dependencies: None
System role: Generic nested property access
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from backoffice.core.exceptions import PropertyAccessError

_PATH_TOKEN = re.compile(r"([^.\[\]]+)|\[([^\]]*)\]")


def parse_property_path(property_path: str) -> list[tuple[str, bool]]:
    """
    Split a property path into (element, is_index) pairs.

    Args:
        property_path: Path like ``a.b[0].c``

    Returns:
        list[tuple[str, bool]]: Path elements, flagged when written as ``[key]``

    Raises:
        PropertyAccessError: If the path is empty or malformed
    """
    elements: list[tuple[str, bool]] = []
    position = 0
    while position < len(property_path):
        if elements and property_path[position] == ".":
            position += 1
        match = _PATH_TOKEN.match(property_path, position)
        if match is None or match.end() == position:
            raise PropertyAccessError(
                f"Could not parse property path {property_path!r} at position {position}",
                property_path=property_path,
            )
        name, index = match.groups()
        elements.append((index, True) if index is not None else (name, False))
        position = match.end()

    if not elements:
        raise PropertyAccessError("Property path is empty", property_path=property_path)
    return elements


class PropertyAccessor:
    """Reads values along property paths."""

    def get_value(self, obj: Any, property_path: str) -> Any:
        """
        Read the value at the end of a property path.

        Args:
            obj: Object or mapping to start from
            property_path: Dotted path, ``[key]`` segments index into mappings
                and sequences

        Returns:
            Any: Value found at the end of the path

        Raises:
            PropertyAccessError: If an element along the path cannot be read
        """
        value = obj
        for element, is_index in parse_property_path(property_path):
            if value is None:
                raise PropertyAccessError(
                    f"Cannot read {element!r} from None in path {property_path!r}",
                    property_path=property_path,
                )
            value = self._read(value, element, is_index, property_path)
        return value

    def is_readable(self, obj: Any, property_path: str) -> bool:
        """Return True when the whole path can be read."""
        try:
            self.get_value(obj, property_path)
        except PropertyAccessError:
            return False
        return True

    def _read(self, value: Any, element: str, is_index: bool, property_path: str) -> Any:
        if isinstance(value, Mapping):
            if element in value:
                return value[element]
            if not is_index:
                raise PropertyAccessError(
                    f"Key {element!r} does not exist in path {property_path!r}",
                    property_path=property_path,
                )

        if is_index:
            if isinstance(value, Sequence) and not isinstance(value, str):
                try:
                    return value[int(element)]
                except (ValueError, IndexError) as e:
                    raise PropertyAccessError(
                        f"Index {element!r} is not readable in path {property_path!r}",
                        property_path=property_path,
                    ) from e
            raise PropertyAccessError(
                f"Index {element!r} is not readable in path {property_path!r}",
                property_path=property_path,
            )

        try:
            return getattr(value, element)
        except AttributeError as e:
            raise PropertyAccessError(
                f"Property {element!r} is not readable on {type(value).__name__} "
                f"in path {property_path!r}",
                property_path=property_path,
            ) from e
