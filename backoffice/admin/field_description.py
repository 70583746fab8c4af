"""
Field description.

Metadata describing how one property of a domain object is read and
displayed by an admin: where the value lives, which template renders it
and which options drive relation labels and inline editing.

Dependencies: None
System role: Field metadata consumed by the template extension
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from backoffice.core.exceptions import NoValueException

if TYPE_CHECKING:
    from backoffice.admin.admin import Admin


@dataclass
class FieldDescription:
    """
    Describes one displayed field of an admin.

    A dotted ``name`` such as ``author.name`` is split into
    ``parent_association_mappings=["author"]`` and ``field_name="name"``
    unless those are given explicitly.

    Recognised options:
        code: method name called instead of reading ``field_name``
        parameters: positional arguments for ``code`` or for a method field
        associated_property: property path or callable giving a relation label
        associated_tostring: method name giving a relation label (deprecated)
        choices: inline-edit choices, ``{value: label}`` or a list of labels keyed by position
        catalogue: translation domain for choice labels
        editable: enable inline editing in list cells
    """

    name: str
    type: str | None = None
    field_name: str | None = None
    template: str | None = None
    label: str | None = None
    options: dict[str, Any] = field(default_factory=dict)
    admin: Admin | None = None
    association_admin: Admin | None = None
    parent_association_mappings: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.field_name is None:
            if "." in self.name and not self.parent_association_mappings:
                *parents, self.field_name = self.name.split(".")
                self.parent_association_mappings = parents
            else:
                self.field_name = self.name
        if self.label is None:
            self.label = self.name.replace(".", " ").replace("_", " ").capitalize()

    def get_option(self, name: str, default: Any = None) -> Any:
        """Return an option value, or ``default`` when unset."""
        return self.options.get(name, default)

    def set_option(self, name: str, value: Any) -> None:
        self.options[name] = value

    def has_association_admin(self) -> bool:
        return self.association_admin is not None

    def get_value(self, obj: Any) -> Any:
        """
        Read this field's value from an object.

        Walks the parent association mappings first, then reads the field.

        Args:
            obj: Domain object (or mapping)

        Returns:
            Any: The field value, possibly None

        Raises:
            NoValueException: If an attribute along the way is missing, or an
                intermediate association is None
        """
        for mapping in self.parent_association_mappings:
            obj = self._get_field_value(obj, mapping)
        return self._get_field_value(obj, self.field_name)

    def _get_field_value(self, obj: Any, field_name: str) -> Any:
        if obj is None:
            raise NoValueException(
                f"Cannot read {field_name!r} from an empty association",
                field=self.name,
            )

        parameters = self.get_option("parameters", [])
        code = self.get_option("code")
        if code:
            method = getattr(obj, code, None)
            if callable(method):
                return method(*parameters)

        if isinstance(obj, Mapping):
            if field_name in obj:
                return obj[field_name]
            raise NoValueException(
                f"Key {field_name!r} does not exist",
                field=self.name,
            )

        try:
            value = getattr(obj, field_name)
        except AttributeError as e:
            raise NoValueException(
                f"{type(obj).__name__} has no attribute {field_name!r}",
                field=self.name,
            ) from e

        if inspect.ismethod(value):
            return value(*parameters)
        return value
