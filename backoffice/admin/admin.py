"""
Admin definition.

An Admin groups everything the back office knows about one model class:
its code, the field descriptions shown in list and show pages, the
templates used to render them and the model manager used to load objects.

Dependencies: backoffice.admin, sqlalchemy (through ModelManager)
System role: Per-model admin configuration
"""

import logging
from typing import Any, Iterable, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.admin.field_description import FieldDescription
from backoffice.admin.model_manager import ModelManager
from backoffice.core.exceptions import FieldDescriptionNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES: dict[str, str] = {
    "base_list_field": "CRUD/base_list_field.html",
    "list": "CRUD/list.html",
    "show": "CRUD/show.html",
    "show_compare": "CRUD/show_compare.html",
}


class Admin:
    """
    Admin for one model class.

    Attributes:
        code: Unique admin code, used in URLs
        model_class: Administered class
        label: Human readable name
        model_manager: Identity and persistence helper
        translator: Optional object exposing ``trans(message, parameters, domain)``
        translation_domain: Default domain for ``trans``
        list_fields: Field descriptions rendered in list pages, in order
        show_fields: Field descriptions rendered in show pages, in order
    """

    def __init__(
        self,
        code: str,
        model_class: type,
        label: str | None = None,
        model_manager: ModelManager | None = None,
        translator: Any = None,
        translation_domain: str = "messages",
        templates: dict[str, str] | None = None,
    ) -> None:
        self.code = code
        self.model_class = model_class
        self.label = label or model_class.__name__
        self.model_manager = model_manager or ModelManager(model_class)
        self.translator = translator
        self.translation_domain = translation_domain
        self.templates = {**DEFAULT_TEMPLATES, **(templates or {})}
        self.list_fields: dict[str, FieldDescription] = {}
        self.show_fields: dict[str, FieldDescription] = {}

    def __repr__(self) -> str:
        return f"<Admin {self.code} ({self.model_class.__name__})>"

    def get_template(self, name: str) -> str | None:
        """Return the template registered under ``name``, if any."""
        return self.templates.get(name)

    def set_template(self, name: str, template: str) -> None:
        self.templates[name] = template

    def add_list_field(self, name: str, type: str | None = None, **kwargs: Any) -> FieldDescription:
        """
        Register a field shown in list pages.

        Args:
            name: Field name, dotted for association traversal
            type: Field type, drives the inline-edit widget
            **kwargs: Other FieldDescription attributes

        Returns:
            FieldDescription: The registered description
        """
        field_description = FieldDescription(name=name, type=type, admin=self, **kwargs)
        self.list_fields[name] = field_description
        return field_description

    def add_show_field(self, name: str, type: str | None = None, **kwargs: Any) -> FieldDescription:
        """Register a field shown in show pages."""
        field_description = FieldDescription(name=name, type=type, admin=self, **kwargs)
        self.show_fields[name] = field_description
        return field_description

    def get_field_description(self, name: str) -> FieldDescription:
        """
        Look up a field description, list fields first.

        Raises:
            FieldDescriptionNotFoundError: If neither list nor show has it
        """
        if name in self.list_fields:
            return self.list_fields[name]
        if name in self.show_fields:
            return self.show_fields[name]
        raise FieldDescriptionNotFoundError(name, admin_code=self.code)

    def trans(
        self,
        message: str,
        parameters: dict[str, Any] | None = None,
        domain: str | None = None,
    ) -> str:
        """Translate a message, returning it unchanged when no translator is set."""
        if self.translator is None:
            return message
        return self.translator.trans(message, parameters or {}, domain or self.translation_domain)

    def get_new_instance(self) -> Any:
        return self.model_manager.get_new_instance()

    def get_urlsafe_identifier(self, model: Any) -> str | None:
        return self.model_manager.get_urlsafe_identifier(model)

    def get_load_paths(self, field_descriptions: Iterable[FieldDescription]) -> list[list[str]]:
        """
        Return the attribute paths read when rendering the given fields.

        A path is the parent associations followed by the field name. A
        string ``associated_property`` extends it with the property path
        read on the related object.

        Args:
            field_descriptions: Fields about to be rendered

        Returns:
            list[list[str]]: Attribute name paths, from the model class
        """
        paths = []
        for field_description in field_descriptions:
            path = [*field_description.parent_association_mappings, field_description.field_name]
            associated_property = field_description.get_option("associated_property")
            if isinstance(associated_property, str):
                for segment in associated_property.split("."):
                    if not segment.isidentifier():
                        break
                    path.append(segment)
            paths.append(path)
        return paths

    async def get_object(self, session: AsyncSession, urlsafe_id: str) -> Any:
        """Load one object by URL-safe identifier, with its show fields' relationships."""
        return await self.model_manager.find(
            session,
            urlsafe_id,
            load_paths=self.get_load_paths(self.show_fields.values()),
        )

    async def get_list(
        self,
        session: AsyncSession,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[Any]:
        """Load a page of objects for the list page, with its list fields' relationships."""
        return await self.model_manager.find_all(
            session,
            limit=limit,
            offset=offset,
            load_paths=self.get_load_paths(self.list_fields.values()),
        )
