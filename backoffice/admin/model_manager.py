"""
Model manager.

Bridges admins and the SQLAlchemy layer: resolves the mapped class and
identity of objects, encodes identities for URLs and loads objects back
from those URL-safe identifiers.

Dependencies: sqlalchemy, backoffice.boundary.db
System role: ORM glue for admins
"""

import logging
import uuid
from typing import Any, Sequence
from urllib.parse import quote, unquote

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.interfaces import ORMOption

from backoffice.boundary.db.CRUD.base_crud import BaseCRUD
from backoffice.core.exceptions import AdminConfigurationError, ObjectNotFoundError

logger = logging.getLogger(__name__)

ID_SEPARATOR = "~"


def _encode_identifier_part(value: Any) -> str:
    # quote() never escapes "~", which is the part separator
    return quote(str(value), safe="").replace(ID_SEPARATOR, "%7E")


def get_real_class(obj: Any) -> type:
    """
    Return the class an object is administered as.

    For SQLAlchemy instances this is the mapped class, which can differ
    from ``type(obj)`` for polymorphic or instrumented subclasses.

    Args:
        obj: Any domain object

    Returns:
        type: Mapped class, or ``type(obj)`` for unmapped objects
    """
    try:
        return sa_inspect(obj).mapper.class_
    except NoInspectionAvailable:
        return type(obj)


class ModelManager:
    """Identity and lookup helpers for one model class."""

    def __init__(self, model_class: type) -> None:
        """
        Initialize manager for a model class.

        Args:
            model_class: Mapped SQLAlchemy class, or any plain class when
                the admin is only used for rendering
        """
        self.model_class = model_class
        self._crud: BaseCRUD | None = None

    @property
    def is_mapped(self) -> bool:
        """Whether the model class is mapped by SQLAlchemy."""
        try:
            sa_inspect(self.model_class)
        except NoInspectionAvailable:
            return False
        return True

    @property
    def crud(self) -> BaseCRUD:
        """Get CRUD helper for the model class."""
        if self._crud is None:
            if not self.is_mapped:
                raise AdminConfigurationError(
                    f"{self.model_class.__name__} is not a mapped model and cannot be loaded",
                    details={"model_class": self.model_class.__name__},
                )
            self._crud = BaseCRUD(self.model_class)
        return self._crud

    def get_new_instance(self) -> Any:
        """Create an empty instance of the model class."""
        return self.model_class()

    def get_identifier_values(self, obj: Any) -> list[Any]:
        """
        Return the identifier values of an object.

        Persistent instances use their identity key, transient mapped
        instances their current primary key attributes. Unmapped objects
        fall back to an ``id`` attribute.

        Args:
            obj: Domain object

        Returns:
            list[Any]: Identifier values, empty when none can be found
        """
        try:
            state = sa_inspect(obj)
        except NoInspectionAvailable:
            identifier = getattr(obj, "id", None)
            return [] if identifier is None else [identifier]

        if state.identity is not None:
            return list(state.identity)
        return list(state.mapper.primary_key_from_instance(obj))

    def get_urlsafe_identifier(self, obj: Any) -> str | None:
        """
        Encode the identifier of an object for use in a URL.

        Each value is percent-encoded, then composite keys are joined with ``~``.

        Args:
            obj: Domain object

        Returns:
            str | None: Encoded identifier, None when the object has no
                complete identifier yet
        """
        values = self.get_identifier_values(obj)
        if not values or any(value is None for value in values):
            return None
        return ID_SEPARATOR.join(_encode_identifier_part(value) for value in values)

    def parse_urlsafe_identifier(self, urlsafe_id: str) -> Any:
        """
        Decode a URL-safe identifier into a primary key identity.

        Each part is converted to the Python type of its primary key column.

        Args:
            urlsafe_id: Identifier produced by get_urlsafe_identifier

        Returns:
            Any: Scalar identity, or a tuple for composite keys

        Raises:
            ObjectNotFoundError: If the identifier does not fit the primary key
        """
        columns = sa_inspect(self.model_class).primary_key
        parts = [unquote(part) for part in urlsafe_id.split(ID_SEPARATOR)]
        if len(parts) != len(columns):
            raise ObjectNotFoundError(
                urlsafe_id,
                details={"reason": f"expected {len(columns)} identifier parts, got {len(parts)}"},
            )

        identity = []
        for column, part in zip(columns, parts):
            try:
                python_type = column.type.python_type
            except NotImplementedError:
                python_type = str
            try:
                if python_type is uuid.UUID:
                    identity.append(uuid.UUID(part))
                elif python_type is int:
                    identity.append(int(part))
                else:
                    identity.append(part)
            except ValueError as e:
                raise ObjectNotFoundError(
                    urlsafe_id,
                    details={"reason": f"invalid value for {column.name}"},
                ) from e

        return identity[0] if len(identity) == 1 else tuple(identity)

    def get_loader_options(self, load_paths: Sequence[Sequence[str]] | None) -> list[ORMOption]:
        """
        Build eager-loading options for relationship paths.

        Each path is a list of attribute names walked from the model class,
        such as ``["author", "address"]``. The walk stops at the first name
        that is not a relationship, so plain column names at the end of a
        path are ignored.

        Args:
            load_paths: Attribute name paths read while rendering

        Returns:
            list[ORMOption]: Chained ``selectinload`` options, one per path
        """
        if not load_paths or not self.is_mapped:
            return []

        options: dict[tuple[str, ...], ORMOption] = {}
        for path in load_paths:
            mapper = sa_inspect(self.model_class)
            option = None
            walked: list[str] = []
            for name in path:
                if name not in mapper.relationships:
                    break
                relationship = mapper.relationships[name]
                attribute = getattr(mapper.class_, name)
                option = selectinload(attribute) if option is None else option.selectinload(attribute)
                walked.append(name)
                mapper = relationship.mapper
            if option is not None:
                options.setdefault(tuple(walked), option)

        return list(options.values())

    async def find(
        self,
        session: AsyncSession,
        urlsafe_id: str,
        load_paths: Sequence[Sequence[str]] | None = None,
    ) -> Any:
        """
        Load one object by its URL-safe identifier.

        Args:
            session: Async database session
            urlsafe_id: Encoded identifier
            load_paths: Relationship paths to load eagerly

        Returns:
            Any: The loaded object

        Raises:
            ObjectNotFoundError: If no object matches
        """
        identity = self.parse_urlsafe_identifier(urlsafe_id)
        obj = await self.crud.get_by_identity(
            session,
            identity,
            options=self.get_loader_options(load_paths),
        )
        if obj is None:
            raise ObjectNotFoundError(urlsafe_id)
        return obj

    async def find_all(
        self,
        session: AsyncSession,
        limit: int | None = None,
        offset: int = 0,
        load_paths: Sequence[Sequence[str]] | None = None,
    ) -> Sequence[Any]:
        """Load a page of objects, eagerly loading ``load_paths``."""
        objects = await self.crud.get_all(
            session,
            limit=limit,
            offset=offset,
            options=self.get_loader_options(load_paths),
        )
        logger.debug(
            "Loaded objects",
            extra={"model_class": self.model_class.__name__, "count": len(objects)},
        )
        return objects
