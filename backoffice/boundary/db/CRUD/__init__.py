"""Generic CRUD helpers."""

from backoffice.boundary.db.CRUD.base_crud import BaseCRUD

__all__ = ["BaseCRUD"]
