"""
Admin metadata layer.

Admins, their field descriptions, the pool registering them and the
helpers used to read values and identities from domain objects.
"""

from backoffice.admin.admin import Admin
from backoffice.admin.field_description import FieldDescription
from backoffice.admin.model_manager import ModelManager, get_real_class
from backoffice.admin.pool import Pool
from backoffice.admin.property_access import PropertyAccessor

__all__ = [
    "Admin",
    "FieldDescription",
    "ModelManager",
    "Pool",
    "PropertyAccessor",
    "get_real_class",
]
