"""
Admin pool.

Registry of admins, looked up by code for routing and by model class
when a template only has an object in hand.

Dependencies: backoffice.admin
System role: Admin registry shared by the router and the template extension
"""

import logging

from backoffice.admin.admin import Admin
from backoffice.admin.property_access import PropertyAccessor
from backoffice.core.exceptions import AdminConfigurationError, AdminNotFoundError

logger = logging.getLogger(__name__)


class Pool:
    """Registry of admins by code and by model class."""

    def __init__(self, property_accessor: PropertyAccessor | None = None) -> None:
        self._admins: dict[str, Admin] = {}
        self._codes_by_class: dict[type, list[str]] = {}
        self._property_accessor = property_accessor or PropertyAccessor()

    def add_admin(self, admin: Admin) -> None:
        """
        Register an admin.

        Raises:
            AdminConfigurationError: If the code is already registered
        """
        if admin.code in self._admins:
            raise AdminConfigurationError(
                f"An admin with code {admin.code!r} is already registered",
                admin_code=admin.code,
            )
        self._admins[admin.code] = admin
        self._codes_by_class.setdefault(admin.model_class, []).append(admin.code)
        logger.debug(
            "Admin registered",
            extra={"admin_code": admin.code, "model_class": admin.model_class.__name__},
        )

    def get_admins(self) -> list[Admin]:
        return list(self._admins.values())

    def has_admin_by_code(self, code: str) -> bool:
        return code in self._admins

    def get_admin_by_code(self, code: str) -> Admin:
        """
        Return the admin registered under ``code``.

        Raises:
            AdminNotFoundError: If no admin has that code
        """
        try:
            return self._admins[code]
        except KeyError:
            raise AdminNotFoundError(code) from None

    def has_admin_by_class(self, model_class: type) -> bool:
        return self._find_codes(model_class) is not None

    def get_admin_by_class(self, model_class: type) -> Admin:
        """
        Return the single admin administering ``model_class``.

        Base classes are searched along the MRO when the class itself has
        no admin.

        Raises:
            AdminNotFoundError: If no admin covers the class
            AdminConfigurationError: If several admins cover it
        """
        codes = self._find_codes(model_class)
        if codes is None:
            raise AdminNotFoundError(model_class.__name__)
        if len(codes) > 1:
            raise AdminConfigurationError(
                f"Unable to find a valid admin for the class {model_class.__name__}, "
                f"there are too many registered: {', '.join(codes)}",
                details={"model_class": model_class.__name__, "codes": codes},
            )
        return self._admins[codes[0]]

    def get_property_accessor(self) -> PropertyAccessor:
        return self._property_accessor

    def _find_codes(self, model_class: type) -> list[str] | None:
        for klass in model_class.__mro__:
            if klass in self._codes_by_class:
                return self._codes_by_class[klass]
        return None
