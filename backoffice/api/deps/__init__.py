"""FastAPI dependencies."""

from backoffice.api.deps.dependencies import (
    get_admin_extension,
    get_pool,
    get_settings_dependency,
    get_template_cache,
    get_templates,
)

__all__ = [
    "get_admin_extension",
    "get_pool",
    "get_settings_dependency",
    "get_template_cache",
    "get_templates",
]
