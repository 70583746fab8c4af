"""
Dependency injection container.

Factory functions for FastAPI dependencies: settings, the admin pool and
the template renderer built around it.

Dependencies: fastapi, backoffice.configs, backoffice.admin, backoffice.templating
System role: DI container for admin page rendering
"""

from functools import lru_cache

from fastapi import Depends
from fastapi.templating import Jinja2Templates

from backoffice.admin.pool import Pool
from backoffice.configs import Settings, get_settings
from backoffice.templating.environment import create_environment
from backoffice.templating.extension import AdminExtension


class TemplateCache:
    """Container for template renderers, one per admin pool."""

    def __init__(self) -> None:
        self._templates: dict[int, Jinja2Templates] = {}

    def get(self, pool: Pool, settings: Settings) -> Jinja2Templates:
        """Get cached renderer for a pool, building it on first use."""
        key = id(pool)
        if key not in self._templates:
            environment = create_environment(pool, settings.rendering)
            self._templates[key] = Jinja2Templates(env=environment)
        return self._templates[key]

    def clear(self) -> None:
        """Clear all cached renderers."""
        self._templates.clear()


# Global template cache
_template_cache = TemplateCache()


def get_template_cache() -> TemplateCache:
    """Get template cache singleton."""
    return _template_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


@lru_cache
def get_pool() -> Pool:
    """
    Get the application admin pool.

    Admins are registered on this instance at startup; tests and embedding
    applications override this dependency with their own pool.

    Returns:
        Pool: Shared admin registry
    """
    return Pool()


def get_templates(
    pool: Pool = Depends(get_pool),
    settings: Settings = Depends(get_settings_dependency),
) -> Jinja2Templates:
    """
    Get template renderer for the current pool.

    Args:
        pool: Admin pool (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        Jinja2Templates: Renderer with the admin filters installed
    """
    return get_template_cache().get(pool, settings)


def get_admin_extension(templates: Jinja2Templates = Depends(get_templates)) -> AdminExtension:
    """Get the admin extension installed on the template environment."""
    return templates.env.admin_extension
