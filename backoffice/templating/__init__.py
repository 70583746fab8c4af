"""
Template layer.

The admin Jinja2 extension, the environment factory and the bundled
CRUD templates.
"""

from backoffice.templating.environment import AdminEnvironment, create_environment
from backoffice.templating.extension import AdminExtension

__all__ = ["AdminEnvironment", "AdminExtension", "create_environment"]
