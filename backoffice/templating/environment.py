"""
Template environment factory.

Builds the Jinja2 environment admin pages are rendered with: user
template directories first, bundled templates last, HTML autoescaping
and the admin extension installed.

Dependencies: jinja2, backoffice.configs
System role: Template environment assembly
"""

import logging
from typing import Any

from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from backoffice.admin.pool import Pool
from backoffice.configs.rendering import RenderingSettings
from backoffice.templating.extension import AdminExtension

logger = logging.getLogger(__name__)


class AdminEnvironment(Environment):
    """Jinja2 environment carrying the debug flag and the admin extension."""

    def __init__(self, *args: Any, debug: bool = False, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.debug = debug
        self.admin_extension: AdminExtension | None = None


def create_environment(
    pool: Pool,
    settings: RenderingSettings | None = None,
    translator: Any = None,
    loaders: list[BaseLoader] | None = None,
) -> AdminEnvironment:
    """
    Create a template environment with the admin filters installed.

    Args:
        pool: Admin registry handed to the extension
        settings: Rendering settings (loaded from the environment when omitted)
        translator: Optional translator for inline-edit choice labels
        loaders: Extra loaders searched before everything else

    Returns:
        AdminEnvironment: Ready to render admin templates
    """
    settings = settings or RenderingSettings()

    loader_chain: list[BaseLoader] = list(loaders or [])
    loader_chain.extend(FileSystemLoader(path) for path in settings.template_dirs)
    loader_chain.append(PackageLoader("backoffice.templating", "templates"))

    environment = AdminEnvironment(
        loader=ChoiceLoader(loader_chain),
        autoescape=select_autoescape(["html", "xml"]),
        debug=settings.debug,
    )

    extension = AdminExtension(
        pool,
        translator=translator,
        base_show_template=settings.base_show_template,
    )
    extension.set_xeditable_type_mapping(settings.xeditable_type_mapping)
    extension.install(environment)
    environment.admin_extension = extension

    logger.info(
        "Template environment created",
        extra={"debug": settings.debug, "template_dirs": len(settings.template_dirs)},
    )
    return environment
