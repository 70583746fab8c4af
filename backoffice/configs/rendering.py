"""
Rendering configuration settings.

Controls how field cells are rendered: debug comment wrapping, extra
template directories and the field type to inline-edit widget mapping.

Dependencies: pydantic, pydantic_settings
System role: Template rendering configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from backoffice.configs.base import BaseSettings

DEFAULT_XEDITABLE_TYPE_MAPPING: dict[str, str] = {
    "choice": "select",
    "boolean": "select",
    "text": "text",
    "textarea": "textarea",
    "html": "textarea",
    "email": "email",
    "string": "text",
    "smallint": "text",
    "bigint": "text",
    "integer": "number",
    "decimal": "number",
    "currency": "number",
    "percent": "number",
    "url": "url",
    "date": "date",
}


class RenderingSettings(BaseSettings):
    """Template rendering configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RENDERING_",
        case_sensitive=False,
        extra="ignore",
    )

    debug: bool = Field(
        default=False,
        description="Wrap rendered fields in HTML debug comments",
    )
    template_dirs: list[str] = Field(
        default_factory=list,
        description="Extra template directories searched before the bundled ones",
    )
    base_show_template: str = Field(
        default="CRUD/base_show_field.html",
        description="Template used for show cells when a field sets none",
    )
    xeditable_type_mapping: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_XEDITABLE_TYPE_MAPPING),
        description="Field type to x-editable widget type",
    )
