"""
Inline-edit schemas.

Response schema describing the x-editable widget of one field.

Dependencies: pydantic
System role: Inline-edit API contracts
"""

from typing import Any

from pydantic import BaseModel, Field


class XEditableChoice(BaseModel):
    """One selectable value of an inline-edit widget."""

    value: Any = Field(description="Submitted value")
    text: Any = Field(description="Displayed label")


class XEditableFieldResponse(BaseModel):
    """Response schema for inline-edit field metadata."""

    admin_code: str
    field: str
    type: str | None = Field(default=None, description="x-editable widget type, None when the field type is unmapped")
    choices: list[XEditableChoice] = Field(default_factory=list)
