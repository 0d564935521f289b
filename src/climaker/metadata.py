"""The project metadata record driving substitution and manifest edits."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError
from .naming import NAME_PATTERN, derive_title

__all__ = ["License", "ProjectMetadata"]


class License(str, Enum):
    """Licenses offered for a generated project."""

    MIT = "MIT"
    ISC = "ISC"
    APACHE_2 = "Apache-2.0"
    GPL_3 = "GPL-3.0"

    @property
    def label(self) -> str:
        """Display form used by the interactive license choice."""

        return self.value.replace("-", " ")


class ProjectMetadata(BaseModel):
    """Immutable description of the project being generated."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., description="Directory and package identifier.")
    title: str = Field("", description="Human readable display name.")
    description: str = Field("", description="Free form project summary.")
    author: str = Field("", description="Package author.")
    license: License = Field(License.MIT, description="SPDX identifier of the project license.")
    email: str = Field("", description="Author e-mail address.")

    @model_validator(mode="before")
    @classmethod
    def _default_title(cls, data: Any) -> Any:
        if isinstance(data, dict):
            title = str(data.get("title") or "").strip()
            if not title:
                data = {**data, "title": derive_title(str(data.get("name") or ""))}
        return data

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not NAME_PATTERN.fullmatch(value):
            raise ValueError(
                f"invalid project name '{value}': use letters, digits, hyphens or underscores"
            )
        return value

    @classmethod
    def build(cls, **fields: Any) -> "ProjectMetadata":
        """Validate ``fields`` and raise :class:`~climaker.errors.ValidationError` on failure."""

        try:
            return cls.model_validate(fields)
        except PydanticValidationError as exc:
            messages = "; ".join(str(error["msg"]).removeprefix("Value error, ") for error in exc.errors())
            raise ValidationError(messages) from exc

    def context(self) -> Dict[str, str]:
        """Return the placeholder values exposed to ``{{fieldName}}`` templates."""

        return {
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "author": self.author,
            "license": self.license.value,
            "email": self.email,
        }
