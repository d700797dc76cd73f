"""Data models for readmegen."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from readmegen.renderer import is_placeholder_name


class MessageType(Enum):
    """Message types with associated display styles."""

    ERROR = ("red", "Error")
    SUCCESS = ("green", "Success")
    INFO = ("blue", "Info")
    WARNING = ("yellow", "Warning")


class ReadmeContext(BaseModel):
    """Values substituted into a README template.

    ``crate`` and ``readme`` are required by every README. ``license`` is only
    needed when the template uses ``{{license}}`` or a license line is appended.
    Any other placeholder values go in ``extra``.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    # Names with a dedicated field; everything else belongs in extra
    RESERVED_KEYS: ClassVar[frozenset[str]] = frozenset({"crate", "readme", "license"})

    crate: str = Field(min_length=1)
    readme: str
    license: str | None = None
    extra: dict[str, str] = Field(default_factory=dict)

    @field_validator("crate", "license")
    @classmethod
    def _single_line(cls, value: str | None) -> str | None:
        if value is not None and ("\n" in value or "\r" in value):
            raise ValueError("must be a single line")
        return value

    @field_validator("extra")
    @classmethod
    def _valid_extra_names(cls, value: dict[str, str]) -> dict[str, str]:
        for name in value:
            if not is_placeholder_name(name):
                raise ValueError(f"invalid placeholder name {name!r}")
            if name in cls.RESERVED_KEYS:
                raise ValueError(f"{name!r} must be set through its own field")
        return value

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> ReadmeContext:
        """Build a context from a flat name to text mapping.

        Args:
            values: Placeholder values, e.g. from a context file and CLI assignments

        Returns:
            Validated context

        Raises:
            pydantic.ValidationError: If crate or readme is missing or any value is invalid
        """
        extra = {key: value for key, value in values.items() if key not in cls.RESERVED_KEYS}
        known = {key: value for key, value in values.items() if key in cls.RESERVED_KEYS}
        return cls.model_validate({**known, "extra": extra})

    def as_mapping(self) -> dict[str, str]:
        """Convert to the flat mapping the renderer consumes.

        Returns:
            Placeholder values; ``license`` is present only when set.
        """
        mapping = dict(self.extra)
        mapping["crate"] = self.crate
        mapping["readme"] = self.readme
        if self.license is not None:
            mapping["license"] = self.license
        return mapping
