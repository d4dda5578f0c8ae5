"""Depth policy model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DepthPolicy(BaseModel):
    """How deep each chapter is split into pages.

    Attributes:
        default: Deepest section level extracted when no override applies
            (1 = chapters only, 2 = sections, and so on).
        overrides: Level per lookup key. The key is the chapter number for a
            chapter, and the 1-based sibling position for every deeper
            section unless ``chapter_scoped`` is set.
        chapter_scoped: Resolve every section under chapter N with key N and
            stop splitting once a section reaches the resolved level.
    """

    model_config = ConfigDict(frozen=True)

    default: int = Field(default=1, ge=1)
    overrides: dict[int, int] = Field(default_factory=dict)
    chapter_scoped: bool = False

    @field_validator("overrides")
    @classmethod
    def _levels_are_positive(cls, value: dict[int, int]) -> dict[int, int]:
        for key, level in value.items():
            if level < 1:
                raise ValueError(f"depth for {key} must be >= 1, got {level}")
        return value

    def resolve(self, position: int) -> int:
        """Return the override for ``position``, or the default."""
        return self.overrides.get(position, self.default)
