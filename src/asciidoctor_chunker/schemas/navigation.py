"""Page order model used for prev/next links."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class NavigationTable(BaseModel):
    """Page basenames in emission order with a reverse lookup."""

    model_config = ConfigDict(frozen=True)

    pages: list[str] = Field(default_factory=list)
    _numbers: dict[str, int] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: object) -> None:
        self._numbers = {basename: number for number, basename in enumerate(self.pages)}

    def page_number(self, basename: str) -> int | None:
        return self._numbers.get(basename)

    def neighbours(self, basename: str) -> tuple[str | None, str | None]:
        """Return the (previous, next) basenames, ``None`` past either end."""
        number = self.page_number(basename)
        if number is None:
            return None, None
        prev = self.pages[number - 1] if number > 0 else None
        next_ = self.pages[number + 1] if number < len(self.pages) - 1 else None
        return prev, next_
