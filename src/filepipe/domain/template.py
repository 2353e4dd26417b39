"""Command templates: parsing from argv and usage validation.

INVARIANT: A template is opaque shell text. Nothing here tokenizes or
quotes it; redirections and pipes inside it are the user's to write.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel

from filepipe.domain.errors import PipeUsageError
from filepipe.domain.placeholders import Placeholder, detect_placeholders


class CommandTemplate(BaseModel):
    """A validated command template and the placeholders it uses."""

    model_config = {"frozen": True}

    text: str
    placeholders: frozenset[Placeholder]

    @property
    def has_in(self) -> bool:
        return Placeholder.IN in self.placeholders

    @property
    def has_out(self) -> bool:
        return Placeholder.OUT in self.placeholders

    @classmethod
    def from_args(cls, args: Sequence[str]) -> CommandTemplate:
        """Join *args* with single spaces and validate the result.

        Raises:
            PipeUsageError: The joined template is empty, or contains
                neither ``%in`` nor ``%out``.
        """
        text = " ".join(args)
        if not text:
            raise PipeUsageError("No command specified")

        placeholders = detect_placeholders(text)
        if not placeholders:
            raise PipeUsageError(
                "No placeholders found. Use %in and/or %out",
                hints=(f"Placeholders: {', '.join(p.value for p in Placeholder)}",),
            )
        return cls(text=text, placeholders=placeholders)

    def require_piped_input(self, *, stdin_is_tty: bool) -> None:
        """Reject ``%in`` when stdin is an interactive terminal.

        A non-interactive stream is accepted even if it turns out empty.
        """
        if self.has_in and stdin_is_tty:
            raise PipeUsageError("%in requires piped input")
