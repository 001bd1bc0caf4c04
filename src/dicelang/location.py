"""Source spans for tokens and diagnostics.

A span is a half-open range of UTF-8 byte offsets into the expression
source, used to point error messages at the offending input.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Span(BaseModel):
    """Half-open ``[start, end)`` byte range into the UTF-8 encoded source.

    Attributes:
        start: 0-indexed byte offset of the first covered byte
        end: 0-indexed byte offset one past the last covered byte
    """

    start: int
    end: int

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"

    def __len__(self) -> int:
        return self.end - self.start



def encode_source(text: str) -> bytes:
    """UTF-8 bytes that span offsets index into; lone surrogates pass through."""
    return text.encode("utf-8", "surrogatepass")
