"""Pydantic model for the snippet envelope sent to the webhook."""

import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_serializer

from ..errors import EmptyInputError
from ..tags import parse_tags

RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class SnippetEnvelope(BaseModel):
    """A single snippet submission.

    Serialized with camelCase field names; ``note`` is left out of the
    JSON entirely when it is not set.
    """

    id: str = Field(description="Unique submission identifier (uuid4)")
    content: str = Field(min_length=1, description="Captured text")
    user_tags: list[str] = Field(default_factory=list, alias="userTags")
    note: Optional[str] = Field(default=None, description="Optional free-text note")
    created_at: datetime = Field(alias="createdAt", description="Build timestamp (UTC)")

    model_config = {"frozen": True, "populate_by_name": True}

    @field_serializer("created_at")
    def _serialize_created_at(self, value: datetime) -> str:
        return value.astimezone(timezone.utc).strftime(RFC3339_FORMAT)

    def to_payload(self) -> dict:
        """Return the wire representation as a plain dict."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        """Return the wire representation as a JSON string."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


def build_envelope(content: str, tags: Optional[str] = None, note: Optional[str] = None) -> SnippetEnvelope:
    """Build a new envelope for ``content``.

    A fresh id and timestamp are generated on every call.

    Args:
        content: Captured text, as read from its source
        tags: Raw comma-separated tags string
        note: Optional note; empty means no note

    Returns:
        The immutable SnippetEnvelope

    Raises:
        EmptyInputError: If content is blank
    """
    if not content or not content.strip():
        raise EmptyInputError()

    return SnippetEnvelope(
        id=str(uuid.uuid4()),
        content=content,
        user_tags=parse_tags(tags),
        note=note or None,
        created_at=datetime.now(timezone.utc),
    )
