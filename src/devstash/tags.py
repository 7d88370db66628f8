"""Tag parsing for snippet submissions."""

from typing import Optional


def parse_tags(raw: Optional[str]) -> list[str]:
    """Split a comma-separated tag string into trimmed tags.

    Blank input gives an empty list. Order is kept and nothing is
    de-duplicated or dropped, so ``"a,,b"`` yields ``["a", "", "b"]``.
    """
    if raw is None or not raw.strip():
        return []
    return [tag.strip() for tag in raw.split(",")]
