"""Pydantic models for DevStash."""

from .envelope import SnippetEnvelope, build_envelope

__all__ = [
    "SnippetEnvelope",
    "build_envelope",
]
