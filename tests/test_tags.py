"""Tests for tag parsing."""

import pytest

from devstash.tags import parse_tags


@pytest.mark.parametrize("raw", ["", "   ", "\t\n", None])
def test_blank_input_gives_no_tags(raw):
    """Test that blank or missing input yields an empty list, not [""]."""
    assert parse_tags(raw) == []


def test_tags_are_trimmed_and_ordered():
    """Test that tags are trimmed and keep their input order."""
    assert parse_tags("a, b ,c") == ["a", "b", "c"]


def test_adjacent_delimiters_keep_empty_tag():
    """Test that empty tokens are trimmed but not filtered out."""
    assert parse_tags("a,,b") == ["a", "", "b"]


def test_trailing_delimiter_keeps_empty_tag():
    """Test that a trailing comma produces a trailing empty tag."""
    assert parse_tags("a,") == ["a", ""]


def test_no_dedup_or_case_folding():
    """Test that duplicates and case variants are kept as given."""
    assert parse_tags("Py,py, Py") == ["Py", "py", "Py"]


def test_single_tag():
    """Test that a single padded tag is trimmed."""
    assert parse_tags("  python  ") == ["python"]
