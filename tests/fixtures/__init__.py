"""Shared test fixtures: sample markdown documents."""

from .sample_markdown import (
    SAMPLE_MARKDOWN_CALLOUT,
    SAMPLE_MARKDOWN_FOOTNOTES,
    SAMPLE_MARKDOWN_FRONTMATTER,
    SAMPLE_MARKDOWN_LISTS,
    SAMPLE_MARKDOWN_MATH_AND_CODE,
    SAMPLE_MARKDOWN_TABLE,
    long_document,
)

__all__ = [
    "SAMPLE_MARKDOWN_CALLOUT",
    "SAMPLE_MARKDOWN_FOOTNOTES",
    "SAMPLE_MARKDOWN_FRONTMATTER",
    "SAMPLE_MARKDOWN_LISTS",
    "SAMPLE_MARKDOWN_MATH_AND_CODE",
    "SAMPLE_MARKDOWN_TABLE",
    "long_document",
]
