"""Integration tests for the markdown to Notion import.

These tests drive ImportCommand through the real scanner, parser, block
builder, sync engine and APIWrapper, with notion-client replaced by the
in-memory FakeNotionClient from tests/helpers. No network access is needed.

Run only these with:
    pytest tests/integration -m integration
"""
