"""Test helpers."""

from .fake_notion import DESTINATION, FakeAPIError, FakeNotionClient

__all__ = ["DESTINATION", "FakeAPIError", "FakeNotionClient"]
