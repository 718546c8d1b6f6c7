"""Pytest configuration and fixtures for integration tests.

Integration tests run the whole import (scanner, parser, builder, sync
engine and APIWrapper) against an in-memory Notion client, with the state
file in a temporary directory.
"""

from unittest.mock import MagicMock, Mock

import pytest

from src.cli.import_command import ImportCommand
from src.notion_api.api_wrapper import APIWrapper
from src.notion_api.auth import Credentials
from tests.fixtures.sample_markdown import (
    SAMPLE_MARKDOWN_CALLOUT,
    SAMPLE_MARKDOWN_FOOTNOTES,
    SAMPLE_MARKDOWN_FRONTMATTER,
    SAMPLE_MARKDOWN_LISTS,
    SAMPLE_MARKDOWN_MATH_AND_CODE,
    SAMPLE_MARKDOWN_TABLE,
    PNG_BYTES,
)
from tests.helpers.fake_notion import DESTINATION, FakeNotionClient


@pytest.fixture
def notion():
    return FakeNotionClient(roots=[DESTINATION])


@pytest.fixture
def authenticator():
    auth = Mock()
    auth.get_credentials.return_value = Credentials(api_key="secret_integration")
    return auth


@pytest.fixture
def api(notion, authenticator):
    return APIWrapper(authenticator, client=notion)


@pytest.fixture
def state_path(tmp_path):
    return str(tmp_path / ".notion-sync.json")


@pytest.fixture
def output():
    return MagicMock()


@pytest.fixture
def import_command(api, authenticator, output, state_path):
    """ImportCommand wired to the fake client."""
    return ImportCommand(
        output_handler=output,
        authenticator=authenticator,
        api_wrapper=api,
        state_path=state_path,
    )


@pytest.fixture
def vault(tmp_path):
    """Create an Obsidian vault:

    notes/
      Plan.md          frontmatter, wiki-link to Tasks, embedded image
      diagram.png
      Work/
        Reference.md   callout, table, footnote, math and code
        Tasks.md       nested lists and to-dos
    """
    root = tmp_path / "notes"
    (root / "Work").mkdir(parents=True)
    (root / "Plan.md").write_text(
        SAMPLE_MARKDOWN_FRONTMATTER + "\nSee [[Tasks]]\n\n![[diagram.png]]\n",
        encoding="utf-8",
    )
    (root / "diagram.png").write_bytes(PNG_BYTES)
    (root / "Work" / "Reference.md").write_text(
        "\n".join([
            SAMPLE_MARKDOWN_CALLOUT,
            SAMPLE_MARKDOWN_TABLE,
            SAMPLE_MARKDOWN_MATH_AND_CODE,
            SAMPLE_MARKDOWN_FOOTNOTES,
        ]),
        encoding="utf-8",
    )
    (root / "Work" / "Tasks.md").write_text(SAMPLE_MARKDOWN_LISTS, encoding="utf-8")
    return root
