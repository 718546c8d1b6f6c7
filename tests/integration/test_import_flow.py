"""Integration tests for the full import flow.

Exercise ImportCommand end to end against FakeNotionClient: directory
pages, document pages, image uploads, re-runs, forced updates and error
exit codes.
"""

import json
import os
from unittest.mock import patch

import pytest

from src.cli.models import ExitCode
from src.sync.models import ImportOptions
from tests.fixtures.sample_markdown import PNG_BYTES, long_document
from tests.helpers.fake_notion import DESTINATION, FakeAPIError

pytestmark = pytest.mark.integration


def _types(notion, page_id):
    return [block["type"] for block in notion.tree[page_id]["children"]]


class TestFirstImport:
    """Importing a vault into an empty destination."""

    def test_builds_page_tree(self, import_command, notion, vault):
        exit_code = import_command.run([str(vault)], DESTINATION, ImportOptions())

        assert exit_code == ExitCode.SUCCESS
        assert notion.children_of(DESTINATION) == ["notes"]
        notes_id = notion.page_id_by_title("notes")
        work_id = notion.page_id_by_title("Work")
        assert notion.children_of(notes_id) == ["Work", "Plan"]
        assert notion.children_of(work_id) == ["Reference", "Tasks"]

    def test_document_content(self, import_command, notion, vault):
        import_command.run([str(vault)], DESTINATION, ImportOptions())

        assert _types(notion, notion.page_id_by_title("Plan")) == [
            "heading_1", "paragraph", "paragraph", "image",
        ]
        assert _types(notion, notion.page_id_by_title("Reference")) == [
            "callout", "quote", "table", "equation", "code", "paragraph", "divider", "paragraph",
        ]
        assert _types(notion, notion.page_id_by_title("Tasks")) == [
            "bulleted_list_item", "numbered_list_item", "numbered_list_item", "to_do", "to_do",
        ]

    def test_image_is_uploaded(self, import_command, notion, vault):
        import_command.run([str(vault)], DESTINATION, ImportOptions())

        image = notion.tree[notion.page_id_by_title("Plan")]["children"][-1]["image"]
        upload = notion.uploads[image["file_upload"]["id"]]
        assert image["type"] == "file_upload"
        assert upload["content_type"] == "image/png"
        assert upload["mode"] == "single_part"
        assert upload["parts"] == [(None, "diagram.png", len(PNG_BYTES))]

    def test_forward_wiki_link_falls_back_to_styled_text(self, import_command, notion, vault):
        import_command.run([str(vault)], DESTINATION, ImportOptions())

        link = notion.tree[notion.page_id_by_title("Plan")]["children"][2]["paragraph"]["rich_text"][-1]
        assert link == {
            "type": "text",
            "text": {"content": "Tasks"},
            "annotations": {"bold": True, "color": "blue"},
        }

    def test_state_file_written(self, import_command, notion, vault, state_path):
        import_command.run([str(vault)], DESTINATION, ImportOptions())

        with open(state_path, encoding="utf-8") as f:
            data = json.load(f)
        assert data["destinationPageId"] == DESTINATION
        assert sorted(data["files"]) == ["Plan.md", "Work/Reference.md", "Work/Tasks.md"]
        assert data["files"]["Plan.md"]["notionPageId"] == notion.page_id_by_title("Plan")
        assert sorted(data["directories"]) == [".", "Work"]


class TestReimport:
    """Re-running an import against the saved state."""

    def test_second_run_makes_no_calls(self, import_command, notion, vault, state_path):
        import_command.run([str(vault)], DESTINATION, ImportOptions())
        calls_after_first = list(notion.calls)
        with open(state_path, encoding="utf-8") as f:
            first_state = f.read()

        exit_code = import_command.run([str(vault)], DESTINATION, ImportOptions())

        assert exit_code == ExitCode.SUCCESS
        assert notion.calls == calls_after_first
        with open(state_path, encoding="utf-8") as f:
            assert f.read() == first_state

    def test_force_resolves_forward_link(self, import_command, notion, vault):
        import_command.run([str(vault)], DESTINATION, ImportOptions())
        page_count = len(notion.tree)

        import_command.run([str(vault)], DESTINATION, ImportOptions(force=True))

        assert len(notion.tree) == page_count
        link = notion.tree[notion.page_id_by_title("Plan")]["children"][2]["paragraph"]["rich_text"][-1]
        assert link == {
            "type": "mention",
            "mention": {"type": "page", "page": {"id": notion.page_id_by_title("Tasks")}},
        }

    def test_changed_document_is_replaced_in_place(self, import_command, notion, vault):
        import_command.run([str(vault)], DESTINATION, ImportOptions())
        tasks_id = notion.page_id_by_title("Tasks")

        (vault / "Work" / "Tasks.md").write_text("- only item\n", encoding="utf-8")
        import_command.run([str(vault)], DESTINATION, ImportOptions())

        assert _types(notion, tasks_id) == ["bulleted_list_item"]
        assert notion.children_of(notion.page_id_by_title("Work")) == ["Reference", "Tasks"]

    def test_long_documents_are_batched(self, import_command, notion, tmp_path):
        doc = tmp_path / "Long.md"
        doc.write_text(long_document(150), encoding="utf-8")

        import_command.run([str(doc)], DESTINATION, ImportOptions())
        page_id = notion.page_id_by_title("Long")
        assert len(notion.tree[page_id]["children"]) == 150
        assert notion.calls.count("blocks.children.append") == 1

        doc.write_text(long_document(120), encoding="utf-8")
        import_command.run([str(doc)], DESTINATION, ImportOptions())

        children = notion.tree[page_id]["children"]
        assert len(children) == 120
        assert children[-1]["paragraph"]["rich_text"][0]["text"]["content"] == "Paragraph 120"
        assert notion.calls.count("blocks.children.list") == 2
        assert notion.calls.count("blocks.delete") == 150


class TestDryRun:
    """Dry runs against the fake client."""

    def test_dry_run_touches_nothing(self, import_command, notion, vault, state_path, output):
        exit_code = import_command.run([str(vault)], DESTINATION, ImportOptions(dry_run=True, verbose=True))

        assert exit_code == ExitCode.SUCCESS
        assert notion.calls == []
        assert not os.path.exists(state_path)
        printed = [c.args[0] for c in output.print.call_args_list]
        assert "[dry-run] create root dir page: notes" in printed
        assert "[dry-run] create: Work/Tasks.md" in printed
        assert printed[-1] == "Import complete."


class TestErrors:
    """Remote failures and their exit codes."""

    def test_rate_limit_is_retried(self, import_command, notion, vault):
        notion.pending_errors.append(FakeAPIError(429, "rate_limited"))

        with patch('src.notion_api.retry_logic.time.sleep') as mock_sleep:
            exit_code = import_command.run([str(vault)], DESTINATION, ImportOptions())

        assert exit_code == ExitCode.SUCCESS
        mock_sleep.assert_called_once_with(1)
        assert notion.children_of(DESTINATION) == ["notes"]

    def test_persistent_rate_limit(self, import_command, notion, vault, output):
        notion.pending_errors.extend(FakeAPIError(429, "rate_limited") for _ in range(4))

        with patch('src.notion_api.retry_logic.time.sleep'):
            exit_code = import_command.run([str(vault)], DESTINATION, ImportOptions())

        assert exit_code == ExitCode.NETWORK_ERROR
        output.error.assert_called_once_with("Notion API failure (after 3 retries)")

    def test_rejected_token(self, import_command, notion, vault):
        notion.pending_errors.append(FakeAPIError(401, "unauthorized"))

        assert import_command.run([str(vault)], DESTINATION, ImportOptions()) == ExitCode.AUTH_ERROR

    def test_unknown_destination(self, import_command, notion, vault, output):
        exit_code = import_command.run([str(vault)], "missing", ImportOptions())

        assert exit_code == ExitCode.GENERAL_ERROR
        output.error.assert_called_once_with("Notion object missing not found")
