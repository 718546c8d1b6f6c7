"""Unit tests for notion_api.upload module."""

from unittest.mock import Mock, patch

import pytest

from src.notion_api.errors import APIAccessError, UploadError
from src.notion_api.upload import (
    FileUploader,
    guess_content_type,
    split_into_chunks,
)


@pytest.fixture
def api():
    mock_api = Mock()
    mock_api.create_file_upload.return_value = "upload-1"
    return mock_api


class TestHelpers:
    """Test cases for content type and chunking helpers."""

    @pytest.mark.parametrize("name,expected", [
        ("a.png", "image/png"),
        ("a.JPG", "image/jpeg"),
        ("a.jpeg", "image/jpeg"),
        ("a.gif", "image/gif"),
        ("a.webp", "image/webp"),
        ("a.svg", "image/svg+xml"),
        ("a.bmp", "application/octet-stream"),
        ("noext", "application/octet-stream"),
    ])
    def test_guess_content_type(self, name, expected):
        assert guess_content_type(name) == expected

    def test_split_into_chunks(self):
        assert split_into_chunks(b"abcdefg", 3) == [b"abc", b"def", b"g"]


class TestFileUploader:
    """Test cases for FileUploader.upload()."""

    def test_small_file_single_part(self, api, tmp_path):
        image = tmp_path / "pic.png"
        image.write_bytes(b"png-bytes")

        upload_id = FileUploader(api).upload(str(image))

        assert upload_id == "upload-1"
        api.create_file_upload.assert_called_once_with("pic.png", "image/png")
        api.send_file_upload.assert_called_once_with("upload-1", ("pic.png", b"png-bytes", "image/png"))
        api.complete_file_upload.assert_not_called()

    def test_large_file_multi_part(self, api, tmp_path):
        image = tmp_path / "huge.gif"
        image.write_bytes(b"x" * 25)

        with patch('src.notion_api.upload.TWENTY_MB', 20), patch('src.notion_api.upload.TEN_MB', 10):
            upload_id = FileUploader(api).upload(str(image))

        assert upload_id == "upload-1"
        api.create_file_upload.assert_called_once_with("huge.gif", "image/gif", number_of_parts=3)
        part_numbers = sorted(c.args[2] for c in api.send_file_upload.call_args_list)
        assert part_numbers == [1, 2, 3]
        sizes = sorted(len(c.args[1][1]) for c in api.send_file_upload.call_args_list)
        assert sizes == [5, 10, 10]
        api.complete_file_upload.assert_called_once_with("upload-1")

    def test_failed_part_raises_upload_error(self, api, tmp_path):
        image = tmp_path / "huge.png"
        image.write_bytes(b"x" * 25)
        api.send_file_upload.side_effect = APIAccessError("part rejected")

        with patch('src.notion_api.upload.TWENTY_MB', 20), patch('src.notion_api.upload.TEN_MB', 10):
            with pytest.raises(UploadError):
                FileUploader(api).upload(str(image))

        api.complete_file_upload.assert_not_called()

    def test_unreadable_file(self, api, tmp_path):
        with pytest.raises(UploadError):
            FileUploader(api).upload(str(tmp_path / "missing.png"))

    def test_verbose_logs_size(self, api, tmp_path, caplog):
        image = tmp_path / "pic.png"
        image.write_bytes(b"x" * 1024)

        with caplog.at_level("INFO", logger="src.notion_api.upload"):
            FileUploader(api, verbose=True).upload(str(image))

        assert "uploading image: pic.png (0.00 MB)" in caplog.text
