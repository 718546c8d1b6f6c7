"""Unit tests for markdown_parser.frontmatter_handler module."""

from src.markdown_parser.frontmatter_handler import FrontmatterHandler


class TestFrontmatterHandlerStrip:
    """Test cases for FrontmatterHandler.strip() method."""

    def test_strip_valid_frontmatter(self):
        """Metadata is parsed and the body follows the closing delimiter."""
        content = "---\ntitle: Test\ntags:\n  - a\n---\n# Heading\n\nBody.\n"

        metadata, body = FrontmatterHandler.strip(content)

        assert metadata == {"title": "Test", "tags": ["a"]}
        assert body == "# Heading\n\nBody.\n"

    def test_strip_without_frontmatter_returns_content_unchanged(self):
        """Documents without frontmatter are returned verbatim."""
        content = "# Just a heading\n\n---\n\nText"

        metadata, body = FrontmatterHandler.strip(content)

        assert metadata == {}
        assert body == content

    def test_strip_empty_body(self):
        """Frontmatter followed by nothing yields an empty body."""
        metadata, body = FrontmatterHandler.strip("---\ntitle: Test\n---\n")

        assert metadata == {"title": "Test"}
        assert body == ""

    def test_strip_empty_metadata_block(self):
        """An empty frontmatter block normalizes to an empty mapping."""
        metadata, body = FrontmatterHandler.strip("---\n\n---\n\nBody")

        assert metadata == {}
        assert body == "\nBody"

    def test_strip_invalid_yaml_still_removes_block(self):
        """Invalid YAML yields empty metadata but the block is still stripped."""
        content = "---\ntitle: [unclosed\n---\nBody text"

        metadata, body = FrontmatterHandler.strip(content)

        assert metadata == {}
        assert body == "Body text"

    def test_strip_non_mapping_yaml(self):
        """A YAML list is not metadata."""
        metadata, body = FrontmatterHandler.strip("---\n- a\n- b\n---\nBody")

        assert metadata == {}
        assert body == "Body"

    def test_strip_crlf_not_recognized(self):
        """CRLF line endings do not match the frontmatter pattern."""
        content = "---\r\ntitle: Test\r\n---\r\nBody"

        metadata, body = FrontmatterHandler.strip(content)

        assert metadata == {}
        assert body == content

    def test_strip_requires_frontmatter_at_start(self):
        """A delimiter block later in the document is not frontmatter."""
        content = "Intro\n---\ntitle: Test\n---\nBody"

        metadata, body = FrontmatterHandler.strip(content)

        assert metadata == {}
        assert body == content
