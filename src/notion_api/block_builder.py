"""Conversion of parsed markdown blocks into Notion block objects.

The builder is the only place that knows Notion's JSON block shapes. It
uploads local images on the way and turns wiki-links into page mentions
when the target document already has a page.
"""

import logging
import os
from typing import Any, Callable, Dict, List, Optional

from src.markdown_parser.inline_parser import to_styled_internal_text
from src.markdown_parser.models import (
    Block,
    BulletedListItem,
    Callout,
    Code,
    Divider,
    Equation,
    EquationSpan,
    ExternalImage,
    Heading,
    Image,
    NumberedListItem,
    Paragraph,
    Quote,
    Span,
    Table,
    TextSpan,
    ToDo,
    WikiLinkSpan,
)

from .upload import FileUploader

logger = logging.getLogger(__name__)

# Notion limit on the content length of a single rich text object
MAX_TEXT_LENGTH = 2000

LinkResolverFunc = Callable[[str], Optional[str]]


def chunk_text(text: str, size: int = MAX_TEXT_LENGTH) -> List[str]:
    """Split text into pieces no longer than size characters."""
    if len(text) <= size:
        return [text]
    return [text[i:i + size] for i in range(0, len(text), size)]


def missing_image_placeholder(path: str) -> Dict[str, Any]:
    """Paragraph block shown in place of a local image that does not exist."""
    return {
        "object": "block",
        "type": "paragraph",
        "paragraph": {
            "rich_text": [
                {"type": "text", "text": {"content": f"[Missing image: {path}]"}},
            ],
        },
    }


def _text_objects(span: TextSpan) -> List[Dict[str, Any]]:
    annotations = span.annotations.to_dict() if span.annotations else {}
    objects = []
    for piece in chunk_text(span.text):
        text: Dict[str, Any] = {"content": piece}
        if span.link:
            text["link"] = {"url": span.link}
        obj: Dict[str, Any] = {"type": "text", "text": text}
        if annotations:
            obj["annotations"] = dict(annotations)
        objects.append(obj)
    return objects


class NotionBlockBuilder:
    """Builds Notion block JSON from parsed blocks.

    Args:
        uploader: FileUploader for local images
        resolve_link: Callable mapping a wiki-link target to a page ID, or
            None when the target has no page yet

    Example:
        >>> builder = NotionBlockBuilder(uploader, resolve_link=lambda target: None)
        >>> builder.build(parse_markdown("# Title", "/notes/a.md"))
        [{'object': 'block', 'type': 'heading_1', ...}]
    """

    def __init__(self, uploader: FileUploader, resolve_link: Optional[LinkResolverFunc] = None):
        self.uploader = uploader
        self.resolve_link = resolve_link or (lambda target: None)

    def build(self, blocks: List[Block]) -> List[Dict[str, Any]]:
        return [self.build_block(block) for block in blocks]

    def rich_text(self, spans: List[Span]) -> List[Dict[str, Any]]:
        """Convert inline spans into Notion rich text objects."""
        result: List[Dict[str, Any]] = []
        for span in spans:
            if isinstance(span, EquationSpan):
                result.append({"type": "equation", "equation": {"expression": span.text}})
            elif isinstance(span, WikiLinkSpan):
                page_id = self.resolve_link(span.target)
                if page_id:
                    result.append({
                        "type": "mention",
                        "mention": {"type": "page", "page": {"id": page_id}},
                    })
                else:
                    result.extend(_text_objects(to_styled_internal_text(span.display)))
            else:
                result.extend(_text_objects(span))
        return result

    def build_block(self, block: Block) -> Dict[str, Any]:
        """Convert one parsed block (and its children) into a Notion block."""
        if isinstance(block, Paragraph):
            return self._wrap("paragraph", {"rich_text": self.rich_text(block.rich_text)})

        if isinstance(block, Heading):
            return self._wrap(f"heading_{block.level}", {"rich_text": self.rich_text(block.rich_text)})

        if isinstance(block, (BulletedListItem, NumberedListItem)):
            block_type = "bulleted_list_item" if isinstance(block, BulletedListItem) else "numbered_list_item"
            body: Dict[str, Any] = {"rich_text": self.rich_text(block.rich_text)}
            if block.children:
                body["children"] = self.build(block.children)
            return self._wrap(block_type, body)

        if isinstance(block, ToDo):
            body = {"rich_text": self.rich_text(block.rich_text), "checked": block.checked}
            if block.children:
                body["children"] = self.build(block.children)
            return self._wrap("to_do", body)

        if isinstance(block, Code):
            return self._wrap("code", {
                "rich_text": self.rich_text([TextSpan(text=block.text)]),
                "language": block.language,
            })

        if isinstance(block, Quote):
            return self._wrap("quote", {"rich_text": self.rich_text(block.rich_text), "color": "default"})

        if isinstance(block, Callout):
            return self._wrap("callout", {
                "rich_text": self.rich_text(block.rich_text),
                "icon": {"type": "emoji", "emoji": block.emoji},
                "color": block.color,
            })

        if isinstance(block, Equation):
            return self._wrap("equation", {"expression": block.expression})

        if isinstance(block, Divider):
            return self._wrap("divider", {})

        if isinstance(block, Image):
            return self._build_image(block)

        if isinstance(block, Table):
            return self._build_table(block)

        raise TypeError(f"Unsupported block type: {type(block).__name__}")

    def _wrap(self, block_type: str, body: Dict[str, Any]) -> Dict[str, Any]:
        return {"object": "block", "type": block_type, block_type: body}

    def _build_image(self, block: Image) -> Dict[str, Any]:
        caption = self.rich_text(block.caption)

        if isinstance(block.source, ExternalImage):
            return self._wrap("image", {
                "type": "external",
                "external": {"url": block.source.url},
                "caption": caption,
            })

        path = block.source.path
        if not os.path.isfile(path):
            logger.info(f"Missing image: {path}")
            return missing_image_placeholder(path)

        upload_id = self.uploader.upload(path)
        return self._wrap("image", {
            "type": "file_upload",
            "file_upload": {"id": upload_id},
            "caption": caption,
        })

    def _build_table(self, block: Table) -> Dict[str, Any]:
        table_width = len(block.rows[0]) if block.rows else 1
        rows = [
            {
                "object": "block",
                "type": "table_row",
                "table_row": {"cells": [self.rich_text(cell) for cell in row]},
            }
            for row in block.rows
        ]
        return self._wrap("table", {
            "table_width": max(table_width, 1),
            "has_column_header": block.has_column_header,
            "has_row_header": block.has_row_header,
            "children": rows,
        })
