"""Footnote definition extraction.

Definitions are lines of the form `[^id]: text`. They are removed from the
body and rendered after the document content, each prefixed with the
superscript form of its label.
"""

import re
from collections import OrderedDict
from typing import List, Tuple

from .inline_parser import segment, superscript_digits
from .models import Block, Divider, Paragraph

FOOTNOTE_DEF_PATTERN = re.compile(r'^\[\^(\w+)\]:\s*(.+)$', re.MULTILINE)


def parse_footnotes(body: str) -> Tuple[str, "OrderedDict[str, str]"]:
    """Collect footnote definitions and strip them from the body.

    Args:
        body: Markdown body (frontmatter already removed)

    Returns:
        Tuple of (cleaned body, ordered mapping of footnote id to text).
        The cleaned body is trimmed of surrounding whitespace.
    """
    footnotes: "OrderedDict[str, str]" = OrderedDict()
    for match in FOOTNOTE_DEF_PATTERN.finditer(body):
        footnotes[match.group(1)] = match.group(2)

    cleaned = FOOTNOTE_DEF_PATTERN.sub('', body).strip()
    return cleaned, footnotes


def superscript(label: str) -> str:
    return superscript_digits(label)


def footnote_blocks(footnotes: "OrderedDict[str, str]") -> List[Block]:
    """Render collected footnotes as a divider followed by one paragraph each."""
    if not footnotes:
        return []

    blocks: List[Block] = [Divider()]
    for label, text in footnotes.items():
        line = f"{superscript(label)} {text}".strip()
        blocks.append(Paragraph(rich_text=segment(line)))
    return blocks
