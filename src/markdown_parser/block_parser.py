"""Line-oriented block parser for Obsidian-flavored markdown.

The parser walks the document line by line and recognizes, in order:
fenced code, block equations, callouts, blockquotes, headings, dividers,
images, tables, list items and finally paragraphs. It is deliberately
forgiving: malformed input degrades to paragraphs instead of raising.
"""

import logging
import re
from typing import List, Optional, Tuple

from .footnotes import footnote_blocks, parse_footnotes
from .inline_parser import (
    is_external_url,
    replace_footnote_refs,
    resolve_image_path,
    segment,
)
from .models import (
    Annotations,
    Block,
    BulletedListItem,
    Callout,
    Code,
    Divider,
    Equation,
    ExternalImage,
    Heading,
    Image,
    ListItem,
    LocalImage,
    NumberedListItem,
    Paragraph,
    Quote,
    Span,
    Table,
    TextSpan,
    ToDo,
)

logger = logging.getLogger(__name__)

CALLOUT_CONFIG = {
    'tip': ('💡', 'yellow_background'),
    'note': ('📝', 'gray_background'),
    'info': ('ℹ️', 'blue_background'),
    'warning': ('⚠️', 'orange_background'),
    'danger': ('🚫', 'red_background'),
    'example': ('📋', 'purple_background'),
    'quote': ('💬', 'gray_background'),
    'recommended': ('👍', 'green_background'),
    'abstract': ('📄', 'blue_background'),
    'success': ('✅', 'green_background'),
    'question': ('❓', 'yellow_background'),
    'failure': ('❌', 'red_background'),
    'bug': ('🐛', 'red_background'),
}
DEFAULT_CALLOUT = 'note'

CODE_FENCE_PATTERN = re.compile(r'^```(\w*)\s*$')
CALLOUT_PATTERN = re.compile(r'^>\s*\[!(\w+)\]\s*(.*)$')
BLOCKQUOTE_PATTERN = re.compile(r'^>\s+')
QUOTE_PREFIX_PATTERN = re.compile(r'^>\s?')
HEADING_PATTERN = re.compile(r'^(#{1,3})\s+(.+)$')
IMAGE_PATTERN = re.compile(r'^!\[([^\]]*)\]\(([^)]+)\)$')
EMBED_IMAGE_PATTERN = re.compile(r'^!\[\[([^\]]+)\]\]$')
TABLE_SEPARATOR_PATTERN = re.compile(r'^\s*\|?\s*[-:]+\s*(\|\s*[-:]+\s*)+\|?\s*$')
TASK_ITEM_PATTERN = re.compile(r'^(\s*)-\s+\[([ xX])\]\s+(.+)$')
BULLETED_ITEM_PATTERN = re.compile(r'^(\s*)[-*]\s+(.+)$')
NUMBERED_ITEM_PATTERN = re.compile(r'^(\s*)\d+\.\s+(.+)$')

DIVIDER_MARKERS = ('---', '***')


def _is_block_math_start(line: str) -> bool:
    return line.strip().startswith('$$')


def _is_divider(line: str) -> bool:
    return line.strip() in DIVIDER_MARKERS


def _is_table_row(line: str) -> bool:
    return '|' in line


def _is_table_separator(line: str) -> bool:
    return bool(TABLE_SEPARATOR_PATTERN.match(line))


def _is_list_item(line: str) -> bool:
    return bool(
        TASK_ITEM_PATTERN.match(line)
        or BULLETED_ITEM_PATTERN.match(line)
        or NUMBERED_ITEM_PATTERN.match(line)
    )


def _parse_image_line(line: str, markdown_file_path: str) -> Optional[Image]:
    """Parse a line consisting solely of an image reference.

    Args:
        line: Source line
        markdown_file_path: Path of the document, used to resolve local images

    Returns:
        Image block, or None if the trimmed line is not an image reference
    """
    trimmed = line.strip()

    match = IMAGE_PATTERN.match(trimmed)
    if match:
        alt, url = match.group(1), match.group(2)
        if is_external_url(url):
            source = ExternalImage(url=url)
        else:
            source = LocalImage(path=resolve_image_path(markdown_file_path, url))
        return Image(source=source, caption=segment(alt))

    match = EMBED_IMAGE_PATTERN.match(trimmed)
    if match:
        path = resolve_image_path(markdown_file_path, match.group(1))
        return Image(source=LocalImage(path=path), caption=[])

    return None


def _strip_quote_prefix(line: str) -> str:
    return QUOTE_PREFIX_PATTERN.sub('', line, count=1)


def _parse_code_fence(lines: List[str], index: int, language: str) -> Tuple[Code, int]:
    code_lines = []
    index += 1
    while index < len(lines) and not lines[index].strip().startswith('```'):
        code_lines.append(lines[index])
        index += 1
    # Skip the closing fence (or run past the end on an unterminated fence)
    return Code(language=language or 'plain text', text='\n'.join(code_lines)), index + 1


def _parse_block_math(lines: List[str], index: int) -> Tuple[Equation, int]:
    trimmed = lines[index].strip()
    if trimmed.startswith('$$') and trimmed.endswith('$$') and len(trimmed) > 4:
        return Equation(expression=trimmed[2:-2].strip()), index + 1

    math_lines = []
    index += 1
    while index < len(lines) and not lines[index].strip().startswith('$$'):
        math_lines.append(lines[index])
        index += 1
    return Equation(expression='\n'.join(math_lines)), index + 1


def _parse_callout(lines: List[str], index: int, match) -> Tuple[Callout, int]:
    callout_type = match.group(1).lower()
    title = (match.group(2) or '').strip()
    emoji, color = CALLOUT_CONFIG.get(callout_type, CALLOUT_CONFIG[DEFAULT_CALLOUT])

    body_lines = []
    index += 1
    while index < len(lines) and BLOCKQUOTE_PATTERN.match(lines[index]):
        body_lines.append(_strip_quote_prefix(lines[index]))
        index += 1

    rich_text: List[Span] = []
    if title:
        rich_text.append(TextSpan(text=f"{title}\n", annotations=Annotations(bold=True)))
    rich_text.extend(segment('\n'.join(body_lines)))
    return Callout(emoji=emoji, color=color, rich_text=rich_text), index


def _parse_blockquote(lines: List[str], index: int) -> Tuple[Quote, int]:
    parts = []
    while (
        index < len(lines)
        and BLOCKQUOTE_PATTERN.match(lines[index])
        and not CALLOUT_PATTERN.match(lines[index])
    ):
        parts.append(_strip_quote_prefix(lines[index]))
        index += 1
    return Quote(rich_text=segment('\n'.join(parts))), index


def _parse_table(lines: List[str], index: int) -> Tuple[Optional[Table], int]:
    """Parse a table starting at index.

    A table needs a row containing `|` immediately followed by a separator
    row. The separator is dropped; consecutive `|` lines after it are data
    rows.
    """
    if index + 1 >= len(lines):
        return None, index
    if not _is_table_row(lines[index]) or not _is_table_separator(lines[index + 1]):
        return None, index

    rows = []
    start = index
    while index < len(lines) and _is_table_row(lines[index]):
        if index == start + 1:
            index += 1
            continue
        stripped = lines[index].strip()
        if stripped.startswith('|'):
            stripped = stripped[1:]
        if stripped.endswith('|'):
            stripped = stripped[:-1]
        rows.append([segment(cell.strip()) for cell in stripped.split('|')])
        index += 1

    return Table(rows=rows, has_column_header=True, has_row_header=False), index


def _parse_list(lines: List[str], index: int) -> Tuple[List[Block], int]:
    """Parse consecutive list lines into a nested item tree.

    Nesting depth is the leading whitespace count divided by two. Each item
    attaches to the nearest open item with a smaller depth.
    """
    blocks: List[Block] = []
    stack: List[Tuple[int, ListItem]] = []

    while index < len(lines):
        line = lines[index]
        item: ListItem
        task_match = TASK_ITEM_PATTERN.match(line)
        bullet_match = None if task_match else BULLETED_ITEM_PATTERN.match(line)
        number_match = None if task_match or bullet_match else NUMBERED_ITEM_PATTERN.match(line)

        if task_match:
            indent = task_match.group(1)
            item = ToDo(
                checked=task_match.group(2).lower() == 'x',
                rich_text=segment(task_match.group(3)),
            )
        elif bullet_match:
            indent = bullet_match.group(1)
            item = BulletedListItem(rich_text=segment(bullet_match.group(2)))
        elif number_match:
            indent = number_match.group(1)
            item = NumberedListItem(rich_text=segment(number_match.group(2)))
        else:
            break

        depth = len(indent) // 2

        while stack and stack[-1][0] >= depth:
            stack.pop()

        if stack:
            stack[-1][1].children.append(item)
        else:
            blocks.append(item)

        stack.append((depth, item))
        index += 1

    return blocks, index


def _starts_other_block(lines: List[str], index: int, markdown_file_path: str) -> bool:
    """Return True if the line at index would be claimed by a non-paragraph rule."""
    line = lines[index]
    next_line = lines[index + 1] if index + 1 < len(lines) else ''
    return bool(
        HEADING_PATTERN.match(line)
        or CODE_FENCE_PATTERN.match(line)
        or _is_block_math_start(line)
        or CALLOUT_PATTERN.match(line)
        or BLOCKQUOTE_PATTERN.match(line)
        or _is_divider(line)
        or _parse_image_line(line, markdown_file_path)
        or (_is_table_row(line) and _is_table_separator(next_line))
        or _is_list_item(line)
    )


def parse_markdown_blocks(content: str, markdown_file_path: str) -> List[Block]:
    """Parse a markdown body (without frontmatter) into blocks.

    Footnote definitions are extracted first and references replaced with
    superscripts; collected footnotes are appended after a divider.

    Args:
        content: Markdown body
        markdown_file_path: Path of the source document, used to resolve
            local image references

    Returns:
        Ordered list of top-level blocks
    """
    body, footnotes = parse_footnotes(content)
    lines = replace_footnote_refs(body).split('\n')
    blocks: List[Block] = []
    i = 0

    while i < len(lines):
        line = lines[i]
        if not line.strip():
            i += 1
            continue

        fence_match = CODE_FENCE_PATTERN.match(line)
        if fence_match:
            code, i = _parse_code_fence(lines, i, fence_match.group(1))
            blocks.append(code)
            continue

        if _is_block_math_start(line):
            equation, i = _parse_block_math(lines, i)
            blocks.append(equation)
            continue

        callout_match = CALLOUT_PATTERN.match(line)
        if callout_match:
            callout, i = _parse_callout(lines, i, callout_match)
            blocks.append(callout)
            continue

        if BLOCKQUOTE_PATTERN.match(line):
            quote, i = _parse_blockquote(lines, i)
            blocks.append(quote)
            continue

        heading_match = HEADING_PATTERN.match(line)
        if heading_match:
            blocks.append(Heading(
                level=len(heading_match.group(1)),
                rich_text=segment(heading_match.group(2)),
            ))
            i += 1
            continue

        if _is_divider(line):
            blocks.append(Divider())
            i += 1
            continue

        image = _parse_image_line(line, markdown_file_path)
        if image:
            blocks.append(image)
            i += 1
            continue

        table, i = _parse_table(lines, i)
        if table:
            blocks.append(table)
            continue

        list_blocks, i = _parse_list(lines, i)
        if list_blocks:
            blocks.extend(list_blocks)
            continue

        paragraph_lines = []
        while i < len(lines) and lines[i].strip():
            if _starts_other_block(lines, i, markdown_file_path):
                break
            paragraph_lines.append(lines[i])
            i += 1

        if paragraph_lines:
            blocks.append(Paragraph(rich_text=segment('\n'.join(paragraph_lines))))
        else:
            # Line matched a rule above without being consumed by it
            logger.debug(f"Skipping unrecognized line: {line!r}")
            i += 1

    blocks.extend(footnote_blocks(footnotes))
    return blocks
