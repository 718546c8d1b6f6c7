"""Inline markdown segmentation.

Splits a line (or joined lines) of markdown into a flat list of spans.
Patterns are tried in priority order; at each step the earliest match in the
remaining text wins and ties go to the higher-priority pattern. Matched
content is opaque: nested markup inside a match is not re-scanned.
"""

import os
import re
from typing import Callable, List, Match, Pattern, Tuple
from urllib.parse import unquote

from .models import Annotations, EquationSpan, Span, TextSpan, WikiLinkSpan

SUPERSCRIPTS = ['⁰', '¹', '²', '³', '⁴', '⁵', '⁶', '⁷', '⁸', '⁹']

FOOTNOTE_REF_PATTERN = re.compile(r'\[\^(\d+)\]')
EXTERNAL_URL_PATTERN = re.compile(r'^https?://', re.IGNORECASE)


def is_external_url(url: str) -> bool:
    """Return True for http:// and https:// URLs."""
    return bool(EXTERNAL_URL_PATTERN.match(url))


def superscript_digits(text: str) -> str:
    """Replace every ASCII digit in text with its superscript glyph."""
    return ''.join(SUPERSCRIPTS[int(ch)] if ch in '0123456789' else ch for ch in text)


def replace_footnote_refs(text: str) -> str:
    """Turn footnote references like `[^12]` into superscript glyphs.

    Example:
        >>> replace_footnote_refs("claim[^1]")
        'claim¹'
    """
    return FOOTNOTE_REF_PATTERN.sub(lambda m: superscript_digits(m.group(1)), text)


def resolve_image_path(markdown_file_path: str, image_ref: str) -> str:
    """Resolve a local image reference against the document's directory.

    The reference is percent-decoded first so `my%20image.png` finds
    `my image.png` on disk.
    """
    base_dir = os.path.dirname(os.path.abspath(markdown_file_path))
    return os.path.normpath(os.path.join(base_dir, unquote(image_ref)))


def to_styled_internal_text(text: str) -> TextSpan:
    """Fallback rendering for a wiki-link whose target has no page yet."""
    return TextSpan(text=text, annotations=Annotations(bold=True, color="blue"))


def _styled(**flags) -> Callable[[Match], Span]:
    def build(match: Match) -> Span:
        return TextSpan(text=match.group(1), annotations=Annotations(**flags))
    return build


def _equation(match: Match) -> Span:
    return EquationSpan(text=match.group(1))


def _wiki_link(match: Match) -> Span:
    target = match.group(1)
    display = match.group(2) or target
    return WikiLinkSpan(target=target, display=display)


def _markdown_link(match: Match) -> Span:
    label, url = match.group(1), match.group(2)
    if is_external_url(url):
        return TextSpan(text=label, link=url)
    return WikiLinkSpan(target=url, display=label)


# Priority order matters: earlier entries win when two patterns start at
# the same offset (e.g. bold-italic before bold before italic).
INLINE_PATTERNS: List[Tuple[Pattern, Callable[[Match], Span]]] = [
    (re.compile(r'\$([^$]+)\$'), _equation),
    (re.compile(r'\[\[([^\]|]+)(?:\|([^\]]+))?\]\]'), _wiki_link),
    (re.compile(r'\[([^\]]+)\]\(([^)]+)\)'), _markdown_link),
    (re.compile(r'==([^=]+)=='), _styled(color="yellow_background")),
    (re.compile(r'\*\*\*([^*]+)\*\*\*'), _styled(bold=True, italic=True)),
    (re.compile(r'___([^_]+)___'), _styled(bold=True, italic=True)),
    (re.compile(r'\*\*([^*]+)\*\*'), _styled(bold=True)),
    (re.compile(r'__([^_]+)__'), _styled(bold=True)),
    (re.compile(r'`([^`]+)`'), _styled(code=True)),
    (re.compile(r'~~([^~]+)~~'), _styled(strikethrough=True)),
    (re.compile(r'\*([^*]+)\*'), _styled(italic=True)),
    (re.compile(r'_([^_]+)_'), _styled(italic=True)),
]


def segment(text: str) -> List[Span]:
    """Split inline markdown into spans.

    Args:
        text: Inline markdown text

    Returns:
        Ordered list of spans covering the input; empty for empty input.

    Example:
        >>> segment("a **b**")
        [TextSpan(text='a ', ...), TextSpan(text='b', annotations=Annotations(bold=True, ...))]
    """
    spans: List[Span] = []
    position = 0

    while position < len(text):
        best_match = None
        best_builder = None
        for pattern, builder in INLINE_PATTERNS:
            match = pattern.search(text, position)
            if match and (best_match is None or match.start() < best_match.start()):
                best_match = match
                best_builder = builder

        if best_match is None:
            spans.append(TextSpan(text=text[position:]))
            break

        if best_match.start() > position:
            spans.append(TextSpan(text=text[position:best_match.start()]))
        spans.append(best_builder(best_match))
        position = best_match.end()

    return spans
