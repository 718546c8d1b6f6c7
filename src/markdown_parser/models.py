"""Data models for parsed markdown documents.

This module defines the intermediate representation produced by the
markdown parser: inline spans (styled text, wiki-links, equations) and the
block variants that make up a document. All models are plain dataclasses so
they compare by value in tests and carry no Notion-specific knowledge.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass
class Annotations:
    """Text styling flags attached to a TextSpan.

    Attributes:
        bold: Bold text
        italic: Italic text
        strikethrough: Struck-through text
        underline: Underlined text
        code: Inline code
        color: Notion color name (e.g., "yellow_background", "blue")

    Example:
        >>> Annotations(bold=True).to_dict()
        {'bold': True}
    """
    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    code: bool = False
    color: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return only the flags that are set."""
        result: Dict[str, Any] = {}
        for name in ("bold", "italic", "strikethrough", "underline", "code"):
            if getattr(self, name):
                result[name] = True
        if self.color:
            result["color"] = self.color
        return result


@dataclass
class TextSpan:
    """Literal text with optional styling and hyperlink."""
    text: str
    annotations: Optional[Annotations] = None
    link: Optional[str] = None


@dataclass
class WikiLinkSpan:
    """Reference to another document in the import set.

    Attributes:
        target: Path-like reference as written in the source document
        display: Text shown when the link cannot be turned into a mention
    """
    target: str
    display: str


@dataclass
class EquationSpan:
    """Inline LaTeX expression."""
    text: str


Span = Union[TextSpan, WikiLinkSpan, EquationSpan]


@dataclass
class ExternalImage:
    url: str


@dataclass
class LocalImage:
    path: str


ImageSource = Union[ExternalImage, LocalImage]


@dataclass
class Paragraph:
    rich_text: List[Span] = field(default_factory=list)


@dataclass
class Heading:
    level: int
    rich_text: List[Span] = field(default_factory=list)


@dataclass
class BulletedListItem:
    rich_text: List[Span] = field(default_factory=list)
    children: List["Block"] = field(default_factory=list)


@dataclass
class NumberedListItem:
    rich_text: List[Span] = field(default_factory=list)
    children: List["Block"] = field(default_factory=list)


@dataclass
class ToDo:
    checked: bool
    rich_text: List[Span] = field(default_factory=list)
    children: List["Block"] = field(default_factory=list)


@dataclass
class Code:
    language: str
    text: str


@dataclass
class Quote:
    rich_text: List[Span] = field(default_factory=list)


@dataclass
class Callout:
    """Highlighted box derived from an Obsidian `> [!type]` block.

    Attributes:
        emoji: Icon shown next to the callout
        color: Notion background color name
        rich_text: Title (bold, newline-terminated) followed by body spans
    """
    emoji: str
    color: str
    rich_text: List[Span] = field(default_factory=list)


@dataclass
class Equation:
    expression: str


@dataclass
class Divider:
    pass


@dataclass
class Image:
    source: ImageSource
    caption: List[Span] = field(default_factory=list)


@dataclass
class Table:
    """Table with a header row followed by data rows.

    Attributes:
        rows: Each row is a list of cells; each cell is a list of spans
        has_column_header: First row is a header row
        has_row_header: First column is a header column
    """
    rows: List[List[List[Span]]] = field(default_factory=list)
    has_column_header: bool = True
    has_row_header: bool = False


Block = Union[
    Paragraph,
    Heading,
    BulletedListItem,
    NumberedListItem,
    ToDo,
    Code,
    Quote,
    Callout,
    Equation,
    Divider,
    Image,
    Table,
]

ListItem = Union[BulletedListItem, NumberedListItem, ToDo]
