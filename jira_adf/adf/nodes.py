"""Atlassian Document Format (ADF) node types produced by the transpiler.

Only the block nodes the transpiler emits are modelled here: paragraphs,
level-3 headings, and flat bullet/ordered lists. Each node knows how to
render itself as the JSON-ready dict Jira expects in rich-text fields.
"""

import json
from dataclasses import dataclass, field
from typing import ClassVar, Literal, TypeAlias

ADF_VERSION = 1
HEADING_LEVEL = 3


@dataclass
class TextRun:
    """A run of unformatted text."""

    type: ClassVar[str] = "text"

    text: str

    def to_dict(self) -> dict:
        return {"type": self.type, "text": self.text}


@dataclass
class Paragraph:
    """A paragraph wrapping a single text run."""

    type: ClassVar[str] = "paragraph"

    content: list[TextRun]

    @classmethod
    def of(cls, text: str) -> "Paragraph":
        return cls(content=[TextRun(text)])

    def to_dict(self) -> dict:
        return {"type": self.type, "content": [run.to_dict() for run in self.content]}


@dataclass
class Heading:
    """A heading at the fixed level used for colon-terminated lines."""

    type: ClassVar[str] = "heading"

    content: list[TextRun]
    level: int = HEADING_LEVEL

    @classmethod
    def of(cls, text: str) -> "Heading":
        return cls(content=[TextRun(text)])

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "attrs": {"level": self.level},
            "content": [run.to_dict() for run in self.content],
        }


@dataclass
class ListItem:
    """A list entry holding exactly one paragraph."""

    type: ClassVar[str] = "listItem"

    content: list[Paragraph]

    @classmethod
    def of(cls, text: str) -> "ListItem":
        return cls(content=[Paragraph.of(text)])

    def to_dict(self) -> dict:
        return {"type": self.type, "content": [para.to_dict() for para in self.content]}


@dataclass
class BulletList:
    """An unordered list (lines starting with ``- ``)."""

    type: ClassVar[str] = "bulletList"
    kind: ClassVar[Literal["bullet"]] = "bullet"

    content: list[ListItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"type": self.type, "content": [item.to_dict() for item in self.content]}


@dataclass
class OrderedList:
    """An ordered list (lines starting with ``1. ``, ``2. ``, ...)."""

    type: ClassVar[str] = "orderedList"
    kind: ClassVar[Literal["ordered"]] = "ordered"

    content: list[ListItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"type": self.type, "content": [item.to_dict() for item in self.content]}


BlockNode: TypeAlias = Paragraph | Heading | BulletList | OrderedList
ListNode: TypeAlias = BulletList | OrderedList
ListKind: TypeAlias = Literal["bullet", "ordered"]


@dataclass
class Document:
    """Root ``doc`` node returned by :func:`jira_adf.adf.transpile`."""

    type: ClassVar[str] = "doc"

    content: list[BlockNode] = field(default_factory=list)
    version: int = ADF_VERSION

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "type": self.type,
            "content": [node.to_dict() for node in self.content],
        }

    def to_json(self, *, indent: int | None = None) -> str:
        """Serialize to the JSON payload sent as a Jira rich-text field."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
