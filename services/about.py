"""
About page rendering.

Each ``club_info`` row carries a free-text ``section`` tag. The tag picks one
parser, once, through ``SectionKind``:

* ``mission``    -> bullet items split on ``•``
* ``objectives`` -> cards split on blank lines, each card split on the first ``": "``
* ``rules``      -> groups split on blank lines; first line is the group title,
                    titles containing ``Disciplinary`` are flagged
* anything else  -> the description as preformatted text

The delimiters are part of the stored content format and must not change.
"""

import enum
from dataclasses import dataclass, field
from typing import List, Optional

BULLET = "•"
BLOCK_SEPARATOR = "\n\n"
TITLE_SEPARATOR = ": "
DISCIPLINARY_MARKER = "Disciplinary"


class SectionKind(str, enum.Enum):
    MISSION = "mission"
    OBJECTIVES = "objectives"
    RULES = "rules"
    TEXT = "text"

    @classmethod
    def for_section(cls, section):
        key = (section or "").strip().lower()
        try:
            return cls(key)
        except ValueError:
            return cls.TEXT


@dataclass
class ObjectiveCard:
    title: str
    body: str = ""


@dataclass
class RuleGroup:
    title: str
    items: List[str] = field(default_factory=list)
    flagged: bool = False

    @property
    def as_list(self):
        return len(self.items) > 1


@dataclass
class RenderedSection:
    section: str
    title: str
    kind: SectionKind
    text: str = ""
    items: List[str] = field(default_factory=list)
    cards: List[ObjectiveCard] = field(default_factory=list)
    groups: List[RuleGroup] = field(default_factory=list)
    id: Optional[int] = None


def _clean(text):
    # Textarea submissions aate hain CRLF ke saath
    return (text or "").replace("\r\n", "\n")


def _blocks(text):
    return [block.strip("\n") for block in _clean(text).split(BLOCK_SEPARATOR) if block.strip()]


def parse_mission(text):
    return [item.strip() for item in _clean(text).split(BULLET) if item.strip()]


def parse_objectives(text):
    cards = []
    for block in _blocks(text):
        title, _, body = block.partition(TITLE_SEPARATOR)
        cards.append(ObjectiveCard(title=title.strip(), body=body.strip()))
    return cards


def parse_rules(text):
    groups = []
    for block in _blocks(text):
        lines = [line.rstrip() for line in block.split("\n")]
        title = lines[0].strip()
        groups.append(RuleGroup(
            title=title,
            items=[line.strip() for line in lines[1:]],
            flagged=DISCIPLINARY_MARKER in title,
        ))
    return groups


def render_section(section, title, description, item_id=None):
    kind = SectionKind.for_section(section)
    rendered = RenderedSection(section=section, title=title, kind=kind, text=_clean(description), id=item_id)
    if kind is SectionKind.MISSION:
        rendered.items = parse_mission(description)
        if not rendered.items:
            rendered.kind = SectionKind.TEXT
    elif kind is SectionKind.OBJECTIVES:
        rendered.cards = parse_objectives(description)
        if not rendered.cards:
            rendered.kind = SectionKind.TEXT
    elif kind is SectionKind.RULES:
        rendered.groups = parse_rules(description)
        if not rendered.groups:
            rendered.kind = SectionKind.TEXT
    return rendered


def render_sections(rows):
    return [render_section(row["section"], row["title"], row["description"], row.get("id")) for row in rows]
