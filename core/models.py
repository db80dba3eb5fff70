"""Section and saved-document data models"""
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Iterator, List, Optional

from core.errors import ContentParseError

logger = logging.getLogger(__name__)


class SectionStatus(str, Enum):
    """Lifecycle status of a section"""

    PENDING = "pending"
    GENERATING = "generating"
    REWRITING = "rewriting"
    DONE = "done"

    @classmethod
    def parse(cls, value) -> "SectionStatus":
        """Parse a stored status string, tolerating legacy and unknown values"""
        if isinstance(value, cls):
            return value
        if value == "humanizing":
            return cls.REWRITING
        try:
            return cls(value)
        except ValueError:
            logger.warning(f"Unknown section status {value!r}, using pending")
            return cls.PENDING


@dataclass
class Section:
    """A titled block of document text with a lifecycle status"""

    id: int
    title: str
    content: str = ""
    status: SectionStatus = SectionStatus.PENDING

    def append(self, text: str):
        self.content += text

    @property
    def word_count(self) -> int:
        return len(self.content.split())

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Section":
        try:
            section_id = int(data["id"])
        except (KeyError, TypeError, ValueError) as e:
            raise ContentParseError(f"Section without a valid id: {data!r}") from e
        content = data.get("content") or ""
        if not isinstance(content, str):
            raise ContentParseError(f"Section {section_id} content is not text: {content!r}")
        return cls(
            id=section_id,
            title=str(data.get("title", "")),
            content=content,
            status=SectionStatus.parse(data.get("status", "pending")),
        )


class SectionList:
    """Ordered list of sections; list order is display order.

    Identifiers are sequential integers handed out by ``add``. The counter
    only moves forward, so an id is never reused after a removal.
    """

    def __init__(self, sections: Optional[List[Section]] = None):
        self._sections: List[Section] = []
        self._last_id = 0
        for section in sections or []:
            self._insert_existing(section)

    def _insert_existing(self, section: Section):
        if any(s.id == section.id for s in self._sections):
            raise ContentParseError(f"Duplicate section id: {section.id}")
        self._sections.append(section)
        self._last_id = max(self._last_id, section.id)

    @classmethod
    def from_titles(cls, titles: List[str]) -> "SectionList":
        sections = cls()
        for title in titles:
            sections.add(title)
        return sections

    def add(self, title: str, content: str = "", position: Optional[int] = None) -> Section:
        """Create a section with the next id

        Args:
            title: Section title
            content: Initial content
            position: Insert index; appended at the end when None

        Returns:
            The new section
        """
        self._last_id += 1
        section = Section(id=self._last_id, title=title.strip(), content=content)
        if position is None:
            self._sections.append(section)
        else:
            self._sections.insert(position, section)
        return section

    def get(self, section_id: int) -> Optional[Section]:
        for section in self._sections:
            if section.id == section_id:
                return section
        return None

    def index_of(self, section_id: int) -> int:
        for i, section in enumerate(self._sections):
            if section.id == section_id:
                return i
        raise KeyError(section_id)

    def remove(self, section_id: int) -> Section:
        index = self.index_of(section_id)
        return self._sections.pop(index)

    def rename(self, section_id: int, title: str):
        self._sections[self.index_of(section_id)].title = title.strip()

    def move(self, section_id: int, offset: int):
        """Move a section up (negative offset) or down, clamped to the list bounds"""
        index = self.index_of(section_id)
        target = min(max(index + offset, 0), len(self._sections) - 1)
        section = self._sections.pop(index)
        self._sections.insert(target, section)

    def clear(self):
        self._sections = []
        self._last_id = 0

    @property
    def ids(self) -> List[int]:
        return [s.id for s in self._sections]

    @property
    def is_complete(self) -> bool:
        return bool(self._sections) and all(
            s.status == SectionStatus.DONE for s in self._sections
        )

    @property
    def word_count(self) -> int:
        return sum(s.word_count for s in self._sections)

    def __iter__(self) -> Iterator[Section]:
        return iter(self._sections)

    def __len__(self) -> int:
        return len(self._sections)

    def __getitem__(self, index: int) -> Section:
        return self._sections[index]

    def to_list(self) -> List[Dict]:
        return [s.to_dict() for s in self._sections]

    @classmethod
    def from_list(cls, items: List[Dict]) -> "SectionList":
        if not isinstance(items, list):
            raise ContentParseError("Section data must be a list")
        return cls([Section.from_dict(item) for item in items])

    def to_json(self) -> str:
        return json.dumps(self.to_list(), ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> "SectionList":
        try:
            items = json.loads(text)
        except (TypeError, json.JSONDecodeError) as e:
            raise ContentParseError(f"Could not parse section list: {e}") from e
        return cls.from_list(items)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class DocumentRecord:
    """A document saved to the remote library"""

    title: str
    topic: str
    type: str
    level: str
    content: str  # serialized section list
    created_at: str = field(default_factory=utc_now_iso)
    id: Optional[int] = None

    def to_row(self) -> Dict:
        """Row payload for insert (id is assigned by the database)"""
        return {
            "title": self.title,
            "topic": self.topic,
            "type": self.type,
            "level": self.level,
            "content": self.content,
            "created_at": self.created_at,
        }

    @classmethod
    def from_row(cls, row: Dict) -> "DocumentRecord":
        return cls(
            id=row.get("id"),
            title=row.get("title") or "",
            topic=row.get("topic") or "",
            type=row.get("type") or "",
            level=row.get("level") or "",
            content=row.get("content") or "[]",
            created_at=row.get("created_at") or "",
        )

    def sections(self) -> SectionList:
        return SectionList.from_json(self.content)
