# services/catalog.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
import random as _random

from app.errors import TextNotFound
from services.typing_engine import word_count

ALL = "all"


@dataclass(frozen=True)
class PracticeText:
    id: str
    title: str
    text: str
    category: str
    difficulty: str = "easy"
    language: str = "en"

    @property
    def word_count(self) -> int:
        return word_count(self.text)

    @property
    def char_count(self) -> int:
        return len(self.text)

    @classmethod
    def from_record(cls, row: Mapping[str, Any]) -> "PracticeText":
        return cls(
            id=str(row.get("slug") or row["id"]),
            title=str(row["title"]),
            text=str(row["text"]),
            category=str(row["category"]),
            difficulty=str(row.get("difficulty") or "easy"),
            language=str(row.get("language") or "en"),
        )

    def to_record(self) -> Dict[str, str]:
        return {
            "slug": self.id,
            "title": self.title,
            "text": self.text,
            "category": self.category,
            "difficulty": self.difficulty,
            "language": self.language,
        }


DEFAULT_TEXTS: Tuple[PracticeText, ...] = (
    PracticeText(
        id="quick-brown-fox",
        title="The quick brown fox",
        text="The quick brown fox jumps over the lazy dog.",
        category="Pangrams",
        difficulty="easy",
    ),
    PracticeText(
        id="home-row",
        title="Home row drill",
        text="asdf jkl; asdf jkl; a sad lad asks dad; all fall; flask glass",
        category="Drills",
        difficulty="easy",
    ),
    PracticeText(
        id="python-zen",
        title="The Zen of Python",
        text=(
            "Beautiful is better than ugly. Explicit is better than implicit. "
            "Simple is better than complex. Complex is better than complicated."
        ),
        category="Quotes",
        difficulty="medium",
    ),
    PracticeText(
        id="numbers-and-symbols",
        title="Numbers and symbols",
        text="Order #4521 shipped on 2024-03-17 at 09:45 (total: $1,299.99; tax 8.25%).",
        category="Drills",
        difficulty="hard",
    ),
    PracticeText(
        id="tieng-viet",
        title="Lời chào",
        text="Xin chào các bạn. Hôm nay chúng ta cùng luyện gõ phím nhé.",
        category="Greetings",
        difficulty="medium",
        language="vi",
    ),
)


class TextCatalog:
    """Read-only collection of practice texts, handed to whoever needs it."""

    def __init__(self, texts: Iterable[PracticeText] = DEFAULT_TEXTS):
        self._texts: Tuple[PracticeText, ...] = tuple(texts)
        self._by_id = {t.id: t for t in self._texts}

    @classmethod
    def from_records(cls, rows: Iterable[Mapping[str, Any]]) -> "TextCatalog":
        return cls(PracticeText.from_record(r) for r in rows)

    def __len__(self) -> int:
        return len(self._texts)

    def __iter__(self):
        return iter(self._texts)

    def all(self) -> List[PracticeText]:
        return list(self._texts)

    def get(self, text_id: str) -> PracticeText:
        try:
            return self._by_id[str(text_id)]
        except KeyError:
            raise TextNotFound(text_id) from None

    def categories(self) -> List[str]:
        # first-seen order, like the selector shows them
        return list(dict.fromkeys(t.category for t in self._texts))

    def languages(self) -> List[str]:
        return list(dict.fromkeys(t.language for t in self._texts))

    def by_category(self, category: str) -> List[PracticeText]:
        return [t for t in self._texts if t.category == category]

    def by_difficulty(self, difficulty: str) -> List[PracticeText]:
        return [t for t in self._texts if t.difficulty == difficulty]

    def by_language(self, language: str) -> List[PracticeText]:
        return [t for t in self._texts if t.language == language]

    def filter(
        self,
        search: str = "",
        category: str = ALL,
        difficulty: str = ALL,
        language: str = ALL,
    ) -> List[PracticeText]:
        needle = (search or "").strip().lower()
        out = []
        for t in self._texts:
            if needle and needle not in t.title.lower() and needle not in t.text.lower():
                continue
            if category != ALL and t.category != category:
                continue
            if difficulty != ALL and t.difficulty != difficulty:
                continue
            if language != ALL and t.language != language:
                continue
            out.append(t)
        return out

    def random(self, rng: Optional[_random.Random] = None) -> Optional[PracticeText]:
        if not self._texts:
            return None
        return (rng or _random).choice(self._texts)
