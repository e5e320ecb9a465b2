from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_PASSAGE_DIR = Path(__file__).resolve().parent.parent / "data" / "passages"


class Category(str, Enum):
    """Difficulty tier of a passage and of the records typed from it."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class PassageNotFoundError(KeyError):
    """No passage is available for the requested category."""


@dataclass(frozen=True)
class Passage:
    text: str
    category: Category
    topic: str = "general"


class PassageRepository:
    """Passages grouped by category, loaded from ``<category>.yaml`` files.

    Each file carries a ``title`` and a ``content`` list. Entries are either
    plain strings or mappings with ``text`` and an optional ``topic``.
    """

    def __init__(self, base_dir: Optional[Path] = None, rng: Optional[random.Random] = None) -> None:
        self._base_dir = base_dir or DEFAULT_PASSAGE_DIR
        self._rng = rng or random.Random()
        self._passages = self._load_passages()

    def categories(self) -> List[Category]:
        return [c for c in Category if self._passages.get(c)]

    def all(self, category: Optional[Category] = None) -> List[Passage]:
        if category is not None:
            return list(self._passages.get(Category(category), []))
        return [p for c in Category for p in self._passages.get(c, [])]

    def fetch_passage(self, category: Category) -> Passage:
        """Return a random passage of *category*."""
        try:
            category = Category(category)
        except ValueError:
            raise PassageNotFoundError(f"Invalid difficulty level: {category!r}") from None
        candidates = self._passages.get(category)
        if not candidates:
            raise PassageNotFoundError(f"No passages found for difficulty {category.value!r}")
        passage = self._rng.choice(candidates)
        logger.debug("Picked %s passage on %r (%d candidates)", category.value, passage.topic, len(candidates))
        return passage

    def _load_passages(self) -> Dict[Category, List[Passage]]:
        base_dir = self._base_dir
        if not base_dir.exists():
            raise FileNotFoundError(f"Passages directory not found: {base_dir}")

        passages: Dict[Category, List[Passage]] = {}
        for category in Category:
            path = base_dir / f"{category.value}.yaml"
            if not path.exists():
                logger.warning("No passage file for %s at %s", category.value, path)
                continue
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
            if not raw or not isinstance(raw, dict):
                raise ValueError(f"{path.name}: expected YAML with 'title' and 'content'")
            content = raw.get("content")
            if content is None:
                raise ValueError(f"{path.name}: missing 'content'")
            if isinstance(content, list):
                items = [self._parse_item(path, category, item) for item in content]
            else:
                # allow content as multiline string, one passage per line
                text = str(content).strip()
                items = [Passage(text=line.strip(), category=category) for line in text.splitlines()]
            items = [p for p in items if p.text]
            if not items:
                raise ValueError(f"{path.name}: 'content' has no passages")
            passages[category] = items

        if not passages:
            raise ValueError(f"No passage files (easy/medium/hard.yaml) found in {base_dir}")
        return passages

    @staticmethod
    def _parse_item(path: Path, category: Category, item: object) -> Passage:
        if isinstance(item, dict):
            text = item.get("text")
            if not isinstance(text, str):
                raise ValueError(f"{path.name}: passage entry without 'text'")
            topic = str(item.get("topic") or "general").strip()
            return Passage(text=text.strip(), category=category, topic=topic)
        return Passage(text=str(item).strip(), category=category)
