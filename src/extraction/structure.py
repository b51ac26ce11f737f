# src/extraction/structure.py - v1
"""Chapter detection and word statistics computed locally from the text."""

from __future__ import annotations

import re

from pydantic import Field

from manuscriptai.core.models import CamelModel

LISTENING_WORDS_PER_HOUR = 9300
EXCERPT_CHARS = 500

_NUMBER_WORDS = (
    "one|two|three|four|five|six|seven|eight|nine|ten|eleven|twelve|thirteen|"
    "fourteen|fifteen|sixteen|seventeen|eighteen|nineteen|twenty|thirty|forty|fifty"
)

# "Chapter 12", "CHAPTER IV: The Storm", "Chapter Twenty-One - Home"
_CHAPTER_HEADING = re.compile(
    r"^[ \t]*chapter[ \t]+"
    r"(?:\d+|[ivxlcdm]+\b|(?:" + _NUMBER_WORDS + r")(?:[- ](?:" + _NUMBER_WORDS + r"))?\b)"
    r"[ \t]*[:.\-]?[ \t]*([^\n]*)",
    re.IGNORECASE | re.MULTILINE,
)


class ChapterInfo(CamelModel):
    number: int
    title: str
    position: int
    word_count: int
    excerpt: str = ""


class ManuscriptStructure(CamelModel):
    total_words: int
    chapter_count: int
    avg_chapter_length: int
    has_structured_chapters: bool
    chapters: list[ChapterInfo] = Field(default_factory=list)


def count_words(text: str) -> int:
    return len(text.split())


def analyze_structure(text: str) -> ManuscriptStructure:
    """Detect chapter headings and count words per chapter."""
    matches = list(_CHAPTER_HEADING.finditer(text))

    chapters: list[ChapterInfo] = []
    for index, match in enumerate(matches):
        start = match.start()
        end = matches[index + 1].start() if index + 1 < len(matches) else len(text)
        body = text[start:end]
        chapters.append(
            ChapterInfo(
                number=index + 1,
                title=match.group(1).strip() or f"Chapter {index + 1}",
                position=start,
                word_count=count_words(body),
                excerpt=body[:EXCERPT_CHARS],
            )
        )

    total_words = count_words(text)
    avg = round(total_words / len(chapters)) if chapters else 0

    return ManuscriptStructure(
        total_words=total_words,
        chapter_count=len(chapters),
        avg_chapter_length=avg,
        has_structured_chapters=bool(chapters),
        chapters=chapters,
    )


def estimate_listening_minutes(words: int) -> float:
    """Finished audio length at the narration rate, in minutes."""
    return round(words / LISTENING_WORDS_PER_HOUR * 60, 2)
