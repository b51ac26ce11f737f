# tests/unit/extraction/test_unit_structure.py - v1
"""Tests for extraction/structure.py."""

from __future__ import annotations

from manuscriptai.extraction.structure import (
    analyze_structure,
    count_words,
    estimate_listening_minutes,
)
from tests.conftest import manuscript_text


class TestAnalyzeStructure:
    def test_numbered_chapters(self):
        structure = analyze_structure(manuscript_text(words=9300, chapters=3))
        assert structure.total_words == 9300
        assert structure.chapter_count == 3
        assert structure.avg_chapter_length == 3100
        assert structure.has_structured_chapters
        assert [c.title for c in structure.chapters] == ["Part 1", "Part 2", "Part 3"]
        assert sum(c.word_count for c in structure.chapters) == 9300

    def test_heading_variants(self):
        text = (
            "CHAPTER IV: The Storm\nrain\n\n"
            "Chapter Twenty-One - Home\nhome again\n\n"
            "chapter 3\nplain"
        )
        structure = analyze_structure(text)
        assert [c.title for c in structure.chapters] == ["The Storm", "Home", "Chapter 3"]
        assert [c.number for c in structure.chapters] == [1, 2, 3]

    def test_no_headings(self):
        structure = analyze_structure("just some words without any headings")
        assert structure.chapter_count == 0
        assert structure.chapters == []
        assert structure.avg_chapter_length == 0
        assert not structure.has_structured_chapters
        assert structure.total_words == 6

    def test_mid_sentence_mention_is_not_a_heading(self):
        structure = analyze_structure("She read chapter 5 twice.")
        assert structure.chapter_count == 0

    def test_camel_case_dump(self):
        data = analyze_structure("Chapter 1\nabc").to_json_dict()
        assert set(data) == {
            "totalWords", "chapterCount", "avgChapterLength",
            "hasStructuredChapters", "chapters",
        }
        assert data["chapters"][0]["wordCount"] == 3


class TestHelpers:
    def test_count_words(self):
        assert count_words("  one\ttwo\n\nthree ") == 3
        assert count_words("") == 0

    def test_listening_minutes(self):
        assert estimate_listening_minutes(9300) == 60.0
        assert estimate_listening_minutes(4650) == 30.0
