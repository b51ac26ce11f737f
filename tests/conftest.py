# tests/conftest.py - v1
"""Shared test fixtures for all unit and integration tests.

Provides a scripted LLM client that answers every agent prompt with a valid
canned object, in-memory backends, a recording sleep and manuscript text
builders. No external services: all I/O stays in process.
"""

from __future__ import annotations

import asyncio
import copy
import json
from typing import Any, Callable

import pytest

from manuscriptai.config.settings import Settings, load_settings
from manuscriptai.core.models import ManuscriptRecord
from manuscriptai.extraction.structure import analyze_structure
from manuscriptai.llm.base_client import BaseLLMClient, LLMHTTPError
from manuscriptai.llm.models import LLMResponse, Message
from manuscriptai.manuscripts.memory_repository import MemoryManuscriptRepository
from manuscriptai.pipeline.agents.editorial.developmental import DevelopmentalAgent
from manuscriptai.pipeline.plugin_kit.models import AgentInputs
from manuscriptai.pipeline.services import PipelineServices, build_services
from manuscriptai.storage.memory_store import MemoryObjectStore

MODEL = "claude-sonnet-4-20250514"
MANUSCRIPT_KEY = "u1/m1/f.txt"


# === CANNED MODEL OUTPUT ===


def _section(score: float) -> dict[str, Any]:
    return {
        "score": score,
        "strengths": ["Clear stakes"],
        "weaknesses": ["Slow second act"],
        "recommendations": ["Tighten the middle chapters"],
    }


AGENT_RESPONSES: dict[str, dict[str, Any]] = {
    "developmental": {
        "overallScore": 7,
        "structure": _section(7),
        "pacing": _section(6),
        "characters": _section(8),
        "plot": _section(7),
        "voice": _section(8),
        "genreFit": _section(8),
        "topPriorities": ["Tighten act two", "Sharpen the villain", "Cut the prologue"],
        "marketability": {"score": 7, "summary": "Solid commercial thriller"},
        "compTitles": [
            {"title": "Gone Girl", "author": "Gillian Flynn", "year": 2012,
             "relevantFeatures": ["unreliable narrator"]},
        ],
    },
    "lineEditing": {
        "overallScore": 7,
        "issues": [
            {"type": "passive_voice", "severity": "medium", "location": "The door was",
             "original": "The door was opened by her.", "suggestion": "She opened the door.",
             "explanation": "Active voice is more direct."},
            {"type": "adverb", "severity": "high", "location": "He ran",
             "original": "He ran very quickly.", "suggestion": "He sprinted.",
             "explanation": "A strong verb replaces the adverb."},
        ],
        "strengths": ["Vivid setting"],
        "readabilityMetrics": {"averageSentenceLength": 14, "passiveVoiceCount": 1,
                               "adverbCount": 1, "sentenceVariety": "good"},
    },
    "copyEditing": {
        "overallScore": 8,
        "errorCount": 1,
        "errors": [
            {"type": "punctuation", "subtype": "serial_comma", "severity": "low",
             "location": "red white", "original": "red, white and blue",
             "correction": "red, white, and blue", "rule": "CMOS 6.19",
             "confidence": "high"},
        ],
        "consistencyIssues": [],
        "strengths": ["Consistent tense"],
    },
    "bookDescription": {
        "short": "A detective races the clock.",
        "medium": "A detective races the clock to stop a killer.",
        "long": "A detective races the clock to stop a killer before the city burns.",
        "hooks": ["What if the killer is you?"],
        "keyWords": ["killer"],
        "targetAudience": "Thriller readers",
        "comparisonLine": "For fans of Gone Girl",
    },
    "keywords": {
        "keywords": [
            "psychological thriller", "detective mystery", "serial killer suspense",
            "crime fiction", "police procedural", "dark secrets", "page turner",
        ],
        "rationale": ["r"] * 7,
        "searchVolume": "high",
        "competitionLevel": "medium",
    },
    "categories": {
        "primary": [{"code": "FIC031000", "name": "FICTION / Thrillers / General"}],
        "secondary": [{"code": "FIC022000", "name": "FICTION / Mystery & Detective"}],
        "alternative": [{"code": "FIC050000", "name": "FICTION / Crime"}],
        "recommendations": ["Lead with thrillers"],
    },
    "authorBio": {
        "short": "Jane writes thrillers.",
        "medium": "Jane writes thrillers from her home in Maine.",
        "long": "Jane writes thrillers from her home in Maine, where winters are long.",
        "tone": "warm",
        "suggestions": [],
        "socialMediaBio": "Thriller author",
    },
    "backMatter": {
        "thankYouMessage": "Thank you for reading!",
        "newsletterCTA": {"headline": "Join", "body": "Get a free story.",
                          "callToAction": "Sign up"},
        "connectMessage": "Find me online.",
        "closingLine": "Until next time.",
    },
    "coverBrief": {
        "visualConcept": {"mainImage": "A lone figure", "mood": "tense"},
        "colorPalette": {"primary": "#101010", "secondary": "#aa0000", "accent": "#ffffff"},
        "typography": {"titleFont": "Bold sans", "authorFont": "Serif"},
        "aiArtPrompts": {"midjourney": "lone figure in fog"},
    },
    "seriesDescription": {
        "seriesTagline": "Every city has a shadow.",
        "shortSeriesDescription": "A detective series.",
        "longSeriesDescription": "A longer detective series description.",
        "bookByBookArc": [
            {"bookNumber": 1, "focus": "The first case"},
            {"bookNumber": 2, "focus": "The second case"},
            {"bookNumber": 3, "focus": "The final case"},
        ],
    },
    "audiobookNarration": {
        "narrationStyle": {"tone": "tense", "pace": "brisk"},
        "characterVoices": [{"name": "Mara", "voiceDirection": "low and dry"}],
        "technicalSpecs": {"format": "ACX"},
    },
    "audiobookPronunciation": {
        "characterNames": [{"name": "Siobhan", "phonetic": "shi-VAWN"}],
        "places": [],
        "terms": [],
        "pronunciationKey": "Capitals mark stress.",
    },
    "audiobookTiming": {
        "overallTiming": {"totalListeningMinutes": 999, "estimatedHours": 16.65,
                          "recordingDays": 3},
        "pacingStrategy": {"overall": "brisk"},
        "productionSchedule": {"totalWeeks": 4},
    },
    "audiobookSamples": {
        "retailAudioSample": {"startsWith": "It was", "approximateMinutes": 5},
        "auditionSamples": [{"title": "Interrogation", "startsWith": "Sit down"}],
        "selectionStrategy": "Open strong.",
    },
    "audiobookMetadata": {
        "titleMetadata": {"title": "Shadow City"},
        "publisherSummary": "A detective races the clock.",
        "categories": {"primary": "FIC031000"},
        "audiobookSpecs": {"estimatedLength": "1 hour"},
    },
}

# A phrase unique to each agent's prompt template.
PROMPT_MARKERS: dict[str, str] = {
    "developmental": "expert developmental editor",
    "lineEditing": "expert line editor",
    "copyEditing": "expert copy editor",
    "bookDescription": "retail descriptions",
    "keywords": "KDP keyword specialist",
    "categories": "BISAC category selection",
    "authorBio": "writes author biographies",
    "backMatter": "back matter that follows",
    "coverBrief": "art director",
    "seriesDescription": "series marketing strategist",
    "audiobookNarration": "casting director",
    "audiobookPronunciation": "pronunciation coach",
    "audiobookTiming": "audiobook producer planning",
    "audiobookSamples": "choosing sample passages",
    "audiobookMetadata": "distribution specialist",
}


def agent_for_prompt(prompt: str) -> str:
    for name, marker in PROMPT_MARKERS.items():
        if marker in prompt:
            return name
    raise AssertionError(f"Unrecognised prompt: {prompt[:120]!r}")


# === FAKE LLM CLIENT ===

Script = Callable[[str], "str | dict[str, Any] | Exception"]


class FakeLLMClient(BaseLLMClient):
    """Answers each prompt with the canned object for its agent.

    ``scripts`` overrides an agent: the callable gets the attempt number
    (1-based, per agent) and returns raw text, an object to serialise, or an
    exception to raise.
    """

    def __init__(self, scripts: dict[str, Callable[[int], Any]] | None = None) -> None:
        self.scripts = scripts or {}
        self.calls: list[tuple[str, str, float]] = []
        self.attempts: dict[str, int] = {}

    @property
    def provider_name(self) -> str:
        return "fake"

    def calls_for(self, agent: str) -> list[str]:
        return [prompt for name, prompt, _ in self.calls if name == agent]

    async def complete(
        self,
        messages: list[Message],
        *,
        model: str,
        temperature: float,
        max_tokens: int = 4096,
    ) -> LLMResponse:
        prompt = messages[-1].content
        agent = agent_for_prompt(prompt)
        self.calls.append((agent, prompt, temperature))
        attempt = self.attempts.get(agent, 0) + 1
        self.attempts[agent] = attempt
        await asyncio.sleep(0)

        script = self.scripts.get(agent)
        result: Any = (
            script(attempt) if script is not None else copy.deepcopy(AGENT_RESPONSES[agent])
        )
        if isinstance(result, Exception):
            raise result
        content = result if isinstance(result, str) else json.dumps(result)
        return LLMResponse(
            content=content, input_tokens=1000, output_tokens=500, model=model
        )


class RecordingSleep:
    """Stand-in for asyncio.sleep that records delays and only yields."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        await asyncio.sleep(0)


def http_error(status: int | None) -> LLMHTTPError:
    return LLMHTTPError(status, "scripted failure")


# === STORES ===


class RecordingStore(MemoryObjectStore):
    """Memory store that keeps every write, in order."""

    def __init__(self) -> None:
        super().__init__()
        self.puts: list[tuple[str, bytes]] = []

    async def put(self, key, body, **kwargs) -> None:
        await super().put(key, body, **kwargs)
        self.puts.append((key, (await self.get(key)).body))

    def json_writes(self, key: str) -> list[dict[str, Any]]:
        return [json.loads(body) for k, body in self.puts if k == key]


# === MANUSCRIPT TEXT ===


def manuscript_text(words: int = 9300, chapters: int = 3) -> str:
    """Plain-text manuscript with ``chapters`` headings and ``words`` words."""
    if chapters == 0:
        return " ".join(["lorem"] * words)
    parts: list[str] = []
    remaining = words
    for number in range(1, chapters + 1):
        heading = f"Chapter {number}: Part {number}"
        heading_words = len(heading.split())
        body_words = (
            remaining - heading_words
            if number == chapters
            else words // chapters - heading_words
        )
        remaining -= body_words + heading_words
        parts.append(heading + "\n\n" + " ".join(["word"] * body_words))
    return "\n\n".join(parts)


async def seed_manuscript(store, key: str = MANUSCRIPT_KEY, text: str | None = None) -> str:
    """Upload a plain-text manuscript; returns its text."""
    text = manuscript_text() if text is None else text
    await store.put(key, text, content_type="text/plain")
    return text


def developmental_artifact(text: str | None = None, key: str = MANUSCRIPT_KEY) -> dict[str, Any]:
    """The stored developmental report for the canned model output."""
    text = manuscript_text() if text is None else text
    inputs = AgentInputs(
        manuscript_key=key, report_id="abc12345", structure=analyze_structure(text)
    )
    return DevelopmentalAgent().finalize(
        copy.deepcopy(AGENT_RESPONSES["developmental"]), inputs
    )


# === FIXTURES ===


@pytest.fixture
def settings() -> Settings:
    return load_settings(
        object_store_backend="memory",
        queue_backend="memory",
        manuscript_repository="memory",
        cost_sink="memory",
        llm_model=MODEL,
        queue_retry_delays_s=[0.0, 0.0, 0.0],
    )


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def fake_llm() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture
def fake_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def manuscripts() -> MemoryManuscriptRepository:
    return MemoryManuscriptRepository()


@pytest.fixture
def services(
    settings: Settings,
    store: RecordingStore,
    fake_llm: FakeLLMClient,
    fake_sleep: RecordingSleep,
    manuscripts: MemoryManuscriptRepository,
) -> PipelineServices:
    return build_services(
        settings,
        llm_client=fake_llm,
        store=store,
        manuscripts=manuscripts,
        sleep=fake_sleep,
    )


@pytest.fixture
def manuscript_record() -> ManuscriptRecord:
    return ManuscriptRecord(
        id="m1", user_id="u1", title="Shadow City", genre="thriller",
        object_key="u1/m1/f.txt",
    )
