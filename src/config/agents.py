# src/config/agents.py - v1
"""Declarative agent registry configuration.

Editorial agents run sequentially in the order listed. Asset agents run
concurrently; their order here is the field order of the combined bundle.
"""

from __future__ import annotations

# Fully qualified class paths for dynamic import by pipeline/registry.py.
EDITORIAL_AGENTS: list[str] = [
    "manuscriptai.pipeline.agents.editorial.developmental.DevelopmentalAgent",
    "manuscriptai.pipeline.agents.editorial.line_editing.LineEditingAgent",
    "manuscriptai.pipeline.agents.editorial.copy_editing.CopyEditingAgent",
]

ASSET_AGENTS: list[str] = [
    "manuscriptai.pipeline.agents.assets.book_description.BookDescriptionAgent",
    "manuscriptai.pipeline.agents.assets.keywords.KeywordsAgent",
    "manuscriptai.pipeline.agents.assets.categories.CategoriesAgent",
    "manuscriptai.pipeline.agents.assets.author_bio.AuthorBioAgent",
    "manuscriptai.pipeline.agents.assets.back_matter.BackMatterAgent",
    "manuscriptai.pipeline.agents.assets.cover_brief.CoverBriefAgent",
    "manuscriptai.pipeline.agents.assets.series_description.SeriesDescriptionAgent",
    "manuscriptai.pipeline.agents.audiobook.narration.NarrationAgent",
    "manuscriptai.pipeline.agents.audiobook.pronunciation.PronunciationAgent",
    "manuscriptai.pipeline.agents.audiobook.timing.TimingAgent",
    "manuscriptai.pipeline.agents.audiobook.samples.SamplesAgent",
    "manuscriptai.pipeline.agents.audiobook.metadata.MetadataAgent",
]
