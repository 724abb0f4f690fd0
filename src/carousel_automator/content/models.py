"""Data models for slide content."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from ..constants import DEFAULT_CTA_TEXT, TemplateKind

_SENTENCE_SPLIT = re.compile(r"(?<=[.!?])\s+")


class SlideInput(BaseModel):
    """One slide as supplied by the text-generation step.

    Either ``text`` (parsed into headline/body) or an explicit
    ``headline`` must be given.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    slide_number: int = Field(ge=1)
    text: str | None = None
    headline: str | None = None
    body: str | None = None
    accent_text: str | None = None
    cta_text: str | None = None

    @model_validator(mode="after")
    def _require_text(self) -> "SlideInput":
        if not (self.text and self.text.strip()) and not (self.headline and self.headline.strip()):
            raise ValueError(f"Slide {self.slide_number} needs text or a headline")
        return self

    @property
    def source_text(self) -> str:
        """Text used for descriptive prompts of persisted images."""
        if self.text:
            return self.text
        return " ".join(part for part in (self.headline, self.body) if part)


class SlideContent(BaseModel):
    """Structured content for a single slide."""

    model_config = ConfigDict(frozen=True)

    slide_number: int
    headline: str | None = None
    body: str | None = None
    accent_text: str | None = None
    cta_text: str | None = None


def split_headline_body(text: str) -> tuple[str, str | None]:
    """Split raw slide text into a headline and an optional body.

    Multi-line text uses the first non-empty line as headline and joins
    the remaining lines. Single-line text uses the first sentence.
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if len(lines) > 1:
        return lines[0], " ".join(lines[1:])

    stripped = text.strip()
    sentences = [s for s in _SENTENCE_SPLIT.split(stripped) if s]
    if len(sentences) > 1:
        return sentences[0], " ".join(sentences[1:])
    return stripped, None


def parse_slide_content(slide: SlideInput, template: TemplateKind | None = None) -> SlideContent:
    """Build slide content from input.

    Args:
        slide: Raw slide input.
        template: Template the slide will use. CTA slides without a
            call-to-action get the default label.

    Returns:
        Parsed slide content.
    """
    if slide.text and slide.text.strip():
        headline, body = split_headline_body(slide.text)
    else:
        headline, body = slide.headline, slide.body

    cta_text = slide.cta_text
    if template == TemplateKind.CTA and not cta_text:
        cta_text = DEFAULT_CTA_TEXT

    return SlideContent(
        slide_number=slide.slide_number,
        headline=headline,
        body=body or None,
        accent_text=slide.accent_text,
        cta_text=cta_text,
    )
