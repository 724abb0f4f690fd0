"""Request and result models for the carousel pipeline."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..content.models import SlideInput
from ..design.context import BrandVisualConfig, DesignContext


class CarouselRequest(BaseModel):
    """Input of one carousel generation run."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    content_id: str = Field(min_length=1)
    slides: list[SlideInput] = Field(min_length=1)
    visual_style: str | None = None
    text_style: str | None = None
    background_style: str | None = None
    background_image: bytes | str | None = None
    design_preset: str | None = None
    use_numbered_slides: bool = False
    job_id: str | None = None
    brand_visual_config: BrandVisualConfig | None = None
    logo_image: bytes | None = None
    model: str | None = None
    total_slides: int | None = Field(default=None, ge=1)

    @field_validator("slides")
    @classmethod
    def _unique_slide_numbers(cls, slides: list[SlideInput]) -> list[SlideInput]:
        numbers = [s.slide_number for s in slides]
        duplicates = sorted({n for n in numbers if numbers.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate slide numbers: {duplicates}")
        return slides

    @model_validator(mode="after")
    def _total_covers_slides(self) -> "CarouselRequest":
        if self.total_slides is not None and self.total_slides < self.max_slide_number:
            raise ValueError(
                f"total_slides ({self.total_slides}) is less than the highest slide number "
                f"({self.max_slide_number})"
            )
        return self

    @property
    def max_slide_number(self) -> int:
        return max(s.slide_number for s in self.slides)

    @property
    def carousel_length(self) -> int:
        """Number of slides in the full carousel, used for template selection."""
        return self.total_slides or self.max_slide_number

    @property
    def ordered_slides(self) -> list[SlideInput]:
        return sorted(self.slides, key=lambda s: s.slide_number)


class SlideImageResult(BaseModel):
    """One successfully generated slide."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    slide_number: int
    image_url: str
    saved_image_id: str | None = None
    template: str


class SlideError(BaseModel):
    """One failed slide."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    slide_number: int
    error: str


class DesignSummary(BaseModel):
    """Design applied to the carousel."""

    preset: str
    system: DesignContext


class CarouselResult(BaseModel):
    """Outcome of a carousel generation run."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    job_id: str
    images: list[SlideImageResult] = Field(default_factory=list)
    design: DesignSummary | None = None
    background_generated: bool = False
    background_error: str | None = None
    slide_errors: list[SlideError] = Field(default_factory=list)
    error: str | None = None
    error_code: str | None = None

    def to_response(self) -> dict[str, Any]:
        """Serialize to the camelCase response shape.

        Optional keys (``backgroundError``, ``slideErrors``, ``error``,
        ``errorCode``) are omitted when empty.
        """
        data = self.model_dump(mode="json", by_alias=True)
        for key in ("backgroundError", "error", "errorCode"):
            if data.get(key) is None:
                data.pop(key, None)
        if not data.get("slideErrors"):
            data.pop("slideErrors", None)
        return data
