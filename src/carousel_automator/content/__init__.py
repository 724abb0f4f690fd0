"""Slide content models and parsing."""

from .models import SlideContent, SlideInput, parse_slide_content, split_headline_body

__all__ = [
    "SlideContent",
    "SlideInput",
    "parse_slide_content",
    "split_headline_body",
]
