"""Lesson discovery, section parsing and metadata extraction."""

from .extractor import extract, split_front_matter
from .parser import extract_title, normalize_section_name, parse_sections
from .scanner import discover, read_document

__all__ = [
    "discover",
    "read_document",
    "extract",
    "split_front_matter",
    "extract_title",
    "normalize_section_name",
    "parse_sections",
]
