"""Extraction sub-package: deterministic, template-agnostic content extraction."""

from .dates import parse_date
from .main_content import find_main_content, first_content_image, strip_noise
from .markdown import container_to_markdown
from .metadata import extract_metadata
from .plaintext import container_to_text
from .urlnorm import normalize_url, resolve_image_url

__all__ = [
    "container_to_markdown",
    "container_to_text",
    "extract_metadata",
    "find_main_content",
    "first_content_image",
    "normalize_url",
    "parse_date",
    "resolve_image_url",
    "strip_noise",
]
