"""Pages — template discovery, output path strategy, request matching."""

from prowl.pages.catalog import TemplateCatalog, TemplateRef, discover_templates
from prowl.pages.matcher import Match, RequestMatcher, is_passthrough
from prowl.pages.paths import (
    check_logical_path,
    normalize_request_path,
    to_artifact_path,
    to_canonical_url,
)

__all__ = [
    "Match",
    "RequestMatcher",
    "TemplateCatalog",
    "TemplateRef",
    "check_logical_path",
    "discover_templates",
    "is_passthrough",
    "normalize_request_path",
    "to_artifact_path",
    "to_canonical_url",
]
