"""Markdown rendering for blog posts."""

import logging
import re
from dataclasses import dataclass, field

import yaml
from markdown import Markdown
from markdown.extensions import Extension
from markdown.inlinepatterns import SimpleTagInlineProcessor
from pydantic import ValidationError

from devsite.core.models import PostMetadata

logger = logging.getLogger(__name__)

FRONTMATTER_PATTERN = re.compile(
    r"^---\s*\n(.*?)\n---\s*(?:\n|\Z)",
    re.DOTALL,
)

# Pattern for strikethrough: ~~text~~
STRIKETHROUGH_PATTERN = r"(~~)(.*?)~~"


class StrikethroughExtension(Extension):
    """Markdown extension for ~~strikethrough~~ text."""

    def extendMarkdown(self, md: Markdown) -> None:
        """Add strikethrough pattern to markdown parser."""
        md.inlinePatterns.register(
            SimpleTagInlineProcessor(STRIKETHROUGH_PATTERN, "del"),
            "strikethrough",
            50,
        )


@dataclass
class RenderedPost:
    """HTML body of a post plus its front matter."""

    html: str
    metadata: PostMetadata = field(default_factory=PostMetadata)


def create_parser() -> Markdown:
    """Create a Markdown parser configured for blog posts.

    A new instance is returned on every call; ``Markdown`` objects keep
    per-document state and are not shared between requests.
    """
    return Markdown(
        extensions=[
            "extra",  # abbreviations, attr_list, def_list, fenced_code, footnotes, md_in_html, tables
            "sane_lists",
            "smarty",
            "toc",
            "pymdownx.tasklist",
            StrikethroughExtension(),
        ]
    )


def split_frontmatter(text: str) -> tuple[PostMetadata, str]:
    """Parse YAML front matter from post text.

    Returns (metadata, text_without_frontmatter). Text with no front
    matter, or with front matter that does not parse to a mapping, is
    returned unchanged with empty metadata. A mapping is always removed
    from the body; fields that fail validation leave the metadata empty.
    """
    match = FRONTMATTER_PATTERN.match(text)
    if not match:
        return PostMetadata(), text

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        logger.debug("Ignoring unparsable front matter: %s", e)
        return PostMetadata(), text
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return PostMetadata(), text

    body = text[match.end() :]
    try:
        metadata = PostMetadata.model_validate({str(k): v for k, v in data.items()})
    except ValidationError as e:
        logger.warning("Invalid front matter fields: %s", e)
        metadata = PostMetadata()
    return metadata, body


def render_markdown(text: str) -> str:
    """Render markdown text to an HTML fragment."""
    return create_parser().convert(text)


def render_post(text: str) -> RenderedPost:
    """Render a post, extracting its front matter first."""
    metadata, body = split_frontmatter(text)
    return RenderedPost(html=render_markdown(body), metadata=metadata)
