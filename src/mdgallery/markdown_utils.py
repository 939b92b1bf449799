"""Markdown processing utilities for mdgallery."""

from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path

import frontmatter
from markdown_it import MarkdownIt

from .config import Config, GalleryOptions, MarkdownConfig
from .errors import GalleryError
from .plugin import ENV_OPTIONS_KEY, ENV_RESULT_KEY, TransformResult, gallery_plugin

FRONTMATTER_KEY = "gallery"


def parse_markdown_file(filepath: Path) -> tuple[dict, str]:
    """Parse a markdown file with YAML frontmatter.

    Args:
        filepath: Path to the markdown file

    Returns:
        Tuple of (metadata dict, markdown content string)

    Raises:
        GalleryError: If the file cannot be read or its frontmatter is invalid
    """
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            post = frontmatter.load(f)
    except (OSError, ValueError) as e:
        raise GalleryError(f"Cannot read {filepath}: {e}") from e
    except Exception as e:
        # yaml raises its own error hierarchy through frontmatter
        raise GalleryError(f"Invalid frontmatter in {filepath}: {e}") from e
    return dict(post.metadata), post.content


def document_overrides(metadata: Mapping) -> dict:
    """Gallery option overrides from a document's frontmatter."""
    overrides = metadata.get(FRONTMATTER_KEY)
    if isinstance(overrides, Mapping):
        return dict(overrides)
    return {}


def create_markdown(markdown_config: MarkdownConfig, options: GalleryOptions) -> MarkdownIt:
    """Create a parser with the gallery plugin registered."""
    md = MarkdownIt(
        markdown_config.preset, {"typographer": markdown_config.typographer}
    )
    return md.use(gallery_plugin, options)


@lru_cache(maxsize=8)
def _cached_markdown(preset: str, typographer: bool, options_key: tuple) -> MarkdownIt:
    options = GalleryOptions(**dict(options_key))
    return create_markdown(MarkdownConfig(preset, typographer), options)


def get_markdown_converter(config: Config) -> MarkdownIt:
    """Get or create a cached parser for the given configuration."""
    options_key = tuple(sorted(vars(config.gallery).items()))
    return _cached_markdown(
        config.markdown.preset, config.markdown.typographer, options_key
    )


def render_markdown(
    content: str, config: Config | None = None, overrides: Mapping | None = None
) -> tuple[str, TransformResult | None]:
    """Render markdown to an HTML fragment with gallery sections.

    Args:
        content: Markdown content
        config: Configuration (defaults when omitted)
        overrides: Per-document gallery option overrides

    Returns:
        Tuple of (HTML string, transform result)
    """
    config = config or Config()
    md = get_markdown_converter(config)

    env: dict = {}
    if overrides:
        env[ENV_OPTIONS_KEY] = config.gallery.merged(overrides, section="frontmatter")

    html_content = md.render(content, env)
    return html_content, env.get(ENV_RESULT_KEY)


def render_markdown_file(
    filepath: Path, config: Config | None = None
) -> tuple[str, TransformResult | None]:
    """Render a markdown file, applying its frontmatter gallery overrides."""
    metadata, content = parse_markdown_file(filepath)
    return render_markdown(content, config, document_overrides(metadata))
