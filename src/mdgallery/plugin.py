"""markdown-it-py plugin that wraps heading + image paragraph motifs.

For every heading at the configured level the token stream is rewritten to::

    <ContentSection class="" headingContent="Title">
      <Gallery class="" id="0" :images="[{id:0,src:'/images/a.jpg',...}]">
        <h2>Title</h2>
      </Gallery>
      <EntryContent class="">
        ...everything up to the next heading of that level...
      </EntryContent>
    </ContentSection>

The image paragraph after the heading stays in the stream but is hidden.
Running the transform twice on the same tokens is not supported; it adds
another gallery layer instead of failing.

Usage::

    md = MarkdownIt().use(gallery_plugin, GalleryOptions(heading_level="h3"))
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.token import Token

from .config import GalleryOptions
from .errors import MalformedMotifError
from .motifs import MotifRecord, MotifStatus, find_motifs
from .splicer import wrap_contents, wrap_galleries, wrap_sections

logger = logging.getLogger(__name__)

RULE_NAME = "gallery_sections"
ENV_RESULT_KEY = "gallery_sections"
ENV_OPTIONS_KEY = "gallery_options"


@dataclass
class TransformResult:
    """Outcome of one document transform."""

    tokens: list[Token]
    motifs: list[MotifRecord] = field(default_factory=list)
    wrapped: list[MotifRecord] = field(default_factory=list)
    skipped: list[MotifRecord] = field(default_factory=list)

    @property
    def gallery_count(self) -> int:
        return len(self.wrapped)

    @property
    def image_count(self) -> int:
        return sum(len(motif.child_image_tokens) for motif in self.wrapped)

    @property
    def hidden_count(self) -> int:
        return sum(len(motif.hide_tokens) for motif in self.wrapped)


class GalleryPlugin:
    """Core rule that detects motifs and inserts the gallery regions."""

    def __init__(self, options: GalleryOptions | None = None):
        self.options = options or GalleryOptions()

    def select_motifs(
        self, motifs: Sequence[MotifRecord], options: GalleryOptions
    ) -> tuple[list[MotifRecord], list[MotifRecord]]:
        """Split motifs into (wrapped, skipped) according to the options.

        Raises:
            MalformedMotifError: For a malformed motif when on_malformed is "abort"
        """
        wrapped: list[MotifRecord] = []
        skipped: list[MotifRecord] = []

        for motif in motifs:
            if motif.status is MotifStatus.MALFORMED:
                if options.on_malformed == "abort":
                    raise MalformedMotifError(motif.position, motif.reason)
                logger.warning(
                    f"Skipping heading at token {motif.position}: {motif.reason}"
                )
                skipped.append(motif)
            elif motif.status is MotifStatus.EMPTY and not options.wrap_empty:
                skipped.append(motif)
            else:
                wrapped.append(motif)

        return wrapped, skipped

    def transform(
        self, tokens: Sequence[Token], options: GalleryOptions | None = None
    ) -> TransformResult:
        """Run detection and the three wrapping passes, returning a new token list."""
        options = options or self.options

        motifs = find_motifs(tokens, options.heading_level)
        wrapped, skipped = self.select_motifs(motifs, options)

        for motif in motifs:
            logger.debug(
                f"  {options.heading_level} '{motif.heading_text}': "
                f"{motif.status.value}, {len(motif.child_image_tokens)} images"
            )

        result = wrap_galleries(tokens, wrapped, options)
        result = wrap_contents(result, wrapped, options)
        result = wrap_sections(result, wrapped, options)

        if motifs:
            logger.debug(f"Wrapped {len(wrapped)} galleries ({len(skipped)} skipped)")

        return TransformResult(
            tokens=result, motifs=motifs, wrapped=wrapped, skipped=skipped
        )

    def __call__(self, state: StateCore) -> None:
        options = self.options
        overrides = state.env.get(ENV_OPTIONS_KEY) if state.env else None
        if isinstance(overrides, GalleryOptions):
            options = overrides
        elif isinstance(overrides, Mapping):
            options = options.merged(overrides)

        result = self.transform(state.tokens, options)
        state.tokens = result.tokens
        state.env[ENV_RESULT_KEY] = result


def _skip_hidden(rule):
    def render(self, tokens, idx, options, env):
        if tokens[idx].hidden:
            return ""
        return rule(tokens, idx, options, env)

    return render


def gallery_plugin(
    md: MarkdownIt, options: GalleryOptions | None = None, **overrides
) -> None:
    """Register the gallery transform on md.

    Args:
        md: Parser instance
        options: Plugin options (defaults when omitted)
        **overrides: Individual option values applied on top of options
    """
    options = (options or GalleryOptions()).merged(overrides)

    md.core.ruler.after("inline", RULE_NAME, GalleryPlugin(options))

    # the html renderer only checks Token.hidden in its default renderToken
    for name, rule in list(md.renderer.rules.items()):
        md.add_render_rule(name, _skip_hidden(rule))
