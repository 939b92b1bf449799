"""Detect heading + image paragraph motifs in a token sequence.

A motif starts at every heading of the configured level. When the heading is
directly followed by a paragraph holding images, those images belong to the
motif's gallery and the paragraph is hidden. Headings without such a
paragraph still form a motif so that every heading of that level gets the
same wrapping.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from markdown_it.token import Token


class MotifStatus(str, Enum):
    DETECTED = "detected"
    EMPTY = "empty"
    MALFORMED = "malformed"


@dataclass(eq=False)
class MotifRecord:
    """One heading at the configured level and the images that follow it."""

    index: int
    position: int
    heading_open: Token
    heading_content: Token | None = None
    heading_close: Token | None = None
    child_image_tokens: list[Token] = field(default_factory=list)
    hide_tokens: list[Token] = field(default_factory=list)
    status: MotifStatus = MotifStatus.EMPTY
    reason: str = ""

    @property
    def heading_text(self) -> str:
        if self.heading_content is None:
            return ""
        return self.heading_content.content

    @property
    def is_wrappable(self) -> bool:
        return self.status is not MotifStatus.MALFORMED


def _token_at(tokens: Sequence[Token], index: int) -> Token | None:
    if 0 <= index < len(tokens):
        return tokens[index]
    return None


def _collect_images(motif: MotifRecord, tokens: Sequence[Token], position: int) -> None:
    paragraph_open = _token_at(tokens, position + 3)
    inline = _token_at(tokens, position + 4)

    if paragraph_open is None or paragraph_open.type != "paragraph_open":
        return
    if inline is None or inline.type != "inline" or not inline.children:
        return

    images = [child for child in inline.children if child.type == "image"]
    if not images:
        return

    motif.child_image_tokens = images
    motif.hide_tokens = [paragraph_open, inline, *inline.children]

    paragraph_close = _token_at(tokens, position + 5)
    if paragraph_close is not None and paragraph_close.type == "paragraph_close":
        motif.hide_tokens.append(paragraph_close)

    motif.status = MotifStatus.DETECTED


def find_motifs(tokens: Sequence[Token], heading_level: str = "h2") -> list[MotifRecord]:
    """Scan tokens once and return a record per heading at heading_level.

    Never raises: a heading that is not followed by its content and close
    tokens is returned with status MALFORMED and a reason.
    """
    motifs: list[MotifRecord] = []

    for position, token in enumerate(tokens):
        if token.type != "heading_open" or token.tag != heading_level:
            continue

        motif = MotifRecord(index=len(motifs), position=position, heading_open=token)
        motifs.append(motif)

        content = _token_at(tokens, position + 1)
        close = _token_at(tokens, position + 2)

        if content is None or content.type != "inline":
            motif.status = MotifStatus.MALFORMED
            motif.reason = "heading content token missing"
            continue
        if close is None or close.type != "heading_close":
            motif.status = MotifStatus.MALFORMED
            motif.reason = "heading close token missing"
            continue

        motif.heading_content = content
        motif.heading_close = close
        _collect_images(motif, tokens, position)

    return motifs
