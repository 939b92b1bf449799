"""Insert region tokens around motifs.

Every pass plans its insertions against existing tokens (by identity) and
applies them in one batch, returning a new list. The input list is never
modified, so a pass can be run and tested on its own. Passes must still run
in order: gallery, content wrapper, section, because each one anchors on the
region tokens added by the one before.
"""

import logging
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from markdown_it.token import Token

from .config import GalleryOptions
from .errors import TokenSequenceError
from .motifs import MotifRecord
from .regions import (
    RegionKind,
    build_content_wrapper_tokens,
    build_gallery_tokens,
    build_section_tokens,
    is_region_token,
)

logger = logging.getLogger(__name__)


class Placement(str, Enum):
    BEFORE = "before"
    AFTER = "after"
    END = "end"


@dataclass(frozen=True)
class Insertion:
    """Place token before or after anchor, or at the end of the sequence."""

    token: Token
    placement: Placement
    anchor: Token | None = None


def apply_insertions(
    tokens: Sequence[Token], insertions: Sequence[Insertion]
) -> list[Token]:
    """Return a new list with all insertions applied.

    Several insertions at the same anchor and placement keep their planned
    order. Anchors must be tokens of the input sequence.

    Raises:
        TokenSequenceError: If an anchor is missing or a token would appear twice
    """
    positions: dict[int, int] = {}
    for index, token in enumerate(tokens):
        if id(token) in positions:
            raise TokenSequenceError(
                f"Token {token.type!r} appears more than once (index {index})"
            )
        positions[id(token)] = index

    before: dict[int, list[Token]] = defaultdict(list)
    after: dict[int, list[Token]] = defaultdict(list)
    end: list[Token] = []
    placed: set[int] = set(positions)

    for insertion in insertions:
        if id(insertion.token) in placed:
            raise TokenSequenceError(
                f"Token {insertion.token.content!r} would appear more than once"
            )
        placed.add(id(insertion.token))

        if insertion.placement is Placement.END:
            end.append(insertion.token)
            continue

        if insertion.anchor is None or id(insertion.anchor) not in positions:
            raise TokenSequenceError(
                f"Anchor for {insertion.token.content!r} is not in the token sequence"
            )

        index = positions[id(insertion.anchor)]
        if insertion.placement is Placement.BEFORE:
            before[index].append(insertion.token)
        else:
            after[index].append(insertion.token)

    result: list[Token] = []
    for index, token in enumerate(tokens):
        result.extend(before.get(index, ()))
        result.append(token)
        result.extend(after.get(index, ()))
    result.extend(end)

    return result


def find_gallery_tokens(
    tokens: Sequence[Token], motifs: Sequence[MotifRecord]
) -> list[tuple[MotifRecord, Token, Token | None]]:
    """Gallery open tokens of the given motifs in document order, with their close tokens."""
    members = {id(motif) for motif in motifs}
    opens: list[tuple[MotifRecord, Token]] = []
    closes: dict[int, Token] = {}

    for token in tokens:
        if token.type != "html_block":
            continue
        motif = token.meta.get("gallery_motif")
        if motif is None or id(motif) not in members:
            continue
        if is_region_token(token, RegionKind.GALLERY, opening=True):
            opens.append((motif, token))
        elif is_region_token(token, RegionKind.GALLERY, opening=False):
            closes[id(motif)] = token

    return [(motif, token, closes.get(id(motif))) for motif, token in opens]


def wrap_galleries(
    tokens: Sequence[Token], motifs: Sequence[MotifRecord], options: GalleryOptions
) -> list[Token]:
    """Wrap each motif's heading in a gallery region and hide its image paragraph."""
    insertions: list[Insertion] = []

    for gallery_id, motif in enumerate(motifs):
        opening, closing = build_gallery_tokens(motif, gallery_id, options)

        for token in motif.hide_tokens:
            token.hidden = True

        insertions.append(Insertion(opening, Placement.BEFORE, motif.heading_open))
        insertions.append(Insertion(closing, Placement.AFTER, motif.heading_close))

    return apply_insertions(tokens, insertions)


def wrap_contents(
    tokens: Sequence[Token], motifs: Sequence[MotifRecord], options: GalleryOptions
) -> list[Token]:
    """Wrap the content after each gallery, up to the next gallery or the end."""
    insertions: list[Insertion] = []
    pending_close: Token | None = None

    for motif, opening, closing in find_gallery_tokens(tokens, motifs):
        if closing is None:
            raise TokenSequenceError(
                f"Gallery for heading {motif.heading_text!r} has no closing token"
            )

        wrapper_open, wrapper_close = build_content_wrapper_tokens(options)

        if pending_close is not None:
            # previous wrapper ends where the next gallery starts
            insertions.append(Insertion(pending_close, Placement.BEFORE, opening))
        insertions.append(Insertion(wrapper_open, Placement.AFTER, closing))
        pending_close = wrapper_close

    if pending_close is not None:
        insertions.append(Insertion(pending_close, Placement.END))

    return apply_insertions(tokens, insertions)


def wrap_sections(
    tokens: Sequence[Token], motifs: Sequence[MotifRecord], options: GalleryOptions
) -> list[Token]:
    """Wrap every gallery and its content wrapper in a section region."""
    members = {id(motif) for motif in motifs}
    insertions: list[Insertion] = []
    section_close: Token | None = None

    for token in tokens:
        if not is_region_token(token, RegionKind.GALLERY, opening=True):
            continue

        motif = token.meta.get("gallery_motif")
        if motif is None or id(motif) not in members:
            logger.debug(f"  Skipping gallery token without a motif: {token.content[:40]!r}")
            continue

        section_open, next_close = build_section_tokens(motif, options)
        if section_close is not None:
            insertions.append(Insertion(section_close, Placement.BEFORE, token))
        insertions.append(Insertion(section_open, Placement.BEFORE, token))
        section_close = next_close

    if section_close is not None:
        insertions.append(Insertion(section_close, Placement.END))

    return apply_insertions(tokens, insertions)
