"""Open/close token pairs for the injected regions.

Each region is a pair of ``html_block`` tokens. The tokens carry their region
kind in ``meta`` so later passes can find them without parsing their markup.
"""

from enum import Enum

from markdown_it.token import Token

from .config import GalleryOptions
from .images import images_attr_string
from .motifs import MotifRecord


class RegionKind(str, Enum):
    GALLERY = "gallery"
    CONTENT_WRAPPER = "content_wrapper"
    SECTION = "section"


def region_token(
    content: str, kind: RegionKind, opening: bool, motif: MotifRecord | None = None
) -> Token:
    meta = {"region": kind.value, "opening": opening}
    if motif is not None:
        meta["gallery_motif"] = motif
    return Token("html_block", "", 0, content=content, block=True, meta=meta)


def is_region_token(token: Token, kind: RegionKind, opening: bool = True) -> bool:
    return (
        token.type == "html_block"
        and token.meta.get("region") == kind.value
        and token.meta.get("opening") is opening
    )


def build_gallery_tokens(
    motif: MotifRecord, gallery_id: int, options: GalleryOptions
) -> tuple[Token, Token]:
    """Gallery region around one heading, carrying its images as a bound attribute."""
    images = images_attr_string(
        motif.child_image_tokens, options.image_path_old, options.image_path_new
    )
    tag = options.gallery_tag

    opening = region_token(
        f'<{tag} class="{options.gallery_class}" id="{gallery_id}" :images="{images}">',
        RegionKind.GALLERY,
        True,
        motif,
    )
    closing = region_token(f"</{tag}>", RegionKind.GALLERY, False, motif)
    return opening, closing


def build_content_wrapper_tokens(options: GalleryOptions) -> tuple[Token, Token]:
    tag = options.content_wrapper_tag
    opening = region_token(
        f'<{tag} class="{options.content_wrapper_class}">',
        RegionKind.CONTENT_WRAPPER,
        True,
    )
    closing = region_token(f"</{tag}>", RegionKind.CONTENT_WRAPPER, False)
    return opening, closing


def build_section_tokens(
    motif: MotifRecord, options: GalleryOptions
) -> tuple[Token, Token]:
    """Section region around a gallery and its content wrapper.

    The heading text goes into headingContent as is.
    """
    tag = options.section_tag
    opening = region_token(
        f'<{tag} class="{options.section_class}" headingContent="{motif.heading_text}">',
        RegionKind.SECTION,
        True,
        motif,
    )
    closing = region_token(f"</{tag}>", RegionKind.SECTION, False, motif)
    return opening, closing
