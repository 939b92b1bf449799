"""Image metadata extracted from image tokens.

Extra attributes ride along in the URL fragment, which browsers never send
to the server:

    ![Alt](photo.jpg#caption=x&frame=2 "Title")
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from markdown_it.token import Token

from .paths import SRC_PREFIX, replace_image_paths
from .serialize import array_to_attr_string, sanitize_text


@dataclass
class ImageRecord:
    """Serialized form of one image inside a gallery."""

    id: int
    src: str
    alt: str = ""
    caption: str = ""
    extra_attributes: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "src": self.src,
            "alt": self.alt,
            "caption": self.caption,
            "extraAttributes": dict(self.extra_attributes),
        }


def get_attributes_from_hash(hash_string: str | None) -> dict[str, str]:
    """Parse ``key1=val1&key2=val2`` into a dict.

    No unescaping is done, so ``&`` and ``=`` cannot appear inside values.
    Parts without ``=`` or with an empty key are dropped.
    """
    attrs: dict[str, str] = {}

    if not hash_string:
        return attrs

    for part in hash_string.split("&"):
        pieces = part.split("=")
        if len(pieces) < 2 or not pieces[0]:
            continue
        attrs[pieces[0]] = pieces[1]

    return attrs


def split_src(src: str | None) -> tuple[str, str | None]:
    """Split an image source into (path, fragment).

    Only the text between the first and second ``#`` is the fragment;
    anything after a second ``#`` is dropped.
    """
    parts = (src or "").split("#")
    return parts[0], (parts[1] if len(parts) > 1 else None)


def image_record_from_token(token: Token, index: int) -> ImageRecord:
    """Build the record for the image token at position index within its gallery."""
    src, fragment = split_src(token.attrGet("src"))
    title = token.attrGet("title")

    return ImageRecord(
        id=index,
        src=src,
        alt=sanitize_text(token.content),
        caption=sanitize_text(title if isinstance(title, str) else ""),
        extra_attributes=get_attributes_from_hash(fragment),
    )


def image_records(tokens: Sequence[Token]) -> list[ImageRecord]:
    return [image_record_from_token(token, i) for i, token in enumerate(tokens)]


def images_attr_string(
    tokens: Sequence[Token], image_path_old: str = "", image_path_new: str = ""
) -> str:
    """Serialize image tokens for the gallery tag and rewrite their paths."""
    records = [record.to_dict() for record in image_records(tokens)]
    attr_string = array_to_attr_string(records)
    return replace_image_paths(SRC_PREFIX, attr_string, image_path_old, image_path_new)
