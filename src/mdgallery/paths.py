"""Rewrite document-relative image paths to server-root-relative paths.

Markdown sources reference images either root-relative (``/images/src/a.jpg``)
or by climbing out of the page folder (``../../images/src/a.jpg``) so they
preview correctly from the file system. Published output always uses the
configured server root.
"""

import re

SRC_PREFIX = "src:'"


def _path_pattern(prefix: str, image_path_old: str) -> re.Pattern:
    """Pattern for prefix + (any number of ../ or one or more /) + old path."""
    old = image_path_old[1:] if image_path_old.startswith("/") else image_path_old
    return re.compile(
        rf"{re.escape(prefix)}(?:(?:\.\./)*|/+){re.escape(old)}"
    )


def encode_spaces(attr_string: str) -> str:
    """Re-encode %20 as %2520.

    The payload is percent-decoded once more by its consumer, so an encoded
    space in a filename has to survive one extra decode.
    """
    return attr_string.replace("%20", "%2520")


def replace_image_paths(
    prefix: str, attr_string: str, image_path_old: str, image_path_new: str
) -> str:
    """Replace every prefix + old path occurrence with prefix + new path.

    Args:
        prefix: Literal text preceding each path, e.g. ``src:'``
        attr_string: Serialized image array
        image_path_old: Root-relative source directory; empty disables rewriting
        image_path_new: Root-relative server directory

    Returns:
        The rewritten attribute string
    """
    if not image_path_old:
        return attr_string

    pattern = _path_pattern(prefix, image_path_old)
    attr_string = pattern.sub(lambda _: f"{prefix}{image_path_new}", attr_string)

    return encode_spaces(attr_string)
