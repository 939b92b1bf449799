"""mdgallery - gallery sections for markdown-it-py token streams."""

from .config import GalleryOptions
from .plugin import GalleryPlugin, TransformResult, gallery_plugin

__all__ = ["GalleryOptions", "GalleryPlugin", "TransformResult", "gallery_plugin"]
