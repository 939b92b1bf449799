"""Configuration loading and management for mdgallery."""

import sys
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import TypeVar

T = TypeVar("T")

CONFIG_DIR = ".mdgallery"
CONFIG_FILE = "config.toml"

MALFORMED_POLICIES = ("skip", "abort")


def _snake_case(key: str) -> str:
    """Map a camelCase key such as "galleryTag" onto "gallery_tag"."""
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in key)


def _find_similar(key: str, valid_keys: set[str], threshold: float = 0.6) -> str | None:
    """Find a similar key from valid_keys using Levenshtein ratio.

    Args:
        key: The unknown key to match
        valid_keys: Set of valid key names
        threshold: Minimum similarity ratio (0-1) to suggest

    Returns:
        Most similar key if above threshold, None otherwise
    """

    def levenshtein_ratio(s1: str, s2: str) -> float:
        m, n = len(s1), len(s2)
        if m == 0 or n == 0:
            return 0.0

        previous = list(range(n + 1))
        for i in range(1, m + 1):
            current = [i] + [0] * n
            for j in range(1, n + 1):
                cost = 0 if s1[i - 1] == s2[j - 1] else 1
                current[j] = min(
                    previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost
                )
            previous = current

        return 1.0 - (previous[n] / max(m, n))

    best_match = None
    best_ratio = 0.0

    normalized = _snake_case(key)

    for valid in sorted(valid_keys):
        ratio = levenshtein_ratio(normalized.lower(), valid.lower())
        if ratio > best_ratio:
            best_ratio = ratio
            best_match = valid

    return best_match if best_ratio >= threshold else None


def _warn_unknown_keys(
    data: Mapping, valid_keys: set[str], section: str, config_path: Path | None = None
) -> None:
    """Print a warning to stderr for each unknown key in a config section."""
    unknown_keys = set(data.keys()) - valid_keys
    if not unknown_keys:
        return

    for key in sorted(unknown_keys):
        location = f" in {config_path}" if config_path else ""
        msg = f"Warning: Unknown config key '{key}' in [{section}]{location}"

        similar = _find_similar(key, valid_keys)
        if similar:
            msg += f". Did you mean '{similar}'?"

        print(msg, file=sys.stderr)


def _load_dataclass(
    cls: type[T],
    data: Mapping,
    defaults: T,
    transforms: dict[str, callable] | None = None,
    section: str = "",
    config_path: Path | None = None,
) -> T:
    """Load a dataclass from a dict with defaults and optional field transforms.

    Args:
        cls: The dataclass type to create
        data: Dict of values from config file
        defaults: Instance with default values
        transforms: Optional dict mapping field names to transform functions
        section: Section name for validation warnings
        config_path: Path to config file for validation warnings

    Returns:
        New instance of cls with values from data, falling back to defaults
    """
    transforms = transforms or {}
    kwargs = {}
    valid_keys = {f.name for f in fields(cls)}

    _warn_unknown_keys(data, valid_keys, section, config_path)

    for f in fields(cls):
        value = data.get(f.name, getattr(defaults, f.name))
        if f.name in transforms:
            value = transforms[f.name](value)
        kwargs[f.name] = value
    return cls(**kwargs)


def normalize_heading_level(value) -> str:
    """Normalize 2, "2" or "h2" to "h2". Anything else is returned unchanged."""
    if isinstance(value, int) and not isinstance(value, bool):
        return f"h{value}"
    if isinstance(value, str) and value.isdigit():
        return f"h{value}"
    return value


def _normalize_malformed_policy(value) -> str:
    if value not in MALFORMED_POLICIES:
        print(
            f"Warning: Unknown on_malformed policy '{value}', using 'skip'",
            file=sys.stderr,
        )
        return "skip"
    return value


OPTION_TRANSFORMS = {
    "heading_level": normalize_heading_level,
    "on_malformed": _normalize_malformed_policy,
}


@dataclass
class GalleryOptions:
    """Options of the gallery transform."""

    content_wrapper_class: str = ""
    content_wrapper_tag: str = "EntryContent"
    gallery_class: str = ""
    gallery_tag: str = "Gallery"
    heading_level: str = "h2"
    # leading ../ segments are matched regardless, do not include them here
    image_path_old: str = "/.vuepress/public/images"
    image_path_new: str = "/images"
    section_class: str = ""
    section_tag: str = "ContentSection"
    wrap_empty: bool = True
    on_malformed: str = "skip"

    def merged(self, overrides: Mapping | None, section: str = "gallery") -> "GalleryOptions":
        """Return a copy with values from overrides applied.

        camelCase keys (galleryTag, imagePathOld) are accepted alongside the
        field names. Unknown keys are reported and ignored.
        """
        if not overrides:
            return replace(self)
        return _load_dataclass(
            GalleryOptions,
            {_snake_case(key): value for key, value in overrides.items()},
            self,
            transforms=OPTION_TRANSFORMS,
            section=section,
        )


@dataclass
class MarkdownConfig:
    """Markdown parser configuration."""

    preset: str = "commonmark"
    typographer: bool = False


@dataclass
class Config:
    """Main configuration container."""

    gallery: GalleryOptions = field(default_factory=GalleryOptions)
    markdown: MarkdownConfig = field(default_factory=MarkdownConfig)

    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path) -> "Config":
        """Load configuration from a TOML file.

        Args:
            config_path: Path to the config.toml file

        Returns:
            Loaded Config object with defaults merged
        """
        config = cls()
        config.config_path = config_path

        if not config_path.exists():
            return config

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        _warn_unknown_keys(data, {"gallery", "markdown"}, "top-level", config_path)

        if "gallery" in data:
            config.gallery = _load_dataclass(
                GalleryOptions,
                data["gallery"],
                config.gallery,
                transforms=OPTION_TRANSFORMS,
                section="gallery",
                config_path=config_path,
            )

        if "markdown" in data:
            config.markdown = _load_dataclass(
                MarkdownConfig,
                data["markdown"],
                config.markdown,
                section="markdown",
                config_path=config_path,
            )

        return config

    @classmethod
    def find_and_load(cls, start_path: Path | None = None) -> "Config":
        """Find and load config from .mdgallery/config.toml.

        Searches from start_path up to filesystem root.

        Raises:
            FileNotFoundError: If no .mdgallery/config.toml is found
        """
        if start_path is None:
            start_path = Path.cwd()

        config_path = cls.find_config(start_path)
        if config_path is None:
            raise FileNotFoundError(
                f"No {CONFIG_DIR}/{CONFIG_FILE} found. Run 'mdgallery init' first."
            )

        return cls.load(config_path)

    @staticmethod
    def find_config(start_path: Path) -> Path | None:
        """Find .mdgallery/config.toml starting from start_path."""
        current = start_path.resolve()

        while True:
            config_path = current / CONFIG_DIR / CONFIG_FILE
            if config_path.exists():
                return config_path

            parent = current.parent
            if parent == current:
                return None
            current = parent
