"""Command-line interface for mdgallery."""

import logging
from pathlib import Path

import click

from .config import CONFIG_DIR, CONFIG_FILE, Config
from .errors import GalleryError

logger = logging.getLogger(__name__)


def get_default_config_content() -> str:
    """Get the default config.toml content from bundled defaults."""
    import importlib.resources

    try:
        config_file = importlib.resources.files("mdgallery.defaults").joinpath(
            CONFIG_FILE
        )
        return config_file.read_text(encoding="utf-8")
    except (TypeError, FileNotFoundError):
        return """\
[gallery]
heading_level = "h2"
image_path_old = "/.vuepress/public/images"
image_path_new = "/images"

[markdown]
preset = "commonmark"
"""


def load_config(config_path: Path | None) -> Config:
    """Load an explicit config file, or search upwards from the cwd."""
    if config_path is not None:
        return Config.load(config_path)

    try:
        return Config.find_and_load()
    except FileNotFoundError:
        logger.debug(f"No {CONFIG_DIR}/{CONFIG_FILE} found, using defaults")
        return Config()


config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help=f"Path to config file (default: search for {CONFIG_DIR}/{CONFIG_FILE})",
)
verbose_option = click.option("--verbose", "-v", is_flag=True, help="Verbose output")


@click.group()
@click.version_option(package_name="mdgallery")
def main():
    """mdgallery - Wrap markdown image galleries in section components."""
    pass


@main.command()
@click.option("--force", "-f", is_flag=True, help="Overwrite existing config")
def init(force: bool):
    """Create .mdgallery/config.toml with the default options."""
    config_dir = Path.cwd() / CONFIG_DIR
    config_file = config_dir / CONFIG_FILE

    if config_file.exists() and not force:
        click.echo(f"Error: {CONFIG_DIR}/{CONFIG_FILE} already exists", err=True)
        click.echo("Use --force to overwrite", err=True)
        raise SystemExit(1)

    config_dir.mkdir(exist_ok=True)
    config_file.write_text(get_default_config_content(), encoding="utf-8")
    click.echo(f"Created {config_file}")


@main.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write HTML to this file instead of stdout",
)
@config_option
@verbose_option
def render(source: Path, output: Path | None, config_path: Path | None, verbose: bool):
    """Render a markdown file to an HTML fragment."""
    from .logging import setup_logging
    from .markdown_utils import render_markdown_file

    setup_logging(verbose)
    config = load_config(config_path)

    try:
        html_content, result = render_markdown_file(source, config)
    except GalleryError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    if result is not None:
        logger.debug(f"{source.name}: {result.gallery_count} galleries, {result.image_count} images")

    if output is None:
        click.echo(html_content, nl=False)
    else:
        output.write_text(html_content, encoding="utf-8")
        click.echo(f"Wrote {output}")


@main.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@config_option
@verbose_option
def inspect(source: Path, config_path: Path | None, verbose: bool):
    """List the gallery motifs detected in a markdown file."""
    from .logging import setup_logging
    from .markdown_utils import render_markdown_file

    setup_logging(verbose)
    config = load_config(config_path)

    try:
        _, result = render_markdown_file(source, config)
    except GalleryError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    if result is None or not result.motifs:
        click.echo("No gallery headings found")
        return

    wrapped = {id(motif) for motif in result.wrapped}
    for motif in result.motifs:
        marker = " " if id(motif) in wrapped else "-"
        click.echo(
            f"{marker} {motif.index:>3}  {motif.status.value:<9} "
            f"{len(motif.child_image_tokens):>3} images  {motif.heading_text}"
        )

    click.echo(
        f"\n{result.gallery_count} galleries, {result.image_count} images, "
        f"{len(result.skipped)} skipped"
    )


if __name__ == "__main__":
    main()
