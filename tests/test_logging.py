"""Tests for mdgallery logging module."""

import logging

import pytest
from markdown_it import MarkdownIt
from markdown_it.token import Token

from mdgallery import logging as mdgallery_logging
from mdgallery.plugin import GalleryPlugin, gallery_plugin


@pytest.fixture(autouse=True)
def reset_logger():
    """Reset the logger state between tests."""
    logger = logging.getLogger(mdgallery_logging.LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    yield
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_returns_named_logger(self):
        logger = mdgallery_logging.setup_logging()
        assert isinstance(logger, logging.Logger)
        assert logger.name == "mdgallery"

    def test_verbose_sets_debug_level(self):
        logger = mdgallery_logging.setup_logging(verbose=True)
        assert logger.level == logging.DEBUG

    def test_non_verbose_sets_info_level(self):
        logger = mdgallery_logging.setup_logging(verbose=False)
        assert logger.level == logging.INFO

    def test_repeated_setup_keeps_two_handlers(self):
        """Calling setup twice should not stack handlers."""
        mdgallery_logging.setup_logging()
        logger = mdgallery_logging.setup_logging()
        assert len(logger.handlers) == 2

    def test_does_not_propagate(self):
        logger = mdgallery_logging.setup_logging()
        assert logger.propagate is False


class TestLoggingOutput:
    """Tests for output routing and formatting of module loggers."""

    def test_info_goes_to_stdout_without_prefix(self, capsys):
        mdgallery_logging.setup_logging()
        logging.getLogger("mdgallery.cli").info("plain message")
        captured = capsys.readouterr()
        assert captured.out.strip() == "plain message"
        assert captured.err == ""

    def test_warning_goes_to_stderr_with_prefix(self, capsys):
        mdgallery_logging.setup_logging()
        logging.getLogger("mdgallery.plugin").warning("something")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.strip() == "Warning: something"

    def test_error_goes_to_stderr_with_prefix(self, capsys):
        mdgallery_logging.setup_logging()
        logging.getLogger("mdgallery.cli").error("something")
        captured = capsys.readouterr()
        assert captured.err.strip() == "Error: something"

    def test_debug_hidden_without_verbose(self, capsys):
        mdgallery_logging.setup_logging(verbose=False)
        logging.getLogger("mdgallery.splicer").debug("debug message")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_debug_shown_with_verbose(self, capsys):
        mdgallery_logging.setup_logging(verbose=True)
        logging.getLogger("mdgallery.splicer").debug("debug message")
        captured = capsys.readouterr()
        assert "debug message" in captured.out


class TestLibraryUse:
    """The plugin logs without configuring the host's logging."""

    def test_plugin_installs_no_handlers(self):
        md = MarkdownIt().use(gallery_plugin)
        md.render("## A\n\n![x](x.jpg)\n")

        logger = logging.getLogger(mdgallery_logging.LOGGER_NAME)
        assert logger.handlers == []
        assert logger.propagate is True

    def test_skipped_heading_warning_reaches_caplog(self, caplog):
        tokens = [
            Token("heading_open", "h2", 1),
            Token("paragraph_open", "p", 1),
            Token("paragraph_close", "p", -1),
        ]

        with caplog.at_level(logging.WARNING, logger="mdgallery"):
            GalleryPlugin().transform(tokens)

        assert [r.name for r in caplog.records] == ["mdgallery.plugin"]
        assert "Skipping heading at token 0" in caplog.records[0].getMessage()
