"""
Unit tests for verbose logging functionality in HubDownloader API.
"""

import logging

import pytest
from unittest.mock import patch

from hubfetch.interfaces.api import HubDownloader


@pytest.fixture(autouse=True)
def restore_level():
    yield
    logging.getLogger("HubFetch").setLevel(logging.INFO)


class TestVerboseLogging:
    """Test cases for verbose logging functionality."""

    def test_default_initialization(self):
        downloader = HubDownloader(environ={})
        assert downloader.verbose is False

    def test_verbose_initialization(self):
        downloader = HubDownloader(verbose=True, environ={})
        assert downloader.verbose is True
        assert logging.getLogger("HubFetch").level == logging.DEBUG

    @patch('hubfetch.interfaces.api.logger')
    def test_logger_level_verbose_true(self, mock_logger):
        HubDownloader(verbose=True, environ={})
        mock_logger.setLevel.assert_called_with(logging.DEBUG)

    @patch('hubfetch.interfaces.api.logger')
    def test_logger_level_verbose_false(self, mock_logger):
        HubDownloader(verbose=False, environ={})
        mock_logger.setLevel.assert_called_with(logging.INFO)

    @patch('hubfetch.interfaces.api.logger')
    def test_set_verbose_method_enable(self, mock_logger):
        downloader = HubDownloader(verbose=False, environ={})
        downloader.set_verbose(True)

        assert downloader.verbose is True
        assert mock_logger.setLevel.call_count >= 2
        mock_logger.setLevel.assert_called_with(logging.DEBUG)

    def test_verbose_mode_toggle(self):
        downloader = HubDownloader(environ={})

        downloader.set_verbose(True)
        assert downloader.verbose is True

        downloader.set_verbose(False)
        assert downloader.verbose is False
