# tests/test_utils.py
"""Test utilities and helpers"""

from unittest.mock import patch

import pyperclip
import pytest

from songlink_cli.core.exceptions import ClipboardError
from songlink_cli.utils import (
    ensure_directory,
    generate_media_filename,
    media_base_name,
    read_clipboard,
    sanitize_file_name,
    write_clipboard,
)


class TestFileNames:
    """Test file name helpers"""

    def test_sanitize_file_name(self):
        """Test each invalid character becomes an underscore"""
        assert sanitize_file_name("AC/DC - Back in Black") == "AC_DC - Back in Black"
        assert sanitize_file_name('a\\b:c*d?e"f<g>h|i') == "a_b_c_d_e_f_g_h_i"
        assert sanitize_file_name("Sigur Rós - Hoppípolla") == "Sigur Rós - Hoppípolla"
        assert sanitize_file_name("") == ""

    def test_media_names(self):
        """Test the artist - song pattern"""
        assert media_base_name("Hello: World", "AC/DC") == "AC_DC - Hello_ World"
        assert generate_media_filename("Caravan", "Duke Ellington", "mp4") == "Duke Ellington - Caravan.mp4"

    def test_ensure_directory(self, temp_dir):
        target = temp_dir / "a" / "b"

        assert ensure_directory(target) == target
        assert target.is_dir()
        ensure_directory(target)


class TestClipboard:
    """Test clipboard access"""

    def test_read_strips_whitespace(self):
        with patch("songlink_cli.utils.clipboard.pyperclip.paste", return_value="  https://x\n"):
            assert read_clipboard() == "https://x"

    def test_read_empty(self):
        with patch("songlink_cli.utils.clipboard.pyperclip.paste", return_value=" \n"):
            with pytest.raises(ClipboardError, match="clipboard is empty"):
                read_clipboard()

    def test_read_unavailable(self):
        with patch("songlink_cli.utils.clipboard.pyperclip.paste",
                   side_effect=pyperclip.PyperclipException("no copy/paste mechanism")):
            with pytest.raises(ClipboardError, match="error reading clipboard"):
                read_clipboard()

    def test_write(self):
        with patch("songlink_cli.utils.clipboard.pyperclip.copy") as mock_copy:
            write_clipboard("https://song.link/i/1")

        mock_copy.assert_called_once_with("https://song.link/i/1")

    def test_write_unavailable(self):
        with patch("songlink_cli.utils.clipboard.pyperclip.copy",
                   side_effect=pyperclip.PyperclipException("no copy/paste mechanism")):
            with pytest.raises(ClipboardError, match="error copying output string to clipboard"):
                write_clipboard("x")
