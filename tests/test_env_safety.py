from __future__ import annotations

import os
from unittest.mock import patch

from research_agent.services.env_safety import sanitize_ssl_keylogfile


def test_sanitize_ssl_keylogfile_unsets_unwritable_path():
    with patch.dict(os.environ, {"SSLKEYLOGFILE": "/does-not-exist/keylog.log"}, clear=False):
        with patch("pathlib.Path.exists", return_value=True):
            with patch("builtins.open", side_effect=PermissionError):
                sanitize_ssl_keylogfile()
        assert "SSLKEYLOGFILE" not in os.environ


def test_sanitize_ssl_keylogfile_unsets_missing_directory(tmp_path):
    missing = tmp_path / "nope" / "keylog.log"
    with patch.dict(os.environ, {"SSLKEYLOGFILE": str(missing)}, clear=False):
        sanitize_ssl_keylogfile()
        assert "SSLKEYLOGFILE" not in os.environ


def test_sanitize_ssl_keylogfile_keeps_usable_path(tmp_path):
    keylog = tmp_path / "keylog.log"
    with patch.dict(os.environ, {"SSLKEYLOGFILE": str(keylog)}, clear=False):
        sanitize_ssl_keylogfile()
        assert os.environ.get("SSLKEYLOGFILE") == str(keylog)
