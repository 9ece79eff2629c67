from __future__ import annotations

import os
from pathlib import Path

from loguru import logger

SSL_KEYLOG_VAR = "SSLKEYLOGFILE"


def _keylog_path_usable(raw_path: str) -> bool:
    path = Path(raw_path)
    if not path.parent.exists():
        return False
    try:
        # Append mode checks writability without truncating.
        with open(path, "a", encoding="utf-8"):
            pass
    except OSError:
        return False
    return True


def sanitize_ssl_keylogfile() -> None:
    """Drop SSLKEYLOGFILE from the environment when it cannot be written.

    httpx, openai and tavily all build an SSL context on first request, and an
    unwritable key log path makes that fail before any search or model call.
    """
    raw_path = os.getenv(SSL_KEYLOG_VAR, "").strip()
    if not raw_path:
        return
    if not _keylog_path_usable(raw_path):
        logger.warning(f"Ignoring unusable {SSL_KEYLOG_VAR}={raw_path!r}")
        os.environ.pop(SSL_KEYLOG_VAR, None)
