from __future__ import annotations

import logging
from typing import List

log = logging.getLogger(__name__)


def decode_text(data: bytes) -> str:
    """Decode photometric file bytes; UTF-8 first, Latin-1 for legacy files."""
    if data.startswith(b"\xef\xbb\xbf"):
        data = data[3:]
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        log.debug("input is not valid UTF-8, decoding as Latin-1")
        return data.decode("latin-1")


def split_lines(text: str) -> List[str]:
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
