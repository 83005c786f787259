from __future__ import annotations

from chatwire.json.reader import JsonTokenReader
from chatwire.json.reader import JsonTokenType

__all__ = ["JsonTokenReader", "JsonTokenType"]
