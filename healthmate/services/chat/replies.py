"""
Reply lookup for the chat channel.

Replies are precomposed and keyed on the exact text the user sent; anything
that is not in the table gets the generic assistant greeting.
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from ...config import DATA_DIR
from ..content import load_yaml

REPLIES_FILE = DATA_DIR / "replies.yaml"


class ReplyResolver:
    def __init__(self, replies: Mapping[str, str], fallback: str) -> None:
        if not fallback:
            raise ValueError("Fallback reply must be a non-empty string")
        self._replies = MappingProxyType(dict(replies))
        self.fallback = fallback

    @classmethod
    def from_file(cls, path: Path = REPLIES_FILE) -> "ReplyResolver":
        data = load_yaml(path)
        replies = {str(key): str(value) for key, value in (data.get("replies") or {}).items() if value}
        return cls(replies, str(data.get("fallback") or ""))

    @property
    def replies(self) -> Mapping[str, str]:
        return self._replies

    def resolve(self, user_text: str) -> str:
        # Exact match only; no trimming or case folding.
        return self._replies.get(user_text, self.fallback)


resolver = ReplyResolver.from_file()


def resolve(user_text: str) -> str:
    return resolver.resolve(user_text)


__all__ = ["REPLIES_FILE", "ReplyResolver", "resolve", "resolver"]
