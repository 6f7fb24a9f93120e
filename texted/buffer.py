"""The text buffer that texted scripts edit."""

from __future__ import annotations


class Buffer:
    """A text buffer with a cursor (point), a mark and the last search match.

    Positions are 1-based: position 1 is before the first character.
    """

    def __init__(self, content: str = "") -> None:
        self._content = content
        self.point = 1
        self.mark = 1
        self.last_search_match = ""
        self.last_search_start = 0
        self.last_search_end = 0

    def __str__(self) -> str:
        return self._content

    def __len__(self) -> int:
        return len(self._content)

    def __repr__(self) -> str:
        return f"Buffer({self._content!r}, point={self.point}, mark={self.mark})"

    def insert(self, text: str) -> None:
        """Insert text at point and move point past it."""
        content = self._content
        if self.point <= 1:
            self._content = text + content
        elif self.point > len(content) + 1:
            self._content = content + text
        else:
            cut = self.point - 1
            self._content = content[:cut] + text + content[cut:]
        self.point += len(text)