# history.py
"""Expression history for the interactive front ends."""

from typing import List


class ExpressionHistory:
    """Most recent expressions, oldest first, without duplicates.

    Adding an expression that is already present moves it to the end. When the
    history grows past ``size`` the oldest entries are dropped.
    """

    def __init__(self, size: int = 25):
        if size < 0:
            raise ValueError("History size cannot be negative")
        self.size = size
        self._entries: List[str] = []

    def add(self, text: str) -> None:
        if text in self._entries:
            self._entries.remove(text)
        self._entries.append(text)
        self._trim()

    def resize(self, size: int) -> None:
        if size < 0:
            raise ValueError("History size cannot be negative")
        self.size = size
        self._trim()

    def _trim(self) -> None:
        while len(self._entries) > self.size:
            self._entries.pop(0)

    def entries(self) -> List[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
