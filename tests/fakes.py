# tests/fakes.py

from storage import MemoryStorage


class CountingStorage(MemoryStorage):
    """MemoryStorage that records every write, for asserting what got persisted."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.writes: list[str] = []

    def set(self, key: str, value: bytes) -> None:
        self.writes.append(key)
        super().set(key, value)

    def delete(self, key: str) -> None:
        self.writes.append(f"-{key}")
        super().delete(key)
