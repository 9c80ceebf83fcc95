from typing import Protocol


class Clock(Protocol):
    def current_height(self) -> int:
        ...


class BlockClock:
    """Manually driven block height that never moves backwards"""

    def __init__(self, height: int = 0):
        if height < 0:
            raise ValueError(f"Block height must be non-negative, got {height}")
        self._height = height

    def current_height(self) -> int:
        return self._height

    def set_height(self, height: int) -> None:
        if height < self._height:
            raise ValueError(f"Block height cannot move back from {self._height} to {height}")
        self._height = height

    def advance(self, blocks: int = 1) -> int:
        if blocks < 0:
            raise ValueError(f"Cannot advance by {blocks} blocks")
        self._height += blocks
        return self._height
