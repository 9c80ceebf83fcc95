"""
Chain-side collaborators: native value transfers and block height
"""

from .transfers import ValueTransferLedger, InMemoryTransferLedger, Transfer
from .clock import Clock, BlockClock

__all__ = [
    "ValueTransferLedger",
    "InMemoryTransferLedger",
    "Transfer",
    "Clock",
    "BlockClock"
]
