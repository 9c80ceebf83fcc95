"""
Native currency transfers (Python implementation)
The ledger instructs transfers here but never moves funds itself
"""

import logging
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional, Protocol

from ..errors import TransferError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transfer:
    """One executed native transfer"""
    amount: int
    sender: str
    recipient: str


class ValueTransferLedger(Protocol):
    def transfer(self, amount: int, sender: str, recipient: str) -> None:
        """Move amount from sender to recipient or raise TransferError"""
        ...


class InMemoryTransferLedger:
    """
    Records every transfer in order.

    Without starting balances every principal is treated as funded; with
    them, a sender that cannot cover the amount makes the transfer fail.
    """

    def __init__(self, balances: Optional[Dict[str, int]] = None):
        self._balances = dict(balances) if balances is not None else None
        self._history: List[Transfer] = []

    def balance_of(self, principal: str) -> int:
        if self._balances is None:
            raise TransferError("Balances are not tracked by this ledger")
        return self._balances.get(principal, 0)

    def transfer(self, amount: int, sender: str, recipient: str) -> None:
        if amount < 0:
            raise TransferError(f"Negative transfer amount {amount}")
        if sender == recipient:
            raise TransferError(f"Sender and recipient are both {sender}")

        if self._balances is not None:
            sender_balance = self._balances.get(sender, 0)
            if sender_balance < amount:
                raise TransferError(f"{sender} holds {sender_balance}, needs {amount}")
            self._balances[sender] = sender_balance - amount
            self._balances[recipient] = self._balances.get(recipient, 0) + amount

        self._history.append(Transfer(amount, sender, recipient))
        logger.debug("Transferred %d from %s to %s", amount, sender, recipient)

    def get_transfer_history(self) -> List[dict]:
        """Get transfers as dictionaries, oldest first"""
        return [asdict(t) for t in self._history]

    @property
    def transfers(self) -> List[Transfer]:
        return list(self._history)
