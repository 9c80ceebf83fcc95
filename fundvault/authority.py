import logging
from typing import Iterable, Optional, Set

from .errors import ErrorCode, Result
from .principals import BURN_ADDRESS

logger = logging.getLogger(__name__)

DEFAULT_CREATION_FEE = 1000


class AuthorityRegistry:
    """Verified authorities, the write-once authority contract and the creation fee"""

    def __init__(self, authorities: Iterable[str] = (), creation_fee: int = DEFAULT_CREATION_FEE):
        self._authorities: Set[str] = set(authorities)
        self._authority_contract: Optional[str] = None
        self.creation_fee = creation_fee

    def is_verified_authority(self, principal: str) -> bool:
        return principal in self._authorities

    def authority_address(self) -> Optional[str]:
        return self._authority_contract

    def add_authority(self, principal: str) -> None:
        self._authorities.add(principal)

    def remove_authority(self, principal: str) -> None:
        self._authorities.discard(principal)

    def set_authority_contract(self, principal: str) -> Result:
        """Record the authority contract; only the first call can succeed"""
        if principal == BURN_ADDRESS:
            return Result.failure(ErrorCode.INVALID_AUTHORITY)
        if self._authority_contract is not None:
            return Result.failure(ErrorCode.AUTHORITY_ALREADY_SET)

        self._authority_contract = principal
        logger.info("Authority contract set to %s", principal)
        return Result.success()

    def set_creation_fee(self, fee: int) -> Result:
        """
        Store any integer fee once the authority contract is set.

        Negative fees are accepted here, but transfer ledgers refuse negative
        amounts, so vault creation fails with TRANSFER_FAILED until the fee
        is raised to zero or more.
        """
        if self._authority_contract is None:
            return Result.failure(ErrorCode.AUTHORITY_NOT_SET)

        self.creation_fee = fee
        logger.info("Creation fee set to %d", fee)
        return Result.success()

    def to_dict(self) -> dict:
        return {
            'authorities': sorted(self._authorities),
            'authority_contract': self._authority_contract,
            'creation_fee': self.creation_fee,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'AuthorityRegistry':
        registry = cls(data['authorities'], data['creation_fee'])
        registry._authority_contract = data['authority_contract']
        return registry
