from dataclasses import dataclass
from typing import Optional

from .errors import ErrorCode, Result
from .vault import VaultParams, find_currency, find_vault_type


@dataclass(frozen=True)
class VaultLimits:
    """Field bounds enforced on vault creation and update"""

    max_name_length: int
    max_deposit_ceiling: int
    max_penalty_rate: int  # percent
    max_approval_thresh: int  # percent
    max_interest_rate: int  # percent
    max_grace_period: int
    max_location_length: int

    @classmethod
    def default(cls) -> 'VaultLimits':
        return cls(
            max_name_length=100,
            max_deposit_ceiling=1_000_000_000,
            max_penalty_rate=100,
            max_approval_thresh=100,
            max_interest_rate=20,
            max_grace_period=30,
            max_location_length=100,
        )

    def validate_create(self, params: VaultParams, vault_count: int, max_vaults: int) -> Result:
        """
        Validate creation parameters.

        Checks run in a fixed order and the first violated rule is reported,
        so callers can rely on which error wins when several fields are bad.
        """
        if vault_count >= max_vaults:
            return Result.failure(ErrorCode.MAX_VAULTS_EXCEEDED)

        error = self._check_core_fields(params.name, params.max_deposit, params.min_withdraw)
        if error is not None:
            return Result.failure(error)

        if params.lock_period <= 0:
            return Result.failure(ErrorCode.INVALID_LOCK_PERIOD)
        if not (0 <= params.penalty_rate <= self.max_penalty_rate):
            return Result.failure(ErrorCode.INVALID_PENALTY_RATE)
        if not (0 < params.approval_thresh <= self.max_approval_thresh):
            return Result.failure(ErrorCode.INVALID_APPROVAL_THRESH)
        if find_vault_type(params.vault_type) is None:
            return Result.failure(ErrorCode.INVALID_VAULT_TYPE)
        if not (0 <= params.interest_rate <= self.max_interest_rate):
            return Result.failure(ErrorCode.INVALID_INTEREST_RATE)
        if not (0 <= params.grace_period <= self.max_grace_period):
            return Result.failure(ErrorCode.INVALID_GRACE_PERIOD)
        if not params.location or len(params.location) > self.max_location_length:
            return Result.failure(ErrorCode.INVALID_LOCATION)
        if find_currency(params.currency) is None:
            return Result.failure(ErrorCode.INVALID_CURRENCY)
        if params.min_deposit <= 0:
            return Result.failure(ErrorCode.INVALID_MIN_DEPOSIT)
        if params.max_withdraw <= 0:
            return Result.failure(ErrorCode.INVALID_MAX_WITHDRAW)

        return Result.success(None)

    def validate_update(self, name: str, max_deposit: int, min_withdraw: int) -> Result:
        """Validate the fields an owner may change after creation"""
        error = self._check_core_fields(name, max_deposit, min_withdraw)
        if error is not None:
            return Result.failure(error)
        return Result.success(None)

    def _check_core_fields(self, name: str, max_deposit: int, min_withdraw: int) -> Optional[ErrorCode]:
        if not name or len(name) > self.max_name_length:
            return ErrorCode.INVALID_UPDATE_PARAM
        if not (0 < max_deposit <= self.max_deposit_ceiling):
            return ErrorCode.INVALID_MAX_DEPOSIT
        if min_withdraw <= 0:
            return ErrorCode.INVALID_MIN_WITHDRAW
        return None
