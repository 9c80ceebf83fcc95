"""
Error kinds and tagged results returned by every ledger operation
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    NOT_AUTHORIZED = 100
    INVALID_MAX_DEPOSIT = 101
    INVALID_MIN_WITHDRAW = 102
    INVALID_LOCK_PERIOD = 103
    INVALID_PENALTY_RATE = 104
    INVALID_APPROVAL_THRESH = 105
    VAULT_ALREADY_EXISTS = 106
    VAULT_NOT_FOUND = 107
    AUTHORITY_NOT_VERIFIED = 109
    INVALID_MIN_DEPOSIT = 110
    INVALID_MAX_WITHDRAW = 111
    INVALID_UPDATE_PARAM = 113  # vault name
    MAX_VAULTS_EXCEEDED = 114
    INVALID_VAULT_TYPE = 115
    INVALID_INTEREST_RATE = 116
    INVALID_GRACE_PERIOD = 117
    INVALID_LOCATION = 118
    INVALID_CURRENCY = 119
    INVALID_STATUS = 120
    INSUFFICIENT_BALANCE = 121
    LOCK_PERIOD_NOT_EXPIRED = 122
    INVALID_AMOUNT = 123
    INVALID_RECIPIENT = 124
    DEPOSIT_EXCEEDS_MAX = 125
    WITHDRAW_BELOW_MIN = 126
    DEPOSIT_BELOW_MIN = 127
    WITHDRAW_EXCEEDS_MAX = 128
    AUTHORITY_ALREADY_SET = 129
    INVALID_AUTHORITY = 130
    AUTHORITY_NOT_SET = 131
    TRANSFER_FAILED = 132


class VaultError(Exception):
    """Raised when a failed result is unwrapped"""

    def __init__(self, code: ErrorCode):
        super().__init__(f"{code.name} ({int(code)})")
        self.code = code


class TransferError(Exception):
    """Raised by a value-transfer ledger that cannot move funds"""


@dataclass(frozen=True)
class Result:
    """Tagged success/error result: value is the payload or an ErrorCode"""
    ok: bool
    value: Any

    @classmethod
    def success(cls, value: Any = True) -> 'Result':
        return cls(True, value)

    @classmethod
    def failure(cls, code: ErrorCode) -> 'Result':
        return cls(False, code)

    def unwrap(self) -> Any:
        """Return the payload or raise VaultError for a failure"""
        if not self.ok:
            raise VaultError(self.value)
        return self.value

    def to_dict(self) -> dict:
        if self.ok:
            return {'success': True, 'value': self.value}
        return {'success': False, 'error': self.value.name, 'code': int(self.value)}
