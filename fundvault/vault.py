import json
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional

from cryptography.hazmat.primitives import hashes


class VaultType(Enum):
    SCHOOL = "school"
    COMMUNITY = "community"
    ENDOWMENT = "endowment"


class Currency(Enum):
    STX = "STX"
    USD = "USD"
    BTC = "BTC"


@dataclass
class VaultParams:
    """Creation parameters for a new vault"""
    name: str
    max_deposit: int
    min_withdraw: int
    lock_period: int  # blocks
    penalty_rate: int  # percent, stored only
    approval_thresh: int  # percent, stored only
    vault_type: str
    interest_rate: int  # percent, stored only
    grace_period: int  # blocks
    location: str
    currency: str
    min_deposit: int
    max_withdraw: int

    @classmethod
    def from_dict(cls, data: dict) -> 'VaultParams':
        """Parse request data; numeric fields must be whole numbers, text fields strings"""
        values = {}
        for name in cls.__dataclass_fields__:
            if name in TEXT_FIELDS:
                if not isinstance(data[name], str):
                    raise TypeError(f"{name} must be a string, got {data[name]!r}")
                values[name] = data[name]
            else:
                values[name] = parse_int(data[name], name)
        return cls(**values)


@dataclass
class Vault:
    """Vault record held by the store"""
    name: str
    max_deposit: int
    min_withdraw: int
    lock_period: int
    penalty_rate: int
    approval_thresh: int
    created_at: int
    last_updated_at: int
    creator: str  # principal, never changes
    vault_type: str
    interest_rate: int
    grace_period: int
    location: str
    currency: str
    status: bool
    min_deposit: int
    max_withdraw: int
    total_balance: int = 0

    @classmethod
    def create(cls, params: VaultParams, creator: str, height: int) -> 'Vault':
        """Build a fresh active vault with an empty balance"""
        return cls(
            name=params.name,
            max_deposit=params.max_deposit,
            min_withdraw=params.min_withdraw,
            lock_period=params.lock_period,
            penalty_rate=params.penalty_rate,
            approval_thresh=params.approval_thresh,
            created_at=height,
            last_updated_at=height,
            creator=creator,
            vault_type=params.vault_type,
            interest_rate=params.interest_rate,
            grace_period=params.grace_period,
            location=params.location,
            currency=params.currency,
            status=True,
            min_deposit=params.min_deposit,
            max_withdraw=params.max_withdraw,
            total_balance=0,
        )

    def lock_expiry(self, deposit_height: int) -> int:
        """Height from which a deposit made at deposit_height may be withdrawn"""
        return deposit_height + self.lock_period

    def commitment_hash(self) -> str:
        """Deterministic SHA-256 digest over every vault field"""
        digest = hashes.Hash(hashes.SHA256())
        digest.update(b"FUND_VAULT_V1")
        digest.update(json.dumps(self.to_dict(), sort_keys=True).encode())
        return digest.finalize().hex()

    def to_dict(self) -> dict:
        """Serialize vault to dictionary"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'Vault':
        """Deserialize vault from dictionary"""
        return cls(**data)


@dataclass
class VaultUpdateRecord:
    """Last applied update for a vault"""
    name: str
    max_deposit: int
    min_withdraw: int
    timestamp: int
    updater: str


@dataclass
class DepositLog:
    """Most recent deposit by one principal into one vault"""
    amount: int
    timestamp: int


@dataclass
class WithdrawalLog:
    """Most recent withdrawal by one principal from one vault"""
    amount: int
    timestamp: int
    penalty: int = 0


def find_vault_type(value: str) -> Optional[VaultType]:
    for vault_type in VaultType:
        if vault_type.value == value:
            return vault_type
    return None


def find_currency(value: str) -> Optional[Currency]:
    for currency in Currency:
        if currency.value == value:
            return currency
    return None


TEXT_FIELDS = ("name", "vault_type", "location", "currency")


def parse_int(value, name: str = "value") -> int:
    """Accept ints and decimal integer strings; reject bools, floats and anything else"""
    if isinstance(value, bool):
        raise TypeError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("+-").isdigit():
        return int(value)
    raise ValueError(f"{name} must be an integer, got {value!r}")
