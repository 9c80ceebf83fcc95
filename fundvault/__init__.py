"""
FundVault - authority-gated vault ledger
Deposits are locked per vault and withdrawn under single-owner rules
"""

from .errors import ErrorCode, Result, VaultError, TransferError
from .vault import Vault, VaultParams, VaultType, Currency
from .rules import VaultLimits
from .authority import AuthorityRegistry
from .store import VaultStore
from .ledger import FundVault

__version__ = "0.1.0"
__all__ = [
    "ErrorCode",
    "Result",
    "VaultError",
    "TransferError",
    "Vault",
    "VaultParams",
    "VaultType",
    "Currency",
    "VaultLimits",
    "AuthorityRegistry",
    "VaultStore",
    "FundVault"
]
