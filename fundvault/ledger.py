"""
FundVault ledger: create, update, deposit into and withdraw from vaults
"""

import functools
import logging
import threading
from dataclasses import replace
from typing import Optional

from .authority import AuthorityRegistry
from .chain.clock import BlockClock, Clock
from .chain.transfers import InMemoryTransferLedger, ValueTransferLedger
from .config import DEFAULT_CONTRACT_PRINCIPAL, LedgerConfig
from .errors import ErrorCode, Result, TransferError
from .rules import VaultLimits
from .store import VaultStore
from .vault import Vault, VaultParams, VaultUpdateRecord

logger = logging.getLogger(__name__)


def serialized(method):
    """Run a ledger method while holding the ledger lock"""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self.lock:
            return method(self, *args, **kwargs)
    return wrapper


class FundVault:
    """
    Authority-gated registry of vaults.

    Every operation reads the clock once, runs all of its checks before
    touching the store and returns a Result. The transfer instruction is
    issued after the checks and before the commit, so a failed transfer
    leaves the store unchanged.

    Public operations hold one re-entrant lock from the first check to the
    commit, so concurrent callers (threaded web workers) see them one at a
    time.
    """

    def __init__(
        self,
        store: Optional[VaultStore] = None,
        authority: Optional[AuthorityRegistry] = None,
        transfers: Optional[ValueTransferLedger] = None,
        clock: Optional[Clock] = None,
        limits: Optional[VaultLimits] = None,
        contract_principal: str = DEFAULT_CONTRACT_PRINCIPAL,
    ):
        self.store = store if store is not None else VaultStore()
        self.authority = authority if authority is not None else AuthorityRegistry()
        self.transfers = transfers if transfers is not None else InMemoryTransferLedger()
        self.clock = clock if clock is not None else BlockClock()
        self.limits = limits if limits is not None else VaultLimits.default()
        self.contract_principal = contract_principal
        self.lock = threading.RLock()

    @classmethod
    def from_config(cls, config: LedgerConfig, **collaborators) -> 'FundVault':
        return cls(
            store=VaultStore(config.max_vaults),
            authority=AuthorityRegistry(config.authorities, config.creation_fee),
            contract_principal=config.contract_principal,
            **collaborators
        )

    # Authority administration

    @serialized
    def set_authority_contract(self, principal: str) -> Result:
        return self._logged("set_authority_contract", self.authority.set_authority_contract(principal))

    @serialized
    def set_creation_fee(self, fee: int) -> Result:
        return self._logged("set_creation_fee", self.authority.set_creation_fee(fee))

    # Ledger operations

    @serialized
    def create_vault(self, params: VaultParams, caller: str) -> Result:
        now = self.clock.current_height()

        validation = self.limits.validate_create(params, self.store.count, self.store.max_vaults)
        if not validation.ok:
            return self._logged("create_vault", validation)
        if not self.authority.is_verified_authority(caller):
            return self._rejected("create_vault", ErrorCode.NOT_AUTHORIZED)
        if self.store.exists_by_name(params.name):
            return self._rejected("create_vault", ErrorCode.VAULT_ALREADY_EXISTS)
        authority_contract = self.authority.authority_address()
        if authority_contract is None:
            return self._rejected("create_vault", ErrorCode.AUTHORITY_NOT_VERIFIED)

        if not self._transfer("create_vault", self.authority.creation_fee, caller, authority_contract):
            return Result.failure(ErrorCode.TRANSFER_FAILED)

        vault_id = self.store.reserve_id()
        self.store.insert(vault_id, Vault.create(params, caller, now))

        logger.info("Created vault %d (%s) for %s at height %d", vault_id, params.name, caller, now)
        return Result.success(vault_id)

    @serialized
    def update_vault(self, vault_id: int, name: str, max_deposit: int, min_withdraw: int, caller: str) -> Result:
        now = self.clock.current_height()

        vault = self.store.get(vault_id)
        if vault is None:
            return self._rejected("update_vault", ErrorCode.VAULT_NOT_FOUND)
        if vault.creator != caller:
            return self._rejected("update_vault", ErrorCode.NOT_AUTHORIZED)
        validation = self.limits.validate_update(name, max_deposit, min_withdraw)
        if not validation.ok:
            return self._logged("update_vault", validation)
        owner_id = self.store.find_id_by_name(name)
        if owner_id is not None and owner_id != vault_id:
            return self._rejected("update_vault", ErrorCode.VAULT_ALREADY_EXISTS)

        old_name = vault.name
        vault.name = name
        vault.max_deposit = max_deposit
        vault.min_withdraw = min_withdraw
        vault.last_updated_at = now
        self.store.rename(old_name, name, vault_id)
        self.store.record_update(vault_id, VaultUpdateRecord(name, max_deposit, min_withdraw, now, caller))

        logger.info("Updated vault %d (%s -> %s) at height %d", vault_id, old_name, name, now)
        return Result.success()

    @serialized
    def deposit_to_vault(self, vault_id: int, amount: int, caller: str) -> Result:
        now = self.clock.current_height()

        vault = self.store.get(vault_id)
        if vault is None:
            return self._rejected("deposit_to_vault", ErrorCode.VAULT_NOT_FOUND)
        if amount <= 0:
            return self._rejected("deposit_to_vault", ErrorCode.INVALID_AMOUNT)
        if amount < vault.min_deposit:
            return self._rejected("deposit_to_vault", ErrorCode.DEPOSIT_BELOW_MIN)
        if amount > vault.max_deposit:
            return self._rejected("deposit_to_vault", ErrorCode.DEPOSIT_EXCEEDS_MAX)
        if not vault.status:
            return self._rejected("deposit_to_vault", ErrorCode.INVALID_STATUS)

        if not self._transfer("deposit_to_vault", amount, caller, self.contract_principal):
            return Result.failure(ErrorCode.TRANSFER_FAILED)

        vault.total_balance += amount
        self.store.record_deposit(vault_id, caller, amount, now)

        logger.info("Deposited %d into vault %d from %s, balance %d", amount, vault_id, caller, vault.total_balance)
        return Result.success()

    @serialized
    def withdraw_from_vault(self, vault_id: int, amount: int, recipient: str, caller: str) -> Result:
        now = self.clock.current_height()

        vault = self.store.get(vault_id)
        if vault is None:
            return self._rejected("withdraw_from_vault", ErrorCode.VAULT_NOT_FOUND)
        deposit = self.store.last_deposit(vault_id, caller)
        if deposit is None:
            return self._rejected("withdraw_from_vault", ErrorCode.NOT_AUTHORIZED)
        if amount <= 0:
            return self._rejected("withdraw_from_vault", ErrorCode.INVALID_AMOUNT)
        if recipient == caller:
            return self._rejected("withdraw_from_vault", ErrorCode.INVALID_RECIPIENT)
        if amount < vault.min_withdraw:
            return self._rejected("withdraw_from_vault", ErrorCode.WITHDRAW_BELOW_MIN)
        if amount > vault.max_withdraw:
            return self._rejected("withdraw_from_vault", ErrorCode.WITHDRAW_EXCEEDS_MAX)
        if amount > vault.total_balance:
            return self._rejected("withdraw_from_vault", ErrorCode.INSUFFICIENT_BALANCE)
        if not vault.status:
            return self._rejected("withdraw_from_vault", ErrorCode.INVALID_STATUS)
        if now < vault.lock_expiry(deposit.timestamp):
            return self._rejected("withdraw_from_vault", ErrorCode.LOCK_PERIOD_NOT_EXPIRED)

        # penalty_rate is recorded on the vault but not applied
        penalty = 0

        if not self._transfer("withdraw_from_vault", amount, self.contract_principal, recipient):
            return Result.failure(ErrorCode.TRANSFER_FAILED)

        vault.total_balance -= amount
        self.store.record_withdrawal(vault_id, caller, amount, now, penalty)

        logger.info("Withdrew %d from vault %d to %s, balance %d", amount, vault_id, recipient, vault.total_balance)
        return Result.success()

    # Queries

    @serialized
    def get_vault(self, vault_id: int) -> Optional[Vault]:
        """Copy of the vault record, or None"""
        vault = self.store.get(vault_id)
        return replace(vault) if vault is not None else None

    @serialized
    def get_vault_count(self) -> Result:
        return Result.success(self.store.count)

    @serialized
    def check_vault_existence(self, name: str) -> Result:
        return Result.success(self.store.exists_by_name(name))

    @serialized
    def snapshot(self) -> dict:
        """Persisted state of the store and authority registry"""
        return {
            'store': self.store.to_dict(),
            'authority': self.authority.to_dict(),
        }

    @classmethod
    def restore(cls, snapshot: dict, **collaborators) -> 'FundVault':
        return cls(
            store=VaultStore.from_dict(snapshot['store']),
            authority=AuthorityRegistry.from_dict(snapshot['authority']),
            **collaborators
        )

    def _transfer(self, operation: str, amount: int, sender: str, recipient: str) -> bool:
        try:
            self.transfers.transfer(amount, sender, recipient)
        except TransferError as e:
            logger.warning("%s aborted, transfer of %d from %s to %s failed: %s",
                           operation, amount, sender, recipient, e)
            return False
        return True

    def _rejected(self, operation: str, code: ErrorCode) -> Result:
        return self._logged(operation, Result.failure(code))

    @staticmethod
    def _logged(operation: str, result: Result) -> Result:
        if not result.ok:
            logger.debug("%s rejected: %s", operation, result.value.name)
        return result
