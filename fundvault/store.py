from typing import Dict, Optional, Tuple

from .vault import DepositLog, Vault, VaultUpdateRecord, WithdrawalLog

DEFAULT_MAX_VAULTS = 1000

LogKey = Tuple[int, str]  # (vault id, principal)


class VaultStore:
    """Owns vault records, the name index and per-principal deposit/withdrawal logs"""

    def __init__(self, max_vaults: int = DEFAULT_MAX_VAULTS):
        self.max_vaults = max_vaults
        self._next_id = 0
        self._vaults: Dict[int, Vault] = {}
        self._ids_by_name: Dict[str, int] = {}
        self._updates: Dict[int, VaultUpdateRecord] = {}
        self._deposits: Dict[LogKey, DepositLog] = {}
        self._withdrawals: Dict[LogKey, WithdrawalLog] = {}

    @property
    def count(self) -> int:
        """Number of ids handed out so far"""
        return self._next_id

    def reserve_id(self) -> int:
        vault_id = self._next_id
        self._next_id += 1
        return vault_id

    def insert(self, vault_id: int, vault: Vault) -> None:
        self._vaults[vault_id] = vault
        self._ids_by_name[vault.name] = vault_id

    def rename(self, old_name: str, new_name: str, vault_id: int) -> None:
        self._ids_by_name.pop(old_name, None)
        self._ids_by_name[new_name] = vault_id

    def get(self, vault_id: int) -> Optional[Vault]:
        return self._vaults.get(vault_id)

    def exists_by_name(self, name: str) -> bool:
        return name in self._ids_by_name

    def find_id_by_name(self, name: str) -> Optional[int]:
        return self._ids_by_name.get(name)

    def record_update(self, vault_id: int, record: VaultUpdateRecord) -> None:
        self._updates[vault_id] = record

    def last_update(self, vault_id: int) -> Optional[VaultUpdateRecord]:
        return self._updates.get(vault_id)

    def record_deposit(self, vault_id: int, depositor: str, amount: int, at: int) -> None:
        # Replaces any earlier entry for this depositor
        self._deposits[(vault_id, depositor)] = DepositLog(amount, at)

    def last_deposit(self, vault_id: int, depositor: str) -> Optional[DepositLog]:
        return self._deposits.get((vault_id, depositor))

    def record_withdrawal(self, vault_id: int, withdrawer: str, amount: int, at: int, penalty: int = 0) -> None:
        self._withdrawals[(vault_id, withdrawer)] = WithdrawalLog(amount, at, penalty)

    def last_withdrawal(self, vault_id: int, withdrawer: str) -> Optional[WithdrawalLog]:
        return self._withdrawals.get((vault_id, withdrawer))

    def to_dict(self) -> dict:
        """Serialize the persisted layout; composite keys become [vault_id, principal]"""
        return {
            'next_id': self._next_id,
            'max_vaults': self.max_vaults,
            'vaults': {str(vault_id): vault.to_dict() for vault_id, vault in self._vaults.items()},
            'updates': {str(vault_id): vars(record).copy() for vault_id, record in self._updates.items()},
            'deposits': [
                {'key': [vault_id, principal], **vars(log)}
                for (vault_id, principal), log in self._deposits.items()
            ],
            'withdrawals': [
                {'key': [vault_id, principal], **vars(log)}
                for (vault_id, principal), log in self._withdrawals.items()
            ],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'VaultStore':
        store = cls(data['max_vaults'])
        store._next_id = data['next_id']
        for vault_id, vault_data in data['vaults'].items():
            store.insert(int(vault_id), Vault.from_dict(vault_data))
        for vault_id, record in data['updates'].items():
            store.record_update(int(vault_id), VaultUpdateRecord(**record))
        for entry in data['deposits']:
            vault_id, principal = entry['key']
            store.record_deposit(vault_id, principal, entry['amount'], entry['timestamp'])
        for entry in data['withdrawals']:
            vault_id, principal = entry['key']
            store.record_withdrawal(vault_id, principal, entry['amount'], entry['timestamp'], entry['penalty'])

        if store._next_id < len(store._vaults):
            raise ValueError(f"next_id {store._next_id} is behind {len(store._vaults)} stored vaults")
        return store
