import unittest

from fundvault.store import VaultStore
from fundvault.vault import Vault, VaultParams, VaultType, Currency, find_vault_type, find_currency, parse_int


class TestVault(unittest.TestCase):

    def setUp(self):
        """Set up test fixtures"""
        self.params = VaultParams(
            "Alpha", 1_000_000, 100, 30, 5, 50, "school", 10, 7, "SchoolX", "STX", 50, 500_000
        )
        self.vault = Vault.create(self.params, "ST1TEST", 12)

    def test_vault_creation(self):
        """Test a fresh vault copies parameters and starts empty"""
        vault = self.vault
        self.assertEqual(vault.name, "Alpha")
        self.assertEqual(vault.max_deposit, 1_000_000)
        self.assertEqual(vault.vault_type, "school")
        self.assertEqual(vault.currency, "STX")
        self.assertEqual(vault.creator, "ST1TEST")
        self.assertEqual(vault.created_at, 12)
        self.assertEqual(vault.last_updated_at, 12)
        self.assertEqual(vault.total_balance, 0)
        self.assertTrue(vault.status)

    def test_lock_expiry(self):
        """Test lock expiry is measured from the deposit height"""
        self.assertEqual(self.vault.lock_expiry(0), 30)
        self.assertEqual(self.vault.lock_expiry(100), 130)

    def test_commitment_hash(self):
        """Test commitment is deterministic and tracks balance changes"""
        first = self.vault.commitment_hash()
        self.assertEqual(len(first), 64)
        self.assertEqual(first, Vault.from_dict(self.vault.to_dict()).commitment_hash())

        self.vault.total_balance = 10
        self.assertNotEqual(first, self.vault.commitment_hash())

    def test_enum_lookup(self):
        """Test vault type and currency lookups"""
        self.assertEqual(find_vault_type("endowment"), VaultType.ENDOWMENT)
        self.assertIsNone(find_vault_type("School"))
        self.assertEqual(find_currency("BTC"), Currency.BTC)
        self.assertIsNone(find_currency("stx"))

    def test_params_from_dict(self):
        """Test parameters parse from a dictionary and ignore extra keys"""
        data = dict(vars(self.params), caller="ST1TEST")
        self.assertEqual(VaultParams.from_dict(data), self.params)

        del data['currency']
        with self.assertRaises(KeyError):
            VaultParams.from_dict(data)

    def test_params_reject_non_integers(self):
        """Test numeric fields accept ints and integer strings only"""
        self.assertEqual(parse_int(30), 30)
        self.assertEqual(parse_int("1000000"), 1_000_000)
        self.assertEqual(parse_int("-5"), -5)
        for value in (1.9, 0.5, "1.5", "ten", None):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    parse_int(value)
        with self.assertRaises(TypeError):
            parse_int(True)

        data = dict(vars(self.params), lock_period=0.5)
        with self.assertRaises(ValueError):
            VaultParams.from_dict(data)
        data = dict(vars(self.params), name=5)
        with self.assertRaises(TypeError):
            VaultParams.from_dict(data)


class TestVaultStore(unittest.TestCase):

    def setUp(self):
        """Set up test fixtures"""
        self.store = VaultStore()
        params = VaultParams(
            "Alpha", 1_000_000, 100, 30, 5, 50, "school", 10, 7, "SchoolX", "STX", 50, 500_000
        )
        self.vault_id = self.store.reserve_id()
        self.store.insert(self.vault_id, Vault.create(params, "ST1TEST", 0))

    def test_sequential_ids(self):
        """Test ids are handed out sequentially and never reused"""
        self.assertEqual(self.vault_id, 0)
        self.assertEqual(self.store.reserve_id(), 1)
        self.assertEqual(self.store.reserve_id(), 2)
        self.assertEqual(self.store.count, 3)

    def test_lookups(self):
        """Test lookups return None or False for unknown keys"""
        self.assertEqual(self.store.get(0).name, "Alpha")
        self.assertIsNone(self.store.get(7))
        self.assertTrue(self.store.exists_by_name("Alpha"))
        self.assertFalse(self.store.exists_by_name("Beta"))
        self.assertEqual(self.store.find_id_by_name("Alpha"), 0)
        self.assertIsNone(self.store.find_id_by_name("Beta"))
        self.assertIsNone(self.store.last_deposit(0, "ST1TEST"))
        self.assertIsNone(self.store.last_update(0))

    def test_rename(self):
        """Test renaming moves the index entry"""
        self.store.rename("Alpha", "Beta", 0)
        self.assertFalse(self.store.exists_by_name("Alpha"))
        self.assertEqual(self.store.find_id_by_name("Beta"), 0)

    def test_deposit_log_overwrites(self):
        """Test a later deposit replaces the earlier log entry"""
        self.store.record_deposit(0, "ST1TEST", 1_000, 5)
        self.store.record_deposit(0, "ST1TEST", 200, 9)

        log = self.store.last_deposit(0, "ST1TEST")
        self.assertEqual(log.amount, 200)
        self.assertEqual(log.timestamp, 9)
        self.assertIsNone(self.store.last_deposit(0, "ST2OTHER"))

    def test_composite_keys_do_not_collide(self):
        """Test (vault, principal) keys stay distinct where joined strings would not"""
        self.store.record_deposit(1, "1-ST1", 10, 0)
        self.store.record_deposit(11, "ST1", 20, 0)
        self.assertEqual(self.store.last_deposit(1, "1-ST1").amount, 10)
        self.assertEqual(self.store.last_deposit(11, "ST1").amount, 20)

    def test_snapshot_round_trip(self):
        """Test the store survives serialization"""
        self.store.record_deposit(0, "ST1TEST", 1_000, 5)
        self.store.record_withdrawal(0, "ST1TEST", 500, 40)

        restored = VaultStore.from_dict(self.store.to_dict())
        self.assertEqual(restored.count, 1)
        self.assertEqual(restored.get(0), self.store.get(0))
        self.assertEqual(restored.find_id_by_name("Alpha"), 0)
        self.assertEqual(restored.last_deposit(0, "ST1TEST").timestamp, 5)
        self.assertEqual(restored.last_withdrawal(0, "ST1TEST").amount, 500)

    def test_snapshot_rejects_stale_counter(self):
        """Test a snapshot whose counter lags its vaults is refused"""
        data = self.store.to_dict()
        data['next_id'] = 0
        with self.assertRaises(ValueError):
            VaultStore.from_dict(data)

if __name__ == '__main__':
    unittest.main()
