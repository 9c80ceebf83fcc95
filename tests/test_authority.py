import unittest

from fundvault.authority import AuthorityRegistry
from fundvault.errors import ErrorCode
from fundvault.principals import BURN_ADDRESS


class TestAuthorityRegistry(unittest.TestCase):

    def setUp(self):
        """Set up test fixtures"""
        self.registry = AuthorityRegistry(["ST1TEST"])

    def test_verified_authority(self):
        """Test membership checks"""
        self.assertTrue(self.registry.is_verified_authority("ST1TEST"))
        self.assertFalse(self.registry.is_verified_authority("ST2FAKE"))

        self.registry.add_authority("ST2FAKE")
        self.assertTrue(self.registry.is_verified_authority("ST2FAKE"))
        self.registry.remove_authority("ST2FAKE")
        self.assertFalse(self.registry.is_verified_authority("ST2FAKE"))

    def test_set_authority_contract(self):
        """Test the authority contract is recorded"""
        result = self.registry.set_authority_contract("ST2TEST")
        self.assertTrue(result.ok)
        self.assertTrue(result.value)
        self.assertEqual(self.registry.authority_address(), "ST2TEST")

    def test_rejects_burn_address(self):
        """Test the burn address is never accepted"""
        result = self.registry.set_authority_contract(BURN_ADDRESS)
        self.assertFalse(result.ok)
        self.assertEqual(result.value, ErrorCode.INVALID_AUTHORITY)
        self.assertIsNone(self.registry.authority_address())

    def test_contract_is_write_once(self):
        """Test a second call fails, even with the same address"""
        self.registry.set_authority_contract("ST2TEST")

        same = self.registry.set_authority_contract("ST2TEST")
        other = self.registry.set_authority_contract("ST3OTHER")
        self.assertEqual(same.value, ErrorCode.AUTHORITY_ALREADY_SET)
        self.assertEqual(other.value, ErrorCode.AUTHORITY_ALREADY_SET)
        self.assertEqual(self.registry.authority_address(), "ST2TEST")

    def test_creation_fee(self):
        """Test the fee can only change once the contract is set"""
        result = self.registry.set_creation_fee(2000)
        self.assertFalse(result.ok)
        self.assertEqual(result.value, ErrorCode.AUTHORITY_NOT_SET)
        self.assertEqual(self.registry.creation_fee, 1000)

        self.registry.set_authority_contract("ST2TEST")
        self.assertTrue(self.registry.set_creation_fee(0).ok)
        self.assertEqual(self.registry.creation_fee, 0)

    def test_snapshot_round_trip(self):
        """Test registry state survives serialization"""
        self.registry.set_authority_contract("ST2TEST")
        self.registry.set_creation_fee(2500)

        restored = AuthorityRegistry.from_dict(self.registry.to_dict())
        self.assertTrue(restored.is_verified_authority("ST1TEST"))
        self.assertEqual(restored.authority_address(), "ST2TEST")
        self.assertEqual(restored.creation_fee, 2500)
        self.assertFalse(restored.set_authority_contract("ST9NEW").ok)

if __name__ == '__main__':
    unittest.main()
