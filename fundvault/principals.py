"""
Principal key utilities
"""

import hashlib
from ecdsa import SigningKey, SECP256k1, VerifyingKey, BadSignatureError
from ecdsa.keys import MalformedPointError
from typing import Optional, Tuple

# Null address; never a valid authority contract
BURN_ADDRESS = "SP000000000000000000002Q6VF78"

PRINCIPAL_PREFIX = "ST"


class PrincipalKey:
    """SECP256k1 key pair identifying a ledger principal"""

    def __init__(self, private_key: Optional[bytes] = None):
        if private_key:
            self.private_key = SigningKey.from_string(private_key, curve=SECP256k1)
        else:
            self.private_key = SigningKey.generate(curve=SECP256k1)

        self.public_key = self.private_key.get_verifying_key()

    @classmethod
    def from_hex(cls, private_hex: str) -> 'PrincipalKey':
        return cls(bytes.fromhex(private_hex))

    def get_public_key_hex(self) -> str:
        """Get compressed public key in hex format"""
        return self.public_key.to_string("compressed").hex()

    @property
    def principal(self) -> str:
        return principal_from_public_key(self.get_public_key_hex())

    def sign_message(self, message: bytes) -> str:
        """Sign message and return signature in hex"""
        return self.private_key.sign(message).hex()

    @staticmethod
    def verify_signature(message: bytes, signature_hex: str, pubkey_hex: str) -> bool:
        """Verify signature against message and compressed or raw public key"""
        try:
            vk = VerifyingKey.from_string(bytes.fromhex(pubkey_hex), curve=SECP256k1)
            return vk.verify(bytes.fromhex(signature_hex), message)
        except (BadSignatureError, MalformedPointError, ValueError):
            return False

    @staticmethod
    def generate_key_pair() -> Tuple[str, str]:
        """Generate new key pair and return (private_key_hex, public_key_hex)"""
        key = PrincipalKey()
        private_hex = key.private_key.to_string().hex()
        public_hex = key.get_public_key_hex()
        return private_hex, public_hex

    @staticmethod
    def hash160(data: bytes) -> bytes:
        """First 20 bytes of double SHA256; the same on every host, unlike RIPEMD160"""
        return hashlib.sha256(hashlib.sha256(data).digest()).digest()[:20]


def principal_from_public_key(pubkey_hex: str) -> str:
    """Derive the principal address for a compressed public key"""
    return PRINCIPAL_PREFIX + PrincipalKey.hash160(bytes.fromhex(pubkey_hex)).hex().upper()
