import logging
import os
from dataclasses import dataclass, field
from typing import Tuple

from .authority import DEFAULT_CREATION_FEE
from .store import DEFAULT_MAX_VAULTS

DEFAULT_CONTRACT_PRINCIPAL = "ST1FUNDVAULT.fund-vault"


@dataclass(frozen=True)
class LedgerConfig:
    """Runtime settings for a ledger and its HTTP surface"""
    max_vaults: int = DEFAULT_MAX_VAULTS
    creation_fee: int = DEFAULT_CREATION_FEE
    contract_principal: str = DEFAULT_CONTRACT_PRINCIPAL  # holds pooled deposits
    authorities: Tuple[str, ...] = field(default_factory=tuple)
    log_level: str = "INFO"
    secret_key: str = "demo_secret_key_change_in_production"
    port: int = 10000

    @classmethod
    def from_env(cls) -> 'LedgerConfig':
        authorities = os.environ.get("FUNDVAULT_AUTHORITIES", "")
        return cls(
            max_vaults=int(os.environ.get("FUNDVAULT_MAX_VAULTS", DEFAULT_MAX_VAULTS)),
            creation_fee=int(os.environ.get("FUNDVAULT_CREATION_FEE", DEFAULT_CREATION_FEE)),
            contract_principal=os.environ.get("FUNDVAULT_CONTRACT_PRINCIPAL", DEFAULT_CONTRACT_PRINCIPAL),
            authorities=tuple(p.strip() for p in authorities.split(",") if p.strip()),
            log_level=os.environ.get("FUNDVAULT_LOG_LEVEL", "INFO").upper(),
            secret_key=os.environ.get("FUNDVAULT_SECRET_KEY", cls.secret_key),
            port=int(os.environ.get("PORT", 10000)),
        )


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stream handler to the package logger"""
    logger = logging.getLogger("fundvault")
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        logger.addHandler(handler)

    return logger
