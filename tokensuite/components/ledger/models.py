"""
Ledger component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from tokensuite.domain.entities import TxReceipt


@dataclass(frozen=True)
class MintInput:
    """Input for minting the same amount to every account."""

    accounts: tuple[str, ...]
    minter: str
    amount: str = "10"
    gas: int = 100000
    operator_data: bytes = b"\xca\xfe"


@dataclass(frozen=True)
class MintOutput:
    """Output from a mint round."""

    receipts: tuple[TxReceipt, ...]
    amount_each: Decimal
    total_minted: Decimal


@dataclass(frozen=True)
class LedgerDifference:
    """One entry that differs between two ledger snapshots."""

    key: str  # account address or "totalSupply"
    before: Decimal
    after: Decimal

    def __str__(self) -> str:
        return f"{self.key}: {self.before} -> {self.after}"
