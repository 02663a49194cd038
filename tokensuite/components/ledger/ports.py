"""
Ledger component - Port interfaces.

Assertions only read the ledger; minting also needs the mint call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from tokensuite.domain.entities import TxReceipt


class LedgerReaderPort(Protocol):
    """Read-only view of a token ledger."""

    @property
    def decimals(self) -> int:
        """Decimal places of the token."""
        ...

    def balance_of(self, holder: str) -> int:
        """Balance in base units."""
        ...

    def total_supply(self) -> int:
        """Total supply in base units."""
        ...


class MintablePort(LedgerReaderPort, Protocol):
    """Ledger that accepts owner mints."""

    def mint(
        self,
        holder: str,
        amount: int,
        *,
        sender: str,
        gas: int,
        operator_data: bytes = b"",
    ) -> TxReceipt:
        """Credit amount base units to holder."""
        ...
