"""
Token contract port.

Protocol-based interface for the operator surface of an ERC-777 style token.
The suite never talks to a contract directly; it goes through this port.

Implementations:
1. Web3TokenAdapter: deployed contract over JSON-RPC (web3.py)
2. DevToken: in-memory token on the dev chain (self-tests)

Read methods return plain values. State-changing methods take the sending
account and a gas limit, and either return a TxReceipt or raise
TransactionRejected. A rejected transaction changes nothing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from tokensuite.domain.entities import TxReceipt


# --- Errors ---


class TokenError(Exception):
    """Base token/chain error."""

    pass


class TransactionRejected(TokenError):
    """
    A state-changing call was reverted by the contract.

    The message always contains "revert" so callers can match on the
    generic signal without depending on reason strings.
    """

    def __init__(self, method: str, reason: str = "") -> None:
        self.method = method
        self.reason = reason
        detail = f" ({reason})" if reason else ""
        super().__init__(f"{method} rejected: revert{detail}")


class BlockWaitTimeout(TokenError):
    """Block containing a submitted transaction did not appear in time."""

    def __init__(self, target_block: int, timeout_seconds: float) -> None:
        self.target_block = target_block
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Block {target_block} not observed within {timeout_seconds:.1f}s"
        )


class SnapshotError(TokenError):
    """Chain snapshot could not be taken or restored."""

    pass


# --- Port Interface ---


class TokenPort(Protocol):
    """Operator surface of the token under test."""

    @property
    def symbol(self) -> str:
        """Display symbol, used in scenario descriptions."""
        ...

    @property
    def decimals(self) -> int:
        """Decimal places between human amounts and base units."""
        ...

    def balance_of(self, holder: str) -> int:
        """Balance of holder in base units."""
        ...

    def total_supply(self) -> int:
        """Total supply in base units."""
        ...

    def is_operator_for(self, operator: str, holder: str) -> bool:
        """True if operator may send on behalf of holder."""
        ...

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

    def authorize_operator(self, operator: str, *, sender: str, gas: int) -> TxReceipt:
        """Make operator an operator for sender."""
        ...

    def revoke_operator(self, operator: str, *, sender: str, gas: int) -> TxReceipt:
        """Remove operator as an operator for sender."""
        ...

    def operator_send(
        self,
        holder: str,
        recipient: str,
        amount: int,
        data: bytes = b"",
        operator_data: bytes = b"",
        *,
        sender: str,
        gas: int,
    ) -> TxReceipt:
        """Move amount base units from holder to recipient on behalf of holder."""
        ...
