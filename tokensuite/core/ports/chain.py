"""
Chain client port.

Covers what the suite needs from a blockchain client besides the token
itself: the account list, block observation and state snapshots.

Ordering rule: a read issued after wait_for_block() observes every
transaction submitted before it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from tokensuite.domain.entities import Block


class ChainPort(Protocol):
    """Blockchain client interface."""

    @property
    def accounts(self) -> list[str]:
        """Fixed, ordered list of unlocked accounts."""
        ...

    def block_number(self) -> int:
        """Number of the latest block."""
        ...

    def wait_for_block(self) -> Block:
        """
        Block until every submitted transaction is included.

        Returns:
            The latest block once it covers the last submitted transaction.

        Raises:
            BlockWaitTimeout: the block did not appear in time.
        """
        ...

    def snapshot(self) -> str:
        """Record current chain state; returns a snapshot id."""
        ...

    def revert(self, snapshot_id: str) -> None:
        """
        Restore the state recorded by snapshot().

        Snapshots taken after snapshot_id are discarded.

        Raises:
            SnapshotError: unknown or already consumed snapshot id.
        """
        ...
