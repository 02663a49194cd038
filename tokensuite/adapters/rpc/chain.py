"""
Web3 chain adapter (ChainPort over JSON-RPC).

Works against any node that exposes unlocked accounts through
eth_accounts and supports evm_snapshot/evm_revert (ganache, hardhat,
anvil).
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

from web3 import Web3
from web3.providers.rpc import HTTPProvider

from tokensuite.core.ports.token import BlockWaitTimeout, SnapshotError
from tokensuite.domain.entities import Block

logger = logging.getLogger(__name__)


class Web3ChainAdapter:
    """
    ChainPort implementation backed by web3.py.

    Token adapters report the block of every mined transaction through
    note_transaction(); wait_for_block() polls until that block is the
    latest one or later.
    """

    def __init__(
        self,
        w3: Web3,
        max_accounts: int | None = None,
        block_timeout_seconds: float = 30.0,
        poll_interval_seconds: float = 0.1,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize adapter.

        Args:
            w3: Connected Web3 instance
            max_accounts: Use only the first N node accounts
            block_timeout_seconds: Upper bound for wait_for_block()
            poll_interval_seconds: Delay between block number polls
        """
        self.w3 = w3
        self._max_accounts = max_accounts
        self._block_timeout = block_timeout_seconds
        self._poll_interval = poll_interval_seconds
        self._sleep = sleep
        self._clock = clock
        self._accounts: list[str] | None = None
        self._pending_block = 0

    @classmethod
    def from_rpc_url(cls, rpc_url: str, **kwargs: Any) -> Web3ChainAdapter:
        """Connect to an HTTP JSON-RPC endpoint."""
        w3 = Web3(HTTPProvider(rpc_url))
        if not w3.is_connected():
            raise ConnectionError(f"Cannot connect to JSON-RPC endpoint {rpc_url}")
        logger.info("Connected to %s (chain id %s)", rpc_url, w3.eth.chain_id)
        return cls(w3, **kwargs)

    @property
    def accounts(self) -> list[str]:
        if self._accounts is None:
            accounts = list(self.w3.eth.accounts)
            if self._max_accounts is not None:
                accounts = accounts[: self._max_accounts]
            self._accounts = accounts
        return list(self._accounts)

    def block_number(self) -> int:
        return int(self.w3.eth.block_number)

    def note_transaction(self, block_number: int) -> None:
        """Record the block a submitted transaction was mined in."""
        self._pending_block = max(self._pending_block, block_number)

    def wait_for_block(self) -> Block:
        deadline = self._clock() + self._block_timeout
        while self.block_number() < self._pending_block:
            if self._clock() >= deadline:
                raise BlockWaitTimeout(self._pending_block, self._block_timeout)
            self._sleep(self._poll_interval)

        block = self.w3.eth.get_block("latest")
        return Block(
            number=int(block["number"]),
            hash=Web3.to_hex(block["hash"]) if block.get("hash") is not None else None,
            timestamp=int(block["timestamp"]),
        )

    def snapshot(self) -> str:
        response = self.w3.provider.make_request("evm_snapshot", [])
        if "error" in response or response.get("result") is None:
            raise SnapshotError(f"evm_snapshot failed: {response.get('error')}")
        snapshot_id = response["result"]
        logger.debug("Took snapshot %s", snapshot_id)
        return str(snapshot_id)

    def revert(self, snapshot_id: str) -> None:
        response = self.w3.provider.make_request("evm_revert", [snapshot_id])
        if "error" in response or not response.get("result"):
            raise SnapshotError(f"evm_revert({snapshot_id}) failed: {response.get('error')}")
        # Blocks past the snapshot are gone
        self._pending_block = min(self._pending_block, self.block_number())
        logger.debug("Reverted to snapshot %s", snapshot_id)
