"""
Dev Chain Adapter (ChainPort + TokenPort implementation).

In-memory chain and operator token for development and for testing the
suite itself. No node, no EVM, no signing.

Production runs against a deployed contract through the web3 adapters;
this provides the same observable behavior in-process.

Key behaviors:
- Deterministic accounts derived from their index
- Every transaction, including a rejected one, mines one block
- Rejected transactions leave balances and operators untouched
- snapshot()/revert() copy token state, like evm_snapshot/evm_revert
- Reason strings are fixed (see REVERT_* constants)
"""

from __future__ import annotations

import copy
import hashlib
import logging
from dataclasses import dataclass, field

from tokensuite.core.ports.token import SnapshotError, TransactionRejected
from tokensuite.domain.entities import ZERO_ADDRESS, Block, TxReceipt
from tokensuite.domain.units import DEFAULT_DECIMALS

logger = logging.getLogger(__name__)

REVERT_NOT_OWNER = "caller is not the owner"
REVERT_SELF_OPERATOR = "cannot authorize yourself as an operator"
REVERT_SELF_REVOKE = "cannot revoke yourself as an operator"
REVERT_NOT_OPERATOR = "caller is not an operator for holder"
REVERT_INSUFFICIENT_BALANCE = "insufficient balance"
REVERT_ZERO_ADDRESS = "cannot send to the zero address"
REVERT_OUT_OF_GAS = "out of gas"


def dev_address(index: int) -> str:
    """Deterministic 20-byte hex address for account index."""
    digest = hashlib.sha256(f"tokensuite-dev-account-{index}".encode()).hexdigest()
    return "0x" + digest[:40]


def _hash(prefix: str, number: int) -> str:
    return "0x" + hashlib.sha256(f"{prefix}-{number}".encode()).hexdigest()


@dataclass
class TokenState:
    """Mutable contract storage of a DevToken."""

    balances: dict[str, int] = field(default_factory=dict)
    operators: set[tuple[str, str]] = field(default_factory=set)  # (operator, holder)
    total_supply: int = 0


class DevChain:
    """
    In-memory chain (ChainPort).

    Tokens deployed with deploy_token() are included in snapshots.
    """

    def __init__(self, num_accounts: int = 10) -> None:
        if num_accounts < 1:
            raise ValueError("Dev chain needs at least one account")
        self._accounts = [dev_address(i) for i in range(num_accounts)]
        self._block_number = 0
        self._tx_count = 0
        self._tokens: list[DevToken] = []
        self._snapshots: dict[str, tuple[int, list[TokenState]]] = {}
        self._snapshot_seq = 0

    @property
    def accounts(self) -> list[str]:
        return list(self._accounts)

    def block_number(self) -> int:
        return self._block_number

    def wait_for_block(self) -> Block:
        # Transactions are mined synchronously, the latest block already covers them
        return Block(
            number=self._block_number,
            hash=_hash("block", self._block_number),
            timestamp=self._block_number,
        )

    def snapshot(self) -> str:
        self._snapshot_seq += 1
        snapshot_id = hex(self._snapshot_seq)
        states = [copy.deepcopy(token.state) for token in self._tokens]
        self._snapshots[snapshot_id] = (self._block_number, states)
        logger.debug("Dev chain snapshot %s at block %d", snapshot_id, self._block_number)
        return snapshot_id

    def revert(self, snapshot_id: str) -> None:
        if snapshot_id not in self._snapshots:
            raise SnapshotError(f"Unknown snapshot id: {snapshot_id}")

        block_number, states = self._snapshots[snapshot_id]
        # Tokens deployed after the snapshot keep their state
        for token, state in zip(self._tokens, states):
            token.state = copy.deepcopy(state)
        self._block_number = block_number

        # Like evm_revert: this snapshot and every later one are consumed
        seq = int(snapshot_id, 16)
        for key in [k for k in self._snapshots if int(k, 16) >= seq]:
            del self._snapshots[key]
        logger.debug("Dev chain reverted to snapshot %s", snapshot_id)

    def deploy_token(
        self,
        owner: str | None = None,
        symbol: str = "DEV",
        decimals: int = DEFAULT_DECIMALS,
        token_class: type[DevToken] | None = None,
    ) -> DevToken:
        """
        Deploy a fresh token; owner defaults to the first account.

        token_class swaps in a DevToken subclass, e.g. one that breaks an
        operator rule on purpose.
        """
        cls = token_class or DevToken
        token = cls(self, owner or self._accounts[0], symbol=symbol, decimals=decimals)
        self._tokens.append(token)
        self._mine("deploy", token.owner)
        return token

    def _mine(self, method: str, sender: str, status: int = 1) -> TxReceipt:
        self._tx_count += 1
        self._block_number += 1
        receipt = TxReceipt(
            tx_hash=_hash("tx", self._tx_count),
            block_number=self._block_number,
            status=status,
            method=method,
            sender=sender,
        )
        logger.debug(
            "Dev chain mined %s from %s in block %d (status=%d)",
            method,
            sender,
            receipt.block_number,
            status,
        )
        return receipt


class DevToken:
    """
    In-memory operator token (TokenPort).

    Operator rules:
    - every holder is an operator for itself, permanently
    - a holder cannot authorize or revoke itself
    - operator_send requires is_operator_for(sender, holder)
    """

    def __init__(
        self,
        chain: DevChain,
        owner: str,
        symbol: str = "DEV",
        decimals: int = DEFAULT_DECIMALS,
    ) -> None:
        self._chain = chain
        self.owner = owner
        self._symbol = symbol
        self._decimals = decimals
        self.state = TokenState()

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def decimals(self) -> int:
        return self._decimals

    # --- Reads ---

    def balance_of(self, holder: str) -> int:
        return self.state.balances.get(holder, 0)

    def total_supply(self) -> int:
        return self.state.total_supply

    def is_operator_for(self, operator: str, holder: str) -> bool:
        return operator == holder or (operator, holder) in self.state.operators

    # --- Transactions ---

    def mint(
        self,
        holder: str,
        amount: int,
        *,
        sender: str,
        gas: int,
        operator_data: bytes = b"",
    ) -> TxReceipt:
        self._check_gas("mint", sender, gas)
        if sender != self.owner:
            self._reject("mint", sender, REVERT_NOT_OWNER)
        if holder == ZERO_ADDRESS:
            self._reject("mint", sender, REVERT_ZERO_ADDRESS)

        self.state.balances[holder] = self.balance_of(holder) + amount
        self.state.total_supply += amount
        return self._chain._mine("mint", sender)

    def authorize_operator(self, operator: str, *, sender: str, gas: int) -> TxReceipt:
        self._check_gas("authorizeOperator", sender, gas)
        if operator == sender:
            self._reject("authorizeOperator", sender, REVERT_SELF_OPERATOR)

        self.state.operators.add((operator, sender))
        return self._chain._mine("authorizeOperator", sender)

    def revoke_operator(self, operator: str, *, sender: str, gas: int) -> TxReceipt:
        self._check_gas("revokeOperator", sender, gas)
        if operator == sender:
            self._reject("revokeOperator", sender, REVERT_SELF_REVOKE)

        self.state.operators.discard((operator, sender))
        return self._chain._mine("revokeOperator", sender)

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
        self._check_gas("operatorSend", sender, gas)
        if not self.is_operator_for(sender, holder):
            self._reject("operatorSend", sender, REVERT_NOT_OPERATOR)
        if recipient == ZERO_ADDRESS:
            self._reject("operatorSend", sender, REVERT_ZERO_ADDRESS)
        if self.balance_of(holder) < amount:
            self._reject("operatorSend", sender, REVERT_INSUFFICIENT_BALANCE)

        self.state.balances[holder] = self.balance_of(holder) - amount
        self.state.balances[recipient] = self.balance_of(recipient) + amount
        return self._chain._mine("operatorSend", sender)

    # --- Internals ---

    def _check_gas(self, method: str, sender: str, gas: int) -> None:
        if gas <= 0:
            self._reject(method, sender, REVERT_OUT_OF_GAS)

    def _reject(self, method: str, sender: str, reason: str) -> None:
        # A reverted transaction still occupies a block
        self._chain._mine(method, sender, status=0)
        logger.info("Dev token rejected %s from %s: %s", method, sender, reason)
        raise TransactionRejected(method, reason)
