"""
Web3 token adapter (TokenPort over a deployed contract).

Reads go through eth_call, writes through eth_sendTransaction from an
unlocked node account followed by a wait for the receipt. Every way a
node reports a revert is folded into TransactionRejected:
- ContractLogicError raised while estimating or sending
- a JSON-RPC error whose message mentions "revert"
- a mined receipt with status 0
"""

from __future__ import annotations

import logging
from typing import Any

from web3 import Web3
from web3.exceptions import ContractLogicError, Web3Exception

from tokensuite.adapters.rpc.abi import ERC777_OPERATOR_ABI
from tokensuite.adapters.rpc.chain import Web3ChainAdapter
from tokensuite.core.ports.token import TransactionRejected
from tokensuite.domain.entities import TxReceipt

logger = logging.getLogger(__name__)


def _revert_reason(error: Exception) -> str:
    message = getattr(error, "message", None) or str(error)
    return str(message).strip()


class Web3TokenAdapter:
    """TokenPort implementation for a deployed ERC-777 style contract."""

    def __init__(
        self,
        chain: Web3ChainAdapter,
        address: str,
        abi: list[dict[str, Any]] | None = None,
        symbol: str | None = None,
        decimals: int | None = None,
        receipt_timeout_seconds: float = 120.0,
    ) -> None:
        """
        Initialize adapter.

        Args:
            chain: Chain adapter sharing the Web3 connection
            address: Contract address
            abi: Contract ABI (defaults to the operator fragment)
            symbol: Display symbol override; read from the contract if None
            decimals: Decimals override; read from the contract if None
            receipt_timeout_seconds: Max wait for a transaction receipt
        """
        self._chain = chain
        self._w3 = chain.w3
        self._receipt_timeout = receipt_timeout_seconds
        self._symbol = symbol
        self._decimals = decimals
        self.contract = self._w3.eth.contract(
            address=Web3.to_checksum_address(address),
            abi=abi or ERC777_OPERATOR_ABI,
        )

    @property
    def address(self) -> str:
        return str(self.contract.address)

    @property
    def symbol(self) -> str:
        if self._symbol is None:
            self._symbol = str(self.contract.functions.symbol().call())
        return self._symbol

    @property
    def decimals(self) -> int:
        if self._decimals is None:
            self._decimals = int(self.contract.functions.decimals().call())
        return self._decimals

    # --- Reads ---

    def balance_of(self, holder: str) -> int:
        return int(self.contract.functions.balanceOf(holder).call())

    def total_supply(self) -> int:
        return int(self.contract.functions.totalSupply().call())

    def is_operator_for(self, operator: str, holder: str) -> bool:
        return bool(self.contract.functions.isOperatorFor(operator, holder).call())

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
        return self._transact("mint", (holder, amount, operator_data), sender, gas)

    def authorize_operator(self, operator: str, *, sender: str, gas: int) -> TxReceipt:
        return self._transact("authorizeOperator", (operator,), sender, gas)

    def revoke_operator(self, operator: str, *, sender: str, gas: int) -> TxReceipt:
        return self._transact("revokeOperator", (operator,), sender, gas)

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
        return self._transact(
            "operatorSend",
            (holder, recipient, amount, data, operator_data),
            sender,
            gas,
        )

    # --- Internals ---

    def _transact(
        self,
        method: str,
        args: tuple[Any, ...],
        sender: str,
        gas: int,
    ) -> TxReceipt:
        fn = getattr(self.contract.functions, method)(*args)
        try:
            tx_hash = fn.transact({"from": sender, "gas": gas})
        except ContractLogicError as e:
            self._log_rejection(method, sender, _revert_reason(e))
            raise TransactionRejected(method, _revert_reason(e)) from e
        except (Web3Exception, ValueError) as e:
            if "revert" not in str(e).lower():
                raise
            self._log_rejection(method, sender, _revert_reason(e))
            raise TransactionRejected(method, _revert_reason(e)) from e

        receipt = self._w3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=self._receipt_timeout
        )
        block_number = int(receipt["blockNumber"])
        status = int(receipt["status"])
        self._chain.note_transaction(block_number)

        logger.debug(
            "%s from %s mined in block %d (tx %s, status %d)",
            method,
            sender,
            block_number,
            Web3.to_hex(tx_hash),
            status,
        )

        if status == 0:
            self._log_rejection(method, sender, "status 0")
            raise TransactionRejected(method, "transaction reverted")

        return TxReceipt(
            tx_hash=Web3.to_hex(tx_hash),
            block_number=block_number,
            status=status,
            method=method,
            sender=sender,
        )

    def _log_rejection(self, method: str, sender: str, reason: str) -> None:
        logger.info("%s from %s rejected: %s", method, sender, reason)
