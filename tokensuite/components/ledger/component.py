"""
Ledger component - Setup and assertion helpers for token scenarios.

Mints starting balances, waits for blocks and asserts balances and total
supply in human units.

Shell Layer - talks to the chain and token ports.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from tokensuite.core.ports.chain import ChainPort
from tokensuite.core.ports.token import TransactionRejected
from tokensuite.domain.entities import Block, LedgerSnapshot
from tokensuite.domain.units import (
    Amount,
    format_amount,
    from_base_units,
    parse_amount,
    to_base_units,
)

from ._impl import diff_snapshots, format_account
from .models import MintInput, MintOutput
from .ports import LedgerReaderPort, MintablePort

logger = logging.getLogger(__name__)

REVERT_SIGNAL = "revert"


# --- Setup ---


def run_mint(input_data: MintInput, token: MintablePort) -> MintOutput:
    """Mint input_data.amount to every account, sent from the minter."""
    amount = parse_amount(input_data.amount)
    base_units = to_base_units(amount, token.decimals)

    receipts = tuple(
        token.mint(
            account,
            base_units,
            sender=input_data.minter,
            gas=input_data.gas,
            operator_data=input_data.operator_data,
        )
        for account in input_data.accounts
    )
    logger.debug(
        "Minted %s to %d accounts from %s",
        amount,
        len(receipts),
        format_account(input_data.minter),
    )

    return MintOutput(
        receipts=receipts,
        amount_each=amount,
        total_minted=amount * len(receipts),
    )


def mint_for_all_accounts(
    chain: ChainPort,
    accounts: Iterable[str],
    token: MintablePort,
    minter: str,
    amount: Amount = "10",
    gas: int = 100000,
) -> MintOutput:
    """Mint amount to every account and wait until the mints are mined."""
    output = run_mint(
        MintInput(accounts=tuple(accounts), minter=minter, amount=str(amount), gas=gas),
        token,
    )
    chain.wait_for_block()
    return output


def get_block(chain: ChainPort) -> Block:
    """Wait until every submitted transaction is included; return the latest block."""
    return chain.wait_for_block()


# --- Assertions ---


def assert_balance(token: LedgerReaderPort, account: str, expected: Amount) -> None:
    """Assert account holds exactly expected (human units)."""
    balance = token.balance_of(account)
    wanted = parse_amount(expected)
    if from_base_units(balance, token.decimals) != wanted:
        raise AssertionError(
            f"Balance of {format_account(account)}: expected {wanted}, "
            f"got {format_amount(balance, token.decimals)}"
        )


def assert_total_supply(token: LedgerReaderPort, expected: Amount) -> None:
    """Assert total supply is exactly expected (human units)."""
    supply = token.total_supply()
    wanted = parse_amount(expected)
    if from_base_units(supply, token.decimals) != wanted:
        raise AssertionError(
            f"Total supply: expected {wanted}, got {format_amount(supply, token.decimals)}"
        )


def snapshot_ledger(
    token: LedgerReaderPort,
    accounts: Iterable[str],
    block_number: int | None = None,
) -> LedgerSnapshot:
    """Capture total supply and the balances of accounts."""
    return LedgerSnapshot(
        total_supply=token.total_supply(),
        balances={account: token.balance_of(account) for account in accounts},
        block_number=block_number,
    )


def assert_ledger_unchanged(
    before: LedgerSnapshot,
    after: LedgerSnapshot,
    decimals: int,
) -> None:
    """Assert two snapshots hold identical balances and total supply."""
    differences = diff_snapshots(before, after, decimals)
    if differences:
        changes = "; ".join(str(d) for d in differences)
        blocks = ""
        if before.block_number is not None and after.block_number is not None:
            blocks = f" between blocks {before.block_number} and {after.block_number}"
        raise AssertionError(f"Ledger changed{blocks}: {changes}")


def assert_supply_matches_balances(token: LedgerReaderPort, accounts: Iterable[str]) -> None:
    """
    Assert the balances of accounts add up to the total supply.

    Only meaningful when every holder is in accounts.
    """
    snapshot = snapshot_ledger(token, accounts)
    if snapshot.observed_sum != snapshot.total_supply:
        raise AssertionError(
            f"Sum of balances {format_amount(snapshot.observed_sum, token.decimals)} "
            f"!= total supply {format_amount(snapshot.total_supply, token.decimals)}"
        )


def expect_revert(action: Callable[[], object]) -> TransactionRejected:
    """
    Run a state-changing call that must be rejected.

    Returns:
        The rejection, for callers that want to inspect it.

    Raises:
        AssertionError: the call succeeded or failed without a revert signal.
    """
    try:
        action()
    except TransactionRejected as e:
        if REVERT_SIGNAL not in str(e):
            raise AssertionError(f"Expected rejection with '{REVERT_SIGNAL}', got: {e}") from e
        logger.debug("Rejected as expected: %s", e)
        return e

    raise AssertionError(f"Expected transaction to be rejected with '{REVERT_SIGNAL}'")
