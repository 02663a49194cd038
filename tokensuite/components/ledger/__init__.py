"""
Ledger component - Minting, block waits and ledger assertions.
"""

from ._impl import diff_snapshots, format_account
from .component import (
    assert_balance,
    assert_ledger_unchanged,
    assert_supply_matches_balances,
    assert_total_supply,
    expect_revert,
    get_block,
    mint_for_all_accounts,
    run_mint,
    snapshot_ledger,
)
from .models import LedgerDifference, MintInput, MintOutput
from .ports import LedgerReaderPort, MintablePort

__all__ = [
    # Entry points
    "run_mint",
    "mint_for_all_accounts",
    "get_block",
    # Assertions
    "assert_balance",
    "assert_total_supply",
    "assert_ledger_unchanged",
    "assert_supply_matches_balances",
    "expect_revert",
    # Helpers
    "format_account",
    "diff_snapshots",
    "snapshot_ledger",
    # Models
    "MintInput",
    "MintOutput",
    "LedgerDifference",
    # Ports
    "LedgerReaderPort",
    "MintablePort",
]
