"""
Ledger helpers - pure functions.

Functional Core - no chain access.
"""

from __future__ import annotations

from tokensuite.domain.entities import LedgerSnapshot
from tokensuite.domain.units import from_base_units

from .models import LedgerDifference

ACCOUNT_LABEL_LENGTH = 8
TOTAL_SUPPLY_KEY = "totalSupply"


def format_account(account: str) -> str:
    """Short account label for test descriptions ("0x1a2b3c")."""
    return account[:ACCOUNT_LABEL_LENGTH]


def diff_snapshots(
    before: LedgerSnapshot,
    after: LedgerSnapshot,
    decimals: int,
) -> list[LedgerDifference]:
    """List every account (and total supply) whose value changed."""
    differences: list[LedgerDifference] = []

    if before.total_supply != after.total_supply:
        differences.append(
            LedgerDifference(
                key=TOTAL_SUPPLY_KEY,
                before=from_base_units(before.total_supply, decimals),
                after=from_base_units(after.total_supply, decimals),
            )
        )

    for account in sorted(set(before.balances) | set(after.balances)):
        old = before.balances.get(account, 0)
        new = after.balances.get(account, 0)
        if old != new:
            differences.append(
                LedgerDifference(
                    key=account,
                    before=from_base_units(old, decimals),
                    after=from_base_units(new, decimals),
                )
            )

    return differences
