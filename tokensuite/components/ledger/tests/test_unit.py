"""
Ledger component unit tests.

Minting, block waits and ledger assertions against in-memory ports.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from tokensuite.components.ledger import (
    LedgerDifference,
    MintInput,
    assert_balance,
    assert_ledger_unchanged,
    assert_supply_matches_balances,
    assert_total_supply,
    diff_snapshots,
    expect_revert,
    format_account,
    get_block,
    mint_for_all_accounts,
    run_mint,
    snapshot_ledger,
)
from tokensuite.core.ports.token import TokenError, TransactionRejected
from tokensuite.domain.entities import Block, LedgerSnapshot, TxReceipt

ALICE = "0xaaaa000000000000000000000000000000000001"
BOB = "0xbbbb000000000000000000000000000000000002"
CAROL = "0xcccc000000000000000000000000000000000003"

# --- Mock Ports ---


class MockToken:
    """Ledger that records mints; six decimals keeps numbers readable."""

    def __init__(self, decimals: int = 6) -> None:
        self.decimals = decimals
        self.balances: dict[str, int] = {}
        self.supply = 0
        self.mints: list[tuple[str, int, str, int, bytes]] = []

    def balance_of(self, holder: str) -> int:
        return self.balances.get(holder, 0)

    def total_supply(self) -> int:
        return self.supply

    def mint(self, holder, amount, *, sender, gas, operator_data=b""):
        self.mints.append((holder, amount, sender, gas, operator_data))
        self.balances[holder] = self.balance_of(holder) + amount
        self.supply += amount
        return TxReceipt(tx_hash=f"0x{len(self.mints):02x}", block_number=len(self.mints))


class MockChain:
    """Counts block waits."""

    def __init__(self) -> None:
        self.waits = 0

    def wait_for_block(self) -> Block:
        self.waits += 1
        return Block(number=7, hash="0x07")


@pytest.fixture
def token() -> MockToken:
    return MockToken()


@pytest.fixture
def chain() -> MockChain:
    return MockChain()


# --- Minting ---


class TestMint:
    """Test minting starting balances."""

    def test_run_mint_credits_every_account(self, token: MockToken) -> None:
        output = run_mint(MintInput(accounts=(ALICE, BOB, CAROL), minter=ALICE), token)

        assert len(output.receipts) == 3
        assert output.amount_each == Decimal("10")
        assert output.total_minted == Decimal("30")
        assert token.balance_of(BOB) == 10_000_000
        assert token.total_supply() == 30_000_000

    def test_run_mint_passes_sender_gas_and_data(self, token: MockToken) -> None:
        run_mint(MintInput(accounts=(BOB,), minter=ALICE, amount="0.5", gas=90000), token)
        assert token.mints == [(BOB, 500_000, ALICE, 90000, b"\xca\xfe")]

    def test_mint_for_all_accounts_waits_once(self, token: MockToken, chain: MockChain) -> None:
        output = mint_for_all_accounts(chain, [ALICE, BOB], token, ALICE, "10", 100000)

        assert chain.waits == 1
        assert output.total_minted == Decimal("20")
        assert [m[3] for m in token.mints] == [100000, 100000]

    def test_float_amount_refused(self, token: MockToken, chain: MockChain) -> None:
        """Floats cannot hold 1.12 exactly."""
        with pytest.raises(TypeError):
            run_mint(MintInput(accounts=(ALICE,), minter=ALICE, amount=1.12), token)
        assert token.mints == []

    def test_get_block(self, chain: MockChain) -> None:
        block = get_block(chain)
        assert block.number == 7
        assert chain.waits == 1


# --- Assertions ---


class TestAssertions:
    """Test balance and supply assertions."""

    def test_assert_balance_exact(self, token: MockToken) -> None:
        token.balances[ALICE] = 8_880_000
        assert_balance(token, ALICE, "8.88")
        assert_balance(token, ALICE, Decimal("8.880"))

    def test_assert_balance_mismatch(self, token: MockToken) -> None:
        token.balances[ALICE] = 10_000_000
        with pytest.raises(AssertionError) as exc:
            assert_balance(token, ALICE, "8.88")
        assert str(exc.value) == f"Balance of {format_account(ALICE)}: expected 8.88, got 10"

    def test_assert_balance_one_base_unit_off(self, token: MockToken) -> None:
        token.balances[ALICE] = 8_880_001
        with pytest.raises(AssertionError, match="got 8.880001"):
            assert_balance(token, ALICE, "8.88")

    def test_assert_total_supply(self, token: MockToken) -> None:
        token.supply = 40_000_000
        assert_total_supply(token, 40)
        with pytest.raises(AssertionError, match="Total supply: expected 39, got 40"):
            assert_total_supply(token, "39")

    def test_supply_matches_balances(self, token: MockToken) -> None:
        token.balances = {ALICE: 3, BOB: 4}
        token.supply = 7
        assert_supply_matches_balances(token, [ALICE, BOB])

        token.supply = 8
        with pytest.raises(
            AssertionError, match="Sum of balances 0.000007 != total supply 0.000008"
        ):
            assert_supply_matches_balances(token, [ALICE, BOB])


# --- Snapshots ---


class TestLedgerSnapshots:
    """Test snapshot diffs."""

    def test_snapshot_ledger(self, token: MockToken) -> None:
        token.balances = {ALICE: 5}
        token.supply = 5
        snap = snapshot_ledger(token, [ALICE, BOB], block_number=3)

        assert snap.balances == {ALICE: 5, BOB: 0}
        assert snap.total_supply == 5
        assert snap.block_number == 3
        assert snap.observed_sum == 5

    def test_unchanged(self) -> None:
        snap = LedgerSnapshot(total_supply=10, balances={ALICE: 10})
        assert diff_snapshots(snap, snap, 6) == []
        assert_ledger_unchanged(snap, snap, 6)

    def test_diff_lists_supply_then_accounts(self) -> None:
        before = LedgerSnapshot(total_supply=20_000_000, balances={ALICE: 10_000_000, BOB: 10_000_000})
        after = LedgerSnapshot(total_supply=16_280_000, balances={ALICE: 6_280_000, BOB: 10_000_000})

        differences = diff_snapshots(before, after, 6)

        assert differences == [
            LedgerDifference(key="totalSupply", before=Decimal(20), after=Decimal("16.28")),
            LedgerDifference(key=ALICE, before=Decimal(10), after=Decimal("6.28")),
        ]

    def test_ledger_changed_names_block_range(self) -> None:
        before = LedgerSnapshot(total_supply=5, balances={ALICE: 5}, block_number=12)
        after = LedgerSnapshot(total_supply=4, balances={ALICE: 4}, block_number=13)

        with pytest.raises(AssertionError, match="^Ledger changed between blocks 12 and 13: "):
            assert_ledger_unchanged(before, after, 0)

    def test_assert_ledger_unchanged_message(self) -> None:
        before = LedgerSnapshot(total_supply=1, balances={BOB: 1})
        after = LedgerSnapshot(total_supply=1, balances={BOB: 0, CAROL: 1})

        with pytest.raises(AssertionError) as exc:
            assert_ledger_unchanged(before, after, 0)

        message = str(exc.value)
        assert message.startswith("Ledger changed: ")
        assert f"{BOB}: 1 -> 0" in message
        assert f"{CAROL}: 0 -> 1" in message


# --- Reverts ---


class TestExpectRevert:
    """Test the rejection helper."""

    def test_returns_rejection(self) -> None:
        def rejected() -> None:
            raise TransactionRejected("revokeOperator", "cannot revoke yourself")

        error = expect_revert(rejected)
        assert error.method == "revokeOperator"
        assert "revert" in str(error)

    def test_success_is_assertion_error(self) -> None:
        with pytest.raises(AssertionError, match="Expected transaction to be rejected"):
            expect_revert(lambda: None)

    def test_other_errors_propagate(self) -> None:
        def broken() -> None:
            raise TokenError("connection reset")

        with pytest.raises(TokenError, match="connection reset"):
            expect_revert(broken)


# --- Helpers ---


def test_format_account() -> None:
    assert format_account(ALICE) == "0xaaaa00"
    assert format_account("0x12") == "0x12"
