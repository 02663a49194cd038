"""
Operator scenarios - the test cases of the operator suite.

Each scenario starts from freshly minted balances (settings.initial_balance
for every account), acts through one or two contract calls, waits for a
block and asserts the resulting state. Scenarios never depend on each
other's side effects.

Account roles: accounts[1] holder, accounts[2] recipient, accounts[3]
operator candidate. accounts[0] mints.
"""

from __future__ import annotations

from decimal import Decimal

from tokensuite.components.ledger import (
    assert_balance,
    assert_ledger_unchanged,
    assert_total_supply,
    expect_revert,
    format_account,
    get_block,
    snapshot_ledger,
)
from tokensuite.domain.units import to_base_units

from .models import DescribeFn, Scenario, ScenarioBody, ScenarioContext

SEND_AMOUNT = "1.12"
REJECTED_SEND_AMOUNT = "3.72"

_REGISTRY: list[Scenario] = []


def scenario(name: str, describe: DescribeFn):
    """Register a scenario body under name."""

    def decorator(body: ScenarioBody) -> ScenarioBody:
        if any(s.name == name for s in _REGISTRY):
            raise ValueError(f"Duplicate scenario name: {name}")
        _REGISTRY.append(Scenario(name=name, describe=describe, body=body))
        return body

    return decorator


def all_scenarios() -> list[Scenario]:
    """Registered scenarios in declaration order."""
    return list(_REGISTRY)


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise AssertionError(message)


def _assert_rejected_without_effect(
    ctx: ScenarioContext,
    watched: list[str],
    action,
) -> None:
    """Call must revert; balances of watched and total supply stay put."""
    token = ctx.token
    before = snapshot_ledger(token, watched, ctx.chain.block_number())
    expect_revert(action)
    block = get_block(ctx.chain)
    after = snapshot_ledger(token, watched, block.number)
    assert_ledger_unchanged(before, after, token.decimals)


# --- Scenarios ---


@scenario(
    "detect_not_operator",
    lambda a, sym: (
        f"should detect {format_account(a[3])} is not an operator "
        f"for {format_account(a[1])}"
    ),
)
def detect_not_operator(ctx: ScenarioContext) -> None:
    a = ctx.accounts
    _require(
        ctx.token.is_operator_for(a[3], a[1]) is False,
        f"{format_account(a[3])} should not be an operator for {format_account(a[1])}",
    )


@scenario(
    "authorize_operator",
    lambda a, sym: (
        f"should authorize {format_account(a[3])} as an operator "
        f"for {format_account(a[1])}"
    ),
)
def authorize_operator(ctx: ScenarioContext) -> None:
    a, token = ctx.accounts, ctx.token
    token.authorize_operator(a[3], sender=a[1], gas=ctx.gas)

    _require(
        token.is_operator_for(a[3], a[1]) is True,
        f"{format_account(a[3])} should be an operator for {format_account(a[1])}",
    )


@scenario(
    "operator_send",
    lambda a, sym: (
        f"should let {format_account(a[3])} send {SEND_AMOUNT} {sym} "
        f"from {format_account(a[1])} to {format_account(a[2])}"
    ),
)
def operator_send(ctx: ScenarioContext) -> None:
    a, token = ctx.accounts, ctx.token
    amount = Decimal(SEND_AMOUNT)
    token.authorize_operator(a[3], sender=a[1], gas=ctx.gas)

    assert_total_supply(token, ctx.initial_supply)
    assert_balance(token, a[1], ctx.initial)
    assert_balance(token, a[2], ctx.initial)

    token.operator_send(
        a[1],
        a[2],
        to_base_units(amount, token.decimals),
        b"",
        b"",
        sender=a[3],
        gas=ctx.gas,
    )

    get_block(ctx.chain)
    assert_total_supply(token, ctx.initial_supply)
    assert_balance(token, a[1], ctx.initial - amount)
    assert_balance(token, a[2], ctx.initial + amount)


@scenario(
    "revoke_operator",
    lambda a, sym: (
        f"should revoke {format_account(a[3])} as an operator "
        f"for {format_account(a[1])}"
    ),
)
def revoke_operator(ctx: ScenarioContext) -> None:
    a, token = ctx.accounts, ctx.token
    token.authorize_operator(a[3], sender=a[1], gas=ctx.gas)
    _require(
        token.is_operator_for(a[3], a[1]) is True,
        f"{format_account(a[3])} should be an operator for {format_account(a[1])}",
    )

    token.revoke_operator(a[3], sender=a[1], gas=ctx.gas)

    get_block(ctx.chain)
    _require(
        token.is_operator_for(a[3], a[1]) is False,
        f"{format_account(a[3])} should no longer be an operator for {format_account(a[1])}",
    )


@scenario(
    "reject_send_not_operator",
    lambda a, sym: (
        f"should not let {format_account(a[3])} send from "
        f"{format_account(a[1])} (not operator)"
    ),
)
def reject_send_not_operator(ctx: ScenarioContext) -> None:
    a, token = ctx.accounts, ctx.token
    assert_total_supply(token, ctx.initial_supply)
    assert_balance(token, a[1], ctx.initial)
    assert_balance(token, a[2], ctx.initial)

    amount = to_base_units(REJECTED_SEND_AMOUNT, token.decimals)
    _assert_rejected_without_effect(
        ctx,
        [a[1], a[2], a[3]],
        lambda: token.operator_send(a[1], a[2], amount, b"", b"", sender=a[3], gas=ctx.gas),
    )

    assert_total_supply(token, ctx.initial_supply)
    assert_balance(token, a[1], ctx.initial)
    assert_balance(token, a[2], ctx.initial)


@scenario(
    "reject_self_authorization",
    lambda a, sym: (
        f"should not let {format_account(a[3])} authorize themselves "
        "as one of their own operators"
    ),
)
def reject_self_authorization(ctx: ScenarioContext) -> None:
    a, token = ctx.accounts, ctx.token
    assert_total_supply(token, ctx.initial_supply)
    assert_balance(token, a[3], ctx.initial)

    _assert_rejected_without_effect(
        ctx,
        [a[3]],
        lambda: token.authorize_operator(a[3], sender=a[3], gas=ctx.gas),
    )

    assert_total_supply(token, ctx.initial_supply)
    assert_balance(token, a[3], ctx.initial)
    _require(
        token.is_operator_for(a[3], a[3]) is True,
        f"{format_account(a[3])} should still be an operator for themselves",
    )


@scenario(
    "self_operator_by_default",
    lambda a, sym: (
        f"should make {format_account(a[3])} an operator for themselves by default"
    ),
)
def self_operator_by_default(ctx: ScenarioContext) -> None:
    a = ctx.accounts
    _require(
        ctx.token.is_operator_for(a[3], a[3]) is True,
        f"{format_account(a[3])} should be an operator for themselves",
    )


@scenario(
    "reject_self_revocation",
    lambda a, sym: (
        f"should not let {format_account(a[3])} revoke themselves "
        "as one of their own operators"
    ),
)
def reject_self_revocation(ctx: ScenarioContext) -> None:
    a, token = ctx.accounts, ctx.token
    assert_total_supply(token, ctx.initial_supply)
    assert_balance(token, a[3], ctx.initial)

    _assert_rejected_without_effect(
        ctx,
        [a[3]],
        lambda: token.revoke_operator(a[3], sender=a[3], gas=ctx.gas),
    )

    assert_total_supply(token, ctx.initial_supply)
    assert_balance(token, a[3], ctx.initial)
    _require(
        token.is_operator_for(a[3], a[3]) is True,
        f"{format_account(a[3])} should still be an operator for themselves",
    )


@scenario(
    "self_operator_send",
    lambda a, sym: f"should let {format_account(a[3])} use operatorSend on themselves",
)
def self_operator_send(ctx: ScenarioContext) -> None:
    a, token = ctx.accounts, ctx.token
    amount = Decimal(REJECTED_SEND_AMOUNT)
    assert_total_supply(token, ctx.initial_supply)
    assert_balance(token, a[3], ctx.initial)
    assert_balance(token, a[2], ctx.initial)

    token.operator_send(
        a[3],
        a[2],
        to_base_units(amount, token.decimals),
        b"",
        b"",
        sender=a[3],
        gas=ctx.gas,
    )

    get_block(ctx.chain)
    assert_total_supply(token, ctx.initial_supply)
    assert_balance(token, a[3], ctx.initial - amount)
    assert_balance(token, a[2], ctx.initial + amount)
