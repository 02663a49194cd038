"""
Operator component - Runs the operator conformance scenarios.

Per scenario: snapshot the chain (when isolating), mint starting balances,
run the body, record the outcome, revert the snapshot. Scenarios run one
at a time in declaration order.

Shell Layer - handles I/O and error conversion.
"""

from __future__ import annotations

import logging
import time

from tokensuite.components.ledger import mint_for_all_accounts
from tokensuite.core.ports.token import SnapshotError, TransactionRejected

from ._impl import all_scenarios
from .models import (
    MIN_ACCOUNTS,
    RunSuiteInput,
    Scenario,
    ScenarioContext,
    ScenarioResult,
    ScenarioSettings,
    SuiteResult,
    SuiteSetupError,
)
from .ports import ChainPort, ResultListenerPort, TokenPort

logger = logging.getLogger(__name__)


def list_scenarios() -> list[str]:
    """Names of all registered scenarios."""
    return [s.name for s in all_scenarios()]


def select_scenarios(only: tuple[str, ...] | list[str] = ()) -> list[Scenario]:
    """
    Pick scenarios by name, keeping declaration order.

    Raises:
        SuiteSetupError: a name matches no scenario.
    """
    scenarios = all_scenarios()
    if not only:
        return scenarios

    known = {s.name for s in scenarios}
    unknown = sorted(set(only) - known)
    if unknown:
        raise SuiteSetupError(f"Unknown scenario(s): {', '.join(unknown)}")
    return [s for s in scenarios if s.name in only]


def _check_accounts(accounts: list[str], settings: ScenarioSettings) -> None:
    if len(accounts) < MIN_ACCOUNTS:
        raise SuiteSetupError(
            f"Operator scenarios need at least {MIN_ACCOUNTS} accounts, got {len(accounts)}"
        )
    if settings.minter_index >= len(accounts):
        raise SuiteSetupError(
            f"minter_index {settings.minter_index} out of range for {len(accounts)} accounts"
        )


def run_scenario(scenario: Scenario, ctx: ScenarioContext) -> ScenarioResult:
    """
    Run one scenario against ctx.

    Never raises for scenario outcomes: assertion failures and unexpected
    reverts become "failed", anything else becomes "error". A failed
    snapshot revert is recorded in isolation_error; a scenario that had
    passed becomes "error".
    """
    description = scenario.describe(ctx.accounts, ctx.token.symbol)
    settings = ctx.settings
    logger.debug("Running %s: %s", scenario.name, description)

    snapshot_id = ctx.chain.snapshot() if settings.isolate else None
    start_time = time.monotonic()
    status = "passed"
    message = ""

    try:
        mint_for_all_accounts(
            ctx.chain,
            ctx.accounts,
            ctx.token,
            ctx.minter,
            settings.initial_balance,
            settings.mint_gas,
        )
        scenario.body(ctx)
    except AssertionError as e:
        status = "failed"
        message = str(e) or "assertion failed"
    except TransactionRejected as e:
        status = "failed"
        message = f"unexpected revert: {e}"
    except Exception as e:
        logger.exception("Scenario %s raised", scenario.name)
        status = "error"
        message = f"{type(e).__name__}: {e}"
    elapsed_ms = int((time.monotonic() - start_time) * 1000)

    isolation_error = ""
    if snapshot_id is not None:
        try:
            ctx.chain.revert(snapshot_id)
        except SnapshotError as e:
            logger.error(
                "Could not revert snapshot %s after %s: %s", snapshot_id, scenario.name, e
            )
            isolation_error = f"{type(e).__name__}: {e}"
            if status == "passed":
                status = "error"
                message = isolation_error

    result = ScenarioResult(
        name=scenario.name,
        description=description,
        status=status,
        message=message,
        duration_ms=elapsed_ms,
        isolation_error=isolation_error,
    )
    if result.passed:
        logger.info("PASS %s", scenario.name)
    else:
        logger.info("%s %s: %s", status.upper(), scenario.name, message)
    return result


def run_suite(
    input_data: RunSuiteInput,
    chain: ChainPort,
    token: TokenPort,
    on_result: ResultListenerPort | None = None,
) -> SuiteResult:
    """
    Run the selected operator scenarios sequentially.

    Raises:
        SuiteSetupError: too few accounts, bad minter index or unknown
            scenario names. Raised before any transaction is sent.
        SnapshotError: a snapshot could not be taken. A failed
            revert does not raise; it stops the run and sets aborted.
    """
    settings = input_data.settings
    accounts = chain.accounts
    _check_accounts(accounts, settings)
    scenarios = select_scenarios(input_data.only)

    logger.info(
        "Running %d operator scenario(s) against %s with %d accounts",
        len(scenarios),
        token.symbol,
        len(accounts),
    )

    suite = SuiteResult(symbol=token.symbol)
    for scenario in scenarios:
        ctx = ScenarioContext(chain=chain, token=token, accounts=accounts, settings=settings)
        result = run_scenario(scenario, ctx)
        suite.results.append(result)
        if on_result is not None:
            on_result(result)
        if result.isolation_error:
            # Later scenarios would start from dirty state
            suite.aborted = (
                f"snapshot revert failed after {scenario.name}: {result.isolation_error}"
            )
            logger.error("Suite aborted: %s", suite.aborted)
            break

    logger.info(
        "Suite finished: %d passed, %d failed, %d errors",
        suite.passed,
        suite.failed,
        suite.errored,
    )
    return suite
