"""
Operator component - Data models.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal

from tokensuite.core.ports.chain import ChainPort
from tokensuite.core.ports.token import TokenPort
from tokensuite.domain.entities import ScenarioStatus
from tokensuite.domain.units import parse_amount

MIN_ACCOUNTS = 4

# --- Errors ---


class SuiteSetupError(Exception):
    """Suite cannot start (too few accounts, unknown scenario names)."""

    pass


# --- Settings / Context ---


@dataclass(frozen=True)
class ScenarioSettings:
    """Per-run knobs shared by all scenarios."""

    initial_balance: str = "10"
    mint_gas: int = 100000
    gas: int = 300000
    minter_index: int = 0
    isolate: bool = True


@dataclass
class ScenarioContext:
    """Everything a scenario body touches."""

    chain: ChainPort
    token: TokenPort
    accounts: list[str]
    settings: ScenarioSettings = field(default_factory=ScenarioSettings)

    @property
    def initial(self) -> Decimal:
        return parse_amount(self.settings.initial_balance)

    @property
    def initial_supply(self) -> Decimal:
        return self.initial * len(self.accounts)

    @property
    def minter(self) -> str:
        return self.accounts[self.settings.minter_index]

    @property
    def gas(self) -> int:
        return self.settings.gas


ScenarioBody = Callable[[ScenarioContext], None]
DescribeFn = Callable[[list[str], str], str]


@dataclass(frozen=True)
class Scenario:
    """A named, independent operator test case."""

    name: str
    describe: DescribeFn  # (accounts, symbol) -> description
    body: ScenarioBody


# --- Input Models ---


@dataclass(frozen=True)
class RunSuiteInput:
    """Input for running the suite."""

    settings: ScenarioSettings = field(default_factory=ScenarioSettings)
    only: tuple[str, ...] = ()


# --- Output Models ---


@dataclass(frozen=True)
class ScenarioResult:
    """Outcome of one scenario."""

    name: str
    description: str
    status: ScenarioStatus
    message: str = ""
    duration_ms: int = 0
    isolation_error: str = ""  # snapshot revert failed; chain state is dirty

    @property
    def passed(self) -> bool:
        return self.status == "passed"


@dataclass
class SuiteResult:
    """Outcome of a suite run."""

    results: list[ScenarioResult] = field(default_factory=list)
    symbol: str = ""
    aborted: str = ""

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.status == "passed")

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.status == "failed")

    @property
    def errored(self) -> int:
        return sum(1 for r in self.results if r.status == "error")

    @property
    def success(self) -> bool:
        return not self.aborted and self.passed == self.total

    @property
    def duration_ms(self) -> int:
        return sum(r.duration_ms for r in self.results)
