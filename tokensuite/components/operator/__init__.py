"""
Operator component - Conformance scenarios for operator authorization,
revocation and delegated sends.
"""

from ._impl import REJECTED_SEND_AMOUNT, SEND_AMOUNT, all_scenarios, scenario
from .component import (
    list_scenarios,
    run_scenario,
    run_suite,
    select_scenarios,
)
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
from .ports import ResultListenerPort

__all__ = [
    # Entry points
    "run_suite",
    "run_scenario",
    "list_scenarios",
    "select_scenarios",
    # Registry
    "all_scenarios",
    "scenario",
    "SEND_AMOUNT",
    "REJECTED_SEND_AMOUNT",
    # Input models
    "RunSuiteInput",
    "ScenarioSettings",
    "ScenarioContext",
    "Scenario",
    # Output models
    "ScenarioResult",
    "SuiteResult",
    "SuiteSetupError",
    "MIN_ACCOUNTS",
    # Ports
    "ResultListenerPort",
]
