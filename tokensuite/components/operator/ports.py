"""
Operator component - Port interfaces.

The chain and token ports live in tokensuite.core.ports; this component
adds the progress hook the runner reports to.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from tokensuite.core.ports.chain import ChainPort
from tokensuite.core.ports.token import TokenPort

if TYPE_CHECKING:
    from .models import ScenarioResult


class ResultListenerPort(Protocol):
    """Receives each scenario result as soon as it is known."""

    def __call__(self, result: ScenarioResult) -> None:
        ...


__all__ = ["ChainPort", "ResultListenerPort", "TokenPort"]
