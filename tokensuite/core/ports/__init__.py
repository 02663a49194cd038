# tokensuite - Ports (Protocol Interfaces)
# Abstract interfaces for adapters; no implementations here

from tokensuite.core.ports.chain import ChainPort
from tokensuite.core.ports.token import (
    BlockWaitTimeout,
    SnapshotError,
    TokenError,
    TokenPort,
    TransactionRejected,
)

__all__ = [
    # Chain
    "ChainPort",
    # Token
    "TokenPort",
    # Errors
    "TokenError",
    "TransactionRejected",
    "BlockWaitTimeout",
    "SnapshotError",
]
