from typing import Literal

from pydantic import BaseModel, Field

# --- Enums / Literals ---
ScenarioStatus = Literal["passed", "failed", "error"]
ProviderType = Literal["dev", "http"]

ZERO_ADDRESS = "0x" + "0" * 40

# --- Chain ---

class Block(BaseModel):
    number: int
    hash: str | None = None
    timestamp: int | None = None

class TxReceipt(BaseModel):
    tx_hash: str
    block_number: int
    status: int = 1  # 1 success, 0 reverted
    method: str = ""
    sender: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status == 1

# --- Ledger ---

class LedgerSnapshot(BaseModel):
    """Total supply plus the balances of the observed accounts, in base units."""

    total_supply: int
    balances: dict[str, int] = Field(default_factory=dict)
    block_number: int | None = None

    @property
    def observed_sum(self) -> int:
        return sum(self.balances.values())
