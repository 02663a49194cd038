from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from web3 import Web3

from tokensuite.domain.entities import ProviderType
from tokensuite.domain.units import parse_amount


class SuiteRules(BaseModel):
    model_config = ConfigDict(extra="forbid")

    initial_balance: str = "10"
    mint_gas: int = Field(default=100000, gt=0)
    gas: int = Field(default=300000, gt=0)
    minter_index: int = Field(default=0, ge=0)
    isolate: bool = True
    scenarios: list[str] | None = None

    @field_validator("initial_balance", mode="before")
    @classmethod
    def _check_balance(cls, value: object) -> str:
        # YAML reads 10 as int and 1.5 as float; keep the literal text
        text = str(value)
        parse_amount(text)
        return text

class ChainRules(BaseModel):
    model_config = ConfigDict(extra="forbid")

    provider: ProviderType = "dev"
    rpc_url: str = "http://127.0.0.1:8545"
    accounts: int | None = Field(default=None, ge=4)
    block_timeout_seconds: float = Field(default=30.0, gt=0)
    poll_interval_seconds: float = Field(default=0.1, gt=0)

class TokenRules(BaseModel):
    model_config = ConfigDict(extra="forbid")

    address: str | None = None
    decimals: int | None = Field(default=None, ge=0, le=77)
    symbol: str | None = None
    abi_path: str | None = None

    @field_validator("address")
    @classmethod
    def _check_address(cls, value: str | None) -> str | None:
        if value is not None and not Web3.is_address(value):
            raise ValueError(f"token.address is not a valid address: {value!r}")
        return value

class ReportRules(BaseModel):
    model_config = ConfigDict(extra="forbid")

    junit_path: str | None = None

class SuiteConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    suite: SuiteRules = Field(default_factory=SuiteRules)
    chain: ChainRules = Field(default_factory=ChainRules)
    token: TokenRules = Field(default_factory=TokenRules)
    report: ReportRules = Field(default_factory=ReportRules)

    @model_validator(mode="after")
    def _check_http_token(self) -> "SuiteConfig":
        if self.chain.provider == "http" and not self.token.address:
            raise ValueError("token.address is required when chain.provider is 'http'")
        return self
