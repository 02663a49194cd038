from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from tokensuite.adapters.dev_chain import DevChain
from tokensuite.adapters.rpc import Web3ChainAdapter, Web3TokenAdapter
from tokensuite.components.operator import RunSuiteInput, ScenarioSettings
from tokensuite.config.loader import ConfigError
from tokensuite.config.models import SuiteConfig
from tokensuite.core.ports.chain import ChainPort
from tokensuite.core.ports.token import TokenPort
from tokensuite.domain.units import DEFAULT_DECIMALS

logger = logging.getLogger(__name__)

DEV_ACCOUNTS = 10
DEV_SYMBOL = "DEV"


def load_abi(path: Path) -> list[dict[str, Any]]:
    """
    Read a contract ABI from a JSON file.

    Accepts a bare ABI list or a compiler artifact with an "abi" key.
    """
    if not path.exists():
        raise FileNotFoundError(f"ABI file not found at: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in ABI file {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("abi")
    if not isinstance(data, list):
        raise ConfigError(f"ABI file {path} holds no ABI list")
    return data


@dataclass
class SuiteContext:
    chain: ChainPort
    token: TokenPort
    config: SuiteConfig

    @classmethod
    def create(cls, config: SuiteConfig) -> SuiteContext:
        """Build chain and token adapters for the configured provider."""
        if config.chain.provider == "dev":
            chain = DevChain(num_accounts=config.chain.accounts or DEV_ACCOUNTS)
            accounts = chain.accounts
            minter_index = config.suite.minter_index
            owner = accounts[minter_index] if minter_index < len(accounts) else accounts[0]
            token: TokenPort = chain.deploy_token(
                owner=owner,
                symbol=config.token.symbol or DEV_SYMBOL,
                decimals=(
                    config.token.decimals
                    if config.token.decimals is not None
                    else DEFAULT_DECIMALS
                ),
            )
            logger.info("Using in-memory dev chain with %d accounts", len(accounts))
            return cls(chain=chain, token=token, config=config)

        rpc_chain = Web3ChainAdapter.from_rpc_url(
            config.chain.rpc_url,
            max_accounts=config.chain.accounts,
            block_timeout_seconds=config.chain.block_timeout_seconds,
            poll_interval_seconds=config.chain.poll_interval_seconds,
        )
        abi = load_abi(Path(config.token.abi_path)) if config.token.abi_path else None
        # provider "http" guarantees an address (SuiteConfig validator)
        token = Web3TokenAdapter(
            rpc_chain,
            str(config.token.address),
            abi=abi,
            symbol=config.token.symbol,
            decimals=config.token.decimals,
        )
        logger.info("Using token %s at %s", token.symbol, token.address)
        return cls(chain=rpc_chain, token=token, config=config)

    @property
    def settings(self) -> ScenarioSettings:
        suite = self.config.suite
        return ScenarioSettings(
            initial_balance=suite.initial_balance,
            mint_gas=suite.mint_gas,
            gas=suite.gas,
            minter_index=suite.minter_index,
            isolate=suite.isolate,
        )

    def run_input(self, only: list[str] | None = None) -> RunSuiteInput:
        """Suite input; explicit names override the configured filter."""
        selected = only or self.config.suite.scenarios or []
        return RunSuiteInput(settings=self.settings, only=tuple(selected))
