import pytest

from tokensuite.adapters.dev_chain import DevChain, DevToken
from tokensuite.components.operator import ScenarioSettings
from tokensuite.domain.units import to_base_units

NUM_ACCOUNTS = 5


@pytest.fixture
def chain() -> DevChain:
    return DevChain(num_accounts=NUM_ACCOUNTS)


@pytest.fixture
def accounts(chain: DevChain) -> list[str]:
    return chain.accounts


@pytest.fixture
def token(chain: DevChain) -> DevToken:
    return chain.deploy_token(symbol="TST")


@pytest.fixture
def settings() -> ScenarioSettings:
    return ScenarioSettings()


@pytest.fixture
def funded_token(token: DevToken, accounts: list[str]) -> DevToken:
    """
    Token with 10 TST minted to every account by accounts[0].
    """
    for account in accounts:
        token.mint(account, to_base_units("10"), sender=accounts[0], gas=100000)
    return token


@pytest.fixture
def dev_config_file(tmp_path):
    path = tmp_path / "suite.yaml"
    path.write_text(
        "suite:\n"
        "  initial_balance: '10'\n"
        "chain:\n"
        "  provider: dev\n"
        "  accounts: 6\n"
        "token:\n"
        "  symbol: TST\n",
        encoding="utf-8",
    )
    return path
