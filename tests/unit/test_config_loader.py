from pathlib import Path

import pytest

from tokensuite.config.loader import ConfigError, load_config, parse_config
from tokensuite.config.models import SuiteConfig

FULL_CONFIG = """
suite:
  initial_balance: "25"
  mint_gas: 200000
  gas: 400000
  minter_index: 1
  isolate: false
  scenarios: [operator_send, revoke_operator]
chain:
  provider: http
  rpc_url: http://localhost:7545
  accounts: 6
  block_timeout_seconds: 5
  poll_interval_seconds: 0.5
token:
  address: "0x1111111111111111111111111111111111111111"
  decimals: 6
  symbol: XRT
  abi_path: build/Token.json
report:
  junit_path: out/operator.xml
"""


def test_defaults_from_empty_document():
    config = parse_config("")
    assert config == SuiteConfig()
    assert config.suite.initial_balance == "10"
    assert config.suite.mint_gas == 100000
    assert config.suite.gas == 300000
    assert config.suite.isolate is True
    assert config.chain.provider == "dev"
    assert config.token.decimals is None


def test_full_config():
    config = parse_config(FULL_CONFIG)
    assert config.suite.initial_balance == "25"
    assert config.suite.minter_index == 1
    assert config.suite.isolate is False
    assert config.suite.scenarios == ["operator_send", "revoke_operator"]
    assert config.chain.provider == "http"
    assert config.chain.rpc_url == "http://localhost:7545"
    assert config.chain.accounts == 6
    assert config.chain.block_timeout_seconds == 5.0
    assert config.token.decimals == 6
    assert config.token.symbol == "XRT"
    assert config.report.junit_path == "out/operator.xml"


def test_numeric_initial_balance_kept_as_text():
    """YAML numbers become their literal text."""
    assert parse_config("suite:\n  initial_balance: 10\n").suite.initial_balance == "10"
    assert parse_config("suite:\n  initial_balance: 1.5\n").suite.initial_balance == "1.5"


def test_markdown_fenced_block():
    content = "# Suite\n\nSome notes.\n\n```yaml\nchain:\n  accounts: 8\n```\n\nTrailing text.\n"
    assert parse_config(content).chain.accounts == 8


@pytest.mark.parametrize(
    "content",
    [
        "suite: [unclosed",
        "- just\n- a list\n",
        "suite:\n  unknown_key: 1\n",
        "suite:\n  initial_balance: abc\n",
        "suite:\n  gas: 0\n",
        "chain:\n  accounts: 3\n",
        "chain:\n  provider: ipc\n",
        "chain:\n  provider: http\n",
        "chain:\n  provider: http\ntoken:\n  address: '0x1234'\n",
        "token:\n  address: not-an-address\n",
    ],
)
def test_invalid_config(content):
    with pytest.raises(ConfigError):
        parse_config(content)


def test_config_error_is_value_error():
    assert issubclass(ConfigError, ValueError)


def test_load_config_missing(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_load_config_file(dev_config_file: Path):
    config = load_config(dev_config_file)
    assert config.chain.accounts == 6
    assert config.token.symbol == "TST"


def test_repo_sample_config_is_valid():
    """The suite.yaml shipped at the project root validates."""
    sample = Path(__file__).resolve().parents[2] / "suite.yaml"
    config = load_config(sample)
    assert config.chain.provider == "dev"


@pytest.mark.parametrize(
    "address",
    [
        "0x1111111111111111111111111111111111111111",
        "0xabababababababababababababababababababab",
    ],
)
def test_token_address_accepted(address):
    config = parse_config(f"token:\n  address: '{address}'\n")
    assert config.token.address == address


def test_token_address_bad_checksum():
    """Mixed case must be a valid EIP-55 checksum."""
    with pytest.raises(ConfigError, match="not a valid address"):
        parse_config("token:\n  address: '0xABababababababababababababababababababab'\n")
