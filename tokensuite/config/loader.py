from pathlib import Path

import yaml
from pydantic import ValidationError

from tokensuite.config.models import SuiteConfig

DEFAULT_CONFIG_PATH = Path("suite.yaml")


class ConfigError(ValueError):
    """Suite configuration could not be parsed or validated."""

    pass


def _extract_yaml(content: str) -> str:
    # Accept a ```yaml fenced block inside a Markdown file
    yaml_lines = []
    in_block = False
    found_block = False

    for line in content.splitlines():
        s_line = line.strip()
        if s_line.startswith("```yaml"):
            in_block = True
            found_block = True
            continue
        if in_block and s_line.startswith("```"):
            break
        if in_block:
            yaml_lines.append(line)

    return "\n".join(yaml_lines) if found_block else content


def parse_config(content: str) -> SuiteConfig:
    """
    Parse and validate config text.
    Raises ConfigError if YAML or schema invalid.
    """
    try:
        data = yaml.safe_load(_extract_yaml(content))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax in suite config: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Suite config must be a mapping at the top level")

    try:
        return SuiteConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Suite config validation failed:\n{e}") from e


def load_config(path: Path) -> SuiteConfig:
    """
    Load and validate the suite config file.
    Raises FileNotFoundError if file missing.
    Raises ConfigError if YAML or schema invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Suite config not found at: {path}")

    with open(path) as f:
        content = f.read()

    return parse_config(content)
