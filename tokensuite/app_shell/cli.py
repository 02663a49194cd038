import argparse
import logging
import sys
from pathlib import Path

from tokensuite.app_shell.context import SuiteContext
from tokensuite.components.operator import SuiteSetupError, list_scenarios, run_suite
from tokensuite.components.report import render_line, render_summary, write_junit
from tokensuite.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from tokensuite.config.models import SuiteConfig
from tokensuite.core.ports.token import SnapshotError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def get_config(path: Path) -> SuiteConfig:
    if not path.exists():
        if path == DEFAULT_CONFIG_PATH:
            logger.info(f"No {path} found, using the in-memory dev chain.")
            return SuiteConfig()
        raise FileNotFoundError(f"Suite config not found at: {path}")
    return load_config(path)


def handle_run(args: argparse.Namespace) -> int:
    try:
        config = get_config(Path(args.config))
        ctx = SuiteContext.create(config)
        suite_input = ctx.run_input(args.only)
        result = run_suite(
            suite_input,
            ctx.chain,
            ctx.token,
            on_result=lambda r: print(render_line(r)),
        )
    except (
        FileNotFoundError,
        ConfigError,
        SuiteSetupError,
        SnapshotError,
        ConnectionError,
    ) as e:
        logger.error(str(e))
        return EXIT_CONFIG

    print(render_summary(result))

    junit_path = args.junit or config.report.junit_path
    if junit_path:
        path = write_junit(result, Path(junit_path))
        logger.info(f"JUnit report written to {path}")

    if result.aborted:
        # Node failure mid-run, not a configuration problem
        logger.error(f"Run aborted: {result.aborted}")

    return EXIT_OK if result.success else EXIT_FAILED


def handle_list(args: argparse.Namespace) -> int:
    for name in list_scenarios():
        print(name)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="ERC-777 operator conformance suite")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # run
    run_parser = subparsers.add_parser("run", help="Run the operator scenarios")
    run_parser.add_argument(
        "--config", default=str(DEFAULT_CONFIG_PATH), help="Path to suite YAML config"
    )
    run_parser.add_argument(
        "--only",
        action="append",
        metavar="NAME",
        help="Run only this scenario (repeatable)",
    )
    run_parser.add_argument("--junit", help="Write a JUnit XML report to this path")

    # list
    subparsers.add_parser("list", help="List scenario names")

    args = parser.parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.command == "run":
        return handle_run(args)
    elif args.command == "list":
        return handle_list(args)
    return EXIT_CONFIG


if __name__ == "__main__":
    sys.exit(main())
