# src/relaycore/cli.py
"""
Command-line interface for inspecting relay configuration.

Commands:
- ``check``: load the environment (and ``.env``), validate, report every issue
- ``show``: print the effective configuration with secrets masked

Available as the ``relaycore`` console script and via ``python -m relaycore``.
Exit status is 0 for a valid configuration and 1 otherwise.
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from .config import ConfigValidator, build_config, load_env_file, new_manager
from .config.models import AppConfig
from .exceptions import ConfigValidationError

logger = logging.getLogger(__name__)


# =============================================================================
# OUTPUT FORMATTING
# =============================================================================

class OutputFormatter:
    """Formats CLI output as colored text or JSON."""

    def __init__(self, use_color: bool = True, json_output: bool = False):
        self.use_color = use_color and sys.stdout.isatty()
        self.json_output = json_output

    def _color(self, text: str, color: str) -> str:
        if not self.use_color:
            return text

        colors = {
            'green': '\033[92m',
            'red': '\033[91m',
            'yellow': '\033[93m',
            'bold': '\033[1m',
            'reset': '\033[0m'
        }
        return f"{colors.get(color, '')}{text}{colors['reset']}"

    def success(self, text: str) -> str:
        return self._color(f"✓ {text}", 'green')

    def error(self, text: str) -> str:
        return self._color(f"✗ {text}", 'red')

    def warning(self, text: str) -> str:
        return self._color(f"⚠ {text}", 'yellow')

    def header(self, text: str) -> str:
        return self._color(text, 'bold')


def mask_secret(value: str) -> str:
    """Keep the first and last four characters of long secrets, hide the rest."""
    if len(value) <= 8:
        return "*" * len(value)
    return f"{value[:4]}...{value[-4:]}"


def _masked_dump(config: AppConfig) -> Dict[str, Any]:
    data = config.model_dump()
    data["keys"]["api_keys"] = [mask_secret(k) for k in config.keys.api_keys]
    data["auth"]["key"] = mask_secret(config.auth.key)
    # base_url is chosen per call by the manager and is not part of the snapshot
    data["upstream"].pop("base_url", None)
    return data


# =============================================================================
# CLI COMMANDS
# =============================================================================

def cmd_check(env_file: Optional[str], formatter: OutputFormatter) -> int:
    """
    Validate the configuration and print every issue found.

    Returns:
        Exit code (0 = valid, 1 = invalid)
    """
    if env_file:
        load_env_file(env_file)

    result = ConfigValidator().validate(build_config())

    if formatter.json_output:
        output = {
            "valid": result.valid,
            "errors": result.violations,
            "warnings": [w.message for w in result.warnings],
        }
        print(json.dumps(output, indent=2))
        return 0 if result.valid else 1

    print(formatter.header("Relay Configuration Check"))
    print("=" * 45)

    if result.valid:
        print(formatter.success("Configuration is valid"))
    else:
        print(formatter.error(f"Configuration has {len(result.errors)} error(s)"))
        for err in result.errors:
            print(f"  {formatter.error(str(err))}")

    if result.warnings:
        print(f"\n{formatter.header('Warnings:')}")
        for warn in result.warnings:
            print(f"  {formatter.warning(str(warn))}")

    return 0 if result.valid else 1


def cmd_show(env_file: Optional[str], formatter: OutputFormatter) -> int:
    """Print the effective configuration with API keys and the auth key masked."""
    try:
        manager = new_manager(env_file=env_file)
    except ConfigValidationError as e:
        print(formatter.error(str(e)), file=sys.stderr)
        return 1

    data = _masked_dump(manager.config)

    if formatter.json_output:
        print(json.dumps(data, indent=2))
        return 0

    for section, values in data.items():
        print(formatter.header(f"[{section}]"))
        for key, value in values.items():
            if isinstance(value, list):
                value = ", ".join(str(v) for v in value)
            print(f"  {key} = {value}")

    return 0


# =============================================================================
# ENTRY POINT
# =============================================================================

def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the configuration CLI."""
    parser = argparse.ArgumentParser(
        prog="relaycore",
        description="RelayCore configuration CLI"
    )
    parser.add_argument(
        "--env-file", "-e",
        help="Path to the .env override file (default: .env)",
        default=".env"
    )
    parser.add_argument(
        "--json",
        help="Output in JSON format",
        action="store_true"
    )
    parser.add_argument(
        "--no-color",
        help="Disable colored output",
        action="store_true"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    subparsers.add_parser("check", help="Validate the configuration")
    subparsers.add_parser("show", help="Show the effective configuration")

    return parser


def main(args: Optional[List[str]] = None) -> int:
    """
    Main entry point for the configuration CLI.

    Args:
        args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    formatter = OutputFormatter(
        use_color=not parsed.no_color,
        json_output=parsed.json
    )

    if parsed.command == "check":
        return cmd_check(parsed.env_file, formatter)
    elif parsed.command == "show":
        return cmd_show(parsed.env_file, formatter)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
