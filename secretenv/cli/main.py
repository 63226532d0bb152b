"""CLI entrypoint for secretenv."""
import os
import sys
import json
import shlex
import argparse
import logging
from pathlib import Path
from typing import Dict, Optional

from secretenv import __version__
from secretenv.secrets.domains.variable_store import VariableStore
from .validators import validate_kind, parse_map_item

# Configure logging to stderr
logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    stream=sys.stderr
)
logger = logging.getLogger(__name__)

FORMATS = ("export", "dotenv", "json")


def render(variables: Dict[str, str], fmt: str) -> str:
    """Render mapped variables for stdout."""
    if fmt == "json":
        return json.dumps(variables, indent=2)
    if fmt == "dotenv":
        return "\n".join(
            f"{name}={json.dumps(value, ensure_ascii=False)}" for name, value in variables.items()
        )
    return "\n".join(f"export {name}={shlex.quote(value)}" for name, value in variables.items())


def _emit(variables: Dict[str, str], fmt: str) -> None:
    output = render(variables, fmt)
    if output:
        print(output)


def _read_payload(args) -> Optional[str]:
    """Resolve the raw payload from --payload, --from-env or --stdin."""
    if args.payload is not None:
        return args.payload
    if args.from_env:
        return os.getenv(args.from_env)
    if args.stdin:
        return sys.stdin.read()
    return None


def cmd_version(args):
    """Show version information."""
    print(f"secretenv {__version__}")


def cmd_map(args):
    """Map a single secret and print the resulting variables."""
    from secretenv.secrets.workflows.secret_operations import SecretEnv

    kind = validate_kind(args.kind)
    overrides = dict(parse_map_item(item) for item in (args.map or []))

    env = SecretEnv(VariableStore({}))
    handler = env.handler(kind, overrides)
    payload = _read_payload(args)

    if args.optional:
        variables = handler.apply_optional(args.name, payload)
    else:
        variables = handler.apply(args.name, payload)

    _emit(variables, args.format)


def cmd_apply(args):
    """Map every secret declared in a bindings file."""
    from secretenv.secrets.domains.config_loader import load_bindings
    from secretenv.secrets.workflows.secret_operations import SecretEnv, apply_bindings

    bindings = load_bindings(args.config)
    env = SecretEnv(VariableStore({}))
    variables = apply_bindings(bindings, env)

    _emit(variables, args.format)


def cmd_config_show(args):
    """Show which bindings file would be used."""
    from secretenv.secrets.domains.config_loader import (
        CONFIG_ENV_VAR,
        default_config_path,
        get_config_path,
    )

    try:
        config_path = get_config_path()
    except FileNotFoundError:
        print(f"Bindings path: {default_config_path()}")
        print("Source: default (file not found)")
        return

    env_path = os.getenv(CONFIG_ENV_VAR)
    print(f"Bindings path: {config_path}")
    if env_path and Path(env_path).expanduser().exists():
        print(f"Source: {CONFIG_ENV_VAR}")
    else:
        print("Source: default")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="secretenv",
        description="secretenv - map JSON secrets onto configuration variables",
        epilog="""
Exit codes:
  0 - Success
  1 - Runtime error (missing payload, invalid JSON, wrong secret shape, bad bindings file)
  2 - Usage error (invalid arguments, unknown kind, invalid variable name)

Environment variables:
  SECRETENV_CONFIG - Path to the bindings file (overrides default location)

Typical use:
  eval "$(secretenv map database_credentials DB_SECRET --from-env DB_SECRET_JSON)"
        """
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug information to stderr"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # version command
    subparsers.add_parser(
        "version",
        help="Show version information",
        description="Display the current version of secretenv"
    )

    # map command
    map_parser = subparsers.add_parser(
        "map",
        help="Map a single secret",
        description="""
Decode one JSON secret, validate it against its kind and print the mapped
variables.

Default mappings:
  database_credentials  engine->DB_CONNECTION host->DB_HOST port->DB_PORT
                        username->DB_USER password->DB_PASSWORD dbname->DB_DATABASE
  basic_credentials     username->USERNAME password->PASSWORD
  ssh_key               ssh_private_key->SSH_PRIVATE_KEY
  key_value             (none, use --map for every key)
        """
    )
    map_parser.add_argument(
        "kind",
        help="Secret kind (basic_credentials, database_credentials, key_value, ssh_key)"
    )
    map_parser.add_argument(
        "name",
        help="Secret name (used in error messages)"
    )
    source = map_parser.add_mutually_exclusive_group()
    source.add_argument("--payload", help="Raw JSON payload")
    source.add_argument("--from-env", metavar="VAR", help="Read the raw payload from environment variable VAR")
    source.add_argument("--stdin", action="store_true", help="Read the raw payload from stdin")
    map_parser.add_argument(
        "--map",
        action="append",
        metavar="FIELD=VARIABLE",
        help="Override the variable a field is mapped to (repeatable)"
    )
    map_parser.add_argument(
        "--optional",
        action="store_true",
        help="Print nothing instead of failing when no payload is available"
    )
    map_parser.add_argument("--format", choices=FORMATS, default="export", help="Output format")

    # apply command
    apply_parser = subparsers.add_parser(
        "apply",
        help="Map every secret in a bindings file",
        description="""
Map all secrets declared in a YAML bindings file. Each binding reads its raw
payload from the environment variable named by 'source' (default: 'name').
        """
    )
    apply_parser.add_argument("--config", help="Path to the bindings file")
    apply_parser.add_argument("--format", choices=FORMATS, default="export", help="Output format")

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Bindings file information",
        description="Inspect secretenv configuration"
    )
    config_subparsers = config_parser.add_subparsers(dest="config_command")
    config_subparsers.add_parser(
        "show",
        help="Show current bindings path",
        description="""
Display the bindings file path and its source.

Sources:
  - SECRETENV_CONFIG: Path set via environment variable
  - default: ~/.config/secretenv/bindings.yml
        """
    )

    return parser


def main(argv=None):
    """Main CLI entrypoint.

    Exit codes:
        0 - Success
        1 - Runtime errors (secret decoding/mapping, bindings file)
        2 - Usage errors (invalid arguments, unknown kind, invalid variable name)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    # If no command provided, show help and exit with usage error code
    if not args.command:
        parser.print_help()
        sys.exit(2)

    # Route to command handlers
    try:
        if args.command == "version":
            cmd_version(args)
        elif args.command == "map":
            cmd_map(args)
        elif args.command == "apply":
            cmd_apply(args)
        elif args.command == "config":
            if args.config_command == "show":
                cmd_config_show(args)
            else:
                parser.print_help()
                sys.exit(2)
        else:
            parser.print_help()
            sys.exit(2)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
