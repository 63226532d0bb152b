"""Input validation for CLI arguments."""
import re
import sys
from typing import Tuple

from secretenv.secrets.domains.models import VARIABLE_PATTERN, SecretKind


def validate_variable_name(name: str) -> None:
    """
    Validate a target variable name.

    Args:
        name: Variable name to validate

    Raises:
        SystemExit with code 2 if validation fails
    """
    if not name:
        print("Error: Variable name cannot be empty", file=sys.stderr)
        sys.exit(2)

    if not re.fullmatch(VARIABLE_PATTERN, name):
        print(f"Error: Invalid variable name '{name}'", file=sys.stderr)
        print("\nVariable names must start with a letter or underscore and contain", file=sys.stderr)
        print("only letters, numbers and underscores.", file=sys.stderr)
        print("\nExamples of valid names:", file=sys.stderr)
        print("  ✓ DB_HOST", file=sys.stderr)
        print("  ✓ _PRIVATE_KEY", file=sys.stderr)
        print("\nExamples of invalid names:", file=sys.stderr)
        print("  ✗ db-host (contains hyphen)", file=sys.stderr)
        print("  ✗ 1PASSWORD (starts with a digit)", file=sys.stderr)
        sys.exit(2)


def validate_kind(kind: str) -> SecretKind:
    """
    Validate a secret kind argument.

    Raises:
        SystemExit with code 2 if the kind is unknown
    """
    try:
        return SecretKind(kind)
    except ValueError:
        print(f"Error: Unknown secret kind '{kind}'", file=sys.stderr)
        print(f"\nSupported kinds: {', '.join(k.value for k in SecretKind)}", file=sys.stderr)
        sys.exit(2)


def parse_map_item(item: str) -> Tuple[str, str]:
    """
    Parse a ``FIELD=VARIABLE`` override.

    Raises:
        SystemExit with code 2 if the item is malformed
    """
    field, sep, variable = item.partition("=")
    if not sep or not field:
        print(f"Error: Invalid mapping '{item}', expected FIELD=VARIABLE", file=sys.stderr)
        sys.exit(2)
    validate_variable_name(variable)
    return field, variable
