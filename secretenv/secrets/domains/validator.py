"""Structural checks of decoded secrets against their kind."""
from typing import Any, Dict, Optional, Union

from .errors import InvalidSecretShape
from .models import (
    SHAPES,
    BasicCredentials,
    DatabaseCredentials,
    SecretKind,
    SSHKey,
    required_fields,
)


def _as_kind(kind: Union[SecretKind, str]):
    try:
        return SecretKind(kind)
    except ValueError:
        return None


def validate(value: Any, kind: Union[SecretKind, str]) -> bool:
    """
    Check that a decoded value has the structure expected for ``kind``.

    Fixed-shape kinds need every required field present as a string; extra
    fields are ignored. ``key_value`` needs every value to be a string.
    Never raises: anything that is not a JSON object, or an unknown kind,
    simply fails the check.
    """
    if not isinstance(value, dict):
        return False

    kind = _as_kind(kind)
    if kind is None:
        return False

    if kind is SecretKind.KEY_VALUE:
        return all(isinstance(v, str) for v in value.values())

    return all(isinstance(value.get(f), str) for f in required_fields(kind))


def parse_secret(
    value: Any,
    kind: Union[SecretKind, str],
    name: Optional[str] = None,
) -> Union[BasicCredentials, DatabaseCredentials, SSHKey, Dict[str, str]]:
    """
    Validate ``value`` and return it as the typed shape for ``kind``.

    Returns a shape dataclass for fixed kinds and a plain dict for
    ``key_value``. Extra fields are dropped from the dataclass.

    Raises:
        InvalidSecretShape: If the value does not match the kind
    """
    if not validate(value, kind):
        raise InvalidSecretShape(str(kind), name)

    kind = SecretKind(kind)
    if kind is SecretKind.KEY_VALUE:
        return dict(value)

    shape = SHAPES[kind]
    data: Dict[str, str] = {f: value[f] for f in required_fields(kind)}
    return shape(**data)
