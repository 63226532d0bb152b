"""Projection of decoded secret fields into a variable store."""
import json
import logging
from typing import Any, Dict, Mapping, Optional, Union

from .errors import InvalidSecretShape, MissingSecretField, NullSecretField
from .models import SecretKind
from .validator import validate
from .variable_store import VariableStore

logger = logging.getLogger(__name__)


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    # Extra, unvalidated fields may hold numbers or booleans
    return json.dumps(value)


def resolve(
    value: Mapping[str, Any],
    kind: Union[SecretKind, str],
    mapping: Mapping[str, str],
    name: Optional[str] = None,
) -> Dict[str, str]:
    """
    Resolve ``mapping`` against a decoded secret without writing anything.

    Returns:
        Ordered dict of variable name -> text value, in mapping order

    Raises:
        MissingSecretField: If a mapped field is absent from the secret
        NullSecretField: If a mapped field is null
    """
    resolved: Dict[str, str] = {}
    for field, variable in mapping.items():
        if field not in value:
            raise MissingSecretField(field, str(kind), variable, name)

        field_value = value[field]
        if field_value is None:
            raise NullSecretField(field, str(kind), variable, name)

        resolved[variable] = _as_text(field_value)
    return resolved


def project(
    value: Any,
    kind: Union[SecretKind, str],
    mapping: Mapping[str, str],
    store: VariableStore,
    name: Optional[str] = None,
) -> Dict[str, str]:
    """
    Write the mapped fields of a decoded secret into ``store``.

    The value is checked against its kind first. Every mapped field is then
    resolved before the first write, so a failure leaves the store untouched.

    Args:
        value: Decoded secret
        kind: Secret kind the value must match
        mapping: Secret field -> variable name
        store: Destination store
        name: Secret name, used only in error messages

    Returns:
        The variables that were written

    Raises:
        InvalidSecretShape: If the value does not match ``kind``
        MissingSecretField: If a mapped field is absent
        NullSecretField: If a mapped field is null
    """
    if not validate(value, kind):
        raise InvalidSecretShape(str(kind), name)

    resolved = resolve(value, kind, mapping, name)
    store.set_many(resolved)

    logger.debug(f"Mapped {len(resolved)} field(s) of {kind} secret '{name}'")
    return resolved
