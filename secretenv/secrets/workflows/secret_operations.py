"""Workflow for mapping secrets into a variable store with a decoded-secret cache."""
import os
import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from ..domains.models import DEFAULT_MAPPINGS, SecretBinding, SecretKind
from ..domains.validator import parse_secret
from ..domains.variable_store import PROCESS_STORE, VariableStore
from .handlers import SecretHandler, SecretMethod

logger = logging.getLogger(__name__)


class SecretEnv:
    """
    Entry point for mapping JSON secrets onto configuration variables.

    Example:
        env = SecretEnv()
        handle_db = env.database({"host": "MY_DB_HOST"})
        handle_db("SCW_DB_SECRET", raw_json)

    Each successfully decoded secret is cached by name for the lifetime of
    this object (last write wins).
    """

    def __init__(self, store: Optional[VariableStore] = None):
        self.store = store if store is not None else PROCESS_STORE
        # {secret_name -> decoded value}
        self._secrets: Dict[str, Any] = {}

        self.database = self._method(SecretKind.DATABASE_CREDENTIALS)
        self.credentials = self._method(SecretKind.BASIC_CREDENTIALS)
        self.kv = self._method(SecretKind.KEY_VALUE)
        self.ssh = self._method(SecretKind.SSH_KEY)

    def _method(self, kind: SecretKind) -> SecretMethod:
        return SecretMethod(kind, DEFAULT_MAPPINGS[kind], self.store, self._remember)

    def _remember(self, name: str, value: Any) -> None:
        self._secrets[name] = value

    def handler(
        self,
        kind: Union[SecretKind, str],
        mapping: Optional[Mapping[str, str]] = None,
    ) -> SecretHandler:
        """
        Build a handler for ``kind`` with optional mapping overrides.

        Raises:
            ValueError: If ``kind`` is not a known secret kind
        """
        return self._method(SecretKind(kind))(mapping)

    def exists(self, variable: str) -> bool:
        """Return True if ``variable`` is set in the store."""
        return self.store.has(variable)

    def is_decoded(self, name: str) -> bool:
        """Return True if a secret called ``name`` has been decoded."""
        return name in self._secrets

    def decoded(self, name: str) -> Optional[Any]:
        """Return the cached decoded value of secret ``name``, or None."""
        return self._secrets.get(name)

    def typed(self, name: str, kind: Union[SecretKind, str]):
        """
        Return the cached secret ``name`` parsed into the typed shape of ``kind``.

        Raises:
            KeyError: If the secret has not been decoded
            InvalidSecretShape: If the cached value does not match ``kind``
        """
        if name not in self._secrets:
            raise KeyError(f"Secret '{name}' has not been decoded")
        return parse_secret(self._secrets[name], kind, name)


def apply_bindings(
    bindings: Iterable[SecretBinding],
    env: SecretEnv,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Map every declared binding, reading raw payloads from ``environ``.

    Args:
        bindings: Bindings loaded from a bindings file
        env: Destination facade
        environ: Where payloads are looked up (process environment if omitted)

    Returns:
        All variables written, in binding order

    Raises:
        SecretError: On the first binding that fails to map
    """
    if environ is None:
        environ = os.environ

    written: Dict[str, str] = {}
    for binding in bindings:
        payload = environ.get(binding.source_variable)
        handler = env.handler(binding.kind, binding.mapping)

        if binding.optional and not payload:
            logger.warning(
                f"Optional secret '{binding.name}' has no payload in "
                f"{binding.source_variable}, skipping"
            )
            continue

        written.update(handler.apply(binding.name, payload))
        logger.info(f"Applied {binding.kind} secret '{binding.name}'")

    return written
