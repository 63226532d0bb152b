"""Handler factory composing decode, validate and project for one secret kind."""
import logging
from typing import Any, Callable, Dict, Mapping, Optional, Union

from ..domains.decoder import decode
from ..domains.mapper import project
from ..domains.models import DEFAULT_MAPPINGS, SecretKind
from ..domains.variable_store import PROCESS_STORE, VariableStore

logger = logging.getLogger(__name__)

DecodedCallback = Callable[[str, Any], None]


class SecretHandler:
    """
    Maps raw secrets of one kind into a variable store.

    The field mapping is fixed when the handler is built. ``apply`` requires
    a payload; ``apply_optional`` silently skips a missing one.
    """

    def __init__(
        self,
        kind: SecretKind,
        mapping: Mapping[str, str],
        store: VariableStore,
        on_decoded: Optional[DecodedCallback] = None,
    ):
        self.kind = kind
        self.mapping: Dict[str, str] = dict(mapping)
        self._store = store
        self._on_decoded = on_decoded

    @property
    def store(self) -> VariableStore:
        return self._store

    def apply(self, name: str, payload: Optional[str]) -> Dict[str, str]:
        """
        Decode ``payload`` and write its mapped fields.

        Returns:
            The variables that were written

        Raises:
            SecretError: On a missing payload, invalid JSON, wrong shape,
                or a mapped field that is absent or null
        """
        value = decode(name, payload)
        if self._on_decoded is not None:
            self._on_decoded(name, value)
        return project(value, self.kind, self.mapping, self._store, name)

    def apply_optional(self, name: str, payload: Optional[str] = None) -> Dict[str, str]:
        """Same as ``apply`` but does nothing when no payload is given."""
        if not payload:
            logger.debug(f"No payload for optional secret '{name}', skipping")
            return {}
        return self.apply(name, payload)

    # Callable form: handler(name, payload) and handler.optional(name, payload)
    __call__ = apply
    optional = apply_optional

    def __repr__(self) -> str:
        return f"SecretHandler(kind={self.kind.value!r}, mapping={self.mapping!r})"


class SecretMethod:
    """
    Factory producing handlers of one kind from caller overrides.

    ``method(overrides)`` returns a :class:`SecretHandler`;
    ``method.optional(overrides)`` returns its optional operation directly.
    """

    def __init__(
        self,
        kind: SecretKind,
        default_mapping: Mapping[str, str],
        store: VariableStore,
        on_decoded: Optional[DecodedCallback] = None,
    ):
        self.kind = kind
        self.default_mapping: Dict[str, str] = dict(default_mapping)
        self._store = store
        self._on_decoded = on_decoded

    def __call__(self, mapping: Optional[Mapping[str, str]] = None) -> SecretHandler:
        effective = {**self.default_mapping, **(mapping or {})}
        return SecretHandler(self.kind, effective, self._store, self._on_decoded)

    def optional(self, mapping: Optional[Mapping[str, str]] = None) -> Callable[..., Dict[str, str]]:
        return self(mapping).apply_optional


def make_handler(
    kind: Union[SecretKind, str],
    default_mapping: Optional[Mapping[str, str]] = None,
    store: Optional[VariableStore] = None,
    on_decoded: Optional[DecodedCallback] = None,
) -> SecretMethod:
    """
    Build the handler factory for ``kind``.

    Args:
        kind: Secret kind
        default_mapping: Field -> variable defaults (kind defaults if omitted)
        store: Destination store (shared PROCESS_STORE over os.environ if omitted)
        on_decoded: Called with (name, value) after each successful decode

    Raises:
        ValueError: If ``kind`` is not a known secret kind
    """
    kind = SecretKind(kind)
    if default_mapping is None:
        default_mapping = DEFAULT_MAPPINGS[kind]
    if store is None:
        store = PROCESS_STORE
    return SecretMethod(kind, default_mapping, store, on_decoded)
