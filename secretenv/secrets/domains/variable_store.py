"""Text-keyed variable namespace that mapped secret fields are written into."""
import os
import logging
import threading
from typing import Dict, MutableMapping, Optional

logger = logging.getLogger(__name__)


class VariableStore:
    """
    Thin wrapper around a mutable string mapping.

    With no backing mapping the store writes straight into ``os.environ``,
    which is what a configuration layer reading the process environment
    expects. Pass a plain dict to get an isolated namespace.
    """

    def __init__(self, backing: Optional[MutableMapping[str, str]] = None):
        self._backing = os.environ if backing is None else backing
        self._lock = threading.Lock()

    @property
    def is_process_environment(self) -> bool:
        return self._backing is os.environ

    def set(self, name: str, value: str) -> None:
        """Set ``name`` to ``value``, overwriting any previous value."""
        with self._lock:
            self._backing[name] = value
        logger.debug(f"Set variable {name}")

    def set_many(self, values: Dict[str, str]) -> None:
        """Set several variables under one lock acquisition."""
        with self._lock:
            for name, value in values.items():
                self._backing[name] = value
        logger.debug(f"Set variables: {', '.join(values)}")

    def has(self, name: str) -> bool:
        """Return True if ``name`` is present in the store."""
        return name in self._backing

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self._backing.get(name, default)

    def __len__(self) -> int:
        return len(self._backing)

    def snapshot(self) -> Dict[str, str]:
        """Copy of the current contents."""
        with self._lock:
            return dict(self._backing)


# Shared by every handler and SecretEnv built without an explicit store, so
# all writes into os.environ go through one lock
PROCESS_STORE = VariableStore()
