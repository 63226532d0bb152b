"""Domain models for secret kinds, shapes and bindings."""
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Dict, Optional

# Portable environment variable name
VARIABLE_PATTERN = r'^[A-Za-z_][A-Za-z0-9_]*$'


class SecretKind(str, Enum):
    """Closed set of secret shapes that can be mapped."""
    BASIC_CREDENTIALS = "basic_credentials"
    DATABASE_CREDENTIALS = "database_credentials"
    KEY_VALUE = "key_value"
    SSH_KEY = "ssh_key"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class BasicCredentials:
    """A ``basic_credentials`` secret."""
    username: str
    password: str


@dataclass(frozen=True)
class DatabaseCredentials:
    """A ``database_credentials`` secret."""
    engine: str
    username: str
    password: str
    host: str
    dbname: str
    port: str


@dataclass(frozen=True)
class SSHKey:
    """An ``ssh_key`` secret."""
    ssh_private_key: str


# key_value has no fixed shape, it decodes into a plain Dict[str, str]
SHAPES = {
    SecretKind.BASIC_CREDENTIALS: BasicCredentials,
    SecretKind.DATABASE_CREDENTIALS: DatabaseCredentials,
    SecretKind.SSH_KEY: SSHKey,
}

DEFAULT_MAPPINGS: Dict[SecretKind, Dict[str, str]] = {
    SecretKind.DATABASE_CREDENTIALS: {
        "engine": "DB_CONNECTION",
        "host": "DB_HOST",
        "port": "DB_PORT",
        "username": "DB_USER",
        "password": "DB_PASSWORD",
        "dbname": "DB_DATABASE",
    },
    SecretKind.BASIC_CREDENTIALS: {
        "username": "USERNAME",
        "password": "PASSWORD",
    },
    SecretKind.SSH_KEY: {
        "ssh_private_key": "SSH_PRIVATE_KEY",
    },
    SecretKind.KEY_VALUE: {},
}


def required_fields(kind: SecretKind) -> tuple:
    """Return the field names a fixed-shape kind must carry (empty for key_value)."""
    shape = SHAPES.get(kind)
    if shape is None:
        return ()
    return tuple(f.name for f in fields(shape))


@dataclass
class SecretBinding:
    """One secret declared in a bindings file."""
    name: str
    kind: SecretKind
    mapping: Dict[str, str] = field(default_factory=dict)
    optional: bool = False
    source: Optional[str] = None

    @property
    def source_variable(self) -> str:
        """Environment variable holding the raw payload."""
        return self.source or self.name
