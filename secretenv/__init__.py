"""Map JSON secrets onto configuration variables."""
from secretenv.secrets.domains.decoder import decode
from secretenv.secrets.domains.errors import (
    InvalidJson,
    InvalidSecretShape,
    MissingPayload,
    MissingSecretField,
    NullSecretField,
    SecretError,
)
from secretenv.secrets.domains.mapper import project
from secretenv.secrets.domains.models import (
    DEFAULT_MAPPINGS,
    BasicCredentials,
    DatabaseCredentials,
    SecretKind,
    SSHKey,
)
from secretenv.secrets.domains.validator import parse_secret, validate
from secretenv.secrets.domains.variable_store import PROCESS_STORE, VariableStore
from secretenv.secrets.workflows.handlers import SecretHandler, SecretMethod, make_handler
from secretenv.secrets.workflows.secret_operations import SecretEnv, apply_bindings

__version__ = "0.1.0"

# Process-wide instance writing into os.environ
default_env = SecretEnv()

__all__ = [
    "BasicCredentials",
    "DatabaseCredentials",
    "DEFAULT_MAPPINGS",
    "InvalidJson",
    "InvalidSecretShape",
    "MissingPayload",
    "MissingSecretField",
    "NullSecretField",
    "PROCESS_STORE",
    "SecretEnv",
    "SecretError",
    "SecretHandler",
    "SecretKind",
    "SecretMethod",
    "SSHKey",
    "VariableStore",
    "apply_bindings",
    "decode",
    "make_handler",
    "parse_secret",
    "project",
    "default_env",
    "validate",
]
