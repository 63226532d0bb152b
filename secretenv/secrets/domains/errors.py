"""Errors raised while decoding and mapping secrets."""
from typing import Optional


class SecretError(ValueError):
    """Base class for every secret decoding or mapping failure."""
    pass


def _secret_label(name: Optional[str]) -> str:
    return f" in secret '{name}'" if name else ""


class MissingPayload(SecretError):
    """No payload was supplied for a required secret."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No JSON provided for secret '{name}'")


class InvalidJson(SecretError):
    """The payload does not parse as JSON after trimming and unwrapping."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Unable to parse JSON secret from '{name}': {reason}")


class InvalidSecretShape(SecretError):
    """The decoded value does not match the structure of its kind."""

    def __init__(self, kind: str, name: Optional[str] = None):
        self.kind = kind
        self.name = name
        super().__init__(
            f"Invalid secret for type '{kind}'{_secret_label(name)}, "
            f"missing or wrong-typed fields."
        )


class MissingSecretField(SecretError):
    """A mapping entry references a field the secret does not have."""

    def __init__(self, field: str, kind: str, variable: str, name: Optional[str] = None):
        self.field = field
        self.kind = kind
        self.variable = variable
        self.name = name
        super().__init__(
            f"Secret key '{field}' not found for type '{kind}'{_secret_label(name)}. "
            f"Cannot map to environment variable '{variable}'."
        )


class NullSecretField(SecretError):
    """A mapping entry references a field whose value is null."""

    def __init__(self, field: str, kind: str, variable: str, name: Optional[str] = None):
        self.field = field
        self.kind = kind
        self.variable = variable
        self.name = name
        super().__init__(
            f"Secret property '{field}' is null for type '{kind}'{_secret_label(name)}. "
            f"Cannot map to environment variable '{variable}'."
        )
