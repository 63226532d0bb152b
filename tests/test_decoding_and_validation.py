"""Tests for payload decoding and structural validation."""
import json

import pytest

from secretenv.secrets.domains.decoder import decode, unwrap_payload
from secretenv.secrets.domains.errors import InvalidJson, InvalidSecretShape, MissingPayload
from secretenv.secrets.domains.models import (
    BasicCredentials,
    DatabaseCredentials,
    SecretKind,
    SSHKey,
    required_fields,
)
from secretenv.secrets.domains.validator import parse_secret, validate


class TestDecoder:
    """Test suite for the payload decoder."""

    def test_decode_plain_json(self):
        """Test that a plain JSON object decodes as-is."""
        assert decode("creds", '{"username": "a", "password": "b"}') == {
            "username": "a",
            "password": "b",
        }

    def test_decode_missing_payload(self):
        """Test that None raises MissingPayload carrying the secret name."""
        with pytest.raises(MissingPayload) as exc_info:
            decode("creds", None)

        assert exc_info.value.name == "creds"
        assert "creds" in str(exc_info.value)

    def test_decode_empty_payload(self):
        """Test that an empty string is treated as a missing payload."""
        with pytest.raises(MissingPayload):
            decode("creds", "")

    def test_decode_whitespace_only_is_invalid_json(self):
        """Test that a whitespace-only payload reaches the parser and fails there."""
        with pytest.raises(InvalidJson):
            decode("creds", "   ")

    def test_decode_trims_whitespace(self):
        """Test that surrounding whitespace is ignored."""
        assert decode("kv", '  {"a": "b"}\n') == {"a": "b"}

    def test_decode_strips_byte_order_mark(self):
        """Test that a leading byte order mark is trimmed like whitespace."""
        assert decode("kv", '\ufeff{"a": "b"}') == {"a": "b"}
        assert decode("kv", ' \ufeff \'{"a": "b"}\'\n') == {"a": "b"}

    def test_decode_single_quoted_payload(self):
        """Test that one pair of single quotes is stripped."""
        assert decode("ssh", "'{\"ssh_private_key\":\"KEY\"}'") == {"ssh_private_key": "KEY"}

    def test_decode_double_quoted_escaped_payload(self):
        """Test that backslashes are dropped and one pair of double quotes stripped."""
        payload = r'"{\"username\":\"a\",\"password\":\"b\"}"'
        assert decode("creds", payload) == {"username": "a", "password": "b"}

    def test_quote_stripping_applied_once(self):
        """Test that a doubly quoted payload keeps its inner layer and fails to parse."""
        payload = "\"'{\"a\":\"b\"}'\""
        assert unwrap_payload(payload) == "'{\"a\":\"b\"}'"

        with pytest.raises(InvalidJson):
            decode("kv", payload)

    def test_invalid_json_message(self):
        """Test that invalid JSON raises InvalidJson naming the secret."""
        with pytest.raises(InvalidJson) as exc_info:
            decode("broken", "{not json")

        assert exc_info.value.name == "broken"
        assert "Unable to parse JSON secret from 'broken'" in str(exc_info.value)
        assert exc_info.value.reason

    def test_non_standard_constants_rejected(self):
        """Test that NaN is not accepted as JSON."""
        with pytest.raises(InvalidJson):
            decode("kv", '{"a": NaN}')

    def test_decode_is_idempotent_after_first_unwrap(self):
        """Test that re-serializing a decoded value decodes to the same value."""
        value = decode("db", "'{\"host\": \"h\", \"port\": \"1\", \"nested\": [1, 2]}'")
        assert decode("db", json.dumps(value)) == value

    def test_decode_returns_non_objects_unvalidated(self):
        """Test that decoding does not enforce any shape."""
        assert decode("list", "[1, 2]") == [1, 2]


class TestValidator:
    """Test suite for shape validation."""

    def test_basic_credentials_valid(self):
        """Test a well-formed basic_credentials value."""
        assert validate({"username": "a", "password": "b"}, SecretKind.BASIC_CREDENTIALS)

    def test_kind_accepted_as_string(self):
        """Test that kinds may be passed by name."""
        assert validate({"username": "a", "password": "b"}, "basic_credentials")

    def test_missing_field_invalid(self):
        """Test that a missing required field fails validation."""
        assert not validate({"username": "a"}, "basic_credentials")

    def test_wrong_type_invalid(self):
        """Test that a non-string required field fails validation."""
        assert not validate({"username": "a", "password": 5}, "basic_credentials")

    def test_extra_fields_ignored(self):
        """Test that unrecognized fields are permitted."""
        assert validate({"ssh_private_key": "KEY", "comment": 1}, "ssh_key")

    def test_non_objects_invalid(self):
        """Test that null, lists and primitives never validate."""
        for value in (None, [], ["username"], "text", 3):
            assert validate(value, "key_value") is False

    def test_database_missing_dbname_invalid(self):
        """Test that database_credentials requires dbname."""
        value = {
            "engine": "postgres",
            "username": "u",
            "password": "p",
            "host": "h",
            "port": "5432",
        }
        assert not validate(value, "database_credentials")
        value["dbname"] = "main"
        assert validate(value, "database_credentials")

    def test_database_port_must_be_text(self):
        """Test that a numeric port is rejected."""
        value = {
            "engine": "postgres",
            "username": "u",
            "password": "p",
            "host": "h",
            "dbname": "main",
            "port": 5432,
        }
        assert not validate(value, "database_credentials")

    def test_key_value_requires_text_values(self):
        """Test key_value accepts any keys but only string values."""
        assert validate({"a": "1", "b": "2"}, "key_value")
        assert validate({}, "key_value")
        assert not validate({"a": "1", "b": None}, "key_value")
        assert not validate({"a": {"nested": "x"}}, "key_value")

    def test_unknown_kind_invalid(self):
        """Test that an unknown kind never validates."""
        assert validate({"username": "a", "password": "b"}, "api_token") is False

    def test_required_fields(self):
        """Test that required fields follow the typed shapes."""
        assert required_fields(SecretKind.BASIC_CREDENTIALS) == ("username", "password")
        assert required_fields(SecretKind.SSH_KEY) == ("ssh_private_key",)
        assert set(required_fields(SecretKind.DATABASE_CREDENTIALS)) == {
            "engine", "username", "password", "host", "dbname", "port",
        }
        assert required_fields(SecretKind.KEY_VALUE) == ()


class TestParseSecret:
    """Test suite for parsing into typed shapes."""

    def test_parse_basic_credentials(self):
        """Test parsing drops extra fields into a BasicCredentials."""
        parsed = parse_secret({"username": "a", "password": "b", "x": "y"}, "basic_credentials")
        assert parsed == BasicCredentials(username="a", password="b")

    def test_parse_database_credentials(self):
        """Test parsing a database secret."""
        parsed = parse_secret(
            {
                "engine": "mysql",
                "username": "u",
                "password": "p",
                "host": "h",
                "dbname": "d",
                "port": "3306",
            },
            SecretKind.DATABASE_CREDENTIALS,
        )
        assert isinstance(parsed, DatabaseCredentials)
        assert parsed.port == "3306"

    def test_parse_ssh_key(self):
        """Test parsing an ssh_key secret."""
        assert parse_secret({"ssh_private_key": "KEY"}, "ssh_key") == SSHKey("KEY")

    def test_parse_key_value_returns_dict(self):
        """Test that key_value parses into a plain dict copy."""
        value = {"a": "1"}
        parsed = parse_secret(value, "key_value")
        assert parsed == {"a": "1"}
        assert parsed is not value

    def test_parse_invalid_raises(self):
        """Test that parsing an invalid value raises InvalidSecretShape."""
        with pytest.raises(InvalidSecretShape) as exc_info:
            parse_secret({"username": "a"}, "basic_credentials", "creds")

        assert exc_info.value.kind == "basic_credentials"
        assert "creds" in str(exc_info.value)
