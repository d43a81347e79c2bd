from typing import Any, Protocol
import json
import yaml

from treepath_lib.errors import MalformedDataError


class Serializer(Protocol):
    """Serialize/deserialize value trees for backends that store bytes.

    Implementations should be symmetric: `dump` -> bytes, `load` <- bytes.
    `load` raises `MalformedDataError` when the bytes cannot be parsed.
    """

    def dump(self, value: Any, compact: bool = False) -> bytes: ...

    def load(self, data: bytes) -> Any: ...


class JSONSerializer:
    """Serializer using JSON (text). `compact` drops indentation and spaces."""

    def __init__(self, indent: int = 4) -> None:
        self.indent = indent

    def dump(self, value: Any, compact: bool = False) -> bytes:
        if compact:
            text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
        else:
            text = json.dumps(value, ensure_ascii=False, indent=self.indent)
        return text.encode("utf-8")

    def load(self, data: bytes) -> Any:
        if not data.strip():
            raise MalformedDataError("empty JSON document")
        try:
            return json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MalformedDataError(f"invalid JSON document: {e}") from e


class YAMLSerializer:
    """Serializer using YAML (text). Key order is kept as inserted."""

    def __init__(self, indent: int = 4) -> None:
        self.indent = indent

    def dump(self, value: Any, compact: bool = False) -> bytes:
        if compact:
            text = yaml.safe_dump(value, default_flow_style=True, sort_keys=False, allow_unicode=True, width=2147483647)
        else:
            text = yaml.safe_dump(value, default_flow_style=False, sort_keys=False, allow_unicode=True, indent=self.indent)
        return text.encode("utf-8")

    def load(self, data: bytes) -> Any:
        try:
            text = data.decode("utf-8")
            value = yaml.safe_load(text)
            # an explicit null is a value, a stream without a document is not
            if value is None and yaml.compose(text, Loader=yaml.SafeLoader) is None:
                raise MalformedDataError("empty YAML document")
        except (UnicodeDecodeError, yaml.YAMLError) as e:
            raise MalformedDataError(f"invalid YAML document: {e}") from e
        return value


class EncryptedSerializer:
        """Serializer that encrypts payloads using Fernet (symmetric, authenticated).

        Notes:
        - `base_serializer` defaults to JSON and produces the plaintext that
            gets encrypted; `compact` is passed through to it.
        - With `password`, each payload carries a random salt and the PBKDF2
            iteration count so the loader can derive the key again.
        - Key rotation is left to callers; this class encrypts and decrypts
            with a single key.
        - A document written in the other mode (key vs password) fails to
            load with `MalformedDataError`, the same as a wrong key.
        """

        def __init__(
            self,
            *,
            key: bytes | None = None,
            password: str | None = None,
            iterations: int = 390000,
            base_serializer: Serializer | None = None,
        ) -> None:
            """Create an EncryptedSerializer.

            Provide either `key` (a Fernet key) or `password` (a passphrase).
            """
            if key is None and password is None:
                raise ValueError("EncryptedSerializer requires either `key` or `password`")
            self._key = key
            self._password = password
            self._iterations = iterations
            self.base_serializer = base_serializer or JSONSerializer()

        def _derive_key(self, password: str, salt: bytes, iterations: int) -> bytes:
            import base64
            from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
            from cryptography.hazmat.primitives import hashes

            kdf = PBKDF2HMAC(
                algorithm=hashes.SHA256(),
                length=32,
                salt=salt,
                iterations=iterations,
            )
            return base64.urlsafe_b64encode(kdf.derive(password.encode("utf-8")))

        def dump(self, value: Any, compact: bool = False) -> bytes:
            """Serialize and encrypt value, returning a framed JSON blob."""
            import os
            import base64
            from cryptography.fernet import Fernet
            inner = self.base_serializer.dump(value, compact)

            if self._password is not None:
                salt = os.urandom(16)
                key = self._derive_key(self._password, salt, self._iterations)
                ct = Fernet(key).encrypt(inner)
                frame = {
                    "v": 1,
                    "mode": "password",
                    "kdf": "pbkdf2",
                    "iterations": self._iterations,
                    "salt": base64.urlsafe_b64encode(salt).decode("ascii"),
                    "ct": base64.urlsafe_b64encode(ct).decode("ascii"),
                }
            else:
                ct = Fernet(self._key).encrypt(inner)
                frame = {"v": 1, "mode": "key", "ct": base64.urlsafe_b64encode(ct).decode("ascii")}
            return json.dumps(frame).encode("utf-8")

        def load(self, data: bytes) -> Any:
            """Parse framed blob, derive key if needed, decrypt and deserialize."""
            import base64
            import binascii
            from cryptography.fernet import Fernet, InvalidToken

            try:
                frame = json.loads(data.decode("utf-8"))
                mode = frame.get("mode")
                if mode == "password":
                    if self._password is None:
                        raise MalformedDataError("password-mode document but the serializer was configured with a key")
                    salt = base64.urlsafe_b64decode(frame["salt"].encode("ascii"))
                    iterations = frame.get("iterations", self._iterations)
                    f = Fernet(self._derive_key(self._password, salt, iterations))
                elif mode == "key":
                    if self._key is None:
                        raise MalformedDataError("key-mode document but the serializer was configured with a password")
                    f = Fernet(self._key)
                else:
                    raise MalformedDataError("unknown frame format")
                ct = base64.urlsafe_b64decode(frame["ct"].encode("ascii"))
                pt = f.decrypt(ct)
            except (UnicodeDecodeError, json.JSONDecodeError, KeyError, AttributeError, binascii.Error, InvalidToken) as e:
                raise MalformedDataError(f"invalid encrypted document: {e!r}") from e
            return self.base_serializer.load(pt)
