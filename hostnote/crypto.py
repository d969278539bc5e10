"""Per-user key derivation and authenticated encryption of file contents.

Blob format (base64 text):

    salt (64 bytes) || nonce (16 bytes) || tag (16 bytes) || ciphertext

The file key is PBKDF2-HMAC-SHA512 over the user key and the blob's own
salt; the user key is PBKDF2-HMAC-SHA512 over the master secret, salted
with ``"user:" + identity``.
"""

import base64
import binascii
import os
from typing import Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from hostnote.constants import (
    CIPHERTEXT_POSITION,
    DEFAULT_KDF_ITERATIONS,
    KEY_LENGTH,
    NONCE_LENGTH,
    SALT_LENGTH,
    TAG_LENGTH,
    TAG_POSITION,
    USER_KEY_SALT_PREFIX,
)
from hostnote.exceptions import AuthenticationError


def _pbkdf2_sha512(password: bytes, salt: bytes, iterations: int) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA512(),
        length=KEY_LENGTH,
        salt=salt,
        iterations=iterations,
    )
    return kdf.derive(password)


def derive_user_key(master_secret: str, identity: str, iterations: int = DEFAULT_KDF_ITERATIONS) -> bytes:
    """
    Stretch the master secret into a key bound to one identity.

    Args:
        master_secret: Process-wide secret (used as UTF-8 password)
        identity: Trusted identity string
        iterations: PBKDF2 iteration count

    Returns:
        32-byte user key
    """
    salt = f"{USER_KEY_SALT_PREFIX}{identity}".encode("utf-8")
    return _pbkdf2_sha512(master_secret.encode("utf-8"), salt, iterations)


def derive_file_key(user_key: bytes, salt: bytes, iterations: int = DEFAULT_KDF_ITERATIONS) -> bytes:
    """
    Stretch a user key with a per-encryption salt into a single-use file key.

    Args:
        user_key: Output of derive_user_key
        salt: Random salt stored at the head of the blob
        iterations: PBKDF2 iteration count

    Returns:
        32-byte file key
    """
    return _pbkdf2_sha512(user_key, salt, iterations)


class ContentCipher:
    """
    AES-256-GCM encryption of file payloads, keyed per user and per call.

    Stateless apart from the master secret and iteration count it was
    constructed with; safe to share between threads.
    """

    def __init__(self, master_secret: str, iterations: int = DEFAULT_KDF_ITERATIONS):
        if not master_secret:
            raise ValueError("master_secret must be non-empty")
        self._master_secret = master_secret
        self.iterations = iterations

    def user_key(self, identity: str) -> bytes:
        return derive_user_key(self._master_secret, identity, self.iterations)

    def encrypt(self, plaintext: bytes, identity: str) -> str:
        """
        Encrypt plaintext for an identity.

        Args:
            plaintext: Raw bytes to protect
            identity: Owner identity string

        Returns:
            Base64 text of salt || nonce || tag || ciphertext
        """
        salt = os.urandom(SALT_LENGTH)
        nonce = os.urandom(NONCE_LENGTH)
        key = derive_file_key(self.user_key(identity), salt, self.iterations)

        sealed = AESGCM(key).encrypt(nonce, plaintext, None)
        ciphertext, tag = sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]

        return base64.b64encode(salt + nonce + tag + ciphertext).decode("ascii")

    def decrypt(self, blob: Union[str, bytes], identity: str) -> bytes:
        """
        Verify and decrypt a blob produced by encrypt().

        Args:
            blob: Base64 ciphertext blob, as text or as the raw bytes read from disk
            identity: Owner identity string

        Returns:
            Plaintext bytes

        Raises:
            AuthenticationError: If the blob is malformed, tampered or keyed for someone else
        """
        if isinstance(blob, str):
            try:
                blob = blob.encode("ascii")
            except UnicodeEncodeError as e:
                raise AuthenticationError("Ciphertext blob is not valid base64") from e

        try:
            raw = base64.b64decode(blob, validate=True)
        except (binascii.Error, ValueError) as e:
            raise AuthenticationError("Ciphertext blob is not valid base64") from e

        # Unused trailing bits must be zero so every stored bit is covered
        if base64.b64encode(raw) != blob:
            raise AuthenticationError("Ciphertext blob is not canonical base64")

        if len(raw) < CIPHERTEXT_POSITION:
            raise AuthenticationError("Ciphertext blob is truncated")

        salt = raw[:SALT_LENGTH]
        nonce = raw[SALT_LENGTH:TAG_POSITION]
        tag = raw[TAG_POSITION:CIPHERTEXT_POSITION]
        ciphertext = raw[CIPHERTEXT_POSITION:]

        key = derive_file_key(self.user_key(identity), salt, self.iterations)

        try:
            return AESGCM(key).decrypt(nonce, ciphertext + tag, None)
        except InvalidTag as e:
            raise AuthenticationError("Ciphertext failed authentication") from e
