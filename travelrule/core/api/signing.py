"""
Request signers.

A signer turns the canonical payload of a signed request (query string
followed by form body) into the value of the ``signature`` parameter.
"""
import base64
from enum import Enum
from typing import Protocol, Union, runtime_checkable

from Crypto.Hash import HMAC, SHA256
from Crypto.PublicKey import ECC, RSA
from Crypto.Signature import eddsa, pkcs1_15

from ..exceptions import ValidationError


class KeyType(str, Enum):
    """API key types accepted by the exchange."""
    HMAC = 'HMAC'
    RSA = 'RSA'
    ED25519 = 'ED25519'


@runtime_checkable
class Signer(Protocol):
    """Protocol for request signers."""

    def sign(self, payload: str) -> str:
        """
        Sign a canonical request payload.

        Args:
            payload: Query string concatenated with the form body

        Returns:
            Signature to send as the ``signature`` parameter
        """
        ...


def _to_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, str):
        return value.encode('utf-8')
    return value


class HMACSigner:
    """HMAC-SHA256 signer, hex encoded."""

    def __init__(self, secret: Union[str, bytes]):
        self._secret = _to_bytes(secret)

    def sign(self, payload: str) -> str:
        mac = HMAC.new(self._secret, _to_bytes(payload), digestmod=SHA256)
        return mac.hexdigest()


class RSASigner:
    """RSASSA-PKCS1-v1_5 SHA-256 signer, base64 encoded."""

    def __init__(self, private_key: Union[str, bytes], passphrase: str = None):
        self._key = RSA.import_key(_to_bytes(private_key), passphrase=passphrase)

    def sign(self, payload: str) -> str:
        digest = SHA256.new(_to_bytes(payload))
        signature = pkcs1_15.new(self._key).sign(digest)
        return base64.b64encode(signature).decode('ascii')


class Ed25519Signer:
    """Ed25519 signer, base64 encoded."""

    def __init__(self, private_key: Union[str, bytes], passphrase: str = None):
        self._key = ECC.import_key(_to_bytes(private_key), passphrase=passphrase)
        if self._key.curve.lower() != 'ed25519':
            raise ValueError(f"Expected an Ed25519 key, got curve {self._key.curve}")

    def sign(self, payload: str) -> str:
        signature = eddsa.new(self._key, 'rfc8032').sign(_to_bytes(payload))
        return base64.b64encode(signature).decode('ascii')


def create_signer(key_type: KeyType, secret: Union[str, bytes]) -> Signer:
    """
    Create the signer matching an API key type.

    Args:
        key_type: Type of the API key
        secret: HMAC secret, or PEM private key for RSA/Ed25519 keys

    Returns:
        Signer instance

    Raises:
        ValidationError: If the secret is not a usable private key
    """
    key_type = KeyType(key_type)
    try:
        if key_type is KeyType.RSA:
            return RSASigner(secret)
        if key_type is KeyType.ED25519:
            return Ed25519Signer(secret)
    except (ValueError, IndexError, TypeError) as e:
        raise ValidationError(
            f"Invalid {key_type.value} private key: {e}",
            field='secret_key'
        ) from e
    return HMACSigner(secret)
