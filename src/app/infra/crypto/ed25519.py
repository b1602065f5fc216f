"""Verificação Ed25519 de interações do Discord."""

from __future__ import annotations

import binascii
from functools import lru_cache

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from app.protocols.signature_verifier import SignatureVerifierProtocol

from .errors import PublicKeyError

_SIGNATURE_SIZE = 64
_PUBLIC_KEY_SIZE = 32


@lru_cache(maxsize=8)
def load_public_key(public_key_hex: str) -> Ed25519PublicKey:
    """Carrega chave pública Ed25519 a partir de hex.

    Raises:
        PublicKeyError: Se a chave não for hex válido de 32 bytes.
    """
    try:
        raw = bytes.fromhex(public_key_hex)
    except ValueError as exc:
        raise PublicKeyError("Invalid public key: not hex encoded") from exc
    if len(raw) != _PUBLIC_KEY_SIZE:
        raise PublicKeyError(f"Invalid public key: expected {_PUBLIC_KEY_SIZE} bytes")
    return Ed25519PublicKey.from_public_bytes(raw)


def verify_ed25519(body: bytes, signature_hex: str, timestamp: str, public_key_hex: str) -> bool:
    """Verifica a assinatura de `timestamp + body`.

    Assinatura malformada retorna False; chave inválida levanta PublicKeyError.
    """
    public_key = load_public_key(public_key_hex)
    try:
        signature = binascii.unhexlify(signature_hex)
    except (binascii.Error, ValueError):
        return False
    if len(signature) != _SIGNATURE_SIZE:
        return False
    try:
        public_key.verify(signature, timestamp.encode("utf-8") + body)
    except InvalidSignature:
        return False
    return True


class Ed25519SignatureVerifier(SignatureVerifierProtocol):
    """Implementação do protocolo de assinatura usando `cryptography`."""

    async def verify(
        self,
        body: bytes,
        signature: str,
        timestamp: str,
        public_key: str,
    ) -> bool:
        return verify_ed25519(body, signature, timestamp, public_key)
