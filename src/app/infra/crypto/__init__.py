"""Criptografia para verificação de interações do Discord.

Localizado em app/infra/ para manter boundaries corretas:
a camada api/ recebe o verificador já construído via bootstrap.
"""

from .ed25519 import Ed25519SignatureVerifier, load_public_key, verify_ed25519
from .errors import PublicKeyError

__all__ = [
    "Ed25519SignatureVerifier",
    "PublicKeyError",
    "load_public_key",
    "verify_ed25519",
]
