"""Protocolo da primitiva de verificação de assinatura de interações."""

from __future__ import annotations

from abc import ABC, abstractmethod


class SignatureVerifierProtocol(ABC):
    """Capacidade `verify(body, signature, timestamp, key) -> bool`."""

    @abstractmethod
    async def verify(
        self,
        body: bytes,
        signature: str,
        timestamp: str,
        public_key: str,
    ) -> bool:
        """Verifica a assinatura de `timestamp + body`.

        Returns:
            True se válida; False para assinatura malformada ou incorreta.

        Raises:
            ValueError: Se a chave pública configurada for inválida.
        """
