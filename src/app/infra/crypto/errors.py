"""Erros de criptografia de interações."""


class PublicKeyError(ValueError):
    """Chave pública configurada inválida (erro de configuração)."""
