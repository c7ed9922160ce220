"""
Exceções customizadas para as consultas à Brasil API.

Define exceções específicas para diferenciar tipos de erro dos provedores
de CEP, busca de cidades e previsão do tempo.
"""

from typing import Optional


class BrasilAPIException(Exception):
    """Exceção base para erros da Brasil API."""
    pass


class NotFoundError(BrasilAPIException):
    """
    Recurso não encontrado no provedor (HTTP 404).

    Casos:
    - CEP inexistente
    - Nenhuma cidade com o nome buscado
    - Código de cidade sem previsão no CPTEC
    """
    pass


class DataIncompleteError(BrasilAPIException):
    """
    Resposta do provedor sem os campos obrigatórios.

    Casos:
    - CEP sem `cep`, `state` ou `city`
    - Previsão sem `cidade`, `estado` ou `clima`
    """
    pass


class APITimeoutError(BrasilAPIException):
    """Provedor não respondeu dentro do tempo configurado."""

    def __init__(self, message: str, timeout: float):
        self.timeout = timeout
        super().__init__(message)


class ProviderError(BrasilAPIException):
    """
    Qualquer outra falha do provedor.

    Casos:
    - Respostas não-2xx diferentes de 404 (500, 503, 429...)
    - Erros de rede/conexão
    - Corpo da resposta não é JSON
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ZipCodeValidationError(BrasilAPIException):
    """CEP com formato inválido, detectado antes de qualquer chamada de rede."""

    def __init__(self, zip_code: str, message: str = None):
        self.zip_code = zip_code
        self.message = message or f"CEP '{zip_code}' deve conter exatamente 8 dígitos"
        super().__init__(self.message)
