"""
Validação e formatação de CEP.
"""

import re

from cep_clima.tools.brasil_api.exceptions import ZipCodeValidationError


def only_digits(value: str) -> str:
    return re.sub(r"\D", "", value or "")


def is_zip_code_valid(zip_code: str) -> bool:
    """Retorna True se o valor tiver exatamente 8 dígitos após a limpeza."""
    return len(only_digits(zip_code)) == 8


def validate_and_clean_zip_code(zip_code: str) -> str:
    """
    Limpa o CEP e garante o formato canônico de 8 dígitos.

    Args:
        zip_code: CEP com ou sem máscara (ex: "01310-100", "01.310-100")

    Returns:
        CEP apenas com dígitos

    Raises:
        ZipCodeValidationError: Se o CEP não tiver 8 dígitos
    """
    if not zip_code or not str(zip_code).strip():
        raise ZipCodeValidationError(str(zip_code or ""), "CEP não informado")

    clean = only_digits(str(zip_code))
    if len(clean) != 8:
        raise ZipCodeValidationError(str(zip_code))
    return clean


def format_zip_code(zip_code: str) -> str:
    """Formata para exibição (01310100 -> 01310-100); outros valores voltam intactos."""
    if zip_code and len(zip_code) == 8 and zip_code.isdigit():
        return f"{zip_code[:5]}-{zip_code[5:]}"
    return zip_code
