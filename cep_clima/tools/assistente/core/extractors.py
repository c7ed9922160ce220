"""
Extratores de CEP, cidade e intenção a partir de texto livre.

Todas as funções são puras e nunca levantam exceção: quando nada é
encontrado retornam None/False e quem chama decide pedir esclarecimento.
"""

import re
from typing import Dict, List, Optional

from cep_clima.tools.assistente.core.constants import (
    BRAZILIAN_STATES,
    CONTEXTUAL_WEATHER_PATTERNS,
    NON_CITY_WORDS,
    WEATHER_KEYWORDS,
    ZIPCODE_CANDIDATE_BLOCKLIST,
    ZIPCODE_KEYWORDS,
    ZIPCODE_REQUEST_KEYWORDS,
)
from cep_clima.tools.assistente.core.validators import only_digits
from cep_clima.utils.log import logger


_LETTERS = "A-Za-zÀ-ÿ"
_PUNCTUATION = "?!.,;:"

# Formatos de CEP procurados quando o texto tem mais de 8 dígitos.
# Os limites (?<!\d)/(?!\d) impedem recortar um CEP de um número maior (telefone).
ZIP_CODE_PATTERNS = [
    re.compile(r"(?<!\d)\d{5}-\d{3}(?!\d)"),  # 01310-100
    re.compile(r"(?<!\d)\d{8}(?!\d)"),  # 01310100
    re.compile(r"(?<!\d)\d{5}\s+\d{3}(?!\d)"),  # 01310 100
    re.compile(r"(?<!\d)\d{2}\.\d{3}-\d{3}(?!\d)"),  # 01.310-100
]

# Do mais específico para o mais genérico
CITY_PATTERNS = [
    re.compile(
        rf"(?:clima|tempo)\s+(?:em|para|de|do|da)\s+([{_LETTERS}\s]+?)(?:\?|\.|$|,)",
        re.IGNORECASE,
    ),
    re.compile(
        rf"(?:previsao|previsão)\s+(?:em|para|de|do|da)\s+([{_LETTERS}\s]+?)(?:\?|\.|$|,)",
        re.IGNORECASE,
    ),
    re.compile(
        rf"(?:previsao|previsão)\s+([{_LETTERS}\s]+?)(?:\?|\.|$|,)",
        re.IGNORECASE,
    ),
    re.compile(
        rf"(?:tempo|clima)\s+([{_LETTERS}\s]+?)(?:\?|\.|$|,)",
        re.IGNORECASE,
    ),
    re.compile(
        rf"\b(?:em|para|de|do|da)\s+([{_LETTERS}\s]+?)(?:\?|\.|$|,)",
        re.IGNORECASE,
    ),
]

CITY_STATE_PATTERNS = [
    re.compile(
        rf"(?:previsao|previsão|tempo|clima|temperatura)\s+(?:em|para|de|do|da)\s+"
        rf"([{_LETTERS}\s]+?)(?:,\s*|\s+)([A-Z]{{2}})(?:\?|$|\.)",
        re.IGNORECASE,
    ),
    # Sem termo de clima antes, só UF em maiúsculas ("Campinas SP")
    re.compile(
        rf"([{_LETTERS}\s]+?)(?:,\s*|\s+)([A-Z]{{2}})(?:\?|$|\.)",
    ),
]

_VALID_CITY_CHARS = re.compile(rf"^[{_LETTERS}\s\-']+$")


# ========== CEP ==========

def extract_zip_code(text: str) -> Optional[str]:
    """
    Extrai um CEP (8 dígitos, sem máscara) do texto.

    Se o texto tiver exatamente 8 dígitos eles são o CEP. Com mais de 8
    dígitos só é aceito um trecho com formato de CEP delimitado por
    não-dígitos, então um telefone de 10 dígitos não gera CEP.
    """
    if not text:
        return None

    digits = only_digits(text)
    if len(digits) == 8:
        return digits

    if len(digits) > 8:
        for pattern in ZIP_CODE_PATTERNS:
            match = pattern.search(text)
            if match:
                zip_code = only_digits(match.group(0))
                if len(zip_code) == 8:
                    return zip_code

    return None


def detect_zip_code_keyword(text: str) -> bool:
    """Texto menciona CEP/endereço (português ou inglês)."""
    lower = (text or "").lower()
    return any(keyword in lower for keyword in ZIPCODE_KEYWORDS)


def mentions_zip_code_request(text: str) -> bool:
    """Pedido explícito de CEP ("cep", "código postal", "endereço")."""
    lower = (text or "").lower()
    return any(keyword in lower for keyword in ZIPCODE_REQUEST_KEYWORDS)


# ========== CLIMA ==========

def has_weather_keyword(text: str) -> bool:
    lower = (text or "").lower()
    return any(keyword in lower for keyword in WEATHER_KEYWORDS)


def is_contextual_weather_query(text: str) -> bool:
    """
    Consulta que depende do local da conversa anterior ("previsão", "e lá?").

    O texto (minúsculo, sem espaços nem "?!." no final) precisa ser igual a
    uma das frases contextuais ou terminar nela como palavra inteira.
    """
    lower = (text or "").lower().strip().rstrip("?!. ")
    if not lower:
        return False

    for pattern in CONTEXTUAL_WEATHER_PATTERNS:
        if lower == pattern:
            return True
        if lower.endswith(pattern) and not lower[-len(pattern) - 1].isalnum():
            return True
    return False


# ========== CIDADE ==========

def is_valid_city_name(value: str) -> bool:
    """
    Verifica se a string parece um nome de cidade.

    Regras: ao menos 2 caracteres, apenas letras (com acento), espaço,
    hífen ou apóstrofo, e nenhuma palavra da lista NON_CITY_WORDS.
    """
    trimmed = (value or "").strip()
    if len(trimmed) < 2:
        return False
    if not _VALID_CITY_CHARS.match(trimmed):
        return False
    return not any(word in NON_CITY_WORDS for word in trimmed.lower().split())


def _clean_capture(value: str) -> str:
    return re.sub(rf"[{re.escape(_PUNCTUATION)}]", "", value).strip()


def _strip_non_city_words(value: str) -> Optional[str]:
    """
    Recorta o trecho de cidade de uma captura com palavras extras.

    "amanhã em Recife" -> "Recife"; "Campinas hoje" -> "Campinas".
    O último trecho válido entre palavras não-cidade vence.
    """
    segments: List[List[str]] = [[]]
    for word in value.split():
        if word.lower() in NON_CITY_WORDS:
            segments.append([])
        else:
            segments[-1].append(word)

    for segment in reversed(segments):
        candidate = " ".join(segment)
        if len(candidate) >= 2 and is_valid_city_name(candidate):
            return candidate
    return None


def extract_possible_city_names(text: str) -> List[str]:
    """Todas as sequências contíguas de palavras que passam em is_valid_city_name."""
    words = (text or "").split()
    candidates = []
    for start in range(len(words)):
        for end in range(start + 1, len(words) + 1):
            candidate = " ".join(words[start:end]).strip(_PUNCTUATION + " ")
            if is_valid_city_name(candidate):
                candidates.append(candidate)
    return candidates


def extract_best_city_name(text: str) -> Optional[str]:
    """
    Extrai o nome de cidade mais provável do texto.

    Tenta os padrões de CITY_PATTERNS em ordem; a primeira captura válida
    vence. Sem captura válida, usa a maior sequência de palavras que pareça
    nome de cidade e não contenha termos de CEP.
    """
    if not text:
        return None

    for pattern in CITY_PATTERNS:
        match = pattern.search(text)
        if not match or not match.group(1):
            continue

        city = _clean_capture(match.group(1))
        if len(city) >= 2 and is_valid_city_name(city):
            logger.debug(f"Cidade extraída por padrão: {city}")
            return city

        city = _strip_non_city_words(city)
        if city:
            logger.debug(f"Cidade extraída após limpeza: {city}")
            return city

    candidates = [
        candidate
        for candidate in extract_possible_city_names(text)
        if not any(term in candidate.lower() for term in ZIPCODE_CANDIDATE_BLOCKLIST)
    ]
    if not candidates:
        return None

    # max mantém o primeiro em caso de empate
    return max(candidates, key=len)


def extract_city_and_state(text: str) -> Optional[Dict[str, str]]:
    """
    Extrai cidade e UF ("tempo em Ibitinga, SP", "Campinas SP").

    Returns:
        {"city": ..., "state": ...} com a UF em maiúsculas, ou None
    """
    if not text:
        return None

    for pattern in CITY_STATE_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue

        city = _clean_capture(match.group(1))
        state = match.group(2).upper()

        if state not in BRAZILIAN_STATES:
            continue
        if not (len(city) >= 2 and is_valid_city_name(city)):
            city = _strip_non_city_words(city)
        if city:
            logger.debug(f"Cidade e estado extraídos: {city}/{state}")
            return {"city": city, "state": state}

    return None
