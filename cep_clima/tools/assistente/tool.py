"""
Ferramentas expostas no servidor MCP.

Todas retornam dicionários serializáveis em JSON. Falhas dos provedores
voltam como {"error": True, "message": ...} em vez de levantar exceção.
"""

import time
from functools import wraps
from typing import Any, Dict, List, Optional

from cep_clima.tools.assistente.core.validators import validate_and_clean_zip_code
from cep_clima.tools.assistente.resolver import (
    describe_error,
    get_default_resolver,
)
from cep_clima.tools.brasil_api.exceptions import (
    BrasilAPIException,
    NotFoundError,
)
from cep_clima.utils.log import logger


def log_execution_time(func):
    """Registra início, fim e duração de cada chamada de ferramenta."""

    @wraps(func)
    async def wrapper(*args, **kwargs):
        start_time = time.time()
        logger.info({"event": "tool_started", "function": func.__name__})

        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            logger.error(
                {
                    "event": "tool_failed",
                    "function": func.__name__,
                    "duration_seconds": round(time.time() - start_time, 3),
                    "error": str(e),
                }
            )
            raise

        logger.info(
            {
                "event": "tool_completed",
                "function": func.__name__,
                "duration_seconds": round(time.time() - start_time, 3),
            }
        )
        return result

    return wrapper


def _error_response(message: str) -> Dict[str, Any]:
    return {"error": True, "message": message}


@log_execution_time
async def resolver_consulta(
    user_input: str, history: Optional[List[Dict[str, Any]]] = None
) -> Dict[str, Any]:
    """
    Resolve uma mensagem livre sobre CEP ou previsão do tempo.

    Args:
        user_input: Mensagem do usuário (ex: "CEP 01310-100", "tempo em Ibitinga")
        history: Turnos anteriores da conversa, em ordem cronológica.
            Cada turno tem `role` ("user" ou "assistant"), `content` e,
            para o assistente, `payload` com o resultado devolvido antes.

    Returns:
        Resultado serializado, com `kind`, `action`, mensagens e os dados
        (`address`, `forecast`, `city_candidates`) do cenário.
    """
    outcome = await get_default_resolver().resolve(user_input, history)
    return outcome.model_dump(mode="json")


@log_execution_time
async def consultar_cep(cep: str) -> Dict[str, Any]:
    """Consulta o endereço de um CEP na Brasil API."""
    try:
        zip_code = validate_and_clean_zip_code(cep)
        address = await get_default_resolver().provider.get_address(zip_code)
    except BrasilAPIException as e:
        logger.warning(f"consultar_cep falhou para '{cep}': {e}")
        return _error_response(f"Erro na consulta do CEP: {describe_error(e, 'CEP')}")

    return address.model_dump(mode="json")


@log_execution_time
async def buscar_cidades(nome_cidade: str) -> Dict[str, Any]:
    """Busca cidades do CPTEC pelo nome; retorna todas, sem filtro."""
    if not nome_cidade or not nome_cidade.strip():
        return _error_response("Informe o nome da cidade.")

    try:
        cities = await get_default_resolver().provider.search_cities(nome_cidade)
    except NotFoundError:
        cities = []
    except BrasilAPIException as e:
        logger.warning(f"buscar_cidades falhou para '{nome_cidade}': {e}")
        return _error_response(
            f"Erro na busca de cidades: {describe_error(e, 'Cidade')}"
        )

    return {"locations": [city.model_dump(mode="json") for city in cities]}


@log_execution_time
async def previsao_do_tempo(codigo_cidade: int) -> Dict[str, Any]:
    """Previsão do tempo de uma cidade pelo código do CPTEC."""
    try:
        forecast = await get_default_resolver().provider.get_forecast(codigo_cidade)
    except BrasilAPIException as e:
        logger.warning(f"previsao_do_tempo falhou para {codigo_cidade}: {e}")
        return _error_response(
            f"Erro na consulta de previsão do tempo: {describe_error(e, 'Previsão')}"
        )

    return forecast.model_dump(mode="json")
