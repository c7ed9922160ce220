# -*- coding: utf-8 -*-
from os import getenv
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import dotenv_values
from loguru import logger


_env_cache: Dict[str, Optional[str]] = {}


def _load_dotenv() -> Dict[str, Optional[str]]:
    """Carrega (uma única vez) as variáveis do arquivo .env na raiz do projeto.

    Returns:
        Dict[str, Optional[str]]: Variáveis definidas no .env, ou dict vazio.
    """
    global _env_cache

    if _env_cache:
        return _env_cache

    env_path = Path(".env")
    if not env_path.exists():
        return {}

    _env_cache = dict(dotenv_values(env_path))
    return _env_cache


def getenv_or_action(
    env_name: str, *, action: str = "raise", default: str = None
) -> str:
    """Obtém uma variável de ambiente ou executa uma ação quando ausente.

    A busca é feita primeiro no ambiente do processo e depois no arquivo .env.

    Args:
        env_name (str): Nome da variável.
        action (str, optional): "raise", "warn" ou "ignore". Defaults to "raise".
        default (str, optional): Valor padrão quando a variável não existe.

    Raises:
        ValueError: Se a ação não for uma das aceitas.
        EnvironmentError: Se action="raise" e a variável não existir.

    Returns:
        str: O valor encontrado, o default, ou None.
    """
    if action not in ["raise", "warn", "ignore"]:
        raise ValueError("action must be one of 'raise', 'warn', or 'ignore'")

    value = getenv(env_name, None)

    if value is None:
        value = _load_dotenv().get(env_name, default)

    if value is None:
        if action == "raise":
            raise EnvironmentError(f"Environment variable {env_name} is not set.")
        elif action == "warn":
            logger.warning(f"Warning: Environment variable {env_name} is not set.")
    return value


def getenv_bool(env_name: str, *, default: bool = False) -> bool:
    """Lê uma flag booleana ("true", "1", "yes", "sim")."""
    value = getenv_or_action(env_name, default=str(default).lower(), action="ignore")
    return str(value).strip().lower() in ("true", "1", "yes", "sim")


def getenv_float(env_name: str, *, default: float) -> float:
    """Lê um número; valores inválidos caem no default com aviso."""
    value = getenv_or_action(env_name, default=str(default), action="ignore")
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning(
            f"Valor inválido para {env_name}: {value!r}. Usando padrão {default}."
        )
        return default


def getenv_list_or_action(
    env_name: str, *, action: str = "raise", default: str = None
) -> List[str]:
    """Lê uma lista separada por vírgulas, descartando itens vazios."""
    value = getenv_or_action(env_name, action=action, default=default)
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]
