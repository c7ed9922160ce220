"""
Configurações centralizadas do servidor MCP do assistente de CEP e clima.
"""
from typing import Any, Dict

from cep_clima.config import env


class Settings:
    """Configurações do servidor MCP"""

    SERVER_NAME: str = "Assistente CEP e Clima MCP Server"
    VERSION: str = "1.0.0"
    DEBUG: bool = env.ENVIRONMENT in ("dev", "local")

    TIMEZONE: str = "America/Sao_Paulo"

    LOG_LEVEL: str = env.LOG_LEVEL

    @classmethod
    def get_server_info(cls) -> Dict[str, Any]:
        """Retorna informações do servidor"""
        return {
            "name": cls.SERVER_NAME,
            "version": cls.VERSION,
            "debug": cls.DEBUG,
            "timezone": cls.TIMEZONE,
            "ai_classification": bool(
                env.GEMINI_API_KEY and env.AI_CLASSIFICATION_ENABLED
            ),
        }
