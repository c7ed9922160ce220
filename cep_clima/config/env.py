import os

from cep_clima.utils.env_utils import (
    getenv_bool,
    getenv_float,
    getenv_list_or_action,
    getenv_or_action,
)

# if file .env exists, load it
if os.path.exists("cep_clima/config/.env"):
    import dotenv

    dotenv.load_dotenv(dotenv_path="cep_clima/config/.env")


ENVIRONMENT = getenv_or_action("ENVIRONMENT", default="staging", action="ignore")
IS_LOCAL = getenv_bool("IS_LOCAL", default=False)
LOG_LEVEL = getenv_or_action("LOG_LEVEL", default="INFO", action="ignore")

# Brasil API (CEP + CPTEC)
BRASIL_API_BASE_URL = getenv_or_action(
    "BRASIL_API_BASE_URL", default="https://brasilapi.com.br/api", action="ignore"
)
BRASIL_API_CITY_SEARCH = getenv_or_action(
    "BRASIL_API_CITY_SEARCH", default="/cptec/v1/cidade", action="ignore"
)
BRASIL_API_WEATHER_FORECAST = getenv_or_action(
    "BRASIL_API_WEATHER_FORECAST", default="/cptec/v1/clima/previsao", action="ignore"
)
BRASIL_API_ZIPCODE_LOOKUP = getenv_or_action(
    "BRASIL_API_ZIPCODE_LOOKUP", default="/cep/v1", action="ignore"
)
BRASIL_API_TIMEOUT = getenv_float("BRASIL_API_TIMEOUT", default=30.0)

# Classificação de intenção por IA (opcional)
GEMINI_API_KEY = getenv_or_action("GEMINI_API_KEY", action="ignore")
GEMINI_MODEL = getenv_or_action("GEMINI_MODEL", default="gemini-2.5-flash", action="ignore")
AI_CLASSIFICATION_ENABLED = getenv_bool("AI_CLASSIFICATION_ENABLED", default=True)
AI_CLASSIFICATION_TIMEOUT = getenv_float("AI_CLASSIFICATION_TIMEOUT", default=15.0)

# Servidor MCP
MCP_HOST = getenv_or_action("MCP_HOST", default="0.0.0.0", action="ignore")
MCP_PORT = int(getenv_or_action("MCP_PORT", default="80", action="ignore"))

# Lista de ferramentas que não devem ser registradas no servidor MCP
# (ex: "buscar_cidades,previsao_do_tempo")
EXCLUDED_TOOLS = getenv_list_or_action("EXCLUDED_TOOLS", default="", action="ignore")
