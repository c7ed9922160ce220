import logging
import sys

from loguru import logger

from cep_clima.config import env


logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

# stdout é reservado para o transporte stdio do MCP
logger.remove()
logger.add(sys.stderr, level=env.LOG_LEVEL.upper())

logger.disable("httpx")
logger.disable("httpcore")
