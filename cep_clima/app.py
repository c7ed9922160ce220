"""
Aplicação principal do servidor FastMCP do assistente de CEP e clima.
"""

from typing import Any, Dict, List, Optional

from fastapi import Request
from fastapi.responses import PlainTextResponse
from fastmcp import FastMCP

from cep_clima.config.env import EXCLUDED_TOOLS
from cep_clima.config.settings import Settings
from cep_clima.tools.assistente import tool
from cep_clima.utils.log import logger


def create_app() -> FastMCP:
    """
    Cria e configura a aplicação FastMCP.

    Returns:
        Instância configurada do FastMCP
    """
    mcp = FastMCP(name=Settings.SERVER_NAME)

    def conditional_mcp_tool(tool_name: str, **kwargs):
        """Registra a tool apenas se ela não estiver em EXCLUDED_TOOLS"""

        def decorator(func):
            if tool_name not in EXCLUDED_TOOLS:
                return mcp.tool(name=tool_name, **kwargs)(func)
            else:
                logger.info(f"Tool '{tool_name}' excluded from registration")
                return func

        return decorator

    @mcp.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        return PlainTextResponse("OK")

    logger.info(f"Inicializando {Settings.SERVER_NAME} v{Settings.VERSION}")
    if EXCLUDED_TOOLS:
        logger.info(f"Tools excluídas: {', '.join(sorted(EXCLUDED_TOOLS))}")

    # ===== REGISTRAR TOOLS =====

    @conditional_mcp_tool("resolver_consulta")
    async def resolver_consulta(
        user_input: str, history: Optional[List[Dict[str, Any]]] = None
    ) -> dict:
        """
        Interpreta uma mensagem livre sobre CEP ou previsão do tempo e executa as consultas necessárias na Brasil API.

        Exemplos de mensagens: "CEP 01310-100", "CEP 01310100 e previsão", "tempo em Ibitinga", "previsão em São Paulo, SP", "e lá?".

        Args:
            user_input (str): Mensagem do usuário.
            history (List[dict], optional): Turnos anteriores da conversa em ordem cronológica. Cada turno tem `role` ("user" ou "assistant"), `content` e, nos turnos do assistente, `payload` com o resultado retornado por esta tool. Necessário para consultas contextuais ("previsão", "e lá?") e para escolher uma cidade da lista ("2", "SP").

        Returns:
            dict: Resultado com `kind`, `action`, `initial_message`, `final_message` e os dados do cenário (`address`, `forecast`, `city_candidates`).
        """
        return await tool.resolver_consulta(user_input, history)

    @conditional_mcp_tool("consultar_cep")
    async def consultar_cep(cep: str) -> dict:
        """
        Consulta o endereço de um CEP brasileiro.

        Args:
            cep (str): CEP com ou sem máscara (ex: "01310-100").

        Returns:
            dict: `zip_code`, `state`, `city`, `neighborhood` e `street`, ou `{"error": true, "message": ...}`.
        """
        return await tool.consultar_cep(cep)

    @conditional_mcp_tool("buscar_cidades")
    async def buscar_cidades(nome_cidade: str) -> dict:
        """
        Busca cidades pelo nome na base do CPTEC. Use o `id` retornado em `previsao_do_tempo`.

        Args:
            nome_cidade (str): Nome da cidade (ex: "Ibitinga").

        Returns:
            dict: `locations` com `id`, `name` e `state` de cada cidade.
        """
        return await tool.buscar_cidades(nome_cidade)

    @conditional_mcp_tool("previsao_do_tempo")
    async def previsao_do_tempo(codigo_cidade: int) -> dict:
        """
        Previsão do tempo de uma cidade pelo código do CPTEC.

        Args:
            codigo_cidade (int): Código da cidade retornado por `buscar_cidades`.

        Returns:
            dict: `city`, `state`, `updated_at` e `days` com a previsão diária.
        """
        return await tool.previsao_do_tempo(codigo_cidade)

    # ===== LOG DE INICIALIZAÇÃO =====

    logger.info("Servidor FastMCP configurado com sucesso!")

    if Settings.DEBUG:
        logger.debug("Modo DEBUG ativado")
        logger.debug(f"Configurações: {Settings.get_server_info()}")

    return mcp


# Instância global da aplicação
mcp = create_app()
