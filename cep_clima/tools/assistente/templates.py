"""
Templates de mensagens do assistente de CEP e clima.

Cada função retorna a dupla (mensagem inicial, mensagem final) exibida ao
usuário para um resultado.
"""

from typing import Tuple


Messages = Tuple[str, str]

EXEMPLOS_CONSULTA = (
    "Tente algo como: 'CEP 01310100', 'Tempo em São Paulo' ou 'Previsão em Tabatinga'."
)
DICA_CIDADE = (
    "🔍 Tente com: nome completo da cidade, incluir o estado "
    "(ex: 'São Paulo/SP') ou verificar a grafia."
)


# ========== CEP ==========

def cep_encontrado() -> Messages:
    return "✅ Encontrei as informações do CEP!", "Dados obtidos da Brasil API."


def cep_e_previsao_encontrados() -> Messages:
    return (
        "✅ Consultei tanto o CEP quanto a previsão do tempo!",
        "Dados obtidos com sucesso da Brasil API.",
    )


def cep_sem_previsao() -> Messages:
    """Endereço obtido, previsão indisponível para a cidade do CEP."""
    return (
        "✅ Encontrei as informações do CEP!",
        "⚠️ Não consegui obter a previsão do tempo para a cidade deste CEP agora.",
    )


def erro_cep(descricao: str) -> Messages:
    return (
        f"❌ Erro ao consultar o CEP: {descricao}",
        "Verifique se o CEP está correto e tente novamente.",
    )


def erro_cep_e_previsao(descricao: str) -> Messages:
    return (
        f"❌ Erro ao consultar CEP e previsão: {descricao}",
        "Tente novamente ou consulte um CEP válido.",
    )


def solicitar_cep() -> Messages:
    return (
        "📮 Para consultar um endereço, preciso de um CEP válido com 8 dígitos.",
        "Por favor, informe o CEP (ex: '01310-100' ou '01310100').",
    )


# ========== PREVISÃO ==========

def previsao_encontrada() -> Messages:
    return "🌤️ Encontrei a previsão do tempo!", "Dados obtidos da API CPTEC/Brasil API."


def previsao_com_contexto() -> Messages:
    return (
        "🌤️ Usando o contexto anterior, encontrei a previsão do tempo!",
        "Dados obtidos da API CPTEC/Brasil API.",
    )


def multiplas_cidades(nome_cidade: str) -> Messages:
    return (
        f'🏙️ Encontrei várias cidades chamadas "{nome_cidade}". Qual você deseja?',
        "Por favor, seja mais específico ou mencione o estado.",
    )


def cidade_nao_encontrada(nome_cidade: str) -> Messages:
    return (
        f'❌ Não encontrei a cidade "{nome_cidade}" na base de dados do CPTEC.',
        DICA_CIDADE,
    )


def previsao_indisponivel(nome_cidade: str) -> Messages:
    """Cidade encontrada, mas a previsão falhou."""
    return (
        f'❌ Não consegui obter a previsão do tempo para "{nome_cidade}".',
        DICA_CIDADE,
    )


def erro_previsao(descricao: str) -> Messages:
    return (
        f"❌ Erro ao consultar previsão do tempo: {descricao}",
        "Tente novamente ou verifique o nome da cidade.",
    )


def solicitar_localizacao() -> Messages:
    return (
        "🌤️ Para consultar a previsão do tempo, preciso saber a cidade.",
        "Por favor, informe o nome da cidade (ex: 'São Paulo', 'Rio de Janeiro').",
    )


def consulta_contextual() -> Messages:
    return (
        "🔍 Detectei que você quer saber sobre previsão do tempo, mas não especificou a cidade.",
        "💡 Dica: Você pode perguntar 'previsão' após consultar um CEP, "
        "ou especificar a cidade diretamente (ex: 'tempo em São Paulo').",
    )


# ========== OUTROS ==========

def fora_do_escopo() -> Messages:
    return (
        "🤔 Não consegui identificar uma consulta de CEP ou previsão do tempo.",
        EXEMPLOS_CONSULTA,
    )


def erro_interno() -> Messages:
    return "❌ Ocorreu um erro interno.", "Tente novamente em alguns instantes."
