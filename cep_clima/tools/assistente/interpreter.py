"""
Interpretação de intenção das mensagens do usuário.

Quando há um classificador de IA configurado, ele é consultado com limite
de tempo; em qualquer falha a interpretação cai para as regras dos
extratores, sem que o usuário perceba.
"""

import asyncio
from typing import Optional

from cep_clima.config import env
from cep_clima.tools.assistente.core.constants import BRAZILIAN_STATES
from cep_clima.tools.assistente.core.extractors import (
    extract_zip_code,
    has_weather_keyword,
    is_contextual_weather_query,
)
from cep_clima.tools.assistente.core.models import (
    AIClassification,
    Interpretation,
    QueryKind,
)
from cep_clima.utils.llms import GeminiClient
from cep_clima.utils.log import logger


SYSTEM_PROMPT = """Você é um assistente especializado em interpretar consultas sobre CEP e previsão do tempo em português brasileiro.

Classifique a mensagem do usuário em um dos tipos:
- ZIP: consulta de CEP (ex: "CEP 12345678", "endereço do cep 12345-678")
- FORECAST: previsão do tempo de uma cidade (ex: "tempo em São Paulo", "clima em Ibitinga")
- ZIP_AND_FORECAST: CEP e previsão na mesma mensagem (ex: "CEP 12345678 e previsão")
- CONTEXTUAL: pergunta sobre o tempo sem dizer onde (ex: "previsão", "e lá?", "vai chover?")
- OUT_OF_SCOPE: qualquer outro assunto

Extraia também:
- city: nome completo e normalizado da cidade, se houver
- state: sigla do estado (UF), se mencionada
- is_contextual: true quando a consulta depende de um local citado antes

Considere variações como:
- "previsão tabatinga" -> city: "Tabatinga"
- "tempo são paulo sp" -> city: "São Paulo", state: "SP"
- "temperatura rio de janeiro" -> city: "Rio de Janeiro"
- "capital paulista" -> city: "São Paulo"
- "cidade maravilhosa" -> city: "Rio de Janeiro"
- "previsão" sem cidade -> CONTEXTUAL"""


def interpret_with_rules(user_input: str) -> Interpretation:
    """
    Interpretação determinística a partir dos extratores.

    CEP + clima -> ZIP_AND_FORECAST; só CEP -> ZIP; só clima -> FORECAST;
    nenhum -> OUT_OF_SCOPE. A flag contextual é sempre calculada.
    """
    zip_code = extract_zip_code(user_input)
    has_weather = has_weather_keyword(user_input)

    if zip_code and has_weather:
        kind = QueryKind.ZIP_AND_FORECAST
    elif zip_code:
        kind = QueryKind.ZIP
    elif has_weather:
        kind = QueryKind.FORECAST
    else:
        kind = QueryKind.OUT_OF_SCOPE

    return Interpretation(
        kind=kind,
        zip_code=zip_code,
        is_contextual=is_contextual_weather_query(user_input),
        source="rules",
    )


def _discard_late_result(task: "asyncio.Task") -> None:
    # Resultado tardio é descartado; a exceção é lida para não gerar aviso no loop
    if not task.cancelled() and task.exception() is not None:
        logger.debug(f"Classificação de IA tardia falhou: {task.exception()}")


class IntentInterpreter:
    """Combina a classificação por IA (opcional) com as regras dos extratores."""

    def __init__(
        self,
        classifier: Optional[GeminiClient] = None,
        timeout: Optional[float] = None,
    ):
        self.classifier = classifier
        self.timeout = timeout if timeout is not None else env.AI_CLASSIFICATION_TIMEOUT

    @classmethod
    def from_env(cls) -> "IntentInterpreter":
        """Cria o interpretador com Gemini apenas se a chave existir e a IA estiver habilitada."""
        if env.AI_CLASSIFICATION_ENABLED and env.GEMINI_API_KEY:
            return cls(classifier=GeminiClient())
        logger.info("Classificação por IA desabilitada, usando apenas regras")
        return cls()

    async def interpret(self, user_input: str) -> Interpretation:
        ai_result = await self._classify_with_ai(user_input)
        if ai_result is not None:
            interpretation = self._normalize_ai_result(ai_result, user_input)
        else:
            interpretation = interpret_with_rules(user_input)

        logger.info(
            f"Interpretação ({interpretation.source}): kind={interpretation.kind.value} "
            f"city={interpretation.city} state={interpretation.state} "
            f"contextual={interpretation.is_contextual}"
        )
        return interpretation

    async def _classify_with_ai(self, user_input: str) -> Optional[AIClassification]:
        """
        Dispara a classificação e espera no máximo `self.timeout` segundos.

        Se o tempo acabar a tarefa é abandonada (não cancelada) e o resultado
        que chegar depois é ignorado.
        """
        if self.classifier is None:
            return None

        try:
            task = asyncio.create_task(
                self.classifier.generate_structured(
                    system_instruction=SYSTEM_PROMPT,
                    prompt=user_input,
                    schema=AIClassification,
                )
            )
            done, _ = await asyncio.wait({task}, timeout=self.timeout)

            if task not in done:
                task.add_done_callback(_discard_late_result)
                logger.warning(
                    f"Classificação por IA excedeu {self.timeout}s, usando regras"
                )
                return None

            return task.result()
        except Exception as e:
            logger.warning(f"Erro na classificação por IA, usando regras: {e}")
            return None

    @staticmethod
    def _normalize_ai_result(
        ai_result: AIClassification, user_input: str
    ) -> Interpretation:
        """Ajusta a resposta da IA às regras de uma Interpretation válida."""
        zip_code = extract_zip_code(user_input)
        kind = ai_result.kind

        if kind == QueryKind.ZIP_AND_FORECAST and not zip_code:
            kind = QueryKind.FORECAST
        elif kind == QueryKind.ZIP and not zip_code:
            kind = QueryKind.OUT_OF_SCOPE

        city = (ai_result.city or "").strip() or None
        state = (ai_result.state or "").strip().upper() or None
        if state not in BRAZILIAN_STATES:
            state = None

        return Interpretation(
            kind=kind,
            zip_code=zip_code,
            city=city,
            state=state,
            is_contextual=ai_result.is_contextual
            or is_contextual_weather_query(user_input),
            source="ai",
        )
