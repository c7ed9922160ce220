"""
Motor de resolução de consultas de CEP e previsão do tempo.

Recebe a mensagem do usuário e o histórico da conversa, decide quais
consultas fazer na Brasil API e monta um resultado tipado por cenário.
Falhas dos provedores viram mensagens para o usuário; quando uma etapa já
trouxe dados, falhas posteriores degradam o resultado em vez de descartá-lo.
"""

import unicodedata
from functools import lru_cache
from typing import Iterable, List, Optional

from cep_clima.tools.assistente import templates
from cep_clima.tools.assistente.context import (
    ConversationContext,
    HistoryItem,
    select_city_choice,
)
from cep_clima.tools.assistente.core.constants import MAX_CITY_CHOICES
from cep_clima.tools.assistente.core.extractors import (
    extract_best_city_name,
    extract_city_and_state,
    mentions_zip_code_request,
)
from cep_clima.tools.assistente.core.models import (
    Action,
    AddressAndForecast,
    AddressOnly,
    CityChoices,
    Clarification,
    ForecastOnly,
    Interpretation,
    OutOfScope,
    QueryKind,
    ResolutionOutcome,
)
from cep_clima.tools.assistente.core.validators import format_zip_code
from cep_clima.tools.assistente.interpreter import IntentInterpreter
from cep_clima.tools.brasil_api.api_service import BrasilAPIService
from cep_clima.tools.brasil_api.exceptions import (
    APITimeoutError,
    BrasilAPIException,
    DataIncompleteError,
    NotFoundError,
    ZipCodeValidationError,
)
from cep_clima.tools.brasil_api.models import AddressRecord, CityCandidate
from cep_clima.utils.log import logger


def describe_error(error: Exception, subject: str = "Recurso") -> str:
    """Descrição amigável de uma falha do provedor, sem status HTTP."""
    if isinstance(error, ZipCodeValidationError):
        return "o CEP deve conter exatamente 8 dígitos."
    if isinstance(error, NotFoundError):
        return f"{subject} não encontrado."
    if isinstance(error, DataIncompleteError):
        return "a Brasil API retornou dados incompletos."
    if isinstance(error, APITimeoutError):
        return f"a Brasil API não respondeu em {error.timeout:g} segundos."
    if isinstance(error, BrasilAPIException):
        return "a Brasil API está indisponível no momento."
    return "erro desconhecido."


def _normalize_name(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value or "")
    return "".join(c for c in decomposed if not unicodedata.combining(c)).lower().strip()


def _filter_by_state(cities: List[CityCandidate], state: Optional[str]) -> List[CityCandidate]:
    if not state:
        return cities
    return [
        city
        for city in cities
        if city.state == state or city.state.lower() == state.lower()
    ]


class ConsultaResolver:
    """
    Resolve uma mensagem em um dos cenários:

    1. CEP + previsão
    2. Apenas CEP
    3. Previsão de uma cidade (com desambiguação)
    4. Consulta contextual (usa o local da conversa)
    5. Fora do escopo
    """

    def __init__(self, provider=None, interpreter: Optional[IntentInterpreter] = None):
        self.provider = provider if provider is not None else BrasilAPIService()
        self.interpreter = (
            interpreter if interpreter is not None else IntentInterpreter.from_env()
        )

    async def resolve(
        self, user_input: str, history: Optional[Iterable[HistoryItem]] = None
    ) -> ResolutionOutcome:
        """Nunca levanta exceção: erros inesperados viram um OutOfScope genérico."""
        try:
            context = ConversationContext(history)

            outcome = await self._resolve_pending_choice(user_input, context)
            if outcome is not None:
                return outcome

            interpretation = await self.interpreter.interpret(user_input)
            return await self._dispatch(user_input, interpretation, context)
        except Exception as e:
            logger.exception(f"Erro inesperado ao resolver '{user_input}': {e}")
            initial, final = templates.erro_interno()
            return OutOfScope(
                action=Action.OUT_OF_SCOPE,
                executed_action="Erro interno",
                initial_message=initial,
                final_message=final,
                error="Erro interno",
            )

    async def _dispatch(
        self,
        user_input: str,
        interpretation: Interpretation,
        context: ConversationContext,
    ) -> ResolutionOutcome:
        kind = interpretation.kind

        if kind == QueryKind.ZIP_AND_FORECAST:
            logger.info("Cenário: CEP + previsão")
            return await self._resolve_zip_and_forecast(interpretation.zip_code)

        if kind == QueryKind.ZIP:
            logger.info("Cenário: CEP")
            return await self._resolve_zip(interpretation.zip_code)

        if kind == QueryKind.FORECAST:
            logger.info("Cenário: previsão")
            return await self._resolve_forecast(
                user_input, interpretation, context, contextual=False
            )

        if kind == QueryKind.CONTEXTUAL or interpretation.is_contextual:
            logger.info("Cenário: consulta contextual")
            return await self._resolve_forecast(
                user_input, interpretation, context, contextual=True
            )

        if mentions_zip_code_request(user_input):
            logger.info("Cenário: pedido de CEP sem código válido")
            initial, final = templates.solicitar_cep()
            return Clarification(
                action=Action.REQUEST_ZIP_CODE,
                executed_action="Solicitação de CEP",
                initial_message=initial,
                final_message=final,
            )

        logger.info("Cenário: fora do escopo")
        initial, final = templates.fora_do_escopo()
        return OutOfScope(
            action=Action.OUT_OF_SCOPE,
            executed_action="Consulta fora do escopo",
            initial_message=initial,
            final_message=final,
        )

    # ========== ESCOLHA PENDENTE ==========

    async def _resolve_pending_choice(
        self, user_input: str, context: ConversationContext
    ) -> Optional[ResolutionOutcome]:
        """Resposta a uma lista de cidades oferecida no turno anterior."""
        candidates = context.pending_city_choices()
        if not candidates:
            return None

        city = select_city_choice(user_input, candidates)
        if city is None:
            return None

        logger.info(f"Cidade escolhida na lista anterior: {city.name}/{city.state}")
        return await self._forecast_for_city(city, city.name, used_context=True)

    # ========== CEP ==========

    async def _resolve_zip(self, zip_code: str) -> ResolutionOutcome:
        try:
            address = await self.provider.get_address(zip_code)
        except BrasilAPIException as e:
            logger.warning(f"Falha ao consultar CEP {format_zip_code(zip_code)}: {e}")
            description = describe_error(e, "CEP")
            initial, final = templates.erro_cep(description)
            return OutOfScope(
                action=Action.OUT_OF_SCOPE,
                executed_action="Erro na consulta de CEP",
                initial_message=initial,
                final_message=final,
                error=description,
            )

        logger.info(f"CEP {format_zip_code(address.zip_code)}: {address.city}/{address.state}")
        initial, final = templates.cep_encontrado()
        return AddressOnly(
            action=Action.CONSULT_ZIP_CODE,
            executed_action="Consulta de CEP",
            initial_message=initial,
            final_message=final,
            address=address,
        )

    async def _resolve_zip_and_forecast(self, zip_code: str) -> ResolutionOutcome:
        try:
            address = await self.provider.get_address(zip_code)
        except BrasilAPIException as e:
            logger.warning(f"Falha ao consultar CEP {format_zip_code(zip_code)}: {e}")
            description = describe_error(e, "CEP")
            initial, final = templates.erro_cep_e_previsao(description)
            return OutOfScope(
                action=Action.OUT_OF_SCOPE,
                executed_action="Erro na consulta",
                initial_message=initial,
                final_message=final,
                error=description,
            )

        try:
            city = await self._find_address_city(address)
            if city is None:
                return self._address_without_forecast(
                    address, "Cidade do CEP não encontrada no CPTEC."
                )
            forecast = await self.provider.get_forecast(city.id)
        except BrasilAPIException as e:
            logger.warning(f"Previsão indisponível para o CEP {format_zip_code(zip_code)}: {e}")
            return self._address_without_forecast(
                address, describe_error(e, "Previsão")
            )

        initial, final = templates.cep_e_previsao_encontrados()
        return AddressAndForecast(
            action=Action.CONSULT_ZIP_CODE_AND_WEATHER,
            executed_action="Consulta de CEP e previsão do tempo",
            initial_message=initial,
            final_message=final,
            address=address,
            forecast=forecast,
            city=city,
        )

    async def _find_address_city(self, address: AddressRecord) -> Optional[CityCandidate]:
        """Cidade do CPTEC correspondente ao endereço, se houver uma única."""
        cities = _filter_by_state(await self._search_cities(address.city), address.state)

        if len(cities) > 1:
            wanted = _normalize_name(address.city)
            cities = [city for city in cities if _normalize_name(city.name) == wanted]

        if len(cities) != 1:
            logger.info(
                f"{len(cities)} cidades para {address.city}/{address.state}, sem previsão"
            )
            return None
        return cities[0]

    @staticmethod
    def _address_without_forecast(address: AddressRecord, reason: str) -> AddressOnly:
        initial, final = templates.cep_sem_previsao()
        return AddressOnly(
            action=Action.CONSULT_ZIP_CODE,
            executed_action="Consulta de CEP (previsão indisponível)",
            initial_message=initial,
            final_message=final,
            address=address,
            error=reason,
        )

    # ========== PREVISÃO ==========

    async def _resolve_forecast(
        self,
        user_input: str,
        interpretation: Interpretation,
        context: ConversationContext,
        contextual: bool,
    ) -> ResolutionOutcome:
        city_name = interpretation.city
        state = interpretation.state
        used_context = False

        if not city_name:
            city_and_state = extract_city_and_state(user_input)
            if city_and_state:
                city_name = city_and_state["city"]
                state = city_and_state["state"]
            else:
                city_name = extract_best_city_name(user_input)

        if not city_name and (contextual or interpretation.is_contextual):
            location = context.last_location()
            if location is not None:
                logger.info(f"Usando local do histórico: {location.city}/{location.state}")
                city_name = location.city
                state = location.state
                used_context = True

        if not city_name:
            if contextual:
                initial, final = templates.consulta_contextual()
                return Clarification(
                    action=Action.CONTEXT_QUERY,
                    executed_action="Consulta contextual detectada",
                    initial_message=initial,
                    final_message=final,
                )
            initial, final = templates.solicitar_localizacao()
            return Clarification(
                action=Action.REQUEST_LOCATION,
                executed_action="Solicitação de localização",
                initial_message=initial,
                final_message=final,
            )

        return await self._forecast_by_name(city_name, state, used_context)

    async def _forecast_by_name(
        self, city_name: str, state: Optional[str], used_context: bool
    ) -> ResolutionOutcome:
        try:
            cities = await self._search_cities(city_name)
        except BrasilAPIException as e:
            logger.warning(f"Falha na busca de cidades '{city_name}': {e}")
            description = describe_error(e, "Cidade")
            initial, final = templates.erro_previsao(description)
            return OutOfScope(
                action=Action.OUT_OF_SCOPE,
                executed_action="Erro na consulta de clima",
                initial_message=initial,
                final_message=final,
                error=description,
            )

        cities = _filter_by_state(cities, state)

        if not cities:
            initial, final = templates.cidade_nao_encontrada(city_name)
            return Clarification(
                action=Action.CITY_NOT_FOUND,
                executed_action="Cidade não encontrada",
                initial_message=initial,
                final_message=final,
                city_name=city_name,
            )

        if len(cities) > 1:
            initial, final = templates.multiplas_cidades(city_name)
            return CityChoices(
                action=Action.MULTIPLE_CITIES,
                executed_action="Múltiplas cidades encontradas",
                initial_message=initial,
                final_message=final,
                city_name=city_name,
                state=state,
                city_candidates=cities[:MAX_CITY_CHOICES],
            )

        return await self._forecast_for_city(cities[0], city_name, used_context)

    async def _forecast_for_city(
        self, city: CityCandidate, city_name: str, used_context: bool
    ) -> ResolutionOutcome:
        try:
            forecast = await self.provider.get_forecast(city.id)
        except BrasilAPIException as e:
            logger.warning(f"Falha na previsão da cidade {city.id} ({city.name}): {e}")
            initial, final = templates.previsao_indisponivel(city_name)
            return Clarification(
                action=Action.CITY_NOT_FOUND,
                executed_action="Previsão indisponível",
                initial_message=initial,
                final_message=final,
                city_name=city_name,
                error=describe_error(e, "Previsão"),
            )

        if used_context:
            initial, final = templates.previsao_com_contexto()
            executed_action = "Consulta de previsão com contexto"
        else:
            initial, final = templates.previsao_encontrada()
            executed_action = "Consulta de previsão do tempo"

        return ForecastOnly(
            action=Action.CONSULT_WEATHER_DIRECT,
            executed_action=executed_action,
            initial_message=initial,
            final_message=final,
            forecast=forecast,
            city=city,
            used_context=used_context,
        )

    async def _search_cities(self, name: str) -> List[CityCandidate]:
        """Busca de cidades em que 404 equivale a nenhum resultado."""
        try:
            return await self.provider.search_cities(name)
        except NotFoundError:
            return []


@lru_cache(maxsize=1)
def get_default_resolver() -> ConsultaResolver:
    return ConsultaResolver()


async def resolve(
    user_input: str, history: Optional[Iterable[HistoryItem]] = None
) -> ResolutionOutcome:
    """Resolve uma mensagem com o provedor e o interpretador padrão."""
    return await get_default_resolver().resolve(user_input, history)
