"""
Leitura do histórico da conversa.

O histórico pertence a quem chama; aqui ele só é lido, de trás para frente,
para recuperar o último local consultado e as cidades oferecidas para escolha.
"""

import re
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from cep_clima.tools.assistente.core.constants import BRAZILIAN_STATES
from cep_clima.tools.assistente.core.models import ConversationTurn, LocationContext
from cep_clima.tools.brasil_api.models import CityCandidate
from cep_clima.utils.log import logger


HistoryItem = Union[ConversationTurn, Dict[str, Any]]


class ConversationContext:
    """Visão somente-leitura sobre os turnos anteriores."""

    def __init__(self, history: Optional[Iterable[HistoryItem]] = None):
        self.turns: List[ConversationTurn] = []
        for item in history or []:
            turn = self._to_turn(item)
            if turn is not None:
                self.turns.append(turn)

    @staticmethod
    def _to_turn(item: HistoryItem) -> Optional[ConversationTurn]:
        if isinstance(item, ConversationTurn):
            return item
        try:
            return ConversationTurn.model_validate(item)
        except ValidationError as e:
            logger.warning(f"Turno de histórico ignorado: {e}")
            return None

    def _assistant_payloads(self):
        for turn in reversed(self.turns):
            if turn.role == "assistant" and turn.payload:
                yield turn.payload

    def last_location(self) -> Optional[LocationContext]:
        """Local do resultado mais recente que trouxe endereço ou previsão."""
        for payload in self._assistant_payloads():
            address = payload.get("address")
            if isinstance(address, dict) and address.get("city"):
                return LocationContext(
                    city=address["city"],
                    state=address.get("state"),
                    zip_code=address.get("zip_code") or address.get("cep"),
                    origin="address",
                )

            forecast = payload.get("forecast")
            if isinstance(forecast, dict):
                city = forecast.get("city") or forecast.get("cidade")
                if city:
                    return LocationContext(
                        city=city,
                        state=forecast.get("state") or forecast.get("estado"),
                        origin="forecast",
                    )
        return None

    def pending_city_choices(self) -> List[CityCandidate]:
        """Cidades oferecidas na última resposta do assistente, se ela foi uma escolha."""
        for turn in reversed(self.turns):
            if turn.role != "assistant":
                continue
            payload = turn.payload or {}
            if payload.get("kind") != "city_choices":
                return []
            candidates = []
            for item in payload.get("city_candidates") or []:
                try:
                    candidates.append(CityCandidate.model_validate(item))
                except ValidationError:
                    logger.warning(f"Cidade inválida no histórico: {item}")
            return candidates
        return []


def select_city_choice(
    user_input: str, candidates: List[CityCandidate]
) -> Optional[CityCandidate]:
    """
    Interpreta a resposta a uma lista de cidades.

    Aceita o número da opção ("2") ou a UF ("SP") quando ela identifica
    exatamente uma das cidades oferecidas.
    """
    if not candidates:
        return None

    answer = re.sub(r"[?!.,;:]", "", user_input or "").strip()

    if answer.isdecimal():
        index = int(answer)
        if 1 <= index <= len(candidates):
            return candidates[index - 1]
        return None

    state = answer.upper()
    if state in BRAZILIAN_STATES:
        matches = [city for city in candidates if city.state.upper() == state]
        if len(matches) == 1:
            return matches[0]

    return None
