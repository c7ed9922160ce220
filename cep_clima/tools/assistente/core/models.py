"""
Modelos de dados do assistente de CEP e clima.
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

from cep_clima.tools.assistente.core.validators import is_zip_code_valid
from cep_clima.tools.brasil_api.models import (
    AddressRecord,
    CityCandidate,
    ForecastRecord,
)


class QueryKind(str, Enum):
    """Tipo de consulta identificado na mensagem do usuário."""

    ZIP = "ZIP"
    FORECAST = "FORECAST"
    ZIP_AND_FORECAST = "ZIP_AND_FORECAST"
    CONTEXTUAL = "CONTEXTUAL"
    OUT_OF_SCOPE = "OUT_OF_SCOPE"


class Action(str, Enum):
    """Ação executada (ou pedida ao usuário) na resolução de uma mensagem."""

    CONSULT_ZIP_CODE = "CONSULT_ZIP_CODE"
    CONSULT_ZIP_CODE_AND_WEATHER = "CONSULT_ZIP_CODE_AND_WEATHER"
    CONSULT_WEATHER_DIRECT = "CONSULT_WEATHER_DIRECT"
    REQUEST_ZIP_CODE = "REQUEST_ZIP_CODE"
    REQUEST_LOCATION = "REQUEST_LOCATION"
    CONTEXT_QUERY = "CONTEXT_QUERY"
    MULTIPLE_CITIES = "MULTIPLE_CITIES"
    CITY_NOT_FOUND = "CITY_NOT_FOUND"
    OUT_OF_SCOPE = "OUT_OF_SCOPE"


class Interpretation(BaseModel):
    """Interpretação normalizada de uma mensagem (IA ou regras)."""

    kind: QueryKind
    zip_code: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    is_contextual: bool = False
    source: Literal["ai", "rules"] = "rules"

    @model_validator(mode="after")
    def validate_zip_code(self) -> "Interpretation":
        """Consultas de CEP exigem um CEP canônico de 8 dígitos."""
        if self.kind in (QueryKind.ZIP, QueryKind.ZIP_AND_FORECAST):
            zip_code = self.zip_code or ""
            if not (zip_code.isdecimal() and is_zip_code_valid(zip_code)):
                raise ValueError(f"{self.kind.value} exige CEP com 8 dígitos")
        return self


class AIClassification(BaseModel):
    """Schema de saída estruturada pedido ao modelo de IA."""

    kind: QueryKind = Field(description="Tipo da consulta identificada")
    city: Optional[str] = Field(
        default=None, description="Nome da cidade extraído e normalizado"
    )
    state: Optional[str] = Field(
        default=None, description="Sigla do estado (UF) se mencionada"
    )
    is_contextual: bool = Field(
        default=False,
        description="Se a consulta precisa do local de uma mensagem anterior",
    )


class ConversationTurn(BaseModel):
    """Mensagem anterior da conversa. `payload` é um resultado já serializado."""

    role: Literal["user", "assistant"]
    content: str = ""
    payload: Optional[Dict[str, Any]] = None


class LocationContext(BaseModel):
    """Último local conhecido na conversa."""

    city: str
    state: Optional[str] = None
    zip_code: Optional[str] = None
    origin: Literal["address", "forecast"]


# ========== RESULTADOS ==========

class _OutcomeBase(BaseModel):
    action: Action
    executed_action: str
    initial_message: str
    final_message: str


class AddressOnly(_OutcomeBase):
    kind: Literal["address_only"] = "address_only"
    address: AddressRecord
    # preenchido quando a previsão foi pedida mas não pôde ser obtida
    error: Optional[str] = None


class AddressAndForecast(_OutcomeBase):
    kind: Literal["address_and_forecast"] = "address_and_forecast"
    address: AddressRecord
    forecast: ForecastRecord
    city: CityCandidate


class ForecastOnly(_OutcomeBase):
    kind: Literal["forecast_only"] = "forecast_only"
    forecast: ForecastRecord
    city: CityCandidate
    used_context: bool = False


class CityChoices(_OutcomeBase):
    kind: Literal["city_choices"] = "city_choices"
    city_name: str
    state: Optional[str] = None
    city_candidates: List[CityCandidate]


class Clarification(_OutcomeBase):
    kind: Literal["clarification"] = "clarification"
    city_name: Optional[str] = None
    error: Optional[str] = None


class OutOfScope(_OutcomeBase):
    kind: Literal["out_of_scope"] = "out_of_scope"
    error: Optional[str] = None


ResolutionOutcome = Annotated[
    Union[
        AddressOnly,
        AddressAndForecast,
        ForecastOnly,
        CityChoices,
        Clarification,
        OutOfScope,
    ],
    Field(discriminator="kind"),
]
