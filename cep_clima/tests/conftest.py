"""
Configurações e fixtures compartilhadas pelos testes do assistente.
"""

import os

import pytest

# Configura variáveis de ambiente antes de imports do projeto
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("BRASIL_API_BASE_URL", "https://brasilapi.com.br/api")
os.environ.setdefault("BRASIL_API_TIMEOUT", "30")
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ.setdefault("AI_CLASSIFICATION_ENABLED", "false")
os.environ.setdefault("EXCLUDED_TOOLS", "")

from cep_clima.tools.brasil_api.exceptions import NotFoundError  # noqa: E402
from cep_clima.tools.brasil_api.models import (  # noqa: E402
    AddressRecord,
    CityCandidate,
    ForecastRecord,
)

# Configura pytest-asyncio
pytest_plugins = ("pytest_asyncio",)


ADDRESS_PAYLOAD = {
    "cep": "01310100",
    "state": "SP",
    "city": "São Paulo",
    "neighborhood": "Bela Vista",
    "street": "Avenida Paulista",
    "service": "open-cep",
}

FORECAST_PAYLOAD = {
    "cidade": "São Paulo",
    "estado": "SP",
    "atualizado_em": "2024-01-15",
    "clima": [
        {
            "data": "2024-01-15",
            "condicao": "pn",
            "condicao_desc": "Parcialmente Nublado",
            "min": 18,
            "max": 28,
            "indice_uv": 9,
        },
        {
            "data": "2024-01-16",
            "condicao": "c",
            "condicao_desc": "Chuva",
            "min": 17,
            "max": 24,
            "indice_uv": 6,
        },
    ],
}

IBITINGA_CITIES = [
    {"id": 2366, "nome": "Ibitinga", "estado": "SP"},
    {"id": 5701, "nome": "Ibitinga", "estado": "MG"},
    {"id": 5702, "nome": "Ibitinga", "estado": "PR"},
]

SAO_PAULO_CITIES = [
    {"id": 244, "nome": "São Paulo", "estado": "SP"},
    {"id": 5004, "nome": "São Paulo de Olivença", "estado": "AM"},
    {"id": 5005, "nome": "São Paulo do Potengi", "estado": "RN"},
]


class FakeBrasilAPI:
    """Provedor em memória que conta as chamadas feitas pelo resolvedor."""

    def __init__(
        self,
        address=None,
        cities=None,
        forecast=None,
        address_error=None,
        search_error=None,
        forecast_error=None,
    ):
        self.address = address
        self.cities = cities or []
        self.forecast = forecast
        self.address_error = address_error
        self.search_error = search_error
        self.forecast_error = forecast_error
        self.calls = {"get_address": [], "search_cities": [], "get_forecast": []}

    def call_count(self, name: str) -> int:
        return len(self.calls[name])

    @property
    def total_calls(self) -> int:
        return sum(len(calls) for calls in self.calls.values())

    async def get_address(self, zip_code):
        self.calls["get_address"].append(zip_code)
        if self.address_error:
            raise self.address_error
        if self.address is None:
            raise NotFoundError(f"Recurso não encontrado: {zip_code}")
        return AddressRecord.model_validate(self.address)

    async def search_cities(self, name):
        self.calls["search_cities"].append(name)
        if self.search_error:
            raise self.search_error
        return [CityCandidate.model_validate(city) for city in self.cities]

    async def get_forecast(self, city_id):
        self.calls["get_forecast"].append(city_id)
        if self.forecast_error:
            raise self.forecast_error
        if self.forecast is None:
            raise NotFoundError(f"Recurso não encontrado: {city_id}")
        return ForecastRecord.model_validate(self.forecast)


@pytest.fixture
def fake_provider_class():
    return FakeBrasilAPI


@pytest.fixture
def address_payload():
    return dict(ADDRESS_PAYLOAD)


@pytest.fixture
def forecast_payload():
    return {**FORECAST_PAYLOAD, "clima": [dict(day) for day in FORECAST_PAYLOAD["clima"]]}


@pytest.fixture
def ibitinga_cities():
    return [dict(city) for city in IBITINGA_CITIES]


@pytest.fixture
def sao_paulo_cities():
    return [dict(city) for city in SAO_PAULO_CITIES]
