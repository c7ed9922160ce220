"""
Testes das ferramentas expostas no servidor MCP.
"""

import pytest
from unittest.mock import patch

from cep_clima.tools.assistente import tool
from cep_clima.tools.assistente.interpreter import IntentInterpreter
from cep_clima.tools.assistente.resolver import ConsultaResolver
from cep_clima.tools.brasil_api.exceptions import NotFoundError, ProviderError


@pytest.fixture
def use_provider():
    """Substitui o resolvedor padrão por um com o provedor informado."""
    patches = []

    def _use(provider):
        resolver = ConsultaResolver(provider=provider, interpreter=IntentInterpreter())
        patcher = patch(
            "cep_clima.tools.assistente.tool.get_default_resolver", return_value=resolver
        )
        patcher.start()
        patches.append(patcher)
        return provider

    yield _use

    for patcher in patches:
        patcher.stop()


class TestResolverConsulta:
    """Testes da tool resolver_consulta."""

    @pytest.mark.asyncio
    async def test_returns_serialized_outcome(
        self, use_provider, fake_provider_class, ibitinga_cities
    ):
        use_provider(fake_provider_class(cities=ibitinga_cities))

        result = await tool.resolver_consulta("tempo em Ibitinga")

        assert result["kind"] == "city_choices"
        assert result["action"] == "MULTIPLE_CITIES"
        assert result["city_candidates"][0] == {"id": 2366, "name": "Ibitinga", "state": "SP"}

    @pytest.mark.asyncio
    async def test_history_enables_choice(
        self, use_provider, fake_provider_class, ibitinga_cities, forecast_payload
    ):
        use_provider(fake_provider_class(cities=ibitinga_cities, forecast=forecast_payload))

        choices = await tool.resolver_consulta("tempo em Ibitinga")
        history = [
            {"role": "user", "content": "tempo em Ibitinga"},
            {"role": "assistant", "content": choices["initial_message"], "payload": choices},
        ]
        result = await tool.resolver_consulta("MG", history)

        assert result["action"] == "CONSULT_WEATHER_DIRECT"
        assert result["city"]["id"] == 5701
        assert result["forecast"]["days"][0]["condition_code"] == "pn"


class TestConsultarCep:
    """Testes da tool consultar_cep."""

    @pytest.mark.asyncio
    async def test_returns_address(self, use_provider, fake_provider_class, address_payload):
        use_provider(fake_provider_class(address=address_payload))

        result = await tool.consultar_cep("01310-100")

        assert result["zip_code"] == "01310100"
        assert result["street"] == "Avenida Paulista"

    @pytest.mark.asyncio
    async def test_invalid_zip_code(self, use_provider, fake_provider_class):
        provider = use_provider(fake_provider_class())

        result = await tool.consultar_cep("123")

        assert result["error"] is True
        assert "8 dígitos" in result["message"]
        assert provider.total_calls == 0

    @pytest.mark.asyncio
    async def test_not_found(self, use_provider, fake_provider_class):
        use_provider(fake_provider_class(address=None))

        result = await tool.consultar_cep("99999999")

        assert result == {
            "error": True,
            "message": "Erro na consulta do CEP: CEP não encontrado.",
        }


class TestBuscarCidades:
    """Testes da tool buscar_cidades."""

    @pytest.mark.asyncio
    async def test_returns_all_cities(self, use_provider, fake_provider_class, ibitinga_cities):
        use_provider(fake_provider_class(cities=ibitinga_cities))

        result = await tool.buscar_cidades("Ibitinga")

        assert [city["state"] for city in result["locations"]] == ["SP", "MG", "PR"]

    @pytest.mark.asyncio
    async def test_not_found_is_empty(self, use_provider, fake_provider_class):
        use_provider(fake_provider_class(search_error=NotFoundError("nada")))

        result = await tool.buscar_cidades("Xyzabc")

        assert result == {"locations": []}

    @pytest.mark.asyncio
    async def test_blank_name(self, use_provider, fake_provider_class):
        use_provider(fake_provider_class())

        result = await tool.buscar_cidades("   ")

        assert result["error"] is True


class TestPrevisaoDoTempo:
    """Testes da tool previsao_do_tempo."""

    @pytest.mark.asyncio
    async def test_returns_forecast(self, use_provider, fake_provider_class, forecast_payload):
        use_provider(fake_provider_class(forecast=forecast_payload))

        result = await tool.previsao_do_tempo(244)

        assert result["city"] == "São Paulo"
        assert len(result["days"]) == 2
        assert result["days"][0]["minimum_temp"] == 18

    @pytest.mark.asyncio
    async def test_provider_error(self, use_provider, fake_provider_class):
        use_provider(fake_provider_class(forecast_error=ProviderError("HTTP 503", 503)))

        result = await tool.previsao_do_tempo(244)

        assert result["error"] is True
        assert "503" not in result["message"]
