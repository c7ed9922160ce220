"""
Serviço de API para a Brasil API.

Encapsula as três consultas usadas pelo assistente:
- Consulta de endereço por CEP (/cep/v1)
- Busca de cidades por nome no CPTEC (/cptec/v1/cidade)
- Previsão do tempo por código de cidade (/cptec/v1/clima/previsao)
"""

import re
from typing import Any, List, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from cep_clima.config import env
from cep_clima.tools.brasil_api.exceptions import (
    APITimeoutError,
    BrasilAPIException,
    DataIncompleteError,
    NotFoundError,
    ProviderError,
    ZipCodeValidationError,
)
from cep_clima.tools.brasil_api.models import (
    AddressRecord,
    CityCandidate,
    ForecastRecord,
)
from cep_clima.utils.log import logger


class BrasilAPIService:
    """
    Cliente assíncrono da Brasil API.

    Cada chamada é independente e não guarda estado entre requisições.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.api_base_url = (base_url or env.BRASIL_API_BASE_URL).rstrip("/")
        self.timeout = timeout or env.BRASIL_API_TIMEOUT

    @staticmethod
    def _limpar_cep(cep: str) -> str:
        return re.sub(r"[^0-9]", "", cep or "")

    async def _make_api_request(self, path: str, identifier: str) -> Any:
        """
        Faz GET em `{base}{path}/{identifier}` e devolve o JSON decodificado.

        Raises:
            NotFoundError: HTTP 404
            ProviderError: Outro status não-2xx, erro de rede ou JSON inválido
            APITimeoutError: Provedor excedeu o timeout
        """
        url = f"{self.api_base_url}{path}/{quote(str(identifier), safe='')}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url)

                if 200 <= response.status_code < 300:
                    try:
                        data = response.json()
                    except ValueError:
                        logger.error(f"Resposta não-JSON de {url}: {response.text}")
                        raise ProviderError(
                            "Resposta inválida da Brasil API",
                            status_code=response.status_code,
                        )
                    logger.info(f"Brasil API respondeu com sucesso para {path}")
                    return data
                elif response.status_code == 404:
                    logger.warning(f"Recurso não encontrado: {url}")
                    raise NotFoundError(f"Recurso não encontrado: {identifier}")
                else:
                    logger.error(
                        f"Erro {response.status_code} da Brasil API em {url}: {response.text}"
                    )
                    raise ProviderError(
                        f"Brasil API retornou HTTP {response.status_code}",
                        status_code=response.status_code,
                    )

        except httpx.TimeoutException:
            logger.error(f"Timeout ({self.timeout}s) chamando {url}")
            raise APITimeoutError(
                f"Brasil API não respondeu em {self.timeout} segundos",
                timeout=self.timeout,
            )
        except BrasilAPIException:
            raise
        except Exception as e:
            logger.error(f"Erro chamando {url}: {str(e)}")
            raise ProviderError(f"Erro ao comunicar com a Brasil API: {str(e)}")

    async def get_address(self, cep: str) -> AddressRecord:
        """
        Consulta o endereço de um CEP.

        Args:
            cep: CEP com ou sem máscara; precisa ter 8 dígitos.

        Raises:
            ZipCodeValidationError: CEP sem 8 dígitos (nenhuma chamada é feita)
            DataIncompleteError: Resposta sem `cep`, `state` ou `city`
        """
        cep_clean = self._limpar_cep(cep)
        if len(cep_clean) != 8:
            raise ZipCodeValidationError(cep)

        data = await self._make_api_request(env.BRASIL_API_ZIPCODE_LOOKUP, cep_clean)

        if not isinstance(data, dict) or not all(
            data.get(field) for field in ("cep", "state", "city")
        ):
            logger.warning(f"Dados incompletos para o CEP {cep_clean}: {data}")
            raise DataIncompleteError(f"Dados incompletos para o CEP {cep_clean}")

        try:
            return AddressRecord.model_validate(data)
        except ValidationError as e:
            raise DataIncompleteError(f"Dados inválidos para o CEP {cep_clean}: {e}")

    async def search_cities(self, name: str) -> List[CityCandidate]:
        """
        Busca cidades pelo nome no CPTEC, na ordem entregue pelo provedor.

        Raises:
            NotFoundError: Nenhuma cidade encontrada (HTTP 404)
        """
        data = await self._make_api_request(env.BRASIL_API_CITY_SEARCH, name.strip())

        if not isinstance(data, list):
            raise ProviderError("Formato inesperado na busca de cidades")

        cities = []
        for item in data:
            try:
                cities.append(CityCandidate.model_validate(item))
            except ValidationError:
                logger.warning(f"Cidade ignorada por dados inválidos: {item}")
        return cities

    async def get_forecast(self, city_id: int) -> ForecastRecord:
        """
        Obtém a previsão do tempo de uma cidade do CPTEC.

        Raises:
            DataIncompleteError: Resposta sem `cidade`, `estado` ou `clima`
        """
        data = await self._make_api_request(env.BRASIL_API_WEATHER_FORECAST, str(city_id))

        if (
            not isinstance(data, dict)
            or not data.get("cidade")
            or not data.get("estado")
            or not isinstance(data.get("clima"), list)
        ):
            logger.warning(f"Previsão incompleta para a cidade {city_id}: {data}")
            raise DataIncompleteError(f"Previsão incompleta para a cidade {city_id}")

        try:
            return ForecastRecord.model_validate(data)
        except ValidationError as e:
            raise DataIncompleteError(f"Previsão inválida para a cidade {city_id}: {e}")
