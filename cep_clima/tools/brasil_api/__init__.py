from cep_clima.tools.brasil_api.api_service import BrasilAPIService
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
    ForecastDay,
    ForecastRecord,
)

__all__ = [
    "BrasilAPIService",
    "BrasilAPIException",
    "NotFoundError",
    "DataIncompleteError",
    "APITimeoutError",
    "ProviderError",
    "ZipCodeValidationError",
    "AddressRecord",
    "CityCandidate",
    "ForecastDay",
    "ForecastRecord",
]
