"""
Modelos Pydantic para os dados retornados pela Brasil API.

Os campos chegam em português (`nome`, `estado`, `cidade`, `clima`...) e são
expostos com nomes em inglês através de aliases.
"""

import re
from typing import List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


NAO_INFORMADO = "Não informado"


class CityCandidate(BaseModel):
    """Cidade retornada pela busca do CPTEC. Identidade é o `id`."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str = Field(alias="nome")
    state: str = Field(alias="estado")


class AddressRecord(BaseModel):
    """Endereço retornado pela consulta de CEP."""

    model_config = ConfigDict(populate_by_name=True)

    zip_code: str = Field(alias="cep")
    state: str
    city: str
    neighborhood: str = NAO_INFORMADO
    street: str = NAO_INFORMADO

    @field_validator("zip_code", mode="before")
    @classmethod
    def validate_zip_code(cls, v: str) -> str:
        """Mantém apenas os dígitos; o valor canônico tem exatamente 8."""
        clean = re.sub(r"[^0-9]", "", str(v))
        if len(clean) != 8:
            raise ValueError("CEP deve conter exatamente 8 dígitos")
        return clean

    @field_validator("neighborhood", "street", mode="before")
    @classmethod
    def default_when_empty(cls, v):
        return v or NAO_INFORMADO


class ForecastDay(BaseModel):
    """Previsão de um dia, na ordem entregue pelo CPTEC."""

    model_config = ConfigDict(populate_by_name=True)

    date: str = Field(default=NAO_INFORMADO, alias="data")
    condition_code: str = Field(
        default=NAO_INFORMADO,
        validation_alias=AliasChoices("condition", "condicao", "condition_code"),
    )
    condition_description: str = Field(default=NAO_INFORMADO, alias="condicao_desc")
    minimum_temp: float = Field(default=0, alias="min")
    maximum_temp: float = Field(default=0, alias="max")
    uv_index: float = Field(default=0, alias="indice_uv")

    @field_validator("date", "condition_code", "condition_description", mode="before")
    @classmethod
    def text_default(cls, v):
        return v or NAO_INFORMADO

    @field_validator("minimum_temp", "maximum_temp", "uv_index", mode="before")
    @classmethod
    def number_default(cls, v):
        return v or 0


class ForecastRecord(BaseModel):
    """Previsão do tempo de uma cidade. `days` nunca é reordenado."""

    model_config = ConfigDict(populate_by_name=True)

    city: str = Field(alias="cidade")
    state: str = Field(alias="estado")
    updated_at: str = Field(default=NAO_INFORMADO, alias="atualizado_em")
    days: List[ForecastDay] = Field(alias="clima")

    @field_validator("updated_at", mode="before")
    @classmethod
    def updated_at_default(cls, v):
        return v or NAO_INFORMADO
