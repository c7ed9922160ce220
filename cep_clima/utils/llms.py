from typing import Optional, Type, TypeVar

from google import genai
from google.genai import types
from pydantic import BaseModel

from cep_clima.config import env
from cep_clima.utils.log import logger


SchemaT = TypeVar("SchemaT", bound=BaseModel)


class GeminiClient:
    """
    Cliente para a API Gemini do Google, usado para saída estruturada (JSON).
    """

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        self.model_name = model_name or env.GEMINI_MODEL
        self.client = genai.Client(
            api_key=api_key or env.GEMINI_API_KEY,
        )

    async def generate_structured(
        self,
        system_instruction: str,
        prompt: str,
        schema: Type[SchemaT],
        temperature: float = 0.1,
    ) -> SchemaT:
        """
        Gera uma resposta JSON validada contra `schema`.

        Args:
            system_instruction: Instrução de sistema (papel e categorias).
            prompt: Texto do usuário.
            schema: Modelo Pydantic esperado na resposta.
            temperature: Temperatura de amostragem.

        Returns:
            Instância de `schema` preenchida pelo modelo.

        Raises:
            ValueError: Se o modelo não devolver texto.
            pydantic.ValidationError: Se o JSON não respeitar o schema.
        """
        generate_content_config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=temperature,
            response_mime_type="application/json",
            response_schema=schema,
        )
        response = await self.client.aio.models.generate_content(
            model=self.model_name,
            contents=[types.Content(role="user", parts=[types.Part(text=prompt)])],
            config=generate_content_config,
        )
        if not response.text:
            logger.error("Resposta do Gemini está vazia.")
            raise ValueError("No text response received from Gemini AI.")
        return schema.model_validate_json(response.text)
