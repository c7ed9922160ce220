"""
Testes do interpretador de intenção (IA com fallback para regras).
"""

import asyncio

import pytest
from pydantic import ValidationError

from cep_clima.tools.assistente.core.models import (
    AIClassification,
    Interpretation,
    QueryKind,
)
from cep_clima.tools.assistente.interpreter import (
    IntentInterpreter,
    interpret_with_rules,
)


class FakeClassifier:
    """Classificador que devolve um resultado fixo, com atraso ou erro opcionais."""

    def __init__(self, result=None, error=None, delay=0.0):
        self.result = result
        self.error = error
        self.delay = delay
        self.calls = 0
        self.completed = False

    async def generate_structured(self, system_instruction, prompt, schema, temperature=0.1):
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        self.completed = True
        if self.error:
            raise self.error
        return self.result


class TestRulesInterpretation:
    """Testes da interpretação determinística."""

    def test_zip_code_only(self):
        interpretation = interpret_with_rules("CEP 01310-100")
        assert interpretation.kind == QueryKind.ZIP
        assert interpretation.zip_code == "01310100"
        assert interpretation.source == "rules"

    def test_zip_code_and_forecast(self):
        interpretation = interpret_with_rules("CEP 01310100 e previsão")
        assert interpretation.kind == QueryKind.ZIP_AND_FORECAST
        assert interpretation.zip_code == "01310100"

    def test_forecast(self):
        interpretation = interpret_with_rules("tempo em Ibitinga")
        assert interpretation.kind == QueryKind.FORECAST
        assert interpretation.zip_code is None
        assert interpretation.is_contextual is False

    def test_out_of_scope(self):
        interpretation = interpret_with_rules("oi, como você está?")
        assert interpretation.kind == QueryKind.OUT_OF_SCOPE
        assert interpretation.is_contextual is False

    def test_contextual_flag_is_carried(self):
        interpretation = interpret_with_rules("previsão")
        assert interpretation.kind == QueryKind.FORECAST
        assert interpretation.is_contextual is True

        interpretation = interpret_with_rules("e lá")
        assert interpretation.kind == QueryKind.OUT_OF_SCOPE
        assert interpretation.is_contextual is True

    def test_zip_kinds_require_zip_code(self):
        with pytest.raises(ValidationError):
            Interpretation(kind=QueryKind.ZIP)
        with pytest.raises(ValidationError):
            Interpretation(kind=QueryKind.ZIP_AND_FORECAST, zip_code="123")
        with pytest.raises(ValidationError):
            Interpretation(kind=QueryKind.ZIP, zip_code="01310-100")

        assert Interpretation(kind=QueryKind.ZIP, zip_code="01310100").zip_code == "01310100"


class TestAIInterpretation:
    """Testes da classificação por IA e sua normalização."""

    @pytest.mark.asyncio
    async def test_ai_result_is_used(self):
        classifier = FakeClassifier(
            AIClassification(kind=QueryKind.FORECAST, city=" São Paulo ", state="sp")
        )
        interpreter = IntentInterpreter(classifier=classifier, timeout=1)

        interpretation = await interpreter.interpret("tempo na capital paulista")

        assert interpretation.source == "ai"
        assert interpretation.kind == QueryKind.FORECAST
        assert interpretation.city == "São Paulo"
        assert interpretation.state == "SP"
        assert classifier.calls == 1

    @pytest.mark.asyncio
    async def test_zip_code_comes_from_extractor(self):
        classifier = FakeClassifier(AIClassification(kind=QueryKind.ZIP))
        interpreter = IntentInterpreter(classifier=classifier, timeout=1)

        interpretation = await interpreter.interpret("endereço do cep 01310-100")

        assert interpretation.kind == QueryKind.ZIP
        assert interpretation.zip_code == "01310100"

    @pytest.mark.asyncio
    async def test_zip_and_forecast_without_zip_becomes_forecast(self):
        classifier = FakeClassifier(
            AIClassification(kind=QueryKind.ZIP_AND_FORECAST, city="Campinas")
        )
        interpreter = IntentInterpreter(classifier=classifier, timeout=1)

        interpretation = await interpreter.interpret("cep e tempo de Campinas")

        assert interpretation.kind == QueryKind.FORECAST
        assert interpretation.city == "Campinas"

    @pytest.mark.asyncio
    async def test_zip_without_zip_becomes_out_of_scope(self):
        classifier = FakeClassifier(AIClassification(kind=QueryKind.ZIP))
        interpreter = IntentInterpreter(classifier=classifier, timeout=1)

        interpretation = await interpreter.interpret("qual o meu cep?")

        assert interpretation.kind == QueryKind.OUT_OF_SCOPE
        assert interpretation.zip_code is None

    @pytest.mark.asyncio
    async def test_invalid_state_is_dropped(self):
        classifier = FakeClassifier(
            AIClassification(kind=QueryKind.FORECAST, city="Ibitinga", state="XX")
        )
        interpreter = IntentInterpreter(classifier=classifier, timeout=1)

        interpretation = await interpreter.interpret("tempo em Ibitinga XX")

        assert interpretation.state is None

    @pytest.mark.asyncio
    async def test_ai_error_falls_back_to_rules(self):
        classifier = FakeClassifier(error=RuntimeError("quota exceeded"))
        interpreter = IntentInterpreter(classifier=classifier, timeout=1)

        interpretation = await interpreter.interpret("CEP 01310100 e previsão")

        assert interpretation.source == "rules"
        assert interpretation.kind == QueryKind.ZIP_AND_FORECAST

    @pytest.mark.asyncio
    async def test_ai_timeout_falls_back_and_abandons_call(self):
        """A chamada lenta não é cancelada; seu resultado tardio é ignorado."""
        classifier = FakeClassifier(
            AIClassification(kind=QueryKind.OUT_OF_SCOPE), delay=0.2
        )
        interpreter = IntentInterpreter(classifier=classifier, timeout=0.01)

        interpretation = await interpreter.interpret("tempo em Ibitinga")

        assert interpretation.source == "rules"
        assert interpretation.kind == QueryKind.FORECAST
        assert classifier.completed is False

        await asyncio.sleep(0.3)
        assert classifier.completed is True

    @pytest.mark.asyncio
    async def test_late_ai_error_is_discarded(self):
        classifier = FakeClassifier(error=RuntimeError("late failure"), delay=0.1)
        interpreter = IntentInterpreter(classifier=classifier, timeout=0.01)

        interpretation = await interpreter.interpret("previsão")

        assert interpretation.source == "rules"
        await asyncio.sleep(0.2)
        assert classifier.completed is True

    @pytest.mark.asyncio
    async def test_without_classifier_uses_rules(self):
        interpreter = IntentInterpreter()

        interpretation = await interpreter.interpret("tempo em Ibitinga")

        assert interpretation.source == "rules"

    def test_from_env_respects_disabled_flag(self):
        """Nos testes a IA está desabilitada via AI_CLASSIFICATION_ENABLED=false."""
        assert IntentInterpreter.from_env().classifier is None
