from cep_clima.tools.assistente.resolver import ConsultaResolver, resolve

__all__ = ["ConsultaResolver", "resolve"]
