from cep_clima.config.settings import Settings

__all__ = ["Settings"]
