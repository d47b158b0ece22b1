from .loader import ConfigurationError, TranslateConfig, load_config

__all__ = [
    "ConfigurationError",
    "TranslateConfig",
    "load_config",
]
