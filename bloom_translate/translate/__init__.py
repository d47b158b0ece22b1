from .dispatcher import TranslationDispatcher, parse_model_from_tag
from .errors import BackendError, ConfigurationError, TranslationTimeoutError, UnsupportedModelError
from .tags import column_name_for_tag, parse_tag, source_column_name

__all__ = [
    "BackendError",
    "ConfigurationError",
    "TranslationDispatcher",
    "TranslationTimeoutError",
    "UnsupportedModelError",
    "column_name_for_tag",
    "parse_model_from_tag",
    "parse_tag",
    "source_column_name",
]
