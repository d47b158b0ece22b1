from .acts2 import Acts2Backend
from .base import TranslationBackend
from .google import GoogleTranslateBackend
from .piglatin import PigLatinBackend, to_pig_latin

__all__ = [
    "Acts2Backend",
    "GoogleTranslateBackend",
    "PigLatinBackend",
    "TranslationBackend",
    "to_pig_latin",
]
