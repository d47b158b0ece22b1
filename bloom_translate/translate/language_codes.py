from __future__ import annotations

"""Two-letter (ISO 639-1) to three-letter (ISO 639-3) language code map.

ACTS2 only accepts ISO 639-3 codes. The table covers the languages Bloom
books are most often translated into; anything else passes through unchanged.
"""

__all__ = [
    "ISO_639_3",
    "to_iso639_3",
]

ISO_639_3: dict[str, str] = {
    "af": "afr",  # Afrikaans
    "am": "amh",  # Amharic
    "ar": "ara",  # Arabic
    "az": "aze",  # Azerbaijani
    "bg": "bul",  # Bulgarian
    "bn": "ben",  # Bengali
    "bs": "bos",  # Bosnian
    "ca": "cat",  # Catalan
    "cs": "ces",  # Czech
    "de": "deu",  # German
    "el": "ell",  # Greek
    "en": "eng",
    "es": "spa",
    "et": "est",  # Estonian
    "eu": "eus",  # Basque
    "fa": "fas",  # Persian/Farsi
    "fil": "fil",  # Filipino/Tagalog
    "fr": "fra",
    "gl": "glg",  # Galician
    "gu": "guj",  # Gujarati
    "ha": "hau",  # Hausa
    "hi": "hin",  # Hindi
    "hr": "hrv",  # Croatian
    "hu": "hun",  # Hungarian
    "hy": "hye",  # Armenian
    "id": "ind",  # Indonesian
    "is": "isl",  # Icelandic
    "it": "ita",  # Italian
    "ja": "jpn",  # Japanese
    "ka": "kat",  # Georgian
    "km": "khm",  # Khmer
    "kn": "kan",  # Kannada
    "ko": "kor",  # Korean
    "lo": "lao",  # Lao
    "lt": "lit",  # Lithuanian
    "lv": "lav",  # Latvian
    "mk": "mkd",  # Macedonian
    "ml": "mal",  # Malayalam
    "mn": "mon",  # Mongolian
    "mr": "mar",  # Marathi
    "ms": "msa",  # Malay
    "my": "mya",  # Burmese
    "ne": "nep",  # Nepali
    "nl": "nld",  # Dutch
    "pa": "pan",  # Punjabi
    "pl": "pol",  # Polish
    "pt": "por",  # Portuguese
    "ro": "ron",  # Romanian
    "ru": "rus",  # Russian
    "si": "sin",  # Sinhala
    "sk": "slk",  # Slovak
    "sq": "sqi",  # Albanian
    "sr": "srp",  # Serbian
    "sw": "swa",  # Swahili
    "ta": "tam",  # Tamil
    "te": "tel",  # Telugu
    "th": "tha",  # Thai
    "tr": "tur",  # Turkish
    "uk": "ukr",  # Ukrainian
    "ur": "urd",  # Urdu
    "uz": "uzb",  # Uzbek
    "vi": "vie",  # Vietnamese
    "zh": "zho",  # Chinese
}


def to_iso639_3(language_code: str) -> str:
    return ISO_639_3.get(language_code.lower(), language_code)
