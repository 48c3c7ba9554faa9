"""Supported languages and code conversion for the DeepL wire format."""

from enum import Enum


class Language(str, Enum):
    """Languages the blog is published in."""

    DE = "de"
    EN = "en"
    RO = "ro"
    RU = "ru"


PROVIDER_CODES = {lang.value: lang.value.upper() for lang in Language}


def normalize_lang(code: str | None) -> str | None:
    """Lower-case a language code at the API boundary."""
    if code is None:
        return None
    code = code.strip().lower()
    return code or None


def to_provider_code(code: str) -> str:
    """Map an API language code to DeepL's upper-case code.

    Unknown codes are upper-cased and passed through unchanged.
    """
    code = normalize_lang(code) or ''
    return PROVIDER_CODES.get(code, code.upper())


def from_provider_code(code: str | None) -> str | None:
    """Map a DeepL code (e.g. 'EN', 'EN-US') back to an API code."""
    if not code:
        return None
    return code.split('-')[0].lower()


def is_supported(code: str | None) -> bool:
    return normalize_lang(code) in PROVIDER_CODES
