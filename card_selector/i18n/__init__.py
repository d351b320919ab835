"""Internationalization module."""

import json
from pathlib import Path
from typing import Any, Optional

DEFAULT_LANGUAGE = "en_US"

_current_lang = DEFAULT_LANGUAGE
_translations: dict[str, dict[str, Any]] = {}
_i18n_dir = Path(__file__).parent


def load_language(lang: str) -> None:
    """Load a language file into the translation cache."""
    lang_file = _i18n_dir / f"{lang}.json"
    if not lang_file.exists():
        raise FileNotFoundError(f"Language file not found: {lang_file}")
    with open(lang_file, "r", encoding="utf-8") as f:
        _translations[lang] = json.load(f)


def set_language(lang: str) -> None:
    """Switch the current language."""
    global _current_lang
    if lang not in _translations:
        load_language(lang)
    _current_lang = lang


def t(key: str, **kwargs: object) -> str:
    """Get a translated string by dot-separated key.

    Falls back to English, then to the key itself.
    Example: t("selector.create_marker", marker="initdv3.txt")
    """
    data = _lookup(_current_lang, key)
    if data is None and _current_lang != DEFAULT_LANGUAGE:
        data = _lookup(DEFAULT_LANGUAGE, key)
    if data is None:
        return key
    result = str(data)
    for k, v in kwargs.items():
        result = result.replace(f"{{{k}}}", str(v))
    return result


def get_current_language() -> str:
    """Return the current language code."""
    return _current_lang


def get_available_languages() -> list[str]:
    """Return list of available language codes."""
    return sorted(f.stem for f in _i18n_dir.glob("*.json"))


def init(lang: Optional[str] = None) -> None:
    """Initialize i18n — load all available languages and set the active one."""
    global _current_lang
    for f in _i18n_dir.glob("*.json"):
        load_language(f.stem)
    _current_lang = lang if lang in _translations else DEFAULT_LANGUAGE


def _lookup(lang: str, key: str) -> Any:
    data: Any = _translations.get(lang, {})
    for k in key.split("."):
        if not isinstance(data, dict):
            return None
        data = data.get(k)
    return data
