"""Language names understood by the Google Translate web endpoint."""

from __future__ import annotations

import threading
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Tuple


# Display name -> endpoint language code. Hebrew still uses the legacy "iw" code.
SUPPORTED_LANGUAGES: Tuple[Tuple[str, str], ...] = (
    ("Afrikaans", "af"),
    ("Albanian", "sq"),
    ("Arabic", "ar"),
    ("Armenian", "hy"),
    ("Azerbaijani", "az"),
    ("Basque", "eu"),
    ("Belarusian", "be"),
    ("Bengali", "bn"),
    ("Bulgarian", "bg"),
    ("Catalan", "ca"),
    ("Chinese", "zh-CN"),
    ("Croatian", "hr"),
    ("Czech", "cs"),
    ("Danish", "da"),
    ("Dutch", "nl"),
    ("English", "en"),
    ("Esperanto", "eo"),
    ("Estonian", "et"),
    ("Filipino", "tl"),
    ("Finnish", "fi"),
    ("French", "fr"),
    ("Galician", "gl"),
    ("German", "de"),
    ("Georgian", "ka"),
    ("Greek", "el"),
    ("Haitian Creole", "ht"),
    ("Hebrew", "iw"),
    ("Hindi", "hi"),
    ("Hungarian", "hu"),
    ("Icelandic", "is"),
    ("Indonesian", "id"),
    ("Irish", "ga"),
    ("Italian", "it"),
    ("Japanese", "ja"),
    ("Korean", "ko"),
    ("Lao", "lo"),
    ("Latin", "la"),
    ("Latvian", "lv"),
    ("Lithuanian", "lt"),
    ("Macedonian", "mk"),
    ("Malay", "ms"),
    ("Maltese", "mt"),
    ("Norwegian", "no"),
    ("Persian", "fa"),
    ("Polish", "pl"),
    ("Portuguese", "pt"),
    ("Romanian", "ro"),
    ("Russian", "ru"),
    ("Serbian", "sr"),
    ("Slovak", "sk"),
    ("Slovenian", "sl"),
    ("Spanish", "es"),
    ("Swahili", "sw"),
    ("Swedish", "sv"),
    ("Tamil", "ta"),
    ("Telugu", "te"),
    ("Thai", "th"),
    ("Turkish", "tr"),
    ("Ukrainian", "uk"),
    ("Urdu", "ur"),
    ("Vietnamese", "vi"),
    ("Welsh", "cy"),
    ("Yiddish", "yi"),
)


class LanguageRegistry:
    """Read-only, lazily built mapping between language names and codes.

    The table is constructed on first access. Construction is guarded by a lock
    so concurrent first use still produces exactly one table, after which
    lookups need no locking.
    """

    def __init__(self, entries: Sequence[Tuple[str, str]] = SUPPORTED_LANGUAGES) -> None:
        self._source = tuple(entries)
        self._lock = threading.Lock()
        self._codes: Optional[Mapping[str, str]] = None
        self._names: Optional[Mapping[str, str]] = None
        self._sorted_names: Tuple[str, ...] = ()

    @property
    def initialized(self) -> bool:
        return self._codes is not None

    def _ensure_initialized(self) -> Mapping[str, str]:
        codes = self._codes
        if codes is not None:
            return codes

        with self._lock:
            if self._codes is not None:
                return self._codes

            by_name: dict[str, str] = {}
            by_code: dict[str, str] = {}
            for name, code in self._source:
                if not name or not code:
                    raise ValueError(f"Invalid language entry: {name!r} -> {code!r}")
                if name in by_name:
                    raise ValueError(f"Duplicate language name: {name}")
                if code in by_code:
                    raise ValueError(f"Duplicate language code: {code}")
                by_name[name] = code
                by_code[code] = name

            self._names = MappingProxyType(by_code)
            self._sorted_names = tuple(sorted(by_name))
            # Published last: readers treat a non-None table as fully built.
            self._codes = MappingProxyType(by_name)
            return self._codes

    def code_for(self, name: str) -> str:
        """Return the endpoint code for ``name`` or an empty string if unknown."""

        return self._ensure_initialized().get(name, "")

    def name_for(self, code: str) -> str:
        """Return the language name registered for ``code`` or an empty string."""

        self._ensure_initialized()
        assert self._names is not None
        return self._names.get(code, "")

    def all_language_names(self) -> Tuple[str, ...]:
        self._ensure_initialized()
        return self._sorted_names

    def __contains__(self, name: object) -> bool:
        return name in self._ensure_initialized()

    def __len__(self) -> int:
        return len(self._ensure_initialized())


_default_registry = LanguageRegistry()


def default_registry() -> LanguageRegistry:
    return _default_registry


def code_for(name: str) -> str:
    return _default_registry.code_for(name)


def name_for(code: str) -> str:
    return _default_registry.name_for(code)


def all_language_names() -> Tuple[str, ...]:
    return _default_registry.all_language_names()
