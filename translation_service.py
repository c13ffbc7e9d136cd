"""Translation utilities for the gtx-translator application."""

from __future__ import annotations

import asyncio
import http.client
import logging
import socket
import threading
import time
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Optional, Tuple

from language_registry import LanguageRegistry, default_registry
from response_parser import build_speech_url, parse_translation


LOGGER = logging.getLogger("gtxtranslator.service")

TRANSLATE_ENDPOINT = "https://translate.googleapis.com/translate_a/single"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 6.1) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/41.0.2228.0 Safari/537.36"
)
DEFAULT_TIMEOUT = 5.0
DEFAULT_SOURCE_LANGUAGE = "English"
DEFAULT_TARGET_LANGUAGE = "Korean"


class TranslationError(RuntimeError):
    """Raised when the translation service cannot complete a request."""


class NetworkError(TranslationError):
    """The translation endpoint could not be reached or refused the request."""


class UnsupportedLanguageError(TranslationError, ValueError):
    """A language name has no entry in the language registry."""

    def __init__(self, language: str) -> None:
        super().__init__(f"Unsupported language: {language!r}")
        self.language = language


@dataclass(frozen=True)
class TranslationResult:
    text: str
    speech_url: Optional[str] = None
    elapsed: float = 0.0
    error: Optional[TranslationError] = None
    source_language: str = ""
    target_language: str = ""

    def __post_init__(self) -> None:
        if self.error is not None and (self.text or self.speech_url is not None):
            raise ValueError("A failed translation cannot carry text or a speech URL")

    @property
    def succeeded(self) -> bool:
        return self.error is None


def build_translate_url(
    source_text: str,
    source_language: str,
    target_language: str,
    registry: Optional[LanguageRegistry] = None,
) -> str:
    """Return the request URL for translating ``source_text``.

    Language names are resolved through ``registry``. An unknown name leaves an
    empty ``sl``/``tl`` value; use :func:`resolve_language_codes` to reject it.
    """

    registry = registry or default_registry()
    params = {
        "client": "gtx",
        "sl": registry.code_for(source_language),
        "tl": registry.code_for(target_language),
        "dt": "t",
        "q": source_text,
    }
    return f"{TRANSLATE_ENDPOINT}?{urllib.parse.urlencode(params)}"


def resolve_language_codes(
    source_language: str,
    target_language: str,
    registry: Optional[LanguageRegistry] = None,
) -> Tuple[str, str]:
    registry = registry or default_registry()
    codes = []
    for language in (source_language, target_language):
        code = registry.code_for(language)
        if not code:
            raise UnsupportedLanguageError(language)
        codes.append(code)
    return codes[0], codes[1]


class GoogleTranslateClient:
    """Minimal client for the unofficial Google Translate web API.

    ``translate`` and ``translate_async`` never raise :class:`TranslationError`;
    failures are reported through :attr:`TranslationResult.error` together with
    the elapsed time. Requests are not retried.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        *,
        registry: Optional[LanguageRegistry] = None,
        user_agent: str = USER_AGENT,
    ) -> None:
        self.timeout = timeout
        self.registry = registry or default_registry()
        self.user_agent = user_agent

    def fetch(self, url: str) -> str:
        """Download ``url`` and return the decoded body."""

        request = urllib.request.Request(url, headers={"User-Agent": self.user_agent})
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                payload = response.read()
        except urllib.error.HTTPError as exc:
            raise NetworkError(f"Google Translate returned HTTP {exc.code}") from exc
        except socket.timeout as exc:
            raise NetworkError("Request to Google Translate timed out") from exc
        except urllib.error.URLError as exc:
            if isinstance(exc.reason, socket.timeout):
                raise NetworkError("Request to Google Translate timed out") from exc
            raise NetworkError(f"Network error while contacting Google Translate: {exc.reason}") from exc
        except http.client.HTTPException as exc:
            raise NetworkError(f"Invalid HTTP response from Google Translate: {exc!r}") from exc
        except OSError as exc:
            raise NetworkError(f"Network error while contacting Google Translate: {exc}") from exc

        return payload.decode("utf-8", errors="replace")

    def translate(
        self,
        text: str,
        source_language: str = DEFAULT_SOURCE_LANGUAGE,
        target_language: str = DEFAULT_TARGET_LANGUAGE,
    ) -> TranslationResult:
        started = time.perf_counter()
        try:
            url, source_code, target_code = self._prepare(text, source_language, target_language)
            body = self.fetch(url)
            return self._finish(body, source_code, target_code, started)
        except TranslationError as exc:
            return self._failure(exc, started)

    async def translate_async(
        self,
        text: str,
        source_language: str = DEFAULT_SOURCE_LANGUAGE,
        target_language: str = DEFAULT_TARGET_LANGUAGE,
    ) -> TranslationResult:
        started = time.perf_counter()
        try:
            url, source_code, target_code = self._prepare(text, source_language, target_language)
            body = await asyncio.to_thread(self.fetch, url)
            return self._finish(body, source_code, target_code, started)
        except TranslationError as exc:
            return self._failure(exc, started)

    def _prepare(self, text: str, source_language: str, target_language: str) -> Tuple[str, str, str]:
        if not text:
            raise TranslationError("Cannot translate empty text")
        source_code, target_code = resolve_language_codes(
            source_language, target_language, self.registry
        )
        try:
            url = build_translate_url(text, source_language, target_language, self.registry)
        except UnicodeError as exc:
            raise TranslationError(f"Text cannot be encoded for the request: {exc}") from exc
        LOGGER.debug("Requesting %s -> %s translation: %s", source_code, target_code, url)
        return url, source_code, target_code

    def _finish(self, body: str, source_code: str, target_code: str, started: float) -> TranslationResult:
        translation = parse_translation(body, source_code)
        if not translation:
            LOGGER.info("Translation response contained no text")
        speech_url = build_speech_url(translation, target_code) if translation else None
        return TranslationResult(
            text=translation,
            speech_url=speech_url,
            elapsed=time.perf_counter() - started,
            source_language=source_code,
            target_language=target_code,
        )

    def _failure(self, exc: TranslationError, started: float) -> TranslationResult:
        LOGGER.warning("Translation failed: %s", exc)
        return TranslationResult(text="", elapsed=time.perf_counter() - started, error=exc)


_default_client: Optional[GoogleTranslateClient] = None
_default_client_lock = threading.Lock()


def default_client() -> GoogleTranslateClient:
    global _default_client
    with _default_client_lock:
        if _default_client is None:
            _default_client = GoogleTranslateClient()
        return _default_client


def translate(
    text: str,
    source_language: str = DEFAULT_SOURCE_LANGUAGE,
    target_language: str = DEFAULT_TARGET_LANGUAGE,
) -> TranslationResult:
    return default_client().translate(text, source_language, target_language)


def list_supported_languages() -> Tuple[str, ...]:
    return default_client().registry.all_language_names()
