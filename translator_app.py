"""Small translation front end: one-shot command line mode and a Tk window."""

from __future__ import annotations

import argparse
import asyncio
import logging
import queue
import sys
import threading
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Callable, List, Optional, Protocol, Sequence

try:  # pragma: no cover - executed during module import
    import pyperclip  # type: ignore
except ImportError:  # pragma: no cover - handled in read_clipboard
    pyperclip = None  # type: ignore

from language_registry import LanguageRegistry, default_registry
from translation_service import (
    DEFAULT_SOURCE_LANGUAGE,
    DEFAULT_TIMEOUT,
    DEFAULT_TARGET_LANGUAGE,
    GoogleTranslateClient,
    TranslationError,
    TranslationResult,
    UnsupportedLanguageError,
)


LOG_FILE_NAME = "gtxtranslator.log"
LOG_MAX_BYTES = 2_097_152
LOG_BACKUP_COUNT = 3
LOG_DIR = Path.home()


def _get_logger(*, verbose: bool = False) -> logging.Logger:
    logger = logging.getLogger("gtxtranslator")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if logger.handlers:
        return logger

    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            LOG_DIR / LOG_FILE_NAME,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError:
        pass
    else:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)
    return logger


class TranslatorProtocol(Protocol):  # pragma: no cover - protocol is for type checking only
    registry: LanguageRegistry

    def translate(self, text: str, source_language: str, target_language: str) -> TranslationResult:
        """Translate text and return a result object."""


@dataclass
class TranslationRequest:
    text: str
    source_language: str
    target_language: str


DisplayCallback = Callable[[TranslationRequest, TranslationResult], None]


class TranslatorApp:
    """Runs translations on a worker thread and hands results to a display."""

    def __init__(
        self,
        *,
        source_language: str = DEFAULT_SOURCE_LANGUAGE,
        target_language: str = DEFAULT_TARGET_LANGUAGE,
        translator: Optional[TranslatorProtocol] = None,
        display_callback: Optional[DisplayCallback] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._translator = translator or GoogleTranslateClient()
        self._registry = getattr(self._translator, "registry", None) or default_registry()
        self._display_callback = display_callback
        self._logger = logger or logging.getLogger("gtxtranslator.app")
        self._lock = threading.Lock()
        self._request_queue: "queue.Queue[Optional[TranslationRequest]]" = queue.Queue()
        self._worker: Optional[threading.Thread] = None
        self.source_language = self._validated(source_language)
        self.target_language = self._validated(target_language)

    @property
    def translator(self) -> TranslatorProtocol:
        return self._translator

    def set_display_callback(self, callback: Optional[DisplayCallback]) -> None:
        self._display_callback = callback

    def _validated(self, language: str) -> str:
        if language not in self._registry:
            raise UnsupportedLanguageError(language)
        return language

    def set_source_language(self, language: str) -> None:
        language = self._validated(language)
        with self._lock:
            self.source_language = language

    def set_target_language(self, language: str) -> None:
        language = self._validated(language)
        with self._lock:
            self.target_language = language

    def swap_languages(self) -> None:
        with self._lock:
            self.source_language, self.target_language = self.target_language, self.source_language

    def start(self) -> None:
        with self._lock:
            if self._worker is not None and self._worker.is_alive():
                return
            self._worker = threading.Thread(
                target=self._process_requests, name="translation-worker", daemon=True
            )
            self._worker.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        with self._lock:
            worker = self._worker
            self._worker = None
        if worker is None:
            return
        self._request_queue.put(None)
        worker.join(timeout)

    def submit(self, text: str) -> bool:
        """Queue ``text`` for translation. Blank text is ignored."""

        text = text.strip()
        if not text:
            return False
        with self._lock:
            request = TranslationRequest(
                text=text,
                source_language=self.source_language,
                target_language=self.target_language,
            )
        self._request_queue.put(request)
        return True

    def wait_until_idle(self) -> None:
        self._request_queue.join()

    def translate_now(self, text: str) -> TranslationResult:
        with self._lock:
            request = TranslationRequest(
                text=text,
                source_language=self.source_language,
                target_language=self.target_language,
            )
        return self._process_single_request(request)

    def _process_requests(self) -> None:
        while True:
            request = self._request_queue.get()
            try:
                if request is None:
                    return
                self._process_single_request(request)
            except Exception as exc:  # pragma: no cover - keeps the worker alive
                self._logger.exception("Error while processing translation request: %s", exc)
            finally:
                self._request_queue.task_done()

    def _process_single_request(self, request: TranslationRequest) -> TranslationResult:
        result = self.translator.translate(
            request.text, request.source_language, request.target_language
        )
        if result.error is not None:
            self._logger.error("Translation of %r failed: %s", request.text, result.error)
        else:
            self._logger.info(
                "Translated %d characters %s -> %s in %.3fs",
                len(request.text),
                request.source_language,
                request.target_language,
                result.elapsed,
            )
        if self._display_callback is not None:
            self._display_callback(request, result)
        return result


def format_result(result: TranslationResult, *, with_speech_url: bool = False) -> str:
    if result.error is not None:
        return f"Error during translation: {result.error}"
    if with_speech_url and result.speech_url:
        return f"{result.text}\n{result.speech_url}"
    return result.text


def read_clipboard() -> str:
    if pyperclip is None:
        raise TranslationError("pyperclip is required to read the clipboard")
    try:
        return pyperclip.paste() or ""
    except pyperclip.PyperclipException as exc:  # pragma: no cover - depends on the desktop session
        raise TranslationError(f"Clipboard is not available: {exc}") from exc


async def translate_many(
    client: GoogleTranslateClient,
    texts: Sequence[str],
    source_language: str,
    target_language: str,
) -> List[TranslationResult]:
    return list(
        await asyncio.gather(
            *(client.translate_async(text, source_language, target_language) for text in texts)
        )
    )


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Translate text with Google Translate. Opens a window when no text is given."
    )
    parser.add_argument("texts", nargs="*", help="Text to translate. Each argument is translated separately.")
    parser.add_argument(
        "--src",
        default=DEFAULT_SOURCE_LANGUAGE,
        help=f"Source language name (default: {DEFAULT_SOURCE_LANGUAGE}).",
    )
    parser.add_argument(
        "--dest",
        default=DEFAULT_TARGET_LANGUAGE,
        help=f"Destination language name (default: {DEFAULT_TARGET_LANGUAGE}).",
    )
    parser.add_argument(
        "--clipboard",
        action="store_true",
        help="Translate the current clipboard text.",
    )
    parser.add_argument(
        "--speech-url",
        action="store_true",
        help="Also print the text-to-speech URL of each translation.",
    )
    parser.add_argument(
        "--list-languages",
        action="store_true",
        help="Print the supported language names and exit.",
    )
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, help="Request timeout in seconds.")
    parser.add_argument("--verbose", action="store_true", help="Log request details.")
    return parser.parse_args(argv)


def _run_once(args: argparse.Namespace, client: GoogleTranslateClient, logger: logging.Logger) -> int:
    texts = list(args.texts)
    if args.clipboard:
        try:
            texts.append(read_clipboard())
        except TranslationError as exc:
            logger.error("%s", exc)
            return 1

    results = asyncio.run(translate_many(client, texts, args.src, args.dest))
    for result in results:
        print(format_result(result, with_speech_url=args.speech_url))
    return 0 if all(result.succeeded for result in results) else 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logger = _get_logger(verbose=args.verbose)
    client = GoogleTranslateClient(timeout=args.timeout)

    if args.list_languages:
        for name in client.registry.all_language_names():
            print(f"{name}\t{client.registry.code_for(name)}")
        return 0

    if args.texts or args.clipboard:
        return _run_once(args, client, logger)

    try:
        app = TranslatorApp(
            source_language=args.src,
            target_language=args.dest,
            translator=client,
            logger=logger,
        )
    except UnsupportedLanguageError as exc:
        logger.error("%s", exc)
        return 2

    from translation_window import TranslationWindow

    TranslationWindow(app).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
