"""Tk window for interactive translation."""

from __future__ import annotations

import queue
from typing import Tuple

try:
    import tkinter as tk
    from tkinter import scrolledtext
except ImportError as exc:  # pragma: no cover - tkinter ships with CPython on desktops
    raise SystemExit("tkinter is required to display the translation window") from exc

from translator_app import TranslationRequest, TranslatorApp, format_result
from translation_service import TranslationResult


POLL_INTERVAL_MS = 50
WINDOW_TITLE = "Translator"


class TranslationWindow:
    """Input box on top, translation below.

    Enter translates the input, Shift+Enter inserts a newline, and Escape or a
    click into the input box clears it. Results arrive on the worker thread and
    are handed to the Tk thread through a queue polled with ``after``.
    """

    def __init__(self, app: TranslatorApp) -> None:
        self._app = app
        self._results: "queue.Queue[Tuple[TranslationRequest, TranslationResult]]" = queue.Queue()
        self._app.set_display_callback(lambda request, result: self._results.put((request, result)))

        self.root = tk.Tk()
        self.root.title(WINDOW_TITLE)
        self.root.attributes("-topmost", True)

        toolbar = tk.Frame(self.root)
        toolbar.pack(fill=tk.X, padx=6, pady=(6, 0))

        names = list(app.translator.registry.all_language_names())
        self._source_var = tk.StringVar(value=app.source_language)
        self._target_var = tk.StringVar(value=app.target_language)
        tk.OptionMenu(toolbar, self._source_var, *names, command=self._on_source_selected).pack(side=tk.LEFT)
        tk.Button(toolbar, text="⇄", command=self._on_swap).pack(side=tk.LEFT, padx=4)
        tk.OptionMenu(toolbar, self._target_var, *names, command=self._on_target_selected).pack(side=tk.LEFT)

        self._topmost_var = tk.BooleanVar(value=True)
        tk.Checkbutton(
            toolbar,
            text="Always on top",
            variable=self._topmost_var,
            command=self._on_topmost_toggled,
        ).pack(side=tk.RIGHT)

        self._input = scrolledtext.ScrolledText(self.root, height=5, wrap=tk.WORD)
        self._input.pack(fill=tk.BOTH, expand=True, padx=6, pady=6)
        self._input.bind("<Return>", self._on_return)
        self._input.bind("<Escape>", self._on_escape)
        self._input.bind("<Button-1>", self._on_click)
        self._input.focus_set()

        self._output = scrolledtext.ScrolledText(self.root, height=5, wrap=tk.WORD, state=tk.DISABLED)
        self._output.pack(fill=tk.BOTH, expand=True, padx=6, pady=(0, 6))

        self._status = tk.Label(self.root, anchor=tk.W)
        self._status.pack(fill=tk.X, padx=6, pady=(0, 6))

        self.root.protocol("WM_DELETE_WINDOW", self.close)

    def run(self) -> None:
        self._app.start()
        self.root.after(POLL_INTERVAL_MS, self._poll_results)
        self.root.mainloop()

    def close(self) -> None:
        self._app.stop(timeout=1.0)
        self.root.destroy()

    def _on_return(self, event: tk.Event) -> str:
        if event.state & 0x0001:  # Shift
            return ""
        if self._app.submit(self._input.get("1.0", tk.END)):
            self._status.configure(text="Translating...")
        return "break"

    def _on_escape(self, _event: tk.Event) -> str:
        self._input.delete("1.0", tk.END)
        return "break"

    def _on_click(self, _event: tk.Event) -> None:
        self._input.delete("1.0", tk.END)

    def _on_source_selected(self, selection: str) -> None:
        self._app.set_source_language(selection)

    def _on_target_selected(self, selection: str) -> None:
        self._app.set_target_language(selection)

    def _on_swap(self) -> None:
        self._app.swap_languages()
        self._source_var.set(self._app.source_language)
        self._target_var.set(self._app.target_language)

    def _on_topmost_toggled(self) -> None:
        self.root.attributes("-topmost", bool(self._topmost_var.get()))

    def _poll_results(self) -> None:
        try:
            while True:
                _request, result = self._results.get_nowait()
                self._show(result)
        except queue.Empty:
            pass
        self.root.after(POLL_INTERVAL_MS, self._poll_results)

    def _show(self, result: TranslationResult) -> None:
        self._output.configure(state=tk.NORMAL)
        self._output.delete("1.0", tk.END)
        self._output.insert("1.0", format_result(result))
        self._output.configure(state=tk.DISABLED)
        self._status.configure(text=f"{result.elapsed:.2f}s")
