from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

from chattranslator.app.config import display_options
from chattranslator.app.diagnostics import summarize_exception
from chattranslator.app.services import ChatTranslatorServices
from chattranslator.chat.colors import parse_color
from chattranslator.chat.menu import HoverTarget, TranslateMenuEntry, build_menu_entry
from chattranslator.chat.preview import InputWriter, PreviewMatcher, PreviewState
from chattranslator.contracts import ChannelKind, ChatLine, OutgoingMessage, TranslationResult
from chattranslator.ui.bridge import CompletionBus

ERROR_PREFIX = "Translation Error: "


class ChatEmitter(Protocol):
    def emit(self, message: OutgoingMessage) -> None:
        ...


@dataclass(frozen=True)
class _Completion:
    entry: TranslateMenuEntry
    result: Optional[TranslationResult] = None
    error: Optional[str] = None


def _log_event(logger: logging.Logger | None, level: int, event: str, **fields: Any) -> None:
    if logger is None:
        return
    logger.log(level, event, extra=fields)


class ChatTranslatorRuntime:
    """
    Host-facing event handlers for one player session.

    Everything except the translation call runs on the host's UI thread. The
    translation itself runs on a worker thread when async_translate is on, and
    its completion is handed back through a CompletionBus that the host drains
    from its UI loop.
    """

    def __init__(
        self,
        services: ChatTranslatorServices,
        *,
        emitter: ChatEmitter,
        writer: InputWriter,
        visible_channel: Callable[[], Optional[ChannelKind]],
        logger: logging.Logger | None = None,
    ) -> None:
        self.services = services
        self.session = services.session
        self.router = services.router
        self.values = services.session.values
        self.emitter = emitter
        self.visible_channel = visible_channel
        self.logger = logger
        self.bus: CompletionBus[_Completion] = CompletionBus(maxsize=max(1, int(self.values["queue_maxsize"])))
        self.preview = PreviewMatcher(
            writer,
            highlight_enabled=bool(self.values["highlight_translations"]),
            correct_color=parse_color(self.values["target_lang_color"]),
            logger=logger,
        )
        self.menu_entry: Optional[TranslateMenuEntry] = None

    def start(self) -> bool:
        ok = self.session.authenticate_from_config()
        _log_event(self.logger, logging.INFO, "runtime_started", authenticated=ok)
        return ok

    def on_menu_opened(self, hover: HoverTarget, line: Optional[ChatLine]) -> Optional[TranslateMenuEntry]:
        self.menu_entry = build_menu_entry(hover, line, self.values)
        return self.menu_entry

    def menu_label(self, entry: TranslateMenuEntry) -> str:
        return entry.label(display_options(self.values))

    def on_menu_clicked(self, entry: Optional[TranslateMenuEntry] = None) -> Optional[threading.Thread]:
        entry = entry or self.menu_entry
        if entry is None:
            return None
        _log_event(
            self.logger,
            logging.INFO,
            "translate_requested",
            source=entry.source_code or "auto",
            target=entry.target_code,
            chars=len(entry.line.text),
        )
        if not self.values.get("async_translate", True):
            self._translate_job(entry)
            return None
        worker = threading.Thread(
            target=self._translate_job,
            args=(entry,),
            name="chattranslator-translate-worker",
            daemon=True,
        )
        worker.start()
        return worker

    def drain(self, max_items: int | None = None) -> int:
        """Apply pending completions. Must be called on the UI thread."""
        limit = int(self.values["max_updates_per_tick"]) if max_items is None else max_items
        drained = 0
        while drained < limit:
            done = self.bus.pop()
            if done is None:
                break
            self._apply(done)
            drained += 1
        return drained

    def on_input_changed(self, typed_text: str) -> PreviewState:
        if not self.values.get("preview_chat_input", True):
            return self.preview.state
        return self.preview.update(typed_text)

    def on_config_changed(self, key: str, value: Any) -> None:
        self.values[key] = value
        if key == "preview_chat_input" and not value:
            self.preview.stop()
        elif key == "highlight_translations":
            self.preview.highlight_enabled = bool(value)
        elif key == "target_lang_color":
            self.preview.correct_color = parse_color(value)

    def _translate_job(self, entry: TranslateMenuEntry) -> None:
        t0 = time.perf_counter()
        try:
            result = self.session.translate(entry.line.text, entry.source_code, entry.target_code)
        except Exception as e:
            if self.logger is not None:
                self.logger.exception("translate_failed", extra={"target": entry.target_code})
            self._push(_Completion(entry=entry, error=summarize_exception(str(e))))
            return
        _log_event(
            self.logger,
            logging.INFO,
            "translate_done",
            detected=result.detected_source_lang,
            target=result.target_lang,
            ms=round((time.perf_counter() - t0) * 1000.0, 2),
        )
        self._push(_Completion(entry=entry, result=result))

    def _push(self, done: _Completion) -> None:
        if self.bus.push(done):
            _log_event(self.logger, logging.WARNING, "completion_queue_drop_oldest", queue_depth=len(self.bus))

    def _apply(self, done: _Completion) -> None:
        if done.result is None:
            self.emitter.emit(
                OutgoingMessage(
                    channel=ChannelKind.GAME_MESSAGE,
                    header="",
                    body=ERROR_PREFIX + (done.error or "Unknown error."),
                    trailer="",
                )
            )
            return

        line = done.entry.line
        if self.values.get("preview_chat_input", True) and line.is_said_by_local_player:
            self.preview.start(done.result.translated_text, line.speaker_name or "")

        message = self.router.route(self._visible(), line, done.result, display_options(self.values))
        self.emitter.emit(message)
        _log_event(self.logger, logging.DEBUG, "translation_emitted", channel=message.channel.value)

    def _visible(self) -> Optional[ChannelKind]:
        # Best effort: an unreadable chat tab falls back to game-message formatting.
        try:
            return self.visible_channel()
        except Exception:
            _log_event(self.logger, logging.DEBUG, "visible_channel_unavailable")
            return None
