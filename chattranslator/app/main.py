from __future__ import annotations

import argparse
import sys
from pathlib import Path

from chattranslator.app.config import load_user_config, resolve_args
from chattranslator.app.diagnostics import hint_for_exception, summarize_exception
from chattranslator.app.logging_setup import setup_app_logger
from chattranslator.app.runtime import ChatTranslatorRuntime
from chattranslator.app.services import build_services
from chattranslator.chat.lines import local_input_line
from chattranslator.chat.menu import HoverTarget
from chattranslator.contracts import ChannelKind, ChatLine, OutgoingMessage
from chattranslator.errors import TranslationError

# Overridable from the command line only; everything else is persisted.
_CLI_KEYS = (
    "translator",
    "source_lang_code",
    "target_lang_code",
    "highlight_translations",
    "show_detected_language",
    "request_timeout_sec",
)


class ConsoleEmitter:
    def __init__(self, out=None) -> None:
        self.out = out or sys.stdout
        self.messages: list[OutgoingMessage] = []

    def emit(self, message: OutgoingMessage) -> None:
        self.messages.append(message)
        print(
            f"[{message.channel.value}] header={message.header!r} body={message.body!r} trailer={message.trailer!r}",
            file=self.out,
        )


class ConsoleInput:
    """Console stand-in for the chat input box: always in normal mode."""

    def __init__(self, typed: str = "") -> None:
        self.typed = typed
        self.rendered = ""

    def set_input_text(self, rendered: str) -> None:
        self.rendered = rendered

    def clear_typed_text(self) -> None:
        self.typed = ""

    def is_normal_input_mode(self) -> bool:
        return True


def _fail(exc: Exception) -> int:
    summary = summarize_exception(str(exc))
    print(f"error: {summary}", file=sys.stderr)
    print(f"hint: {hint_for_exception(summary)}", file=sys.stderr)
    return 1


def _read_credentials(args: argparse.Namespace) -> str:
    if args.api_key:
        return str(args.api_key)
    return Path(args.credentials_file).read_text(encoding="utf-8-sig")


def main(argv: list[str] | None = None) -> int:
    args = resolve_args(argv)
    logger, log_path = setup_app_logger(debug=bool(args.debug))
    logger.info("app_start", extra={"command": args.command, "config_path": str(args.config or "")})

    values, used_path = load_user_config(args.config)
    for key in _CLI_KEYS:
        values[key] = getattr(args, key)

    services = build_services(values, config_path=str(used_path), logger=logger)
    session = services.session

    if args.command == "login":
        try:
            languages = session.authenticate(_read_credentials(args))
        except (OSError, TranslationError) as e:
            return _fail(e)
        print(f"Authenticated: {len(languages)} languages available.")
        return 0

    if args.command == "logout":
        session.unauthenticate()
        print("Credentials cleared.")
        return 0

    if not session.authenticate_from_config():
        print("error: You are not authenticated for Chat Translation.", file=sys.stderr)
        print(f"hint: {hint_for_exception('not authenticated')}", file=sys.stderr)
        print(f"log: {log_path}", file=sys.stderr)
        return 1

    if args.command == "languages":
        for lang in session.languages:
            print(f"{lang.code}\t{lang.name}")
        return 0

    # translate: run the same path a host click takes, synchronously
    values["async_translate"] = False
    emitter = ConsoleEmitter()
    runtime = ChatTranslatorRuntime(
        services,
        emitter=emitter,
        writer=ConsoleInput(typed=args.text if args.local else ""),
        visible_channel=lambda: ChannelKind(args.channel),
        logger=logger,
    )
    if args.local:
        line = local_input_line(args.speaker or "You", args.text)
        hover = HoverTarget.INPUT
    else:
        line = ChatLine(text=args.text, speaker_name=args.speaker)
        hover = HoverTarget.CHAT_LINE
    entry = runtime.on_menu_opened(hover, line)
    if entry is None:
        print("error: nothing to translate (empty text or right-click translation disabled).", file=sys.stderr)
        return 2
    runtime.on_menu_clicked(entry)
    runtime.drain(max_items=1)
    failed = any(m.body.startswith("Translation Error: ") for m in emitter.messages)
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
