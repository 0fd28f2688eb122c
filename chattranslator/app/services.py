from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from chattranslator.app.session import TranslatorSession
from chattranslator.chat.router import TranslationRouter
from chattranslator.translator.factory import get_translator


@dataclass(frozen=True)
class ChatTranslatorServices:
    session: TranslatorSession
    router: TranslationRouter


def build_services(
    values: dict[str, Any],
    *,
    config_path: str | None = None,
    logger: logging.Logger | None = None,
) -> ChatTranslatorServices:
    translator = get_translator(
        str(values["translator"]),
        timeout_sec=max(1.0, float(values["request_timeout_sec"])),
    )
    session = TranslatorSession(translator, values, config_path=config_path, logger=logger)
    return ChatTranslatorServices(session=session, router=TranslationRouter())
