from __future__ import annotations

import html
import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from chattranslator.contracts import Language
from chattranslator.errors import APIError

log = logging.getLogger(__name__)

UNKNOWN_LANGUAGE = "?"


@dataclass(frozen=True)
class TranslationEntry:
    detected_source_lang: str
    translated_text: str


def _data(payload: Any) -> dict:
    if not isinstance(payload, dict) or not isinstance(payload.get("data"), dict):
        raise APIError("response has no 'data' object")
    return payload["data"]


def parse_languages(payload: Any) -> List[Language]:
    """Entries missing a code or a name are skipped, not fatal."""
    items = _data(payload).get("languages")
    if not isinstance(items, list):
        raise APIError("response has no 'languages' list")
    out: List[Language] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        code = item.get("language")
        name = item.get("name")
        if not isinstance(code, str) or not isinstance(name, str):
            log.debug("language_entry_skipped", extra={"entry": repr(item)[:80]})
            continue
        out.append(Language(code=code, name=name))
    return out


def _entry(item: Any, source_lang: Optional[str]) -> Optional[TranslationEntry]:
    if not isinstance(item, dict) or not isinstance(item.get("translatedText"), str):
        return None
    text = html.unescape(item["translatedText"])
    if source_lang is not None:
        return TranslationEntry(detected_source_lang=source_lang, translated_text=text)
    detected = item.get("detectedSourceLanguage")
    if not isinstance(detected, str) or not detected:
        detected = UNKNOWN_LANGUAGE
    return TranslationEntry(detected_source_lang=detected, translated_text=text)


def parse_translations(payload: Any, source_lang: Optional[str] = None) -> List[TranslationEntry]:
    """
    With an explicit source and a single translation, the requested source is
    reported as the detected language. Otherwise Google's detectedSourceLanguage
    is used ("?" when absent). Unparsable entries are skipped.
    """
    items = _data(payload).get("translations")
    if not isinstance(items, list):
        raise APIError("response has no 'translations' list")
    explicit = source_lang if len(items) == 1 else None
    out: List[TranslationEntry] = []
    for item in items:
        entry = _entry(item, explicit)
        if entry is not None:
            out.append(entry)
    return out


def best_translation(entries: List[TranslationEntry], language: Optional[str]) -> TranslationEntry:
    if not entries:
        raise APIError("No translations found")
    if len(entries) == 1 or language is None:
        return entries[0]
    for entry in entries:
        if entry.detected_source_lang.lower() == language.lower():
            return entry
    return entries[0]
