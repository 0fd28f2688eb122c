from __future__ import annotations
from typing import List

from .base import Translator
from chattranslator.contracts import Language, TranslationRequest, TranslationResult
from chattranslator.errors import AuthenticationError

STUB_LANGUAGES = [
    Language(code="en", name="English"),
    Language(code="da", name="Danish"),
    Language(code="fa", name="Persian"),
]

class StubTranslator(Translator):
    def __init__(self) -> None:
        self._authenticated = False

    @property
    def name(self) -> str:
        return "stub"

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    def authenticate(self, credentials: str) -> List[Language]:
        if not (credentials or "").strip():
            raise AuthenticationError("No credentials provided.")
        self._authenticated = True
        return list(STUB_LANGUAGES)

    def unauthenticate(self) -> None:
        self._authenticated = False

    def supported_languages(self) -> List[Language]:
        return list(STUB_LANGUAGES)

    def translate(self, req: TranslationRequest) -> TranslationResult:
        # Deterministic, test-friendly
        out = f"[{req.target_lang}] {req.text}"
        return TranslationResult(
            source_text=req.text,
            translated_text=out,
            detected_source_lang=req.source_lang or "en",
            target_lang=req.target_lang,
            provider=self.name,
        )
