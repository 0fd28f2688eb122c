from __future__ import annotations
import os
from .base import Translator
from .google import GoogleTranslator
from .stub import StubTranslator

def get_translator(provider: str | None = None, *, timeout_sec: float = 10.0) -> Translator:
    provider = (provider or os.getenv("CHATTRANSLATOR_BACKEND", "google")).lower().strip()

    if provider == "google":
        return GoogleTranslator(timeout_sec=timeout_sec)
    if provider == "stub":
        # Offline, for demos and tests.
        return StubTranslator()

    raise ValueError(f"Unknown translator provider: {provider}")
