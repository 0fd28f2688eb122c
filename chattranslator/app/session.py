from __future__ import annotations

import logging
from typing import Any, List, Optional

from chattranslator.app.config import save_user_config
from chattranslator.app.state import AuthStateTracker
from chattranslator.contracts import Language, TranslationRequest, TranslationResult
from chattranslator.errors import AuthenticationError
from chattranslator.translator.base import Translator


class TranslatorSession:
    """
    One player's handle on the translation backend: credentials, auth state,
    remembered languages. Persisted values are written back through
    save_user_config.
    """

    def __init__(
        self,
        translator: Translator,
        values: dict[str, Any],
        *,
        config_path: str | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.translator = translator
        self.values = values
        self.config_path = config_path
        self.logger = logger or logging.getLogger("chattranslator.session")
        self.auth = AuthStateTracker()
        self._languages: List[Language] = []

    @property
    def is_authenticated(self) -> bool:
        return self.auth.is_authenticated and self.translator.is_authenticated

    @property
    def languages(self) -> List[Language]:
        if not self.is_authenticated:
            raise AuthenticationError("You are not authenticated for Chat Translation.")
        return list(self._languages)

    def authenticate(self, credentials: str) -> List[Language]:
        self.auth.set_authenticating()
        try:
            languages = self.translator.authenticate(credentials)
        except AuthenticationError as e:
            self.auth.set_error(str(e))
            self.logger.warning("auth_failed", extra={"translator": self.translator.name, "error": str(e)})
            raise
        self._languages = list(languages)
        self.auth.set_authenticated()
        self._persist({"credentials": credentials})
        self.logger.info(
            "auth_ok",
            extra={"translator": self.translator.name, "languages": len(self._languages)},
        )
        return list(self._languages)

    def authenticate_from_config(self) -> bool:
        """
        Startup path. A stored credential that no longer works is dropped
        rather than reported.
        """
        credentials = self.values.get("credentials")
        if not credentials:
            return False
        try:
            self.authenticate(str(credentials))
        except AuthenticationError:
            self.logger.warning("auth_failed_startup", exc_info=True)
            self.unauthenticate()
            return False
        return True

    def unauthenticate(self) -> None:
        self.translator.unauthenticate()
        self._languages = []
        self.auth.set_unauthenticated()
        self._persist({"credentials": None})
        self.logger.info("auth_cleared")

    def set_source_language(self, lang: Language) -> None:
        self._persist({"source_lang_code": lang.code, "source_lang_name": lang.name})

    def set_target_language(self, lang: Language) -> None:
        self._persist({"target_lang_code": lang.code, "target_lang_name": lang.name})

    def find_language(self, code: str) -> Optional[Language]:
        c = (code or "").lower()
        for lang in self._languages:
            if lang.code.lower() == c:
                return lang
        return None

    def translate(self, text: str, source_lang: str | None, target_lang: str) -> TranslationResult:
        if not self.is_authenticated:
            raise AuthenticationError("You are not authenticated for Chat Translation.")
        req = TranslationRequest(text=text, source_lang=source_lang, target_lang=target_lang)
        return self.translator.translate(req)

    def _persist(self, changes: dict[str, Any]) -> None:
        self.values.update(changes)
        save_user_config(changes, config_path=self.config_path)
