from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List

from chattranslator.contracts import Language, TranslationRequest, TranslationResult

class Translator(ABC):
    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_authenticated(self) -> bool: ...

    @abstractmethod
    def authenticate(self, credentials: str) -> List[Language]:
        """Validate credentials and return the supported languages."""

    @abstractmethod
    def unauthenticate(self) -> None: ...

    @abstractmethod
    def supported_languages(self) -> List[Language]: ...

    @abstractmethod
    def translate(self, req: TranslationRequest) -> TranslationResult: ...
