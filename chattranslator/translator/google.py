from __future__ import annotations

import json
import logging
from typing import Any, List, Optional, Tuple

import requests
from google.auth import exceptions as google_auth_exceptions

from .base import Translator
from .responses import best_translation, parse_languages, parse_translations
from chattranslator.contracts import Language, TranslationRequest, TranslationResult
from chattranslator.errors import APIError, AuthenticationError

log = logging.getLogger(__name__)

BASE_URL = "https://translation.googleapis.com/language/translate/v2"
SCOPES = ["https://www.googleapis.com/auth/cloud-translation"]

API_KEY = "api_key"
SERVICE_ACCOUNT = "service_account"


def parse_credentials(blob: str) -> Tuple[str, Any]:
    """
    Credentials are either a bare API key or the contents of a
    service-account key file.
    """
    text = (blob or "").strip()
    if not text:
        raise AuthenticationError("No credentials provided.")
    if not text.startswith("{"):
        return API_KEY, text
    try:
        info = json.loads(text)
    except ValueError as e:
        raise AuthenticationError("Credentials are not valid JSON.") from e
    if not isinstance(info, dict) or info.get("type") != SERVICE_ACCOUNT:
        raise AuthenticationError("Credentials JSON is not a service account key.")
    return SERVICE_ACCOUNT, info


class GoogleTranslator(Translator):
    def __init__(
        self,
        *,
        timeout_sec: float = 10.0,
        session: Optional[requests.Session] = None,
        base_url: str = BASE_URL,
    ):
        self.timeout_sec = timeout_sec
        self.base_url = base_url.rstrip("/")
        # an injected session is reused for API-key auth; otherwise each login gets a fresh one
        self._injected_session = session
        self._session = session
        self._api_key: Optional[str] = None
        self._languages: Optional[List[Language]] = None

    @property
    def name(self) -> str:
        return "google"

    @property
    def is_authenticated(self) -> bool:
        return self._languages is not None

    def authenticate(self, credentials: str) -> List[Language]:
        kind, value = parse_credentials(credentials)
        prev_session, prev_key = self._session, self._api_key
        try:
            if kind == SERVICE_ACCOUNT:
                self._session = self._authorized_session(value)
                self._api_key = None
            else:
                self._session = self._injected_session or requests.Session()
                self._api_key = value
            log.debug("google_languages_request")
            resp = self._send("GET", "/languages", params={"target": "en"})
            if resp.status_code != 200:
                raise AuthenticationError(f"Google returned code {resp.status_code}")
            languages = parse_languages(self._json(resp))
        except AuthenticationError:
            self._session, self._api_key = prev_session, prev_key
            raise
        except Exception as e:
            self._session, self._api_key = prev_session, prev_key
            raise AuthenticationError("Invalid Google Cloud Platform credentials") from e

        self._languages = languages
        log.info("google_authenticated", extra={"languages": len(languages), "credential_kind": kind})
        return list(languages)

    def unauthenticate(self) -> None:
        self._session = self._injected_session
        self._api_key = None
        self._languages = None

    def supported_languages(self) -> List[Language]:
        if self._languages is None:
            raise AuthenticationError("You are not authenticated for Chat Translation.")
        return list(self._languages)

    def translate(self, req: TranslationRequest) -> TranslationResult:
        if not self.is_authenticated:
            raise AuthenticationError("You are not authenticated for Chat Translation.")

        body = {"q": req.text, "target": req.target_lang}
        if req.source_lang is not None:
            body["source"] = req.source_lang
        try:
            resp = self._send("POST", "", json=body)
        except google_auth_exceptions.RefreshError as e:
            raise AuthenticationError("Service account token refresh failed. Re-authenticate.") from e
        except requests.RequestException as e:
            raise APIError("API call failed. Try again or re-authenticate.") from e

        if resp.status_code in (401, 403):
            raise AuthenticationError(f"Google returned code {resp.status_code}")
        if resp.status_code != 200:
            raise APIError(f"Google returned code {resp.status_code}")

        entries = parse_translations(self._json(resp), source_lang=req.source_lang)
        best = best_translation(entries, req.source_lang)
        return TranslationResult(
            source_text=req.text,
            translated_text=best.translated_text,
            detected_source_lang=best.detected_source_lang,
            target_lang=req.target_lang,
            provider=self.name,
        )

    def _send(self, method: str, path: str, **kwargs) -> requests.Response:
        params = dict(kwargs.pop("params", None) or {})
        if self._api_key:
            params["key"] = self._api_key
        session = self._session or requests.Session()
        self._session = session
        return session.request(
            method,
            self.base_url + path,
            params=params,
            timeout=self.timeout_sec,
            **kwargs,
        )

    @staticmethod
    def _json(resp: requests.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise APIError("Google returned a malformed response") from e

    @staticmethod
    def _authorized_session(info: dict) -> requests.Session:
        from google.auth.transport.requests import AuthorizedSession
        from google.oauth2 import service_account

        creds = service_account.Credentials.from_service_account_info(info, scopes=SCOPES)
        return AuthorizedSession(creds)
