import pytest

from chattranslator.contracts import TranslationRequest
from chattranslator.errors import AuthenticationError
from chattranslator.translator.factory import get_translator
from chattranslator.translator.google import GoogleTranslator
from chattranslator.translator.stub import StubTranslator

def test_stub_translator_deterministic():
    tr = StubTranslator()
    out = tr.translate(TranslationRequest(text="Hello world.", source_lang="en", target_lang="da"))
    assert out.provider == "stub"
    assert "Hello world." in out.translated_text
    assert out.detected_source_lang == "en"

def test_stub_translator_auth_lifecycle():
    tr = StubTranslator()
    with pytest.raises(AuthenticationError):
        tr.authenticate("")
    assert tr.authenticate("anything")
    assert tr.is_authenticated
    tr.unauthenticate()
    assert not tr.is_authenticated

def test_factory_selects_backend(monkeypatch):
    assert isinstance(get_translator("stub"), StubTranslator)
    google = get_translator("GOOGLE", timeout_sec=3.0)
    assert isinstance(google, GoogleTranslator)
    assert google.timeout_sec == 3.0
    monkeypatch.setenv("CHATTRANSLATOR_BACKEND", "stub")
    assert isinstance(get_translator(), StubTranslator)
    with pytest.raises(ValueError):
        get_translator("deepl")
