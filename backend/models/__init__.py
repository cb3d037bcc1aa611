# models/__init__.py
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from errors import InvalidRequest, NotConfigured


class TranslationRequest(BaseModel):
    # Optional on purpose: missing fields are reported as InvalidRequest by the provider, not as a 422
    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = Field(None, description="Text to translate, forwarded verbatim")
    source_lang: Optional[str] = Field(None, alias="sourceLang", description="Source language code (e.g. 'en')")
    target_lang: Optional[str] = Field(None, alias="targetLang", description="Target language code (e.g. 'hi')")


class TranslationResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    translated_text: str = Field(..., alias="translatedText")
    source_lang: str = Field(..., alias="sourceLang")
    target_lang: str = Field(..., alias="targetLang")


class TranslationProvider(ABC):
    requires_credential: bool = True

    def __init__(self, name: str, config: Dict[str, Any], *, credential: Optional[str] = None,
                 http: Any = None) -> None:
        self.name = name
        self.config = config or {}
        self.credential = credential or None
        self.http = http

    @abstractmethod
    def translate(self, request: TranslationRequest) -> TranslationResult: ...

    def is_configured(self) -> bool:
        return bool(self.credential) or not self.requires_credential

    def validate(self, request: TranslationRequest) -> None:
        """Raise before any network call: NotConfigured wins over InvalidRequest."""
        if not self.is_configured():
            raise NotConfigured()
        if not (_present(request.text) and _present(request.source_lang) and _present(request.target_lang)):
            raise InvalidRequest()


def _present(value: Optional[str]) -> bool:
    return value is not None and value != ""


def merged_params(defaults: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    merged = dict(defaults or {})
    if overrides: merged.update({k: v for k, v in overrides.items() if v is not None})
    return merged
