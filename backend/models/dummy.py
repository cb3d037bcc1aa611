# models/dummy.py
from typing import Optional

from . import TranslationProvider, TranslationRequest, TranslationResult  # <-- note the relative import


class DummyAdapter(TranslationProvider):
    """Offline provider: returns `fixed_response` when set, otherwise echoes the input text."""
    requires_credential = False

    def translate(self, request: TranslationRequest) -> TranslationResult:
        self.validate(request)
        fixed: Optional[str] = (self.config.get("params") or {}).get("fixed_response")
        return TranslationResult(
            translated_text=fixed or request.text,
            source_lang=request.source_lang,
            target_lang=request.target_lang,
        )
