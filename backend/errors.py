# errors.py
from __future__ import annotations
from typing import Dict, Optional


class TranslationError(Exception):
    """
    Base class for every failure the gateway reports to a caller.

    Subclasses fix the HTTP status, a short stable `error` label and a
    client-safe `message`. Upstream details never go into either; they are
    logged where the failure is detected.
    """
    status_code: int = 500
    error: str = "Translation failed"
    message: str = "Unknown error occurred"

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, str]:
        return {"error": self.error, "message": self.message}


# ---------- Client / operator side (400) ----------
class InvalidRequest(TranslationError):
    status_code = 400
    error = "Missing required parameters"
    message = "text, sourceLang, and targetLang are required"


class NotConfigured(TranslationError):
    status_code = 400
    error = "Bhashini API key not configured"
    message = "Please configure BHASHINI_API_KEY environment variable"


# ---------- Hop 1: pipeline discovery (500) ----------
class PipelineDiscoveryFailed(TranslationError):
    error = "Failed to get translation pipeline"
    message = "Bhashini API returned an error"


class InvalidPipelineResponse(TranslationError):
    error = "Invalid pipeline response"
    message = "No translation service found"


# ---------- Hop 2: translation invocation (500) ----------
class TranslationInvocationFailed(TranslationError):
    error = "Translation failed"
    message = "Failed to translate text"


class EmptyTranslationResult(TranslationError):
    error = "No translation result"
    message = "Translation returned empty result"
