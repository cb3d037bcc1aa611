from __future__ import annotations
import logging
import os
from typing import Any, Dict, Mapping, Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dotenv import load_dotenv
load_dotenv()  # loads .env into process env

from config import LANGUAGES, load_config, read_credential, resolve_provider
from errors import InvalidRequest, NotConfigured, TranslationError
from factory import build_adapter
from models import TranslationProvider, TranslationRequest, TranslationResult

logger = logging.getLogger(__name__)


# ---------- Routes ----------
router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/languages")
def list_languages(request: Request):
    return {
        "languages": [{"code": code, **names} for code, names in LANGUAGES.items()],
        "provider": request.app.state.provider_key,
    }


@router.post("/translate", response_model=TranslationResult)
def translate(req: TranslationRequest, request: Request):
    """
    Runs both upstream hops on the worker threadpool. A client disconnect does not
    abort a hop already in flight; each hop is bounded by the provider timeout instead.
    """
    provider: TranslationProvider = request.app.state.provider
    try:
        return provider.translate(req)
    except TranslationError:
        raise
    except Exception:
        logger.exception("Translation error")
        raise TranslationError()


# ---------- Error mapping ----------
def _translation_error_handler(request: Request, exc: TranslationError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # A body FastAPI cannot parse is still the caller's fault, unless the service isn't set up at all
    provider: TranslationProvider = request.app.state.provider
    err: TranslationError = InvalidRequest() if provider.is_configured() else NotConfigured()
    logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=err.status_code, content=err.to_dict())


# ---------- FastAPI ----------
def create_app(cfg: Optional[Dict[str, Any]] = None, *, environ: Optional[Mapping[str, str]] = None,
               provider: Optional[TranslationProvider] = None, http: Any = None) -> FastAPI:
    """
    Builds the gateway. The provider credential is read once here, from `environ`
    (default: os.environ), and passed to the provider; pass `provider` to skip that entirely.
    """
    cfg = cfg or {}
    server_cfg = cfg.get("server", {}) or {}
    logging.basicConfig(
        level=str(server_cfg.get("log_level", "INFO")).upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    provider_key, entry = resolve_provider(cfg)
    if provider is None:
        credential = read_credential(entry, os.environ if environ is None else environ)
        provider = build_adapter(
            name=provider_key,
            adapter_key=entry.get("adapter", provider_key),
            merged_config={"params": entry.get("params", {}) or {}},
            credential=credential,
            http=http,
        )
    if not provider.is_configured():
        logger.warning("Provider '%s' has no credential; /translate will answer 400 until it is set", provider_key)

    app = FastAPI(title="Translation Gateway", version="0.1.0")
    app.state.provider = provider
    app.state.provider_key = provider_key

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=["Content-Length"],
        max_age=600,
    )
    app.add_exception_handler(TranslationError, _translation_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.include_router(router, prefix=server_cfg.get("route_prefix", "") or "")
    return app


app = create_app(load_config())
