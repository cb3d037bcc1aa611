# config.py
from __future__ import annotations
import os
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

DEFAULT_PROVIDER = "bhashini"
DEFAULT_API_KEY_ENV = "BHASHINI_API_KEY"

# Used when config.yml has no `providers` section
DEFAULT_PROVIDERS: Dict[str, Any] = {
    "bhashini": {"adapter": "bhashini", "params": {"api_key_env": DEFAULT_API_KEY_ENV}},
    "dummy": {"adapter": "dummy", "params": {}},
}

# Languages offered by the learning app; informational, /translate does not check them
LANGUAGES: Dict[str, Dict[str, str]] = {
    "en": {"native": "English", "english": "English"},
    "hi": {"native": "हिंदी", "english": "Hindi"},
    "mr": {"native": "मराठी", "english": "Marathi"},
    "bn": {"native": "বাংলা", "english": "Bengali"},
    "ta": {"native": "தமிழ்", "english": "Tamil"},
    "pa": {"native": "ਪੰਜਾਬੀ", "english": "Punjabi"},
    "gu": {"native": "ગુજરાતી", "english": "Gujarati"},
    "ml": {"native": "മലയാളം", "english": "Malayalam"},
    "kn": {"native": "ಕನ್ನಡ", "english": "Kannada"},
    "te": {"native": "తెలుగు", "english": "Telugu"},
    "or": {"native": "ଓଡ଼ିଆ", "english": "Odia"},
    "as": {"native": "অসমীয়া", "english": "Assamese"},
    "ur": {"native": "اردو", "english": "Urdu"},
}


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Reads the YAML config at `path` (or $CONFIG_YML, or ./config.yml).
    A missing file yields an empty config, i.e. all defaults.
    """
    path = path or os.environ.get("CONFIG_YML", "config.yml")
    if not os.path.isfile(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config file '{path}' must contain a mapping at top level")
    return raw


def resolve_provider(cfg: Dict[str, Any], provider_key: Optional[str] = None) -> Tuple[str, Dict[str, Any]]:
    """Returns (provider_key, registry entry) for the requested or default provider."""
    registry = cfg.get("providers") or DEFAULT_PROVIDERS
    key = provider_key or (cfg.get("defaults") or {}).get("provider") or DEFAULT_PROVIDER
    if key not in registry:
        raise ValueError(f"Provider '{key}' not found in config. Available: {sorted(registry)}")
    return key, (registry[key] or {})


def read_credential(entry: Dict[str, Any], environ: Mapping[str, str]) -> Optional[str]:
    env_name = (entry.get("params") or {}).get("api_key_env") or DEFAULT_API_KEY_ENV
    return environ.get(env_name) or None
