# factory.py
from typing import Any, Callable, Dict, Optional
from models import TranslationProvider

# Import provider implementations
from models.dummy import DummyAdapter
from models.bhashini import BhashiniAdapter

_ADAPTERS: Dict[str, Callable[..., TranslationProvider]] = {
    "dummy": DummyAdapter,
    "bhashini": BhashiniAdapter,
}

def build_adapter(name: str, adapter_key: str, merged_config: Dict[str, Any], *,
                  credential: Optional[str] = None, http: Any = None) -> TranslationProvider:
    try:
        cls = _ADAPTERS[adapter_key]
    except KeyError:
        raise ValueError(f"Unknown adapter '{adapter_key}'. Available: {list(_ADAPTERS)}")
    return cls(name=name, config=merged_config, credential=credential, http=http)
