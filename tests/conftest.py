import json as jsonlib
from typing import Any, Dict, List, Optional

import pytest

SERVICE_URL = "https://example/svc"


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else jsonlib.dumps(body)

    def json(self) -> Any:
        if self._body is None:
            return jsonlib.loads(self.text)  # raises ValueError on non-JSON text
        return self._body


class FakeHttp:
    """Stands in for the `requests` module: records posts and replays scripted responses/exceptions."""

    def __init__(self, *responses: Any) -> None:
        self.responses: List[Any] = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers or {}, "timeout": timeout})
        if not self.responses:
            raise AssertionError(f"unexpected POST to {url}")
        nxt = self.responses.pop(0)
        if isinstance(nxt, BaseException):
            raise nxt
        return nxt


def pipeline_ok(service_id: str = SERVICE_URL) -> FakeResponse:
    return FakeResponse(200, {
        "pipelineResponseConfig": [
            {"taskType": "translation", "config": [{"serviceId": service_id, "modelId": "m-1"}]},
        ],
    })


def compute_ok(target: Any = "नमस्ते") -> FakeResponse:
    return FakeResponse(200, {
        "pipelineResponse": [
            {"taskType": "translation", "output": [{"source": "hello", "target": target}]},
        ],
    })


@pytest.fixture
def valid_body() -> Dict[str, str]:
    return {"text": "hello", "sourceLang": "en", "targetLang": "hi"}
