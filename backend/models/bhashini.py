# models/bhashini.py
from __future__ import annotations
from typing import Any, Dict, Optional, Tuple
import logging
import time

import requests

from . import TranslationProvider, TranslationRequest, TranslationResult, merged_params
from errors import (
    EmptyTranslationResult,
    InvalidPipelineResponse,
    PipelineDiscoveryFailed,
    TranslationInvocationFailed,
)

logger = logging.getLogger(__name__)

DEFAULT_PARAMS: Dict[str, Any] = {
    "pipeline_url": "https://meity-auth.ulcacontrib.org/ulca/apis/v0/model/getModelsPipeline",
    "pipeline_id": "64392f96daac500b55c543cd",
    "task_type": "translation",
    "connect_timeout": 5.0,
    "read_timeout": 30.0,
}


class BhashiniAdapter(TranslationProvider):
    """
    Two-hop translation through the Bhashini / ULCA pipeline API.

    Hop 1 asks the fixed discovery endpoint (authenticated with the `userID`
    header) for a translation pipeline bound to the language pair. The first
    service config of the first response config carries a `serviceId`, which
    the upstream also uses as the URL of the inference endpoint.

    Hop 2 posts the text to that URL, unauthenticated, and reads
    `pipelineResponse[0].output[0].target`.

    Supported params:
      - pipeline_url: str      # discovery endpoint
      - pipeline_id: str       # capability selector sent as pipelineRequestConfig.pipelineId
      - task_type: str         # default "translation"
      - connect_timeout: float # seconds, per hop
      - read_timeout: float    # seconds, per hop

    `http` is anything with a requests-style `post(url, json=, headers=, timeout=)`;
    defaults to the `requests` module. No retries, no caching.
    """

    def __init__(self, name: str, config: Dict[str, Any], *, credential: Optional[str] = None,
                 http: Any = None) -> None:
        super().__init__(name, config, credential=credential, http=http)
        params = merged_params(DEFAULT_PARAMS, (self.config or {}).get("params"))
        self.pipeline_url: str = params["pipeline_url"]
        self.pipeline_id: str = str(params["pipeline_id"])
        self.task_type: str = params["task_type"]
        self.timeout: Tuple[float, float] = (float(params["connect_timeout"]), float(params["read_timeout"]))
        if self.http is None:
            self.http = requests

    # ---------- Payloads ----------
    def _language(self, request: TranslationRequest) -> Dict[str, str]:
        return {"sourceLanguage": request.source_lang, "targetLanguage": request.target_lang}

    def pipeline_payload(self, request: TranslationRequest) -> Dict[str, Any]:
        return {
            "pipelineTasks": [
                {"taskType": self.task_type, "config": {"language": self._language(request)}},
            ],
            "pipelineRequestConfig": {"pipelineId": self.pipeline_id},
        }

    def compute_payload(self, request: TranslationRequest, service_id: str) -> Dict[str, Any]:
        return {
            "pipelineTasks": [
                {
                    "taskType": self.task_type,
                    "config": {"language": self._language(request), "serviceId": service_id},
                },
            ],
            # the pipeline accepts a batch; this gateway always sends a single item
            "inputData": {"input": [{"source": request.text}]},
        }

    # ---------- Hops ----------
    def _post(self, url: str, payload: Dict[str, Any], headers: Dict[str, str], hop: str):
        started = time.perf_counter()
        resp = self.http.post(url, json=payload, headers=headers, timeout=self.timeout)
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        logger.info("[%s] %s POST %s -> %s (%.0f ms)", self.name, hop, url, resp.status_code, elapsed_ms)
        return resp

    def discover_service(self, request: TranslationRequest) -> str:
        headers = {"Content-Type": "application/json", "userID": self.credential or ""}
        try:
            resp = self._post(self.pipeline_url, self.pipeline_payload(request), headers, "pipeline")
        except requests.RequestException as e:
            logger.warning("[%s] Bhashini pipeline error: %s", self.name, e)
            raise PipelineDiscoveryFailed() from e

        if not 200 <= resp.status_code < 300:
            logger.warning("[%s] Bhashini pipeline error (HTTP %s): %s", self.name, resp.status_code, resp.text)
            raise PipelineDiscoveryFailed()

        try:
            data = resp.json()
        except ValueError as e:
            logger.warning("[%s] Pipeline response is not JSON: %s", self.name, resp.text)
            raise InvalidPipelineResponse() from e

        service_id = _service_id(data)
        if not service_id:
            logger.warning("[%s] Pipeline response has no usable serviceId: %s", self.name, data)
            raise InvalidPipelineResponse()
        return service_id

    def invoke(self, request: TranslationRequest, service_id: str) -> str:
        headers = {"Content-Type": "application/json"}
        try:
            # serviceId doubles as the inference URL
            resp = self._post(service_id, self.compute_payload(request, service_id), headers, "compute")
        except requests.RequestException as e:
            logger.warning("[%s] Bhashini translation error: %s", self.name, e)
            raise TranslationInvocationFailed() from e

        if not 200 <= resp.status_code < 300:
            logger.warning("[%s] Bhashini translation error (HTTP %s): %s", self.name, resp.status_code, resp.text)
            raise TranslationInvocationFailed()

        try:
            data = resp.json()
        except ValueError as e:
            logger.warning("[%s] Translation response is not JSON: %s", self.name, resp.text)
            raise EmptyTranslationResult() from e

        target = _target(data)
        if not target:
            logger.warning("[%s] Translation response has no target text: %s", self.name, data)
            raise EmptyTranslationResult()
        return target

    def translate(self, request: TranslationRequest) -> TranslationResult:
        self.validate(request)
        service_id = self.discover_service(request)
        translated = self.invoke(request, service_id)
        return TranslationResult(
            translated_text=translated,
            source_lang=request.source_lang,
            target_lang=request.target_lang,
        )


def _first(value: Any) -> Any:
    if isinstance(value, list) and value:
        return value[0]
    return None


def _service_id(data: Any) -> Optional[str]:
    """pipelineResponseConfig[0].config[0].serviceId, or None if any step is missing."""
    if not isinstance(data, dict):
        return None
    response_config = _first(data.get("pipelineResponseConfig"))
    if not isinstance(response_config, dict):
        return None
    service = _first(response_config.get("config"))
    if not isinstance(service, dict):
        return None
    service_id = service.get("serviceId")
    return service_id if isinstance(service_id, str) and service_id else None


def _target(data: Any) -> Optional[str]:
    """pipelineResponse[0].output[0].target, or None if any step is missing."""
    if not isinstance(data, dict):
        return None
    task = _first(data.get("pipelineResponse"))
    if not isinstance(task, dict):
        return None
    output = _first(task.get("output"))
    if not isinstance(output, dict):
        return None
    target = output.get("target")
    return target if isinstance(target, str) and target else None
