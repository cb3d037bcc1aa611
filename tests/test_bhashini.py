import pytest
import requests

from conftest import SERVICE_URL, FakeHttp, FakeResponse, compute_ok, pipeline_ok
from errors import (
    EmptyTranslationResult,
    InvalidPipelineResponse,
    InvalidRequest,
    NotConfigured,
    PipelineDiscoveryFailed,
    TranslationInvocationFailed,
)
from models import TranslationRequest
from models.bhashini import DEFAULT_PARAMS, BhashiniAdapter


def make_adapter(http, credential="secret-key", params=None):
    return BhashiniAdapter("bhashini", {"params": params or {}}, credential=credential, http=http)


def make_request(text="hello", source="en", target="hi"):
    return TranslationRequest(text=text, source_lang=source, target_lang=target)


# ---------- Validation: no network ----------
@pytest.mark.parametrize("fields", [
    {"text": None},
    {"source": None},
    {"target": None},
    {"text": ""},
    {"source": ""},
    {"target": ""},
])
def test_missing_fields_are_invalid_request_without_calls(fields):
    http = FakeHttp()
    with pytest.raises(InvalidRequest):
        make_adapter(http).translate(make_request(**fields))
    assert http.calls == []


@pytest.mark.parametrize("fields", [
    {"text": "   "},
    {"source": " "},
    {"target": "\t"},
])
def test_whitespace_only_fields_are_forwarded_verbatim(fields):
    http = FakeHttp(pipeline_ok(), compute_ok("x"))
    request = make_request(**fields)
    result = make_adapter(http).translate(request)

    assert result.translated_text == "x"
    language = http.calls[0]["json"]["pipelineTasks"][0]["config"]["language"]
    assert language == {"sourceLanguage": request.source_lang, "targetLanguage": request.target_lang}
    assert http.calls[1]["json"]["inputData"] == {"input": [{"source": request.text}]}


@pytest.mark.parametrize("credential", [None, ""])
def test_missing_credential_is_not_configured_without_calls(credential):
    http = FakeHttp()
    with pytest.raises(NotConfigured):
        make_adapter(http, credential=credential).translate(make_request())
    assert http.calls == []


def test_missing_credential_wins_over_invalid_request():
    http = FakeHttp()
    with pytest.raises(NotConfigured):
        make_adapter(http, credential=None).translate(make_request(text=None))
    assert http.calls == []


# ---------- Hop 1 ----------
def test_discovery_http_error_stops_before_hop_two():
    http = FakeHttp(FakeResponse(503, text="upstream exploded"))
    with pytest.raises(PipelineDiscoveryFailed) as exc_info:
        make_adapter(http).translate(make_request())
    assert len(http.calls) == 1
    assert "upstream exploded" not in exc_info.value.message


@pytest.mark.parametrize("exc", [requests.Timeout("slow"), requests.ConnectionError("refused")])
def test_discovery_transport_error_is_discovery_failure(exc):
    http = FakeHttp(exc)
    with pytest.raises(PipelineDiscoveryFailed):
        make_adapter(http).translate(make_request())
    assert len(http.calls) == 1


@pytest.mark.parametrize("body", [
    {"pipelineResponseConfig": []},
    {},
    {"pipelineResponseConfig": [{"config": []}]},
    {"pipelineResponseConfig": [{"config": [{"modelId": "x"}]}]},
    {"pipelineResponseConfig": [{"config": [{"serviceId": ""}]}]},
    [],
])
def test_discovery_without_service_is_invalid_pipeline_response(body):
    http = FakeHttp(FakeResponse(200, body))
    with pytest.raises(InvalidPipelineResponse):
        make_adapter(http).translate(make_request())
    assert len(http.calls) == 1


def test_discovery_non_json_is_invalid_pipeline_response():
    http = FakeHttp(FakeResponse(200, text="<html>maintenance</html>"))
    with pytest.raises(InvalidPipelineResponse):
        make_adapter(http).translate(make_request())


def test_discovery_request_shape():
    http = FakeHttp(pipeline_ok(), compute_ok())
    make_adapter(http).translate(make_request())

    first = http.calls[0]
    assert first["url"] == DEFAULT_PARAMS["pipeline_url"]
    assert first["headers"]["userID"] == "secret-key"
    assert first["json"] == {
        "pipelineTasks": [
            {"taskType": "translation",
             "config": {"language": {"sourceLanguage": "en", "targetLanguage": "hi"}}},
        ],
        "pipelineRequestConfig": {"pipelineId": "64392f96daac500b55c543cd"},
    }
    assert first["timeout"] == (5.0, 30.0)


def test_pipeline_id_and_url_come_from_config():
    http = FakeHttp(pipeline_ok(), compute_ok())
    params = {"pipeline_url": "https://discovery.test/pipe", "pipeline_id": "abc123",
              "connect_timeout": 2, "read_timeout": 7}
    make_adapter(http, params=params).translate(make_request())

    assert http.calls[0]["url"] == "https://discovery.test/pipe"
    assert http.calls[0]["json"]["pipelineRequestConfig"] == {"pipelineId": "abc123"}
    assert http.calls[1]["timeout"] == (2.0, 7.0)


# ---------- Hop 2 ----------
def test_invocation_targets_service_id_url():
    http = FakeHttp(pipeline_ok("https://example/svc"), compute_ok())
    make_adapter(http).translate(make_request())

    second = http.calls[1]
    assert second["url"] == "https://example/svc"
    assert "userID" not in second["headers"]
    assert second["json"] == {
        "pipelineTasks": [
            {"taskType": "translation",
             "config": {"language": {"sourceLanguage": "en", "targetLanguage": "hi"},
                        "serviceId": "https://example/svc"}},
        ],
        "inputData": {"input": [{"source": "hello"}]},
    }


def test_successful_translation():
    http = FakeHttp(pipeline_ok(), compute_ok("नमस्ते"))
    result = make_adapter(http).translate(make_request())

    assert result.translated_text == "नमस्ते"
    assert result.source_lang == "en"
    assert result.target_lang == "hi"
    assert len(http.calls) == 2


def test_repeated_calls_rediscover_every_time():
    http = FakeHttp(pipeline_ok(), compute_ok(), pipeline_ok(), compute_ok())
    adapter = make_adapter(http)
    adapter.translate(make_request())
    adapter.translate(make_request())
    assert [c["url"] for c in http.calls] == [DEFAULT_PARAMS["pipeline_url"], SERVICE_URL] * 2


def test_invocation_http_error():
    http = FakeHttp(pipeline_ok(), FakeResponse(500, text="model crashed"))
    with pytest.raises(TranslationInvocationFailed):
        make_adapter(http).translate(make_request())
    assert len(http.calls) == 2


def test_invocation_timeout_is_invocation_failure():
    http = FakeHttp(pipeline_ok(), requests.ReadTimeout("slow"))
    with pytest.raises(TranslationInvocationFailed):
        make_adapter(http).translate(make_request())


@pytest.mark.parametrize("response", [
    compute_ok(""),
    compute_ok(None),
    FakeResponse(200, {"pipelineResponse": []}),
    FakeResponse(200, {"pipelineResponse": [{"output": []}]}),
    FakeResponse(200, {}),
    FakeResponse(200, text="not json"),
])
def test_empty_or_missing_target_is_empty_result(response):
    http = FakeHttp(pipeline_ok(), response)
    with pytest.raises(EmptyTranslationResult):
        make_adapter(http).translate(make_request())
