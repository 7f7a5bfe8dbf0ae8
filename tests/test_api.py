import json

from fastapi.testclient import TestClient

from syllabus_auditor import api
from syllabus_auditor.api import create_app
from syllabus_auditor.models.analysis_models import AnalysisResult
from syllabus_auditor.services.analysis_pipeline import AnalysisPipeline
from tests.fakes import HANG

EVALUATION = json.dumps({"courseTitle": "Intro to Algorithms", "overallScore": 66})


def _client(fake_llm, config, script):
    return TestClient(create_app(AnalysisPipeline(fake_llm(script), config)))


def test_root(fake_llm, fast_config) -> None:
    response = _client(fake_llm, fast_config, {}).get("/")
    assert response.status_code == 200


def test_analyze_upload(fake_llm, fast_config) -> None:
    client = _client(fake_llm, fast_config, {"evaluate": EVALUATION, "benchmark": HANG})
    response = client.post(
        "/analyze",
        files={"file": ("syllabus.txt", b"Course: Intro to Algorithms", "text/plain")},
        data={"language": "en", "benchmark_target": "ABET"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["courseTitle"] == "Intro to Algorithms"
    assert body["overallScore"] == 66
    assert body["benchmarks"][0]["university"] == "Search Unavailable"
    assert body["tutors"] == []


def test_evaluate_upload_skips_searches(fake_llm, fast_config) -> None:
    llm = fake_llm({"evaluate": EVALUATION})
    client = TestClient(create_app(AnalysisPipeline(llm, fast_config)))
    response = client.post(
        "/evaluate",
        files={"file": ("syllabus.txt", b"Course: Intro to Algorithms", "text/plain")},
    )
    assert response.status_code == 200
    assert response.json()["benchmarks"] == []
    assert [c["stage"] for c in llm.calls] == ["evaluate"]


def test_analyze_unsupported_type(fake_llm, fast_config) -> None:
    response = _client(fake_llm, fast_config, {}).post(
        "/analyze", files={"file": ("slides.png", b"\x89PNG", "image/png")}
    )
    assert response.status_code == 415
    assert "image/png" in response.json()["detail"]


def test_analyze_bad_language(fake_llm, fast_config) -> None:
    response = _client(fake_llm, fast_config, {}).post(
        "/analyze",
        files={"file": ("syllabus.txt", b"text", "text/plain")},
        data={"language": "fr"},
    )
    assert response.status_code == 400


def test_translate_timeout_is_gateway_timeout(fake_llm, fast_config) -> None:
    client = _client(fake_llm, fast_config, {"translate": HANG})
    response = client.post("/translate", json={"result": AnalysisResult().to_dict(), "language": "ar"})
    assert response.status_code == 504
    assert response.json()["detail"] == "Translation timed out."


def test_translate_merges_over_original(fake_llm, fast_config) -> None:
    client = _client(fake_llm, fast_config, {"translate": json.dumps({"courseTitle": "الخوارزميات"})})
    original = AnalysisResult(course_title="Algorithms").to_dict()
    response = client.post("/translate", json={"result": original, "language": "ar"})
    assert response.status_code == 200
    assert response.json() == dict(original, courseTitle="الخوارزميات")


def test_lifespan_keeps_injected_pipeline(fake_llm, fast_config) -> None:
    pipeline = AnalysisPipeline(fake_llm({}), fast_config)
    app = create_app(pipeline)
    with TestClient(app) as client:
        assert client.get("/").status_code == 200
        assert app.state.pipeline is pipeline


def test_lifespan_builds_pipeline_from_environment(monkeypatch, fake_llm, fast_config) -> None:
    pipeline = AnalysisPipeline(fake_llm({"evaluate": EVALUATION}), fast_config)
    built = []
    monkeypatch.setattr(api.ConfigLoader, "load_config", lambda: (fast_config, "test-key"))
    monkeypatch.setattr(
        api.AnalysisPipeline, "from_config",
        lambda config, api_key: built.append((config, api_key)) or pipeline,
    )
    app = create_app()
    assert app.state.pipeline is None
    with TestClient(app) as client:
        response = client.post(
            "/evaluate",
            files={"file": ("syllabus.txt", b"Course: Intro to Algorithms", "text/plain; charset=utf-8")},
        )
    assert built == [(fast_config, "test-key")]
    assert app.state.pipeline is pipeline
    assert response.status_code == 200
    assert response.json()["courseTitle"] == "Intro to Algorithms"


def test_request_without_pipeline_is_unavailable() -> None:
    response = TestClient(create_app()).get("/")
    assert response.status_code == 200
    response = TestClient(create_app()).post("/translate", json={"result": {}, "language": "ar"})
    assert response.status_code == 503
