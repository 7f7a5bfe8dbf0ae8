import pytest

from syllabus_auditor.models.analysis_models import AnalysisConfig
from tests.fakes import FakeLLM


@pytest.fixture
def fake_llm():
    return FakeLLM


@pytest.fixture
def fast_config() -> AnalysisConfig:
    return AnalysisConfig(evaluation_timeout=0.05, search_timeout=0.05, translation_timeout=0.05)
