import asyncio
import json

import pytest

from syllabus_auditor.models.analysis_models import AnalysisResult, BenchmarkResult, GapAnalysis, Language
from syllabus_auditor.models.errors import StageTimeoutError
from syllabus_auditor.services.translation_service import TranslationService, merge_translation
from tests.fakes import HANG

ORIGINAL = AnalysisResult(
    course_title="Intro to Algorithms",
    syllabus_topics=["sorting", "recursion"],
    overall_score=70,
    gap_analysis=GapAnalysis(["No plagiarism policy"], ["Vague ILOs"], ["Clear plan"]),
    recommendations=["Add a grading rubric"],
    benchmarks=[BenchmarkResult("MIT", "Close match", "https://mit.edu")],
)


def _translate(llm, config, result=ORIGINAL, language=Language.AR):
    return asyncio.run(TranslationService(llm, config).translate(result, language))


def test_merge_keeps_missing_and_corrupted_keys() -> None:
    original = {"a": "one", "b": ["two"], "c": {"k": "three"}, "d": 4, "e": "five"}
    translated = {"a": "uno", "b": ["dos"], "c": {"k": "tres"}, "d": "cuatro", "zzz": "extra"}
    merged = merge_translation(original, translated)
    assert set(merged) == set(original)
    assert merged == {"a": "uno", "b": ["dos"], "c": {"k": "tres"}, "d": 4, "e": "five"}


def test_merge_with_non_object_returns_original() -> None:
    original = {"a": "one"}
    assert merge_translation(original, ["x"]) == original


def test_partial_translation_preserves_untranslated_fields(fake_llm, fast_config) -> None:
    reply = {
        "courseTitle": "مقدمة في الخوارزميات",
        "syllabusTopics": ["الفرز", "العودية"],
        "recommendations": "not a list",
    }
    result = _translate(fake_llm({"translate": json.dumps(reply, ensure_ascii=False)}), fast_config)
    assert result.course_title == "مقدمة في الخوارزميات"
    assert result.syllabus_topics == ["الفرز", "العودية"]
    assert result.recommendations == ORIGINAL.recommendations
    assert result.gap_analysis == ORIGINAL.gap_analysis
    assert result.benchmarks == ORIGINAL.benchmarks
    assert result.overall_score == 70


def test_unparseable_translation_returns_original(fake_llm, fast_config) -> None:
    assert _translate(fake_llm({"translate": "I cannot do that."}), fast_config) == ORIGINAL


def test_repeated_translation_keeps_structure(fake_llm, fast_config) -> None:
    translated = dict(ORIGINAL.to_dict(), courseTitle="مقدمة في الخوارزميات")
    llm = fake_llm({"translate": json.dumps(translated, ensure_ascii=False)})
    once = _translate(llm, fast_config)
    twice = _translate(llm, fast_config, result=once)
    assert twice.to_dict().keys() == ORIGINAL.to_dict().keys()
    assert all(value is not None for value in twice.to_dict().values())
    assert twice == once


def test_prompt_contains_serialized_report(fake_llm, fast_config) -> None:
    llm = fake_llm({"translate": "{}"})
    _translate(llm, fast_config, language="en")
    prompt = llm.calls[0]["parts"][0].text
    assert "to English" in prompt
    assert '"courseTitle": "Intro to Algorithms"' in prompt


def test_translation_timeout_propagates(fake_llm, fast_config) -> None:
    with pytest.raises(StageTimeoutError, match="Translation timed out."):
        _translate(fake_llm({"translate": HANG}), fast_config)


def test_merge_rejects_emptied_values() -> None:
    original = ORIGINAL.to_dict()
    translated = dict(original, courseTitle="", recommendations=[], gapAnalysis={})
    merged = merge_translation(original, translated)
    assert merged["courseTitle"] == "Intro to Algorithms"
    assert merged["recommendations"] == ["Add a grading rubric"]
    assert merged["gapAnalysis"] == original["gapAnalysis"]


def test_merge_rejects_placeholder_only_gap_lists() -> None:
    original = ORIGINAL.to_dict()
    translated = dict(original, gapAnalysis={
        "missingComponents": ["لا توجد سياسة للانتحال"],
        "weaknesses": [],
        "strengths": ["Analysis yielded no strength data."],
    })
    merged = merge_translation(original, translated)
    assert merged["gapAnalysis"] == {
        "missingComponents": ["لا توجد سياسة للانتحال"],
        "weaknesses": ["Vague ILOs"],
        "strengths": ["Clear plan"],
    }


def test_emptied_title_and_gap_analysis_keep_original(fake_llm, fast_config) -> None:
    reply = dict(ORIGINAL.to_dict(), courseTitle="   ", gapAnalysis={}, syllabusTopics=["الفرز", "العودية"])
    result = _translate(fake_llm({"translate": json.dumps(reply, ensure_ascii=False)}), fast_config)
    assert result.course_title == "Intro to Algorithms"
    assert result.gap_analysis == ORIGINAL.gap_analysis
    assert result.syllabus_topics == ["الفرز", "العودية"]


def test_blank_original_accepts_translated_placeholders() -> None:
    original = {"revisedILOs": ["No revisions generated."]}
    translated = {"revisedILOs": ["لم يتم إنشاء مراجعات."]}
    assert merge_translation(original, translated) == translated
