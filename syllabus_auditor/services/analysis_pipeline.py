"""Syllabus analysis pipeline"""

import asyncio
import dataclasses
import logging
from typing import List, Optional, Sequence

from ..interfaces.converter_interface import TextConverterInterface
from ..interfaces.llm_interface import LLMInterface
from ..models.analysis_models import (
    AnalysisConfig,
    AnalysisResult,
    BenchmarkResult,
    EvaluationCriteria,
    Language,
    Tutor,
)
from ..models.document_models import DocumentPayload
from .benchmark_service import SEARCH_UNAVAILABLE_BENCHMARK, BenchmarkService
from .document_extractor import DocumentExtractor, DocumentSource
from .docx_converter import DocxTextConverter
from .syllabus_evaluator import SyllabusEvaluator
from .translation_service import TranslationService
from .tutor_service import TutorService

logger = logging.getLogger(__name__)


class AnalysisPipeline:
    """Runs extraction, evaluation, benchmarking and tutor search.

    Extraction, evaluation and translation errors reach the caller.
    Benchmark and tutor failures are replaced by placeholder content.
    """

    def __init__(
        self,
        llm_client: LLMInterface,
        config: AnalysisConfig,
        converter: Optional[TextConverterInterface] = None,
    ):
        self.config = config
        self.extractor = DocumentExtractor(converter)
        self.evaluator = SyllabusEvaluator(llm_client, config)
        self.benchmarks = BenchmarkService(llm_client, config)
        self.tutors = TutorService(llm_client, config)
        self.translator = TranslationService(llm_client, config)

    @classmethod
    def from_config(cls, config: AnalysisConfig, api_key: str) -> "AnalysisPipeline":
        """Build a pipeline around one shared Gemini client"""
        from .gemini_client import GeminiClient

        return cls(GeminiClient(api_key, config), config, DocxTextConverter())

    async def extract(self, source: DocumentSource, mime_type: Optional[str] = None) -> DocumentPayload:
        return await self.extractor.extract(source, mime_type)

    async def evaluate(
        self, payload: DocumentPayload, criteria: EvaluationCriteria, language: Language = Language.EN
    ) -> AnalysisResult:
        return await self.evaluator.evaluate(payload, criteria, language)

    async def benchmark(
        self, course_title: str, target: str, topics: Sequence[str], language: Language = Language.EN
    ) -> List[BenchmarkResult]:
        """Benchmark results, or the 'Search Unavailable' placeholder on failure"""
        result = await self.benchmarks.search(course_title, target, topics, language)
        return result.unwrap_or([dataclasses.replace(SEARCH_UNAVAILABLE_BENCHMARK)])

    async def find_tutors(self, course_title: str, language: Language = Language.EN) -> List[Tutor]:
        """Tutor profiles, or an empty list on failure"""
        result = await self.tutors.search(course_title, language)
        return result.unwrap_or([])

    async def translate(self, result: AnalysisResult, language: Language) -> AnalysisResult:
        return await self.translator.translate(result, language)

    async def analyze(
        self, payload: DocumentPayload, criteria: EvaluationCriteria, language: Language = Language.EN
    ) -> AnalysisResult:
        """Evaluate an extracted payload, then run both searches concurrently"""
        language = Language.from_code(language)
        evaluation = await self.evaluate(payload, criteria, language)

        benchmarks, tutors = await asyncio.gather(
            self.benchmark(
                evaluation.course_title,
                criteria.benchmark_target,
                evaluation.syllabus_topics,
                language,
            ),
            self.find_tutors(evaluation.course_title, language),
        )
        logger.info(
            "Analysis complete: %d benchmark(s), %d tutor(s)", len(benchmarks), len(tutors)
        )
        return dataclasses.replace(evaluation, benchmarks=benchmarks, tutors=tutors)

    async def run(
        self,
        source: DocumentSource,
        criteria: EvaluationCriteria,
        language: Language = Language.EN,
        mime_type: Optional[str] = None,
    ) -> AnalysisResult:
        """Full analysis of a syllabus document"""
        payload = await self.extract(source, mime_type)
        return await self.analyze(payload, criteria, language)
