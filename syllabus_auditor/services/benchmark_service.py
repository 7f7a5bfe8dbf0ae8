"""Benchmark search service"""

import dataclasses
import logging
from typing import List, Sequence

from ..interfaces.llm_interface import LLMInterface
from ..models.analysis_models import AnalysisConfig, BenchmarkResult, Language
from ..models.document_models import TextPayload
from ..models.stage_models import StageResult
from ..utils.delimited_parser import DelimitedRecordParser, RecordSchema
from ..utils.timeout import with_timeout

logger = logging.getLogger(__name__)

BENCHMARK_SCHEMA = RecordSchema(
    name="benchmark",
    keys=("University", "Comparison"),
    primary_key="University",
    defaults={"Comparison": "No comparison provided."},
)

NO_DATA_BENCHMARK = BenchmarkResult(university="No Data", comparison="Could not retrieve benchmarks.")
SEARCH_UNAVAILABLE_BENCHMARK = BenchmarkResult(
    university="Search Unavailable",
    comparison="Benchmarking skipped due to connection timeout or error.",
)


class BenchmarkService:
    """Compares a syllabus against external curricula found by web search"""

    def __init__(self, llm_client: LLMInterface, config: AnalysisConfig):
        self.llm = llm_client
        self.config = config
        self.parser = DelimitedRecordParser(BENCHMARK_SCHEMA)

    def _create_search_prompt(
        self, course_title: str, target: str, topics: Sequence[str], language: Language
    ) -> str:
        topics_context = ", ".join(topics[: self.config.max_benchmark_topics])
        return f"""Context: The user is evaluating a syllabus for the course "{course_title}".
Current Syllabus Topics: {topics_context}.
Target Benchmark: "{target or "Standard Global Curriculum"}".

INSTRUCTIONS:
1. **INTERPRET THE GOAL**:
   - If the target is an accreditation body (ABET, ACM, IEEE), search for their specific curriculum guidelines/student outcomes for this subject.
   - If the target is a University, search for their syllabus/catalog for "{course_title}".
   - If general, search for top-tier university syllabuses.

2. **SEARCH**: Perform a Google Search.
   Query ideas:
   - "{course_title} syllabus {target}"
   - "{target} {course_title} learning outcomes"
   - "ABET requirements for {course_title}"

3. **COMPARE & ANALYZE**:
   - Compare the found benchmark against the 'Current Syllabus Topics' provided above.
   - Identify what the benchmark includes that the current syllabus MISSES (e.g., "ABET requires ethics, but current topics don't show it").
   - Identify if the current syllabus is aligned or outdated.

Output Language: {language.display_name}.

STRICT OUTPUT FORMAT:
Do not use JSON. Use the following text format for each benchmark found (provide 1 to 3 items):

BENCHMARK_ITEM
University: [Name of University OR Standard (e.g., ABET)]
Comparison: [Comparison Analysis: "The ABET standard requires X, Y, Z. Your syllabus covers X but misses Y..."]
END_ITEM
"""

    async def search(
        self,
        course_title: str,
        target: str,
        topics: Sequence[str],
        language: Language = Language.EN,
    ) -> StageResult:
        """Run the benchmark search.

        Returns:
            StageResult holding a non-empty list of BenchmarkResult, or the
            error that stopped the search
        """
        try:
            language = Language.from_code(language)
            logger.info("Benchmarking '%s' against '%s'", course_title, target or "general")
            prompt = self._create_search_prompt(course_title, target, list(topics), language)
            request = self.llm.generate([TextPayload(prompt)], use_search=True)
            response = await with_timeout(
                request, self.config.search_timeout, "Benchmarking search timed out."
            )
        except Exception as e:
            logger.warning("Benchmarking error: %s", e)
            return StageResult.failure(e)

        results: List[BenchmarkResult] = [
            BenchmarkResult.from_dict(record) for record in self.parser.parse(response.text)
        ]
        if not results:
            logger.info("No benchmark records found in response")
            return StageResult.success([dataclasses.replace(NO_DATA_BENCHMARK)])

        # The citation is not tied to a specific record; it goes on the first one.
        url = next((c.uri for c in response.citations if c.uri), None)
        if url:
            results[0].url = url

        logger.info("Found %d benchmark(s)", len(results))
        return StageResult.success(results)
