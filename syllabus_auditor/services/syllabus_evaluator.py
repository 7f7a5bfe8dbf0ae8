"""Syllabus evaluator service"""

import logging

from ..interfaces.llm_interface import LLMInterface
from ..models.analysis_models import AnalysisConfig, AnalysisResult, EvaluationCriteria, Language
from ..models.document_models import DocumentPayload, TextPayload
from ..utils.response_parser import ResponseParser
from ..utils.timeout import with_timeout

logger = logging.getLogger(__name__)

_STRING_LIST = {"type": "ARRAY", "items": {"type": "STRING"}}

EVALUATION_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "courseTitle": {"type": "STRING"},
        "syllabusTopics": _STRING_LIST,
        "overallScore": {"type": "NUMBER"},
        "sectionScores": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "section": {"type": "STRING"},
                    "score": {"type": "NUMBER"},
                    "feedback": {"type": "STRING"},
                },
            },
        },
        "gapAnalysis": {
            "type": "OBJECT",
            "properties": {
                "missingComponents": _STRING_LIST,
                "weaknesses": _STRING_LIST,
                "strengths": _STRING_LIST,
            },
        },
        "recommendations": _STRING_LIST,
        "revisedILOs": _STRING_LIST,
        "suggestedActivities": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": {"type": "STRING"},
                    "description": {"type": "STRING"},
                    "learningOutcomeMap": {"type": "STRING"},
                },
            },
        },
    },
}


class SyllabusEvaluator:
    """Service for the schema-constrained rubric evaluation of a syllabus"""

    def __init__(self, llm_client: LLMInterface, config: AnalysisConfig):
        """Initialize syllabus evaluator

        Args:
            llm_client: LLM client interface implementation
            config: Analysis configuration
        """
        self.llm = llm_client
        self.config = config
        self.parser = ResponseParser()

    def _create_evaluation_prompt(self, criteria: EvaluationCriteria, language: Language) -> str:
        def check(enabled: bool, strict: str) -> str:
            return strict if enabled else "Standard check."

        return f"""You are an expert Academic Quality Assurance Officer at Palestine Ahliya University (PAU).

Task: Analyze the attached syllabus file content to ensure it meets high academic standards.
Output Language: {language.display_name}.

CRITICAL INSTRUCTIONS:
1. **Deep Analysis**: You MUST populate 'gapAnalysis' arrays. Do NOT leave them empty.
   - **missingComponents**: List specific sections missing (e.g., "No plagiarism policy", "Missing weekly reading list", "No grade breakdown").
   - **weaknesses**: Critique quality (e.g., "ILOs are too vague", "Assessment weight is unbalanced", "Old references").
   - **strengths**: Highlight good parts (e.g., "Clear weekly plan", "Diverse assessment").
2. **Extract Topics**: Summarize the core list of topics covered in the course into the 'syllabusTopics' array.
3. **Revised ILOs**: You MUST rewrite at least 3-5 ILOs to be more measurable (using Bloom's verbs).
4. **Suggested Activities**: Provide 3 specific active learning activities.

Criteria to evaluate:
1. ILO Clarity: {check(criteria.ilo_clarity, "Check strictly for Bloom's taxonomy and specificity.")}
2. Alignment: {check(criteria.ilo_alignment, "Check if weekly topics map to ILOs.")}
3. Assessments: {check(criteria.assessment_quality, "Evaluate variety, rubrics, and weight.")}
4. References: {check(criteria.reference_currency, "Check if books are recent (last 5-7 years).")}
5. Structure: {check(criteria.structure_compliance, "Check that all mandatory syllabus sections and policies are present.")}

Please provide a structured JSON response with:
- courseTitle
- syllabusTopics (Array of strings: list of main topics found)
- overallScore (0-100)
- sectionScores (Array of object {{ section, score, feedback }})
- gapAnalysis (missingComponents, weaknesses, strengths) -> THESE ARRAYS MUST NOT BE EMPTY.
- recommendations (list of strings)
- revisedILOs (list of strings) -> MUST CONTAIN AT LEAST 3 ITEMS.
- suggestedActivities (Array of {{ title, description, learningOutcomeMap }})
"""

    async def evaluate(
        self,
        payload: DocumentPayload,
        criteria: EvaluationCriteria,
        language: Language = Language.EN,
    ) -> AnalysisResult:
        """Evaluate a syllabus against the rubric.

        Malformed or missing model output never fails this stage: whatever
        parses is laid over the default report skeleton and sanitized.
        Timeouts and transport errors are propagated.

        Returns:
            AnalysisResult without benchmarks or tutors
        """
        language = Language.from_code(language)
        logger.info("Evaluating syllabus (language: %s)", language.value)

        request = self.llm.generate(
            [payload, TextPayload(self._create_evaluation_prompt(criteria, language))],
            response_schema=EVALUATION_SCHEMA,
        )
        timeout = self.config.evaluation_timeout
        response = await with_timeout(request, timeout, f"Analysis timed out ({timeout:g}s).")

        parsed = self.parser.parse_json(response.text)
        if not isinstance(parsed, dict):
            logger.warning("Evaluation response was not a JSON object, using defaults")
            parsed = {}

        # search stages fill these in later
        parsed = {key: value for key, value in parsed.items() if key not in ("benchmarks", "tutors")}
        result = AnalysisResult.from_dict(parsed)
        logger.info("Evaluation finished: %s (score %d)", result.course_title, result.overall_score)
        return result
