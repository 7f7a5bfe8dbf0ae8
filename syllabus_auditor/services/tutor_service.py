"""Tutor search service"""

import logging

from ..interfaces.llm_interface import LLMInterface
from ..models.analysis_models import AnalysisConfig, Language, Tutor
from ..models.document_models import TextPayload
from ..models.stage_models import StageResult
from ..utils.delimited_parser import DelimitedRecordParser, RecordSchema
from ..utils.timeout import with_timeout

logger = logging.getLogger(__name__)

TUTOR_SCHEMA = RecordSchema(
    name="tutor",
    keys=("Name", "Affiliation", "Email", "Specialization"),
    primary_key="Name",
    defaults={"Affiliation": "Unknown", "Email": "Not listed", "Specialization": "Related Field"},
)

INSTITUTIONS = {
    "Jordan": ["University of Jordan", "JUST", "Yarmouk"],
    "Palestine": ["Birzeit", "An-Najah", "Palestine Ahliya University", "Al-Quds University"],
}


class TutorService:
    """Finds regional faculty who teach the course subject"""

    def __init__(self, llm_client: LLMInterface, config: AnalysisConfig):
        self.llm = llm_client
        self.config = config
        self.parser = DelimitedRecordParser(TUTOR_SCHEMA)

    def _create_search_prompt(self, course_title: str, language: Language) -> str:
        regions = " or ".join(
            f"{country} (e.g., {', '.join(names)})" for country, names in INSTITUTIONS.items()
        )
        return f"""Search for academic professors, lecturers, or tutors who specialize in "{course_title}" or related fields
specifically at universities in {regions}.

SEARCH STRATEGY:
1. Use the exact course name "{course_title}".
2. ALSO search for common variations or synonyms of this course title (e.g., if "Data Structures", also search for "Algorithms", "Computer Science", or "Programming").
3. Look for faculty members in the relevant department.

Find 3-5 profiles.
Output Language: {language.display_name}.

STRICT OUTPUT FORMAT:
Do not use JSON. Use the following text format for each tutor found:

TUTOR_ITEM
Name: [Name]
Affiliation: [University/Inst]
Email: [Email or "Not listed"]
Specialization: [Field]
END_ITEM
"""

    async def search(self, course_title: str, language: Language = Language.EN) -> StageResult:
        """Run the tutor search; returns a StageResult holding a list of Tutor"""
        try:
            language = Language.from_code(language)
            logger.info("Searching tutors for '%s'", course_title)
            request = self.llm.generate(
                [TextPayload(self._create_search_prompt(course_title, language))],
                use_search=True,
            )
            response = await with_timeout(request, self.config.search_timeout, "Tutor search timed out.")
        except Exception as e:
            logger.warning("Tutor search error: %s", e)
            return StageResult.failure(e)

        tutors = [Tutor.from_dict(record) for record in self.parser.parse(response.text)]
        logger.info("Found %d tutor(s)", len(tutors))
        return StageResult.success(tutors)
