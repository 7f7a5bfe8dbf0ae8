"""Data models for syllabus analysis"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

DEFAULT_COURSE_TITLE = "Untitled Course"
DEFAULT_TOPICS = ["General Topics"]
NO_MISSING_COMPONENTS = "Analysis yielded no missing components data."
NO_WEAKNESSES = "Analysis yielded no weakness data."
NO_STRENGTHS = "Analysis yielded no strength data."
NO_REVISED_ILOS = "No revisions generated."


class Language(Enum):
    """Output languages supported by the prompts"""
    EN = "en"
    AR = "ar"

    @property
    def display_name(self) -> str:
        return "Arabic" if self is Language.AR else "English"

    @classmethod
    def from_code(cls, code: Any) -> "Language":
        if isinstance(code, cls):
            return code
        try:
            return cls(str(code).strip().lower())
        except ValueError:
            raise ValueError(f"Unsupported language: {code!r}. Use 'en' or 'ar'.") from None


@dataclass(frozen=True)
class EvaluationCriteria:
    """Rubric dimensions to emphasise plus the benchmark target"""
    ilo_clarity: bool = True
    ilo_alignment: bool = True
    assessment_quality: bool = True
    reference_currency: bool = True
    structure_compliance: bool = True
    benchmark_target: str = ""


@dataclass
class AnalysisConfig:
    """Configuration for the analysis pipeline"""
    model_name: str = "gemini-2.5-flash"
    temperature: Optional[float] = None
    evaluation_timeout: float = 60.0
    search_timeout: float = 90.0
    translation_timeout: float = 60.0
    max_benchmark_topics: int = 10


def _to_text(value: Any, default: str = "") -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def _to_score(value: Any) -> int:
    """Coerce a model-supplied score into an integer between 0 and 100"""
    if isinstance(value, bool):
        return 0
    if isinstance(value, str):
        try:
            value = float(value.strip().rstrip("%"))
        except ValueError:
            return 0
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        return 0
    return max(0, min(100, int(round(value))))


def _string_list(value: Any) -> Optional[List[str]]:
    """Keep the string items of a list; None when ``value`` is not a list"""
    if not isinstance(value, list):
        return None
    items = []
    for item in value:
        if isinstance(item, str):
            items.append(item)
        elif isinstance(item, (int, float)) and not isinstance(item, bool):
            items.append(str(item))
    return items


def _record_list(value: Any, record_type) -> List[Any]:
    if not isinstance(value, list):
        return []
    return [record_type.from_dict(item) for item in value if isinstance(item, Mapping)]


@dataclass
class SectionScore:
    """Score for one rubric dimension"""
    section: str
    score: int
    feedback: str = ""

    @classmethod
    def from_dict(cls, data: Mapping) -> "SectionScore":
        return cls(
            section=_to_text(data.get("section"), "Unnamed Section"),
            score=_to_score(data.get("score")),
            feedback=_to_text(data.get("feedback")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"section": self.section, "score": self.score, "feedback": self.feedback}


@dataclass
class GapAnalysis:
    """Missing components, weaknesses and strengths; never empty once built"""
    missing_components: List[str] = field(default_factory=lambda: [NO_MISSING_COMPONENTS])
    weaknesses: List[str] = field(default_factory=lambda: [NO_WEAKNESSES])
    strengths: List[str] = field(default_factory=lambda: [NO_STRENGTHS])

    @classmethod
    def from_dict(cls, data: Any) -> "GapAnalysis":
        if not isinstance(data, Mapping):
            return cls()
        return cls(
            missing_components=_string_list(data.get("missingComponents")) or [NO_MISSING_COMPONENTS],
            weaknesses=_string_list(data.get("weaknesses")) or [NO_WEAKNESSES],
            strengths=_string_list(data.get("strengths")) or [NO_STRENGTHS],
        )

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            "missingComponents": list(self.missing_components),
            "weaknesses": list(self.weaknesses),
            "strengths": list(self.strengths),
        }


@dataclass
class ClassroomActivity:
    """Suggested active learning activity"""
    title: str
    description: str = ""
    learning_outcome_map: str = ""

    @classmethod
    def from_dict(cls, data: Mapping) -> "ClassroomActivity":
        return cls(
            title=_to_text(data.get("title"), "Untitled Activity"),
            description=_to_text(data.get("description")),
            learning_outcome_map=_to_text(data.get("learningOutcomeMap")),
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "title": self.title,
            "description": self.description,
            "learningOutcomeMap": self.learning_outcome_map,
        }


@dataclass
class BenchmarkResult:
    """Comparison of the syllabus against an external curriculum"""
    university: str
    comparison: str
    url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping) -> "BenchmarkResult":
        url = data.get("url")
        return cls(
            university=_to_text(data.get("university"), "Unknown"),
            comparison=_to_text(data.get("comparison")),
            url=url if isinstance(url, str) and url else None,
        )

    def to_dict(self) -> Dict[str, str]:
        data = {"university": self.university, "comparison": self.comparison}
        if self.url:
            data["url"] = self.url
        return data


@dataclass
class Tutor:
    """Subject-matter expert found through web search"""
    name: str
    affiliation: str = "Unknown"
    email: str = "Not listed"
    specialization: str = "Related Field"

    @classmethod
    def from_dict(cls, data: Mapping) -> "Tutor":
        return cls(
            name=_to_text(data.get("name"), "Unknown"),
            affiliation=_to_text(data.get("affiliation")) or "Unknown",
            email=_to_text(data.get("email")) or "Not listed",
            specialization=_to_text(data.get("specialization")) or "Related Field",
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "name": self.name,
            "affiliation": self.affiliation,
            "email": self.email,
            "specialization": self.specialization,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Complete syllabus evaluation report"""
    course_title: str = DEFAULT_COURSE_TITLE
    syllabus_topics: List[str] = field(default_factory=lambda: list(DEFAULT_TOPICS))
    overall_score: int = 0
    section_scores: List[SectionScore] = field(default_factory=list)
    gap_analysis: GapAnalysis = field(default_factory=GapAnalysis)
    recommendations: List[str] = field(default_factory=list)
    revised_ilos: List[str] = field(default_factory=lambda: [NO_REVISED_ILOS])
    benchmarks: List[BenchmarkResult] = field(default_factory=list)
    tutors: List[Tutor] = field(default_factory=list)
    suggested_activities: List[ClassroomActivity] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "AnalysisResult":
        """Build a fully populated result from an untrusted mapping.

        Keys missing from ``data`` take the default skeleton values. Keys
        that are present but carry the wrong type are replaced field by
        field: lists become empty lists, except the gap analysis lists and
        the revised ILOs, which fall back to their placeholder sentinels.
        """
        if not isinstance(data, Mapping):
            data = {}

        title = data.get("courseTitle")
        if not isinstance(title, str) or not title.strip():
            title = DEFAULT_COURSE_TITLE

        if "syllabusTopics" in data:
            topics = _string_list(data["syllabusTopics"]) or []
        else:
            topics = list(DEFAULT_TOPICS)

        return cls(
            course_title=title,
            syllabus_topics=topics,
            overall_score=_to_score(data.get("overallScore", 0)),
            section_scores=_record_list(data.get("sectionScores"), SectionScore),
            gap_analysis=GapAnalysis.from_dict(data.get("gapAnalysis")),
            recommendations=_string_list(data.get("recommendations")) or [],
            revised_ilos=_string_list(data.get("revisedILOs")) or [NO_REVISED_ILOS],
            benchmarks=_record_list(data.get("benchmarks"), BenchmarkResult),
            tutors=_record_list(data.get("tutors"), Tutor),
            suggested_activities=_record_list(data.get("suggestedActivities"), ClassroomActivity),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "courseTitle": self.course_title,
            "syllabusTopics": list(self.syllabus_topics),
            "overallScore": self.overall_score,
            "sectionScores": [s.to_dict() for s in self.section_scores],
            "gapAnalysis": self.gap_analysis.to_dict(),
            "recommendations": list(self.recommendations),
            "revisedILOs": list(self.revised_ilos),
            "benchmarks": [b.to_dict() for b in self.benchmarks],
            "tutors": [t.to_dict() for t in self.tutors],
            "suggestedActivities": [a.to_dict() for a in self.suggested_activities],
        }
