"""Markdown report generator"""

import json
import os
import re
from typing import List, Tuple

from ..models.analysis_models import AnalysisResult


def _cell(text: str) -> str:
    """Collapse whitespace and escape pipes so text fits one table cell"""
    return " ".join(text.split()).replace("|", "\\|")


def _bullets(items: List[str], empty: str = "_None._") -> str:
    return "\n".join(f"- {item}" for item in items) if items else empty


def render_markdown(result: AnalysisResult) -> str:
    """Render an analysis result as a Markdown document"""
    gap = result.gap_analysis
    sections: List[Tuple[str, str]] = []

    if result.section_scores:
        rows = ["| Section | Score | Feedback |", "| --- | --- | --- |"]
        rows += [f"| {_cell(s.section)} | {s.score} | {_cell(s.feedback)} |" for s in result.section_scores]
        sections.append(("Section Scores", "\n".join(rows)))

    sections += [
        ("Syllabus Topics", _bullets(result.syllabus_topics)),
        ("Missing Components", _bullets(gap.missing_components)),
        ("Weaknesses", _bullets(gap.weaknesses)),
        ("Strengths", _bullets(gap.strengths)),
        ("Recommendations", _bullets(result.recommendations)),
        ("Revised Learning Outcomes", _bullets(result.revised_ilos)),
    ]

    if result.suggested_activities:
        sections.append(("Suggested Activities", "\n\n".join(
            f"**{a.title}**\n\n{a.description}\n\n_Outcome: {a.learning_outcome_map}_"
            for a in result.suggested_activities
        )))

    if result.benchmarks:
        blocks = []
        for b in result.benchmarks:
            heading = f"### [{b.university}]({b.url})" if b.url else f"### {b.university}"
            blocks.append(f"{heading}\n\n{b.comparison}")
        sections.append(("Benchmarks", "\n\n".join(blocks)))

    sections.append(("Tutors", _bullets(
        [f"**{t.name}** ({t.affiliation}) - {t.specialization}, {t.email}" for t in result.tutors],
        empty="No tutors found.",
    )))

    header = f"# {result.course_title}\n\n**Overall Score:** {result.overall_score}/100\n\n"
    return header + "".join(f"## {title}\n\n{body}\n\n" for title, body in sections)


def save_report(result: AnalysisResult, directory: str = "reports", suffix: str = "") -> Tuple[str, str]:
    """Save a report as Markdown and JSON, returning both file paths"""
    os.makedirs(directory, exist_ok=True)
    stem = re.sub(r"\W+", "_", result.course_title.lower(), flags=re.UNICODE).strip("_")[:30] or "report"
    base = os.path.join(directory, stem + suffix)

    markdown_path = base + ".md"
    with open(markdown_path, "w", encoding="utf-8") as f:
        f.write(render_markdown(result))

    json_path = base + ".json"
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)

    return markdown_path, json_path
