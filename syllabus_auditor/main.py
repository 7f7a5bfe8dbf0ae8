"""Syllabus Auditor Main Module"""

import asyncio
import logging
import os

from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .config.config_loader import ConfigLoader
from .models.analysis_models import AnalysisResult, EvaluationCriteria, Language
from .services.analysis_pipeline import AnalysisPipeline
from .services.report_generator import save_report


def run_with_spinner(console: Console, loop: asyncio.AbstractEventLoop, description: str, coroutine):
    """Run a coroutine to completion while showing a spinner"""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console
    ) as progress:
        task = progress.add_task(description, total=None)
        try:
            return loop.run_until_complete(coroutine)
        finally:
            progress.remove_task(task)


def print_summary(console: Console, result: AnalysisResult):
    """Print the headline numbers of a report"""
    console.print(f"\n[bold green]{result.course_title}[/bold green]  Overall score: [cyan]{result.overall_score}/100[/cyan]")

    if result.section_scores:
        table = Table("Section", "Score", "Feedback")
        for score in result.section_scores:
            table.add_row(score.section, str(score.score), score.feedback)
        console.print(table)

    console.print(f"Missing components: {len(result.gap_analysis.missing_components)}")
    console.print(f"Benchmarks: {', '.join(b.university for b in result.benchmarks) or 'None'}")
    console.print(f"Tutors found: {len(result.tutors)}")


def main():
    """Main entry point for the syllabus auditor"""
    console = Console()
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "WARNING"),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    try:
        config, api_key = ConfigLoader.load_config()
    except ValueError as e:
        console.print(f"\n[red]Configuration Error: {str(e)}[/red]")
        console.print("[yellow]Please check your API keys in the .env file[/yellow]")
        return

    pipeline = AnalysisPipeline.from_config(config, api_key)
    # one loop for the whole session, the shared client is bound to it
    loop = asyncio.new_event_loop()

    console.print("\n[bold blue]Syllabus Auditor[/bold blue]")
    console.print("Enter the path of a syllabus (PDF, DOCX or TXT). The report will include:")
    console.print("- Rubric scores and gap analysis")
    console.print("- Benchmark comparison against external curricula")
    console.print("- Regional tutors for the subject")
    console.print("\nPress Ctrl+C to exit.\n")

    while True:
        try:
            path = input("Syllabus file: ").strip().strip('"')
            if not path:
                continue
            target = input("Benchmark target (university, ABET, ... or blank): ").strip()
            language = Language.from_code(input("Language [en/ar]: ").strip() or "en")

            criteria = EvaluationCriteria(benchmark_target=target)
            result = run_with_spinner(
                console, loop,
                "[cyan]Analyzing syllabus...",
                pipeline.run(path, criteria, language),
            )
            print_summary(console, result)

            markdown_path, json_path = save_report(result, suffix=f"_{language.value}")
            console.print(f"\n[green]Analysis completed successfully![/green]")
            console.print(f"Saved to: {markdown_path} and {json_path}")

            other = Language.AR if language is Language.EN else Language.EN
            answer = input(f"Translate report to {other.display_name}? (yes/no): ").strip().lower()
            if answer == "yes":
                translated = run_with_spinner(
                    console, loop,
                    f"[cyan]Translating to {other.display_name}...",
                    pipeline.translate(result, other),
                )
                markdown_path, _ = save_report(translated, suffix=f"_{other.value}")
                console.print(f"[green]Translated report saved to: {markdown_path}[/green]")

            console.print("\nEnter another syllabus or press Ctrl+C to exit.\n")

        except KeyboardInterrupt:
            console.print("\n\n[yellow]Exiting Syllabus Auditor...[/yellow]")
            break
        except Exception as e:
            console.print(f"\n[red]Error: {str(e)}[/red]")
            continue

    loop.close()


if __name__ == "__main__":
    main()
