"""CLI entry point for job description analysis and interview prep."""

import argparse
import logging
import sys

from jobprep.analysis.analyzer import analyze
from jobprep.analysis.catalog import (
    get_all_coding_questions,
    get_coding_questions_by_category,
    get_coding_questions_by_difficulty,
    search_coding_questions,
)
from jobprep.analysis.preparation import build_preparation
from jobprep.core.config import Settings
from jobprep.core.errors import JobPrepError
from jobprep.core.schemas import CodingQuestion, JobAnalysis, JobPosting
from jobprep.core.session import Session

DEFAULT_CONFIG = "config/settings.yaml"


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG,
        help=f"Path to settings YAML file (default: {DEFAULT_CONFIG}; defaults apply if missing)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Analyze job descriptions and prepare for interviews",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- analyze ---
    analyze_parser = subparsers.add_parser("analyze", help="Analyze a job posting")
    analyze_parser.add_argument("--title", required=True, help="Job title")
    analyze_parser.add_argument("--company", required=True, help="Company name")
    source = analyze_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--description", help="Job description text")
    source.add_argument("--file", help="Read the description from a text or PDF file")
    analyze_parser.add_argument("--url", help="Job posting URL")
    analyze_parser.add_argument("--location", help="Job location")
    analyze_parser.add_argument(
        "--no-save",
        action="store_true",
        help="Print the analysis without storing it",
    )
    analyze_parser.add_argument("--export", choices=["json"], help="Print the full analysis as JSON")
    _add_common(analyze_parser)

    # --- show ---
    show_parser = subparsers.add_parser("show", help="Show a stored analysis")
    show_parser.add_argument("id", help="Analysis id")
    show_parser.add_argument("--export", choices=["json"], help="Print the full analysis as JSON")
    _add_common(show_parser)

    # --- list ---
    list_parser = subparsers.add_parser("list", help="List stored analyses, newest first")
    _add_common(list_parser)

    # --- delete ---
    delete_parser = subparsers.add_parser("delete", help="Delete a stored analysis")
    delete_parser.add_argument("id", help="Analysis id")
    _add_common(delete_parser)

    # --- wipe ---
    wipe_parser = subparsers.add_parser("wipe", help="Delete every stored analysis")
    wipe_parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    _add_common(wipe_parser)

    # --- prep ---
    prep_parser = subparsers.add_parser("prep", help="Show the interview preparation plan for an analysis")
    prep_parser.add_argument("id", help="Analysis id")
    _add_common(prep_parser)

    # --- questions ---
    questions_parser = subparsers.add_parser("questions", help="Browse the coding challenge catalog")
    questions_parser.add_argument("--difficulty", choices=["easy", "medium", "hard"])
    questions_parser.add_argument("--category", help="Category name (case-insensitive)")
    questions_parser.add_argument("--tag", action="append", default=[], help="Tag filter, repeatable")
    _add_common(questions_parser)

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def print_analysis(analysis: JobAnalysis) -> None:
    result = analysis.analysis
    score = result.compatibility_score
    print(f"{analysis.job_title} at {analysis.company}  [{analysis.id}]")
    print(f"  Analyzed: {analysis.analysis_date}")
    print(f"  Role: {result.role_type}  Level: {result.experience_level}")
    print(f"  Required skills: {', '.join(result.required_skills) or '-'}")
    print(f"  Preferred skills: {', '.join(result.preferred_skills) or '-'}")
    print(f"  Technical stack: {', '.join(result.technical_stack) or '-'}")
    info = result.company_info
    print(f"  Company: {info.size}, {info.industry}, culture: {', '.join(info.culture) or '-'}")
    print("  Responsibilities:")
    for line in result.key_responsibilities:
        print(f"    - {line}")
    print(f"  Compatibility (simulated): {score.overall}/100")
    for rec in score.recommendations:
        print(f"    * {rec}")


def print_coding_questions(questions: list[CodingQuestion]) -> None:
    for q in questions:
        print(f"[{q.id}] {q.question} ({q.difficulty}, {q.category})")
        if q.tags:
            print(f"    tags: {', '.join(q.tags)}")


def cmd_analyze(args: argparse.Namespace, session: Session) -> None:
    """Handle analyze subcommand."""
    if not args.no_save:
        session.require_user()

    if args.file:
        from jobprep.documents import read_job_description

        description = read_job_description(args.file)
    else:
        description = args.description

    posting = JobPosting(
        job_title=args.title.strip(),
        job_description=description.strip(),
        company=args.company.strip(),
        job_url=(args.url or "").strip() or None,
        location=(args.location or "").strip() or None,
    )
    analysis = analyze(posting, session.settings)

    if not args.no_save:
        session.analyses.save(analysis)

    if args.export == "json":
        print(analysis.model_dump_json(by_alias=True, indent=2))
    else:
        print_analysis(analysis)


def cmd_show(args: argparse.Namespace, session: Session) -> None:
    """Handle show subcommand."""
    session.require_user()
    analysis = session.analyses.get(args.id)
    if analysis is None:
        msg = f"No analysis with id '{args.id}'"
        raise ValueError(msg)
    if args.export == "json":
        print(analysis.model_dump_json(by_alias=True, indent=2))
    else:
        print_analysis(analysis)


def cmd_list(args: argparse.Namespace, session: Session) -> None:
    """Handle list subcommand."""
    session.require_user()
    analyses = session.analyses.list_recent()
    if not analyses:
        print("No stored analyses.")
        return
    for a in analyses:
        score = a.analysis.compatibility_score.overall
        print(f"{a.id}  {a.analysis_date}  {a.job_title} at {a.company}  ({score}/100)")


def cmd_delete(args: argparse.Namespace, session: Session) -> None:
    """Handle delete subcommand."""
    session.require_user()
    if not session.analyses.delete(args.id):
        msg = f"No analysis with id '{args.id}'"
        raise ValueError(msg)
    print(f"Deleted {args.id}")


def cmd_wipe(args: argparse.Namespace, session: Session) -> None:
    """Handle wipe subcommand."""
    session.require_user()
    if not args.yes:
        answer = input("Delete every stored analysis? [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            print("Aborted.")
            return
    removed = session.analyses.wipe()
    print(f"Deleted {removed} analyses.")


def cmd_prep(args: argparse.Namespace, session: Session) -> None:
    """Handle prep subcommand."""
    session.require_user()
    analysis = session.analyses.get(args.id)
    if analysis is None:
        msg = f"No analysis with id '{args.id}'"
        raise ValueError(msg)
    areas = build_preparation(analysis).preparation_areas

    print(f"Interview preparation for {analysis.job_title} at {analysis.company}")
    print("\nBehavioral questions:")
    for q in areas.behavioral.questions:
        print(f"  - {q}")
    print("  Tips: " + "; ".join(areas.behavioral.tips))
    print("\nTechnical questions:")
    for q in areas.technical.questions:
        print(f"  - {q}")
    print("  Study topics: " + ", ".join(areas.technical.study_topics))
    print("\nCoding challenges:")
    print_coding_questions(areas.coding.challenges)
    print("  Practice topics: " + ", ".join(areas.coding.practice_topics))
    print("\nSystem design:")
    for q in areas.system_design.questions:
        print(f"  - {q}")
    print("  Concepts: " + "; ".join(areas.system_design.concepts))


def cmd_questions(args: argparse.Namespace) -> None:
    """Handle questions subcommand. Filters combine with AND."""
    questions = get_all_coding_questions()
    if args.difficulty:
        allowed = {q.id for q in get_coding_questions_by_difficulty(args.difficulty)}
        questions = [q for q in questions if q.id in allowed]
    if args.category:
        allowed = {q.id for q in get_coding_questions_by_category(args.category)}
        questions = [q for q in questions if q.id in allowed]
    if args.tag:
        allowed = {q.id for q in search_coding_questions(args.tag)}
        questions = [q for q in questions if q.id in allowed]
    if not questions:
        print("No matching coding questions.")
        return
    print_coding_questions(questions)


_SESSION_COMMANDS = {
    "analyze": cmd_analyze,
    "show": cmd_show,
    "list": cmd_list,
    "delete": cmd_delete,
    "wipe": cmd_wipe,
    "prep": cmd_prep,
}


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.command == "questions":
        cmd_questions(args)
        return

    try:
        settings = Settings.load(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    handler = _SESSION_COMMANDS[args.command]
    try:
        with Session.from_settings(settings) as session:
            handler(args, session)
    except (JobPrepError, FileNotFoundError, ImportError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
