"""
Command-line interface for the question paper wizard.

Usage:
    python -m wizard serve [--port 3001]
    python -m wizard generate notes1.pdf notes2.pdf --subject "Operating Systems" \\
        --branch "Computer Engineering" --mcq 10 --short 6 --long 4 --out-dir papers/
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from generation.config import get_settings
from generation.paper_exporter import export_filenames, generate_answer_sheet, generate_question_paper
from generation.paper_summary import summarize_paper
from generation.schemas import (
    AdditionalOptions,
    ExamDetails,
    LongAnswerConfig,
    MCQConfig,
    QuestionConfig,
    ShortAnswerConfig,
)
from ingestion.pdf_text import PdfExtractionError, extract_pdf_file
from wizard.api_client import DEFAULT_BASE_URL, PaperApiClient
from wizard.controller import run_generation
from wizard.state import (
    UploadedDocument,
    WizardError,
    start_over,
    submit_config,
    submit_details,
    submit_uploads,
)

log = logging.getLogger("wizard")


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more, got {number}")
    return number


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be 1 or more, got {number}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="paper-wizard",
        description="AI Question Paper Generator - PDFs in, question paper + answer sheet out",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (default: PORT env or 3001)")
    serve_parser.add_argument("--reload", action="store_true")

    # Generate command
    gen = subparsers.add_parser("generate", help="Walk the wizard for a set of PDFs")
    gen.add_argument("pdfs", nargs="+", type=Path, help="Study material PDF files")
    gen.add_argument("--server", default=DEFAULT_BASE_URL, help=f"API base URL (default: {DEFAULT_BASE_URL})")
    gen.add_argument("--out-dir", "-o", type=Path, default=Path("."), help="Where to write the PDFs")

    details = gen.add_argument_group("exam details")
    details.add_argument("--subject", required=True)
    details.add_argument("--branch", required=True, help="Branch / department")
    details.add_argument("--university", default="")
    details.add_argument("--date", default="", help="Exam date, YYYY-MM-DD")
    details.add_argument("--duration", default="", help='e.g. "3 hours"')
    details.add_argument("--total-marks", type=_non_negative_int, default=100)

    config = gen.add_argument_group("question configuration")
    config.add_argument("--mcq", type=_non_negative_int, default=10, help="MCQ count (default: 10)")
    config.add_argument("--mcq-marks", type=_positive_int, default=1)
    config.add_argument("--mcq-options", type=int, choices=[4, 5], default=4)
    config.add_argument("--short", type=_non_negative_int, default=6, help="Short answer count (default: 6)")
    config.add_argument("--short-marks", type=_positive_int, default=5)
    config.add_argument("--short-words", type=_positive_int, default=150)
    config.add_argument("--long", type=_non_negative_int, default=4, help="Long answer count (default: 4)")
    config.add_argument("--long-marks", type=_positive_int, default=15)
    config.add_argument("--long-words", type=_positive_int, default=500)
    config.add_argument("--numerical", action="store_true", help="Ask for numerical problems")
    config.add_argument("--diagram", action="store_true", help="Ask for diagram-based questions")
    config.add_argument("--case-study", action="store_true", help="Ask for case-study questions")

    return parser


def _question_config(args: argparse.Namespace) -> QuestionConfig:
    return QuestionConfig(
        mcq=MCQConfig(count=args.mcq, marks_per_question=args.mcq_marks, options_count=args.mcq_options),
        short_answer=ShortAnswerConfig(
            count=args.short, marks_per_question=args.short_marks, word_limit=args.short_words,
        ),
        long_answer=LongAnswerConfig(
            count=args.long, marks_per_question=args.long_marks, word_limit=args.long_words,
        ),
        additional=AdditionalOptions(
            numerical_problems=args.numerical,
            diagram_based=args.diagram,
            case_study=args.case_study,
        ),
    )


async def run_wizard(args: argparse.Namespace) -> int:
    state = start_over()

    # Step 1: upload
    files = []
    for path in args.pdfs:
        try:
            text = extract_pdf_file(path)
        except (PdfExtractionError, OSError) as e:
            print(f"[ERROR] {path}: {e}", file=sys.stderr)
            return 1
        files.append(UploadedDocument(name=path.name, size=path.stat().st_size, extracted_text=text))
        print(f"  extracted {len(text):>7} chars  {path.name}")

    try:
        state = submit_uploads(state, files)

        # Step 2-3: details + configuration
        state = submit_details(state, ExamDetails(
            subject=args.subject,
            branch=args.branch,
            university_name=args.university,
            exam_date=args.date,
            exam_duration=args.duration,
            total_marks=args.total_marks,
        ))
        state = submit_config(state, _question_config(args))

        # Step 4: generate
        async with PaperApiClient(base_url=args.server) as api:
            state = await run_generation(
                state, api, on_progress=lambda s: print(f"  [{s.progress:3d}%] {s.status_message}"),
            )
    except WizardError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    # Step 5: preview + export
    summary = summarize_paper(list(state.questions), state.question_config)
    for section in summary.sections:
        print(f"  {section.kind.value:<5}  {section.delivered}/{section.requested} questions  {section.marks} marks")
    if summary.under_delivered:
        print("  [WARN] the model returned fewer questions than requested")

    args.out_dir.mkdir(parents=True, exist_ok=True)
    names = export_filenames(state.paper)
    question_paper = args.out_dir / names["question_paper"]
    answer_sheet = args.out_dir / names["answer_sheet"]
    question_paper.write_bytes(generate_question_paper(state.paper).getvalue())
    answer_sheet.write_bytes(generate_answer_sheet(state.paper).getvalue())
    print(f"  wrote {question_paper}")
    print(f"  wrote {answer_sheet}")
    return 0


def main(argv=None) -> int:
    load_dotenv()
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        import uvicorn
        port = args.port or get_settings().port
        uvicorn.run("paper_api:app", host=args.host, port=port, reload=args.reload)
        return 0

    if args.command == "generate":
        logging.basicConfig(level=logging.WARNING, format="%(asctime)s  %(levelname)s  %(message)s")
        return asyncio.run(run_wizard(args))

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
