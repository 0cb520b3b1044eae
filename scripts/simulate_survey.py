#!/usr/bin/env python3
"""Simulate a SurveyFlow session end-to-end.

Drives through every question page and the info form, printing an audit
log of each page shown, the answers chosen, rejected transitions and the
final result handed to the completion callback.

By default answers are **randomised** (``--random``, on by default).  Use
``--no-random`` to answer every question True.  ``--step-back`` exercises
the backward navigation once per page.

Usage::

    # Default run (bundled question file, random answers)
    python scripts/simulate_survey.py

    # Deterministic run with 5 questions per page
    python scripts/simulate_survey.py --no-random -p 5

    # Use another question file
    python scripts/simulate_survey.py -f path/to/questions.yaml

    # Debug logs from the flow itself
    python scripts/simulate_survey.py -v
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Ensure the src/ tree is importable without installing the package.
# ---------------------------------------------------------------------------
_SCRIPT_DIR = Path(__file__).resolve().parent
_REPO_ROOT = _SCRIPT_DIR.parent
sys.path.insert(0, str(_REPO_ROOT / "src"))

from survey_intake.config import configure_logging, load_settings  # noqa: E402
from survey_intake.flow import SurveyFlow  # noqa: E402
from survey_intake.models.step import QuestionPageStep, SurveyResult  # noqa: E402
from survey_intake.question_bank import QuestionBank  # noqa: E402

# Info form values used for the final step.
_SIM_INFO = {
    "name": "Simulated Student",
    "age": "15",
    "school": "Simulation High School",
    "grade": "9",
}

_quiet = False


def _print(msg: str = "") -> None:
    if not _quiet:
        print(msg)


def _print_page(step: QuestionPageStep) -> None:
    _print(f"\n{'-' * 62}")
    _print(
        f" Page {step.page_number}/{step.total_pages}  "
        f"(questions {step.first_question_number}-{step.last_question_number} "
        f"of {step.question_count}, progress {step.progress:.0%})"
    )
    _print(f"{'-' * 62}")


def run_simulation(
    questions_path: str | None,
    page_size: int | None,
    randomise: bool,
    step_back: bool,
) -> SurveyResult:
    settings = load_settings()
    bank = QuestionBank(questions_path or settings.questions_path)
    bank.load()

    results: list[SurveyResult] = []
    flow = SurveyFlow(bank.questions, results.append, page_size=page_size, settings=settings)
    _print(f"Loaded {len(bank)} questions from {bank.path}: {flow.total_pages} pages")

    visited: set[int] = set()
    while not flow.is_info_step:
        step = flow.current_step
        _print_page(step)

        # Try to leave early once to show the gate at work
        rejected = flow.next()
        if not rejected.accepted:
            _print(f"   next() rejected: {rejected.reason.value}")

        for q in step.questions:
            value = random.choice([True, False]) if randomise else True
            flow.answer(q.id, value)
            _print(f"   Q{q.id:>3}  {'T' if value else 'F'}  {q.text}")

        if step_back and step.can_go_prev and step.page_index not in visited:
            visited.add(step.page_index)
            back = flow.prev()
            _print(f"   prev() -> page {back.step.page_number}; forward again")
            flow.next()

        flow.next()

    _print(f"\n{'=' * 62}")
    _print(" Info form")
    _print(f"{'=' * 62}")

    early = flow.submit()
    _print(f"   submit() with empty form: {early.reason.value} {early.missing_fields}")
    for key, value in _SIM_INFO.items():
        flow.update_info_field(key, value)
        _print(f"   {key:<8s} = {value}")

    final = flow.submit()
    if not final.accepted:
        raise RuntimeError(f"Submission rejected: {final.reason}")

    result = results[0]
    _print(f"\n{'=' * 62}")
    _print(" Result")
    _print(f"{'=' * 62}")
    _print(json.dumps({
        "answers": result.answer_codes(),
        "info": result.info,
    }, ensure_ascii=False, indent=2))
    return result


def main() -> None:
    global _quiet

    parser = argparse.ArgumentParser(
        description="Simulate a survey session from the first page to submission.",
    )
    parser.add_argument(
        "-f", "--questions",
        default=None,
        help="YAML question file (default: SURVEY_QUESTIONS_PATH or data/questions.yaml)",
    )
    parser.add_argument(
        "-p", "--page-size",
        type=int,
        default=None,
        help="Questions per page (default: SURVEY_QUESTIONS_PER_PAGE or 10)",
    )
    parser.add_argument(
        "--random",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Randomise answers (default: on). Use --no-random to answer all True.",
    )
    parser.add_argument(
        "--step-back",
        action="store_true",
        help="Go back one page (and forward again) on every page after the first",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show DEBUG logs from the flow",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress all print output (exit code still reflects success/failure)",
    )
    args = parser.parse_args()

    _quiet = args.quiet
    configure_logging()
    if args.verbose:
        logging.getLogger("survey_intake").setLevel(logging.DEBUG)

    run_simulation(args.questions, args.page_size, args.random, args.step_back)


if __name__ == "__main__":
    main()
