import argparse
import getpass
import json
import logging
import os
import sys
from pathlib import Path
from typing import Callable

from core.client import DEFAULT_API_URL, AdminContext, QuizApiClient
from core.errors import (
    QuizError,
    QuizNotFound,
    TransientStoreFailure,
    Unauthorized,
    ValidationFailure,
)
from core.links import (
    category_from_title,
    category_title,
    parse_share_link,
    share_link,
)
from core.logging_setup import setup_console_logging
from core.models import AnswerState, Question
from core.scoring import review, score_answers
from core.session import QuizSession, ResultSink

STATE_MARKS = {
    AnswerState.UNANSWERED: " ",
    AnswerState.CORRECT: "*",
    AnswerState.WRONG: "*",
    AnswerState.SKIPPED: "?",
}

HELP_TEXT = (
    "Commands: <option key> answer | n next | p previous | g <number> go to | "
    "s submit | q quit"
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Quiz Portal command line")
    parser.add_argument(
        "--api-url",
        default=DEFAULT_API_URL,
        help="Base URL of the quiz API",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("categories", help="List quiz categories")

    take = commands.add_parser("take", help="Take a quiz")
    take.add_argument("quiz", help="Share link or category id")
    take.add_argument("--name", default="")
    take.add_argument("--roll-number", default="")

    share = commands.add_parser("share", help="Print the share link of a quiz")
    share.add_argument("category")
    share.add_argument("--site-url", default=None)

    for name, help_text in (
        ("results", "List submitted results"),
        ("result", "Show correct, incorrect and skipped questions of a result"),
        ("delete-result", "Delete one result"),
        ("delete-results", "Delete all results"),
        ("import-questions", "Create questions from a JSON file"),
        ("update-question", "Edit an existing question"),
        ("delete-question", "Delete a question"),
    ):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("--username", default=os.environ.get("QUIZ_ADMIN_USER", "admin"))
        if name in ("result", "delete-result"):
            sub.add_argument("id", type=int)
        elif name == "delete-results":
            sub.add_argument("--yes", action="store_true", help="Skip confirmation")
        elif name == "import-questions":
            sub.add_argument("file", type=Path, help="JSON list of questions")
        elif name == "update-question":
            sub.add_argument("id")
            sub.add_argument("--text", default=None)
            sub.add_argument(
                "--option",
                action="append",
                default=None,
                metavar="KEY=TEXT",
                help="Option text, repeat for each option",
            )
            sub.add_argument("--answer", default=None)
        elif name == "delete-question":
            sub.add_argument("id")

    create_admin = commands.add_parser(
        "create-admin", help="Create an admin account in the local database"
    )
    create_admin.add_argument("username")

    return parser.parse_args(argv)


def render_question(session: QuizSession, output: Callable[[str], None]) -> None:
    question = session.current_question
    answer = session.answer_for(question.id)
    output("")
    output(f"{session.title}  |  Question {session.cursor + 1} of {len(session.questions)}")
    output(question.text)
    for key, text in question.options.items():
        marker = ">" if answer is not None and answer.selected_option == key else " "
        output(f" {marker} {key.upper()}. {text}")
    navigator = " ".join(
        f"[{index}{STATE_MARKS[state]}]"
        for index, (_, state) in enumerate(session.classify_all(), start=1)
    )
    output(navigator)


def run_quiz(
    session: QuizSession,
    sink: ResultSink,
    input_fn: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
) -> bool:
    """Drive a session from terminal input. Returns True once submitted."""
    output(HELP_TEXT)
    while True:
        render_question(session, output)
        command = input_fn("> ").strip()
        if not command:
            continue
        lowered = command.lower()
        if lowered == "q":
            return False
        if lowered == "n":
            session.advance()
        elif lowered == "p":
            session.retreat()
        elif lowered.startswith("g "):
            try:
                session.jump_to(int(lowered[2:]) - 1)
            except ValueError:
                output("Usage: g <question number>")
        elif lowered == "s":
            if _submit(session, sink, input_fn, output):
                return True
        elif lowered in session.current_question.options:
            if session.answer_for(session.current_question.id) is not None:
                output("This question is already answered.")
            else:
                session.select_current(lowered)
        else:
            output(HELP_TEXT)


def _submit(
    session: QuizSession,
    sink: ResultSink,
    input_fn: Callable[[str], str],
    output: Callable[[str], None],
) -> bool:
    if not session.candidate.is_complete:
        session.set_candidate(
            session.candidate.name or input_fn("Name: "),
            session.candidate.roll_number or input_fn("Roll number: "),
        )
    try:
        session.request_submit()
    except ValidationFailure as exc:
        output(str(exc))
        session.set_candidate("", "")
        return False

    if input_fn("Are you sure you want to submit? [y/N] ").strip().lower() != "y":
        session.cancel_submit()
        return False

    try:
        result = session.confirm_submit(sink)
    except (TransientStoreFailure, Unauthorized) as exc:
        output(f"Failed to submit quiz. Please try again. ({exc})")
        return False

    summary = score_answers(result.answers, result.total_questions)
    output("")
    output(f"Test Completed, {result.name}!")
    output(f"Roll Number: {result.roll_number}")
    output(f"Score: {result.score}/{result.total_questions}")
    output(
        f"Correct: {result.score}  Incorrect: {summary.incorrect_count}  "
        f"Skipped: {summary.skipped_count}"
    )
    return True


def _quiz_category(value: str) -> str:
    if "/" in value:
        return parse_share_link(value)
    return value


def _login(client: QuizApiClient, username: str) -> AdminContext:
    password = os.environ.get("QUIZ_ADMIN_PASSWORD") or getpass.getpass("Admin password: ")
    return client.login(username, password)


def _print_results(client: QuizApiClient, admin: AdminContext) -> None:
    results = client.get_results(admin)
    if not results:
        print("No results have been submitted yet.")
        return
    for result in results:
        category = result.category or category_from_title(result.quiz_title)
        print(
            f"{result.id:>5}  {result.name:<24} {result.roll_number:<12} "
            f"{category:<12} {result.score}/{result.total_questions}"
        )


def _question_numbers(numbers: list[int | None]) -> str:
    if not numbers:
        return "-"
    return ", ".join(
        f"Question-{number}" if number is not None else "Question-?" for number in numbers
    )


def print_review(
    client: QuizApiClient,
    admin: AdminContext,
    result_id: int,
    output: Callable[[str], None] = print,
) -> None:
    """Show which questions of a result were correct, incorrect or skipped."""
    result = next(
        (item for item in client.get_results(admin) if item.id == result_id), None
    )
    if result is None:
        raise ValidationFailure(f"Result {result_id} not found")

    category = result.category or category_from_title(result.quiz_title)
    questions = client.get_questions(category)
    groups = review(result, questions)
    summary = score_answers(result.answers, result.total_questions)

    output(f"{result.name} ({result.roll_number}): {result.quiz_title}")
    output(f"Score: {result.score}/{result.total_questions}")
    output(f"Correct ({len(groups.correct)}): {_question_numbers(groups.correct)}")
    output(f"Incorrect ({len(groups.incorrect)}): {_question_numbers(groups.incorrect)}")
    output(f"Skipped ({summary.skipped_count}): {_question_numbers(groups.skipped)}")


def _parse_options(values: list[str] | None) -> dict[str, str] | None:
    if not values:
        return None
    options = {}
    for value in values:
        key, sep, text = value.partition("=")
        if not sep or not key.strip():
            raise ValidationFailure(f"Expected KEY=TEXT, got {value!r}")
        options[key.strip()] = text
    return options


def _update_question(
    client: QuizApiClient,
    admin: AdminContext,
    question_id: str,
    text: str | None,
    options: list[str] | None,
    answer: str | None,
) -> None:
    parsed = _parse_options(options)
    if text is None and parsed is None and answer is None:
        raise ValidationFailure("Nothing to update: pass --text, --option or --answer")
    question = client.update_question(
        admin, question_id, text=text, options=parsed, answer=answer
    )
    print(f"Updated {question.id} in {question.category}")


def _import_questions(client: QuizApiClient, admin: AdminContext, path: Path) -> None:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, list):
        raise ValidationFailure("Expected a JSON list of questions")
    for item in payload:
        question = client.create_question(admin, Question.from_payload(item))
        print(f"Created {question.id} in {question.category}")


def _create_admin(username: str) -> None:
    from api.database import SessionLocal, init_db
    from api.services.auth_service import create_admin, get_admin_by_username

    init_db()
    password = os.environ.get("QUIZ_ADMIN_PASSWORD") or getpass.getpass("New admin password: ")
    db = SessionLocal()
    try:
        if get_admin_by_username(db, username):
            raise ValidationFailure(f"Admin {username!r} already exists")
        create_admin(db, username, password)
    finally:
        db.close()
    print(f"Created admin {username}")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_console_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "share":
        print(share_link(args.category, args.site_url))
        return 0
    if args.command == "create-admin":
        try:
            _create_admin(args.username)
        except ValidationFailure as exc:
            print(exc, file=sys.stderr)
            return 1
        return 0

    with QuizApiClient(args.api_url) as client:
        try:
            if args.command == "categories":
                for category in client.dashboard_categories():
                    print(f"{category:<16} {category_title(category)}")
            elif args.command == "take":
                session = QuizSession.load(_quiz_category(args.quiz), client)
                if args.name or args.roll_number:
                    session.set_candidate(args.name, args.roll_number)
                return 0 if run_quiz(session, client) else 1
            else:
                admin = _login(client, args.username)
                if args.command == "results":
                    _print_results(client, admin)
                elif args.command == "result":
                    print_review(client, admin, args.id)
                elif args.command == "delete-result":
                    client.delete_result(admin, args.id)
                    print("Result deleted successfully")
                elif args.command == "delete-results":
                    if not args.yes and input("Delete all results? [y/N] ").strip().lower() != "y":
                        return 1
                    client.delete_all_results(admin)
                    print("All results deleted successfully")
                elif args.command == "import-questions":
                    _import_questions(client, admin, args.file)
                elif args.command == "update-question":
                    _update_question(client, admin, args.id, args.text, args.option, args.answer)
                elif args.command == "delete-question":
                    client.delete_question(admin, args.id)
                    print("Question deleted successfully")
        except QuizNotFound as exc:
            print(f"{exc}. Pick one of: {', '.join(client.dashboard_categories())}", file=sys.stderr)
            return 1
        except Unauthorized as exc:
            print(f"Unauthorized: {exc}. Please log in again.", file=sys.stderr)
            return 1
        except (QuizError, ValueError) as exc:
            print(exc, file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
