"""Command-line entry point for inspecting module playlists and progress.

Usage:
    curriculum modules
    curriculum playlist "Sales" [--save]
    curriculum progress <user_id>
    curriculum level 250
    curriculum quiz sales --answers 0,2,1
"""

import argparse
import json
import logging
import sys

from .category_order import build_module_index
from .config import get_passing_score, get_session_file
from .document_store import DocumentStore, FirestoreRestStore, JsonSnapshotStore, StoreError
from .gamification import INVALID_XP, compute_level
from .playlist_assembler import PlaylistAssembler
from .progress import aggregate_progress, completed_video_ids, most_watched, video_progress
from .quiz import grade_quiz, pretty_module_name
from .session_state import JsonFileSessionState, save_playlist


def _open_store(args) -> DocumentStore:
    if args.firestore:
        return FirestoreRestStore()
    return JsonSnapshotStore(args.snapshot_dir)


def _emit(args, data: dict) -> bool:
    """Print ``data`` as JSON when --json was given."""
    if args.json:
        print(json.dumps(data, indent=2))
        return True
    return False


def cmd_modules(args) -> int:
    store = _open_store(args)
    modules = build_module_index(store.fetch_content(), store.fetch_display_names())
    if _emit(args, {"modules": [m.to_dict() for m in modules]}):
        return 0

    print(f"\n=== Modules ({len(modules)}) ===\n")
    for module in modules:
        print(f"  {module.display_name:<40} {module.slug}")
    return 0


def cmd_playlist(args) -> int:
    store = _open_store(args)
    outcome = PlaylistAssembler().assemble(
        store.fetch_content(),
        args.category,
        store.fetch_custom_orders(),
    )

    if not outcome.ok:
        print(f"No videos found for the {args.category} module. Please try another module.")
        return 1

    if args.save:
        save_playlist(JsonFileSessionState(args.session_file or get_session_file()), outcome)

    if _emit(args, outcome.to_dict()):
        return 0

    print(f"\n=== {args.category} Module ===\n")
    print(f"Videos: {len(outcome.videos)}")
    for segment in outcome.segments:
        print(f"\n[{segment.role}] {segment.category} ({len(segment.items)})")
        for item in segment.items:
            print(f"  - {item.title} ({item.id})")
    print(f"\nStart: {outcome.player_location()}")
    if args.save:
        print("(Saved to session state)")
    return 0


def cmd_progress(args) -> int:
    store = _open_store(args)
    items = store.fetch_content()
    events = store.fetch_watch_events(args.user_id)
    summary = aggregate_progress(items, completed_video_ids(events))
    progress = video_progress(items, events)
    top = most_watched(items, progress, limit=args.top)

    if _emit(args, {
        "summary": summary.to_dict(),
        "most_watched": [{"id": v.id, "title": v.title, "progress": round(progress[v.id], 1)} for v in top],
    }):
        return 0

    if summary.empty:
        print("No data yet.")
        return 0

    print(f"\nWatched:   {summary.watched_count}/{summary.total_count} ({summary.watched_percent}%)")
    print(f"Unwatched: {summary.unwatched_count}")
    print("\nMost watched:")
    for video in top:
        print(f"  {progress[video.id]:5.1f}%  {video.title}")
    return 0


def cmd_level(args) -> int:
    level = compute_level(args.xp)
    if level.status == INVALID_XP:
        print(f"Total XP cannot be negative: {args.xp}", file=sys.stderr)
        return 2
    if _emit(args, level.to_dict()):
        return 0

    print(f"Level {level.level} - {level.title}")
    print(f"Progress to Level {level.level + 1}: {round(level.progress_percent)}%")
    print(f"{level.xp_to_next_level} XP needed for next level")
    return 0


def cmd_quiz(args) -> int:
    store = _open_store(args)
    questions = store.fetch_quiz_questions(args.module_id)
    if not questions:
        print(f"No quiz questions are available for {pretty_module_name(args.module_id)} yet.")
        return 1

    choices = [int(c) for c in args.answers.split(",") if c.strip()] if args.answers else []
    answers = {q.answer_key: choice for q, choice in zip(questions, choices)}
    result = grade_quiz(args.module_id, questions, answers)

    if _emit(args, {"correct": result.correct, "total": result.total,
                    "score_percent": result.score_percent, "passed": result.passed}):
        return 0

    verdict = "Passed" if result.passed else f"Need >={round(get_passing_score() * 100)}%"
    print(f"Score: {result.score_percent}% ({result.correct}/{result.total}) - {verdict}")
    return 0


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="curriculum", description=__doc__.splitlines()[0])
    parser.add_argument("--snapshot-dir", help="Directory of exported <collection>.json files")
    parser.add_argument("--firestore", action="store_true", help="Read live data from Firestore")
    parser.add_argument("--json", action="store_true", help="Print JSON output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("modules", help="List discovered modules").set_defaults(func=cmd_modules)

    p = sub.add_parser("playlist", help="Assemble a module playlist")
    p.add_argument("category")
    p.add_argument("--save", action="store_true", help="Store the playlist in session state")
    p.add_argument("--session-file", help="Session state file")
    p.set_defaults(func=cmd_playlist)

    p = sub.add_parser("progress", help="Show a user's watch progress")
    p.add_argument("user_id")
    p.add_argument("--top", type=_non_negative_int, default=3)
    p.set_defaults(func=cmd_progress)

    p = sub.add_parser("level", help="Show level for a total XP")
    p.add_argument("xp", type=int)
    p.set_defaults(func=cmd_level)

    p = sub.add_parser("quiz", help="Grade answers for a module quiz")
    p.add_argument("module_id")
    p.add_argument("--answers", help="Comma-separated option indexes in question order")
    p.set_defaults(func=cmd_quiz)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI for the curriculum engine."""
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        return args.func(args)
    except (StoreError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
