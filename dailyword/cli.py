import argparse
import logging
import sys
from datetime import date
from pathlib import Path

import colorama as clr

from dailyword import daily, search, words

clr.init()


def green(x: str) -> str:
    return f"{clr.Fore.GREEN}{x}{clr.Fore.RESET}"


def red(x: str) -> str:
    return f"{clr.Fore.RED}{x}{clr.Fore.RESET}"


def gray(x: str) -> str:
    return f"{clr.Style.DIM}{x}{clr.Style.RESET_ALL}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dailyword",
        description="Pick words for a word guessing game.",
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--words",
        type=Path,
        help="Read the word list from a text (one word per line) or JSON file.",
    )
    source.add_argument(
        "--url",
        type=str,
        default=words.DEFAULT_WORD_LIST_URL,
        help="Download the word list from this URL.",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Always download the word list instead of reusing a cached copy.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log what is going on.",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    daily_parser = commands.add_parser("daily", help="Show the word of the day.")
    daily_parser.add_argument(
        "--length",
        type=int,
        default=daily.STANDARD_LENGTH,
        help="Length of the word.",
    )
    daily_parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Use this day (YYYY-MM-DD) instead of today.",
    )
    daily_parser.add_argument(
        "--seed",
        type=lambda x: int(x, 0),
        default=daily.SEED,
        help="Override the word of the day seed.",
    )

    find_parser = commands.add_parser(
        "find",
        help="Find a random word matching known letters, e.g. _A_T.",
    )
    find_parser.add_argument(
        "pattern",
        type=str,
        help="Known letters; use _ . or ? for unknown positions.",
    )
    find_parser.add_argument(
        "--skip",
        nargs="*",
        default=[],
        help="Words that must not be returned.",
    )
    find_parser.add_argument(
        "--max-iterations",
        type=int,
        default=search.DEFAULT_MAX_ITERATIONS,
        help="How many words to try before giving up.",
    )

    random_parser = commands.add_parser("random", help="Pick a random word.")
    random_parser.add_argument(
        "--min",
        type=int,
        default=daily.STANDARD_LENGTH,
        help="Shortest word length.",
    )
    random_parser.add_argument(
        "--max",
        type=int,
        default=daily.STANDARD_LENGTH,
        help="Longest word length (exclusive, unless equal to --min).",
    )

    return parser


def load_store(ns: argparse.Namespace) -> words.WordStore:
    if ns.words is not None:
        return words.WordStore(words.load_path(ns.words))

    cache_dir = None if ns.no_cache else words.DEFAULT_CACHE_DIR
    return words.WordStore(words.fetch_word_list(ns.url, cache_dir))


def run(ns: argparse.Namespace) -> str:
    store = load_store(ns)

    if ns.command == "daily":
        selector = daily.DailyWordSelector(seed=ns.seed)
        number = selector.puzzle_number(ns.date)
        word = selector.word_of_the_day(store, ns.length, ns.date)
        return f"{gray(f'#{number}')} {green(word)}"

    if ns.command == "find":
        word = search.ConstrainedWordSearch(store).find(
            ns.pattern,
            ns.max_iterations,
            ns.skip,
        )
        return green(word)

    word = search.RandomWordPicker(store).pick(ns.min, ns.max)
    return green(word)


def main(argv: list[str] | None = None) -> int:
    ns = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        print(run(ns))
    except words.WordSelectionError as e:
        print(red(e.reason), file=sys.stderr)
        return 1

    return 0
