import hashlib
import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Iterable, Iterator

import requests

logger = logging.getLogger(__name__)

directory = Path(__file__).parent

DEFAULT_WORD_LIST_URL = (
    "https://raw.githubusercontent.com/dwyl/english-words/master/words.txt"
)
DEFAULT_CACHE_DIR = directory


class WordSelectionError(Exception):
    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.reason!r})"


class OutOfRange(WordSelectionError, IndexError):
    pass


class EmptyVocabulary(WordSelectionError, LookupError):
    pass


class WordStore:
    """
    Read-only collection of words indexed by length.

    Words are upper-cased once, here, and keep their first-seen order within
    each length so that index lookups are stable across runs.
    """

    def __init__(self, words: Iterable[str]) -> None:
        grouped: defaultdict[int, list[str]] = defaultdict(list)
        for word in words:
            grouped[len(word)].append(word.upper())

        self._words_by_length: dict[int, tuple[str, ...]] = {
            length: tuple(group) for length, group in grouped.items()
        }
        self._word_set = frozenset(
            word for group in self._words_by_length.values() for word in group
        )

    @property
    def lengths(self) -> tuple[int, ...]:
        return tuple(sorted(self._words_by_length))

    def word_count_for_length(self, length: int) -> int:
        return len(self._words_by_length.get(length, ()))

    def words_for_length(self, length: int) -> tuple[str, ...]:
        return self._words_by_length.get(length, ())

    def word_at_index(self, length: int, index: int) -> str:
        words = self._words_by_length.get(length)
        if not words:
            raise OutOfRange(f"There are no {length}-letter words.")

        if not 0 <= index < len(words):
            raise OutOfRange(
                f"Index {index} is outside [0, {len(words)}) for {length}-letter words.",
            )

        return words[index]

    def is_word(self, word: str) -> bool:
        return word.upper() in self._word_set

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.is_word(word)

    def __len__(self) -> int:
        return sum(len(group) for group in self._words_by_length.values())

    def __iter__(self) -> Iterator[str]:
        for length in self.lengths:
            yield from self._words_by_length[length]

    def __repr__(self) -> str:
        return f"WordStore(<{len(self)} words, lengths {list(self.lengths)}>)"


def _split_lines(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def _parse_json_words(text: str, source: object) -> list[str]:
    data = json.loads(text)
    if not isinstance(data, list) or not all(isinstance(w, str) for w in data):
        msg = f"{source} does not contain a JSON array of strings."
        raise ValueError(msg)

    return data


def load_text(path: Path | str) -> list[str]:
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        words = _split_lines(f.read())

    logger.info("Loaded %s words from %s", len(words), path)
    return words


def load_json(path: Path | str) -> list[str]:
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        words = _parse_json_words(f.read(), path)

    logger.info("Loaded %s words from %s", len(words), path)
    return words


def load_path(path: Path | str) -> list[str]:
    path = Path(path)
    if path.suffix.lower() == ".json":
        return load_json(path)

    return load_text(path)


def _decode_word_list(text: str, source: object) -> list[str]:
    if text.lstrip().startswith("["):
        return _parse_json_words(text, source)

    return _split_lines(text)


def cache_path(url: str, cache_dir: Path = DEFAULT_CACHE_DIR) -> Path:
    # one cache file per URL
    return cache_dir / f"{hashlib.sha256(url.encode()).hexdigest()[:16]}.txt"


def fetch_word_list(
    url: str = DEFAULT_WORD_LIST_URL,
    cache_dir: Path | None = None,
    *,
    timeout: float = 30,
) -> list[str]:
    cache = cache_path(url, cache_dir) if cache_dir is not None else None

    if cache is not None:
        try:
            with cache.open(encoding="utf-8") as f:
                words = _decode_word_list(f.read(), cache)
        except (OSError, ValueError):
            pass
        else:
            logger.info("Loaded %s cached words from %s", len(words), cache)
            return words

    logger.info("Downloading word list from %s", url)
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    words = _decode_word_list(response.text, url)

    if cache is not None:
        try:
            with cache.open("w", encoding="utf-8") as f:
                f.writelines(f"{w}\n" for w in words)
        except OSError:
            logger.debug("Could not write word list cache %s", cache)

    logger.info("Fetched %s words from %s", len(words), url)
    return words
