import logging
import random
from typing import Iterable, Sequence

from dailyword.words import EmptyVocabulary, WordSelectionError, WordStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_TRIES = 1000
DEFAULT_MAX_ITERATIONS = 1000

UNKNOWN_SLOTS = frozenset("_.? \0")

KnownPattern = tuple[str | None, ...]


class InvalidRange(WordSelectionError, ValueError):
    pass


class NoWordFound(WordSelectionError, LookupError):
    pass


class NoMatchFound(WordSelectionError, LookupError):
    pass


def parse_pattern(pattern: str | Sequence[str | None]) -> KnownPattern:
    """
    Turn ``"_A_T"`` (or ``[None, "a", None, "t"]``) into a known pattern.

    ``_``, ``.``, ``?``, space, NUL and ``None`` mark unknown slots; any
    other character is a required letter. Raises ``ValueError`` for slots
    that are neither ``None`` nor a single character.
    """
    for slot in pattern:
        if slot is not None and (not isinstance(slot, str) or len(slot) != 1):
            msg = f"Pattern slot {slot!r} is not a single character or None."
            raise ValueError(msg)

    return tuple(
        None if slot is None or slot in UNKNOWN_SLOTS else slot.upper()
        for slot in pattern
    )


def pattern_matches(pattern: KnownPattern, word: str) -> bool:
    if len(pattern) != len(word):
        return False

    return all(
        required is None or required == letter
        for required, letter in zip(pattern, word)
    )


class RandomWordPicker:
    def __init__(
        self,
        store: WordStore,
        rng: random.Random | None = None,
        max_tries: int = DEFAULT_MAX_TRIES,
    ) -> None:
        self.store = store
        self.rng = rng if rng is not None else random.Random()
        self.max_tries = max_tries

    def _draw_length(self, min_length: int, max_length: int) -> int:
        # the upper bound is exclusive unless both bounds are the same
        if min_length == max_length:
            return min_length
        return self.rng.randrange(min_length, max_length)

    def pick(self, min_length: int, max_length: int) -> str:
        if min_length > max_length:
            raise InvalidRange(
                f"min_length ({min_length}) must not exceed max_length ({max_length}).",
            )

        for _ in range(self.max_tries):
            length = self._draw_length(min_length, max_length)
            count = self.store.word_count_for_length(length)
            if count == 0:
                continue

            # nothing has been tried yet within this call, so any index is new
            return self.store.word_at_index(length, self.rng.randrange(count))

        logger.debug(
            "Gave up after %s tries for lengths [%s, %s)",
            self.max_tries,
            min_length,
            max_length,
        )
        raise NoWordFound(
            f"No word with a length in [{min_length}, {max_length}) was found.",
        )


class ConstrainedWordSearch:
    def __init__(
        self,
        store: WordStore,
        picker: RandomWordPicker | None = None,
    ) -> None:
        self.store = store
        self.picker = picker if picker is not None else RandomWordPicker(store)

    def find(
        self,
        pattern: str | Sequence[str | None],
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        skip_words: Iterable[str] = (),
    ) -> str:
        known = parse_pattern(pattern)
        length = len(known)
        skip = {word.upper() for word in skip_words}

        if self.store.word_count_for_length(length) == 0:
            raise EmptyVocabulary(f"There are no {length}-letter words.")

        for _ in range(max_iterations):
            word = self.picker.pick(length, length)
            if word in skip:
                continue

            if pattern_matches(known, word):
                return word

        logger.debug("No match for %r after %s iterations", known, max_iterations)
        raise NoMatchFound(
            f"No word matching the pattern was found in {max_iterations} iterations.",
        )


def find_word(
    store: WordStore,
    pattern: str | Sequence[str | None],
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    skip_words: Iterable[str] = (),
) -> str:
    return ConstrainedWordSearch(store).find(pattern, max_iterations, skip_words)
