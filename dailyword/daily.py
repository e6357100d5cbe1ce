import logging
from dataclasses import dataclass
from datetime import date, datetime

from tzlocal import get_localzone

from dailyword.words import EmptyVocabulary, WordStore

logger = logging.getLogger(__name__)

# Changing the seed or the epoch changes every daily word from then on.
SEED = 0xBEEF
EPOCH = date(2022, 1, 22)
STANDARD_LENGTH = 5

INT32_MAX = 2**31 - 1
_MSEED = 161803398


def today() -> date:
    return datetime.now(get_localzone()).date()


def _as_date(day: date) -> date:
    if isinstance(day, datetime):
        return day.date()
    return day


def puzzle_number(day: date | None = None, epoch: date = EPOCH) -> int:
    """Puzzle 1 falls on the epoch; dates before it give zero or less."""
    if day is None:
        day = today()

    return (_as_date(day) - _as_date(epoch)).days + 1


class CompatRandom:
    """
    Knuth's subtractive generator, seeded the same way as the seeded
    ``System.Random`` of .NET, so a given seed yields the same stream of
    draws on both platforms.
    """

    def __init__(self, seed: int) -> None:
        seed_array = [0] * 56

        subtraction = INT32_MAX if seed == -(2**31) else abs(seed)
        mj = _MSEED - subtraction
        seed_array[55] = mj
        mk = 1

        ii = 0
        for _ in range(1, 55):
            ii += 21
            if ii >= 55:
                ii -= 55

            seed_array[ii] = mk
            mk = mj - mk
            if mk < 0:
                mk += INT32_MAX

            mj = seed_array[ii]

        for _ in range(1, 5):
            for i in range(1, 56):
                n = i + 30
                if n >= 55:
                    n -= 55

                seed_array[i] -= seed_array[1 + n]
                if seed_array[i] < 0:
                    seed_array[i] += INT32_MAX

        self._seed_array = seed_array
        self._inext = 0
        self._inextp = 21

    def _internal_sample(self) -> int:
        inext = self._inext + 1
        if inext >= 56:
            inext = 1

        inextp = self._inextp + 1
        if inextp >= 56:
            inextp = 1

        value = self._seed_array[inext] - self._seed_array[inextp]
        if value == INT32_MAX:
            value -= 1
        if value < 0:
            value += INT32_MAX

        self._seed_array[inext] = value
        self._inext = inext
        self._inextp = inextp
        return value

    def sample(self) -> float:
        return self._internal_sample() * (1.0 / INT32_MAX)

    def next_in_range(self, min_value: int, max_value: int) -> int:
        if min_value > max_value:
            msg = f"min_value ({min_value}) must not exceed max_value ({max_value})."
            raise ValueError(msg)

        span = max_value - min_value
        if span > INT32_MAX:
            msg = f"Range of {span} is too wide."
            raise ValueError(msg)

        return int(self.sample() * span) + min_value


@dataclass(frozen=True)
class DailyWordSelector:
    seed: int = SEED
    epoch: date = EPOCH

    def puzzle_number(self, day: date | None = None) -> int:
        return puzzle_number(day, self.epoch)

    def word_index(self, count: int, day: date | None = None) -> int:
        if count <= 0:
            raise EmptyVocabulary("There are no words to choose from.")

        number = self.puzzle_number(day)
        logger.debug("Puzzle number %s (seed %#x)", number, self.seed)

        # the last of `number` draws is the day's index
        rng = CompatRandom(self.seed)
        index = 0
        for _ in range(number):
            index = rng.next_in_range(0, count - 1)

        return index

    def word_of_the_day(
        self,
        store: WordStore,
        length: int = STANDARD_LENGTH,
        day: date | None = None,
    ) -> str:
        count = store.word_count_for_length(length)
        if count == 0:
            raise EmptyVocabulary(f"There are no {length}-letter words.")

        return store.word_at_index(length, self.word_index(count, day))


DEFAULT_SELECTOR = DailyWordSelector()


def word_of_the_day(
    store: WordStore,
    length: int = STANDARD_LENGTH,
    day: date | None = None,
) -> str:
    return DEFAULT_SELECTOR.word_of_the_day(store, length, day)
