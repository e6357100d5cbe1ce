from datetime import date, datetime, timedelta

import pytest

from dailyword import daily
from dailyword.daily import CompatRandom, DailyWordSelector, puzzle_number
from dailyword.words import EmptyVocabulary, WordStore

EPOCH = date(2022, 1, 22)


@pytest.fixture
def store() -> WordStore:
    return WordStore(
        [
            "apple", "bread", "crane", "drive", "eagle", "flame", "grape",
            "house", "irony", "joker", "knife", "lemon", "mango", "night",
        ],
    )


def test_epoch_is_puzzle_one() -> None:
    assert puzzle_number(EPOCH) == 1
    assert puzzle_number(date(2022, 1, 23)) == 2


@pytest.mark.parametrize("k", [0, 1, 30, 365, 1000])
def test_puzzle_number_counts_days(k: int) -> None:
    assert puzzle_number(EPOCH + timedelta(days=k)) == k + 1


def test_puzzle_number_before_epoch() -> None:
    assert puzzle_number(date(2022, 1, 21)) == 0
    assert puzzle_number(date(2021, 1, 22)) == -364


def test_puzzle_number_ignores_time_of_day() -> None:
    assert puzzle_number(datetime(2022, 1, 23, 23, 59)) == 2


def test_puzzle_number_custom_epoch() -> None:
    assert puzzle_number(date(2024, 3, 5), epoch=date(2024, 3, 1)) == 5


def test_puzzle_number_defaults_to_today(monkeypatch) -> None:
    monkeypatch.setattr(daily, "today", lambda: date(2022, 2, 1))
    assert puzzle_number() == 11


def test_generator_is_reproducible() -> None:
    a = CompatRandom(daily.SEED)
    b = CompatRandom(daily.SEED)
    assert [a.next_in_range(0, 10_000) for _ in range(50)] == [
        b.next_in_range(0, 10_000) for _ in range(50)
    ]


def test_generator_depends_on_seed() -> None:
    a = CompatRandom(1)
    b = CompatRandom(2)
    assert [a.next_in_range(0, 1_000_000) for _ in range(10)] != [
        b.next_in_range(0, 1_000_000) for _ in range(10)
    ]


def test_generator_stays_in_range() -> None:
    rng = CompatRandom(daily.SEED)
    for _ in range(2000):
        sample = rng.sample()
        assert 0.0 <= sample < 1.0

    for _ in range(2000):
        assert 3 <= rng.next_in_range(3, 9) < 9


def test_generator_equal_bounds() -> None:
    rng = CompatRandom(daily.SEED)
    assert rng.next_in_range(0, 0) == 0
    assert rng.next_in_range(7, 7) == 7


def test_generator_rejects_swapped_bounds() -> None:
    with pytest.raises(ValueError):
        CompatRandom(daily.SEED).next_in_range(5, 4)


def test_negative_seed_matches_positive() -> None:
    a = CompatRandom(-1234)
    b = CompatRandom(1234)
    assert [a.next_in_range(0, 500) for _ in range(20)] == [
        b.next_in_range(0, 500) for _ in range(20)
    ]


def test_word_of_the_day_is_deterministic(store: WordStore) -> None:
    day = date(2023, 6, 1)
    words = {daily.word_of_the_day(store, 5, day) for _ in range(5)}
    words.add(DailyWordSelector().word_of_the_day(store, 5, day))
    words.add(DailyWordSelector().word_of_the_day(WordStore(store), 5, day))
    assert len(words) == 1


@pytest.mark.parametrize("day", [date(2022, 1, 22), date(2022, 3, 14), date(2024, 2, 29)])
def test_word_of_the_day_advances_generator(store: WordStore, day: date) -> None:
    count = store.word_count_for_length(5)
    rng = CompatRandom(daily.SEED)
    index = 0
    for _ in range(puzzle_number(day)):
        index = rng.next_in_range(0, count - 1)

    assert daily.word_of_the_day(store, 5, day) == store.word_at_index(5, index)


def test_the_last_word_is_never_drawn(store: WordStore) -> None:
    count = store.word_count_for_length(5)
    selector = DailyWordSelector()
    indices = {
        selector.word_index(count, EPOCH + timedelta(days=k)) for k in range(200)
    }
    assert max(indices) <= count - 2


def test_two_words_always_pick_the_first() -> None:
    store = WordStore(["alpha", "bravo"])
    for k in range(20):
        assert daily.word_of_the_day(store, 5, EPOCH + timedelta(days=k)) == "ALPHA"


def test_single_word() -> None:
    store = WordStore(["alpha"])
    assert daily.word_of_the_day(store, 5, date(2030, 1, 1)) == "ALPHA"


def test_dates_before_epoch_use_first_word(store: WordStore) -> None:
    assert daily.word_of_the_day(store, 5, date(2020, 1, 1)) == "APPLE"
    assert daily.word_of_the_day(store, 5, date(2022, 1, 21)) == "APPLE"


def test_seed_and_epoch_can_be_overridden(store: WordStore) -> None:
    shifted = DailyWordSelector(epoch=date(2022, 1, 21))
    assert shifted.puzzle_number(EPOCH) == 2
    assert shifted.word_of_the_day(store, 5, EPOCH) == DailyWordSelector().word_of_the_day(
        store,
        5,
        date(2022, 1, 23),
    )

    count = store.word_count_for_length(5)
    rng = CompatRandom(42)
    expected = [rng.next_in_range(0, count - 1) for _ in range(3)][-1]
    assert DailyWordSelector(seed=42).word_index(count, date(2022, 1, 24)) == expected


def test_selector_is_immutable() -> None:
    with pytest.raises(AttributeError):
        DailyWordSelector().seed = 1  # type: ignore[misc]


def test_empty_vocabulary(store: WordStore) -> None:
    with pytest.raises(EmptyVocabulary):
        daily.word_of_the_day(store, 8, date(2023, 1, 1))

    with pytest.raises(EmptyVocabulary):
        daily.word_of_the_day(store, 8, date(2000, 1, 1))


def test_defaults_to_today(store: WordStore, monkeypatch) -> None:
    monkeypatch.setattr(daily, "today", lambda: date(2022, 5, 5))
    assert daily.word_of_the_day(store) == daily.word_of_the_day(
        store,
        5,
        date(2022, 5, 5),
    )


def test_generator_reference_sequence() -> None:
    rng = CompatRandom(0)
    assert [rng._internal_sample() for _ in range(3)] == [
        1559595546,
        1755192844,
        1649316166,
    ]


def test_generator_reference_draws() -> None:
    rng = CompatRandom(0)
    assert [rng.next_in_range(0, 10) for _ in range(3)] == [7, 8, 7]


def test_pinned_words_of_the_day() -> None:
    store = WordStore(
        [
            "apple", "bread", "crane", "drive", "eagle", "flame",
            "grape", "house", "irony", "joker", "knife",
        ],
    )
    selector = DailyWordSelector(seed=0)
    assert selector.word_of_the_day(store, 5, date(2022, 1, 22)) == "HOUSE"
    assert selector.word_of_the_day(store, 5, date(2022, 1, 23)) == "IRONY"
    assert selector.word_of_the_day(store, 5, date(2022, 1, 24)) == "HOUSE"


def test_published_constants() -> None:
    assert daily.SEED == 0xBEEF
    assert daily.EPOCH == date(2022, 1, 22)
    assert daily.STANDARD_LENGTH == 5
    assert DailyWordSelector() == DailyWordSelector(seed=0xBEEF, epoch=date(2022, 1, 22))
