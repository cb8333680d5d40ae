import pytest
from packages.oracle import MAX_LENGTH, SecretOracle, WRONG_LENGTH, INVALID_ALPHABET
from packages.solvers.counter import QueryCounter
from packages.solvers.errors import CountSumMismatch, LengthDiscoveryError, OracleInvalidAlphabet
from packages.solvers.profiling import check_counts, detect_length, measure_frequencies, single_letter
from packages.solvers.reporting import RecordingReporter


class AlwaysWrongLength:
    def __init__(self):
        self.seen = []

    def evaluate(self, guess):
        self.seen.append(guess)
        return WRONG_LENGTH


def test_detect_length_finds_n_and_base_count():
    rec = RecordingReporter()
    counter = QueryCounter(SecretOracle("BACXIUBACXIUBA"), rec)
    assert detect_length(counter.evaluate) == (14, 3)
    assert counter.count == 14
    assert [g for g, _ in counter.history] == ["B" * k for k in range(1, 15)]
    assert len(rec.of("query")) == 14


def test_detect_length_never_probes_past_max():
    o = AlwaysWrongLength()
    with pytest.raises(LengthDiscoveryError):
        detect_length(o.evaluate)
    assert len(o.seen) == MAX_LENGTH
    assert max(len(g) for g in o.seen) == MAX_LENGTH


def test_detect_length_invalid_alphabet_is_fatal():
    with pytest.raises(OracleInvalidAlphabet):
        detect_length(lambda g: INVALID_ALPHABET)


def test_measure_frequencies_one_probe_per_letter():
    o = SecretOracle("BACXIUBACXIUBA")
    counts = measure_frequencies(o.evaluate, 14, {"B": 3})
    assert counts == {"B": 3, "A": 3, "C": 2, "X": 2, "I": 2, "U": 2}
    assert o.calls == 5


def test_measure_frequencies_sum_check():
    # an oracle that claims one hit for every letter of a length-4 secret
    with pytest.raises(CountSumMismatch) as ei:
        measure_frequencies(lambda g: 1, 4, {"B": 0})
    assert ei.value.length == 4


def test_check_counts_orders_by_alphabet():
    assert list(check_counts({"U": 1, "B": 1}, 2)) == ["B", "A", "C", "X", "I", "U"]


def test_single_letter():
    assert single_letter({"B": 0, "A": 0, "U": 5}) == "U"
    assert single_letter({"B": 1, "A": 0, "U": 5}) is None
