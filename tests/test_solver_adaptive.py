import itertools
import random

import pytest
from packages.oracle import ALPHABET, MAX_LENGTH, SecretOracle, WRONG_LENGTH, INVALID_ALPHABET
from packages.solvers import RecordingReporter, create_solver
from packages.solvers.errors import (CountSumMismatch, LengthDiscoveryError,
                                     OracleInvalidAlphabet, OracleLengthMismatch)

SOLVER_IDS = ["adaptive", "adaptive_sweep"]


def _solve(secret, solver_id="adaptive", **kwargs):
    solver = create_solver(solver_id)
    solver.reset(SecretOracle(secret), **kwargs)
    return solver.run()


def _query_bound(n):
    a = len(ALPHABET)
    return n + a + n * (a - 1)


class FlakyOracle:
    """Answers WRONG_LENGTH (or another sentinel) on chosen call numbers."""

    def __init__(self, secret, bad_calls, sentinel=WRONG_LENGTH):
        self.inner = SecretOracle(secret)
        self.bad_calls = set(bad_calls)
        self.sentinel = sentinel
        self.calls = 0

    def evaluate(self, guess):
        self.calls += 1
        if self.calls in self.bad_calls:
            return self.sentinel
        return self.inner.evaluate(guess)


class ShiftingOracle:
    """Switches to a different secret after `after` calls."""

    def __init__(self, first, second, after):
        self.first, self.second = SecretOracle(first), SecretOracle(second)
        self.after = after
        self.calls = 0

    def evaluate(self, guess):
        self.calls += 1
        return (self.first if self.calls <= self.after else self.second).evaluate(guess)


class LyingOracle:
    """Correct length, but claims one match for every probe."""

    def evaluate(self, guess):
        return WRONG_LENGTH if len(guess) != 4 else 1


def test_concrete_scenario_mixed_letters():
    rec = RecordingReporter()
    res = _solve("BACXIUBACXIUBA", reporter=rec)
    assert res.secret == "BACXIUBACXIUBA"
    assert res.length == 14
    assert res.counts == {"B": 3, "A": 3, "C": 2, "X": 2, "I": 2, "U": 2}
    assert rec.of("phase")[1] == {"name": "length", "length": 14, "base_count": 3}
    assert [g for g, _ in res.history[:14]] == ["B" * k for k in range(1, 15)]
    # every letter is present, so there is no filler and refinement does the work
    assert res.method == "refined"
    assert "group_locate" not in [p["name"] for p in rec.of("phase")]
    assert res.queries <= _query_bound(14)
    assert rec.of("result")[0]["secret"] == "BACXIUBACXIUBA"


def test_concrete_scenario_single_letter():
    rec = RecordingReporter()
    res = _solve("UUUUUU", reporter=rec)
    assert res.secret == "UUUUUU"
    assert res.method == "single_letter"
    assert res.queries == 6 + 5
    names = [p["name"] for p in rec.of("phase")]
    assert "group_locate" not in names and "refine" not in names


@pytest.mark.parametrize("letter", list(ALPHABET))
@pytest.mark.parametrize("n", [1, 2, 7, MAX_LENGTH])
def test_single_letter_short_circuit(letter, n):
    res = _solve(letter * n)
    assert res.secret == letter * n
    assert res.method == "single_letter"
    assert res.queries == n + ALPHABET.index(letter)
    assert all(len(set(g)) == 1 for g, _ in res.history)


def test_group_locator_used_when_a_letter_is_absent():
    res = _solve("BBAACC")
    assert res.secret == "BBAACC"
    assert res.method == "group_located"


@pytest.mark.parametrize("solver_id", SOLVER_IDS)
def test_every_secret_up_to_length_four(solver_id):
    for n in range(1, 5):
        for letters in itertools.product(ALPHABET, repeat=n):
            secret = "".join(letters)
            res = _solve(secret, solver_id)
            assert res.secret == secret
            assert res.queries <= _query_bound(n)


@pytest.mark.parametrize("solver_id", SOLVER_IDS)
def test_random_secrets_recovered_within_bound(solver_id):
    rng = random.Random(2024)
    for _ in range(300):
        n = rng.randint(1, MAX_LENGTH)
        pool = rng.sample(ALPHABET, rng.randint(1, len(ALPHABET)))
        secret = "".join(rng.choice(pool) for _ in range(n))
        res = _solve(secret, solver_id)
        assert res.secret == secret
        assert res.queries <= _query_bound(n)
        assert max(len(g) for g, _ in res.history) <= MAX_LENGTH
        assert res.method in {"single_letter", "group_located", "refined"}


@pytest.mark.parametrize("secret", ["B", "U", "A" * MAX_LENGTH, "BACXIUBACXIUBACXIU", "IUXCAB"])
def test_length_boundaries(secret):
    res = _solve(secret)
    assert res.secret == secret
    assert all(len(g) <= MAX_LENGTH for g, _ in res.history)


def test_verify_spends_one_query_and_matches_everywhere():
    plain = _solve("CABXXU")
    checked = _solve("CABXXU", verify=True)
    assert checked.secret == "CABXXU"
    assert checked.queries == plain.queries + 1
    assert checked.history[-1] == ("CABXXU", 6)


def test_recovers_after_one_length_mismatch():
    solver = create_solver("adaptive")
    oracle = FlakyOracle("BACX", bad_calls=[5])
    solver.reset(oracle)
    res = solver.run()
    assert res.secret == "BACX"
    # four discovery probes, one rejected probe, four to re-discover, then the retry
    assert [g for g, _ in res.history[:10]] == (
        ["B", "BB", "BBB", "BBBB", "AAAA", "B", "BB", "BBB", "BBBB", "AAAA"])


def test_repeated_length_mismatch_is_fatal():
    rec = RecordingReporter()
    solver = create_solver("adaptive")
    solver.reset(FlakyOracle("BACX", bad_calls=[5, 10]), reporter=rec)
    with pytest.raises(OracleLengthMismatch):
        solver.run()
    assert rec.of("failure") and not rec.of("result")


def test_secret_length_change_is_fatal():
    solver = create_solver("adaptive")
    solver.reset(ShiftingOracle("BACX", "BACXI", after=4))
    with pytest.raises(OracleLengthMismatch, match="changed from 4 to 5"):
        solver.run()


def test_invalid_alphabet_response_is_fatal():
    solver = create_solver("adaptive")
    solver.reset(FlakyOracle("BACX", bad_calls=[5], sentinel=INVALID_ALPHABET))
    with pytest.raises(OracleInvalidAlphabet):
        solver.run()


def test_inconsistent_counts_are_fatal():
    rec = RecordingReporter()
    solver = create_solver("adaptive")
    solver.reset(LyingOracle(), reporter=rec)
    with pytest.raises(CountSumMismatch):
        solver.run()
    assert "CountSumMismatch" in rec.of("failure")[0]["error"]


def test_no_valid_length_is_fatal():
    solver = create_solver("adaptive")
    solver.reset(FlakyOracle("B", bad_calls=range(1, 100)))
    with pytest.raises(LengthDiscoveryError):
        solver.run()


def test_run_requires_reset():
    with pytest.raises(RuntimeError):
        create_solver("adaptive").run()
