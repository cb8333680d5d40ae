import pytest
from packages.solvers.errors import CountSumMismatch, StateInvariantError
from packages.solvers.state import (SolverState, initial_candidate, iter_positions, mask_of,
                                    popcount, split_mask)


def test_initial_candidate_blocks_by_count():
    counts = {"B": 3, "A": 3, "C": 2, "X": 2, "I": 2, "U": 2}
    assert initial_candidate(counts, 14) == "BBBAAACCXXIIUU"


@pytest.mark.parametrize("counts,n", [({"B": 2}, 3), ({"B": 2, "A": 2}, 3)])
def test_initial_candidate_rejects_counts_not_summing_to_length(counts, n):
    with pytest.raises(CountSumMismatch):
        initial_candidate(counts, n)


def test_initial_candidate_ties_follow_alphabet_order():
    counts = {"B": 1, "A": 3, "C": 3, "X": 0, "I": 0, "U": 1}
    assert initial_candidate(counts, 8) == "AAACCCBU"


def test_masks_are_not_width_capped():
    m = mask_of([0, 40, 63])
    assert popcount(m) == 3
    assert list(iter_positions(m)) == [0, 40, 63]


def test_split_mask_lower_half_by_index():
    lower, upper = split_mask(mask_of([0, 2, 5, 7, 9]))
    assert list(iter_positions(lower)) == [0, 2]
    assert list(iter_positions(upper)) == [5, 7, 9]
    # a single position cannot be split
    assert split_mask(mask_of([4])) == (0, mask_of([4]))


def test_state_rejects_counts_that_do_not_sum_to_length():
    with pytest.raises(CountSumMismatch):
        SolverState({"B": 2, "A": 1}, 4)


def test_confirm_position_updates_remaining_and_masks():
    st = SolverState({"B": 2, "A": 1, "C": 1}, 4)
    assert st.guess() == "BBAC"
    assert st.absent_letters() == ["X", "I", "U"]
    assert st.masks["X"] == 0

    st.confirm_position(2, "B")
    assert st.remaining["B"] == 1
    assert st.candidate[2] == "B"
    assert not st.could_be("A", 2) and not st.could_be("C", 2)
    assert st.open_positions() == [0, 1, 3]
    st.check_invariants()

    with pytest.raises(StateInvariantError):
        st.confirm_position(2, "A")          # already confirmed
    st.confirm_position(0, "A")
    with pytest.raises(StateInvariantError):
        st.confirm_position(1, "A")          # no A left


def test_possible_letters_priority_and_elimination():
    st = SolverState({"B": 1, "A": 2, "C": 1}, 4)
    assert st.possible_letters(3) == ["A", "B", "C"]
    st.eliminate("A", 3)
    assert st.possible_letters(3) == ["B", "C"]
    assert st.possible_letters(0) == ["A", "B", "C"]


def test_assign_mask_and_invariants():
    st = SolverState({"B": 3, "U": 2}, 5)
    assert st.assign_mask(mask_of([1, 3, 4]), "B") == [1, 3, 4]
    assert st.remaining == {"B": 0, "A": 0, "C": 0, "X": 0, "I": 0, "U": 2}
    st.check_invariants()
    assert not st.is_solved()
    st.assign_mask(st.open_mask(), "U")
    assert st.is_solved() and st.guess() == "UBUBB"
    st.check_invariants()


def test_check_invariants_catches_drift():
    st = SolverState({"B": 1, "A": 1}, 2)
    st.remaining["A"] = 0   # bypass the mutators
    with pytest.raises(StateInvariantError):
        st.check_invariants()
