import random

from dotpop.board_state import BoardState
from dotpop.events.bus import EVENT_GRAVITY_APPLIED
from dotpop.systems.board_ops import GravityMove, compute_gravity_moves
from tests.helpers import column_counts, make_board, record_events

R, G, B, Y = 'red', 'green', 'blue', 'yellow'


def test_column_compacts_preserving_order():
    state = make_board([
        [Y],
        [G],
        [B],
        [R],
    ])
    state.remove_cells([(0, 0), (0, 2)])
    moves = state.compact_columns()
    assert state.snapshot() == ((B, Y, None, None),)
    assert moves == [
        GravityMove(source=(0, 1), target=(0, 0), color=B),
        GravityMove(source=(0, 3), target=(0, 1), color=Y),
    ]


def test_tokens_already_resting_do_not_move():
    state = make_board([
        [R, G],
        [B, R],
        [G, B],
    ])
    state.remove_cells([(0, 2), (1, 1)])
    moves = state.compact_columns()
    assert moves == [GravityMove(source=(1, 2), target=(1, 1), color=G)]
    assert state.snapshot() == ((G, B, None), (B, G, None))


def test_compaction_without_gaps_is_a_noop():
    state = make_board([
        [R, G],
        [B, R],
    ])
    before = state.snapshot()
    assert state.compact_columns() == []
    assert state.snapshot() == before


def test_compaction_is_computed_from_current_state_only():
    state = make_board([
        [R],
        [G],
        [B],
    ])
    state.remove_cells([(0, 0)])
    state.compact_columns()
    state.remove_cells([(0, 0)])
    moves = state.compact_columns()
    assert moves == [GravityMove(source=(0, 1), target=(0, 0), color=R)]
    assert state.snapshot() == ((R, None, None),)


def test_compaction_keeps_bottom_to_top_sequence_on_random_boards():
    for seed in range(15):
        state = BoardState(6, 7, [R, G, B, Y], rng=random.Random(seed))
        rng = random.Random(seed)
        doomed = {(rng.randrange(6), rng.randrange(7)) for _ in range(15)}
        state.remove_cells(doomed)
        before = state.snapshot()
        state.compact_columns()
        after = state.snapshot()
        assert column_counts(before) == column_counts(after)
        for old, new in zip(before, after):
            survivors = [color for color in old if color is not None]
            assert list(new[:len(survivors)]) == survivors
            assert all(color is None for color in new[len(survivors):])


def test_gravity_event_lists_touched_columns():
    state = make_board([
        [R, G, B],
        [B, R, G],
    ])
    events = record_events(state.event_bus, EVENT_GRAVITY_APPLIED)
    state.remove_cells([(0, 0), (2, 0)])
    state.compact_columns()
    assert len(events) == 1
    _, payload = events[0]
    assert payload['columns'] == [0, 2]
    assert len(payload['moves']) == 2


def test_compute_gravity_moves_does_not_mutate():
    state = make_board([
        [R],
        [G],
    ])
    state.remove_cells([(0, 0)])
    before = state.snapshot()
    assert compute_gravity_moves(state.world) == [GravityMove(source=(0, 1), target=(0, 0), color=R)]
    assert state.snapshot() == before
