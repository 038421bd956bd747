"""Tests for move history and time travel."""

import pytest

from timetravel.game import EMPTY_BOARD
from timetravel.history import GameHistory


def play(history, *cells):
    for cell in cells:
        assert history.submit_move(cell)
    return history


def scenario_a():
    # X takes the top row: 0, 1, 2 against O on 4 and 3.
    return play(GameHistory(), 0, 4, 1, 3, 2)


def test_initial_state():
    history = GameHistory()
    assert history.history == [EMPTY_BOARD]
    assert history.current_move == 0
    assert history.player_to_move() == "X"
    assert history.status() == "Next player: X"
    assert history.move_descriptors() == [(0, "Go to game start")]


def test_each_move_changes_exactly_one_cell():
    history = play(GameHistory(), 4, 0, 8, 2)
    for move in range(1, len(history.history)):
        before, after = history.history[move - 1], history.history[move]
        changed = [i for i in range(9) if before[i] != after[i]]
        assert len(changed) == 1
        assert before[changed[0]] is None
        assert after[changed[0]] == ("X" if move % 2 == 1 else "O")


def test_turn_parity_alternates():
    history = GameHistory()
    seen = [history.player_to_move()]
    for cell in (0, 1, 2, 4, 3, 5, 7, 6, 8):
        history.submit_move(cell)
        seen.append(history.player_to_move())
    assert seen == ["X", "O"] * 5


def test_scenario_a_x_wins_top_row():
    history = scenario_a()
    assert history.status() == "Winner: X"
    assert history.winner() == "X"
    assert history.winning_line() == (0, 1, 2)
    assert len(history.history) == 6
    assert history.current_move == 5


def test_scenario_b_jump_back_and_fork():
    history = scenario_a()
    history.jump_to(2)
    board = history.current_board()
    assert board[0] == "X" and board[4] == "O"
    assert sum(c is not None for c in board) == 2
    assert history.status() == "Next player: X"

    assert history.submit_move(2)
    assert len(history.history) == 4
    assert history.current_board()[2] == "X"
    assert history.winner() is None
    assert history.move_descriptors()[-1] == (3, "Go to move #3")


def test_fork_discards_abandoned_future():
    history = scenario_a()
    old = list(history.history)
    history.jump_to(1)
    history.submit_move(8)
    assert len(history.history) == 3
    assert history.history[:2] == old[:2]
    assert history.history[2] not in old[2:]


def test_move_on_won_board_is_noop():
    history = scenario_a()
    board = history.current_board()
    assert history.submit_move(5) is False
    assert history.current_board() == board
    assert len(history.history) == 6


def test_move_on_occupied_cell_is_noop():
    history = play(GameHistory(), 0)
    assert history.submit_move(0) is False
    assert len(history.history) == 2
    assert history.player_to_move() == "O"


def test_jump_past_a_win_is_allowed():
    history = scenario_a()
    history.jump_to(0)
    assert history.status() == "Next player: X"
    history.jump_to(5)
    assert history.status() == "Winner: X"


def test_jump_to_current_move_changes_nothing():
    history = play(GameHistory(), 0, 4)
    before = (list(history.history), history.current_move, history.status())
    history.jump_to(history.current_move)
    assert (list(history.history), history.current_move, history.status()) == before


def test_jump_changes_player_to_move():
    history = play(GameHistory(), 0, 4, 8)
    history.jump_to(1)
    assert history.player_to_move() == "O"
    assert len(history.history) == 4


@pytest.mark.parametrize("move", [-1, 4, 100])
def test_jump_out_of_range_raises(move):
    history = play(GameHistory(), 0, 4, 8)
    with pytest.raises(ValueError):
        history.jump_to(move)
    assert history.current_move == 3


def test_move_descriptors_follow_history_length():
    history = scenario_a()
    assert history.move_descriptors() == [
        (0, "Go to game start"),
        (1, "Go to move #1"),
        (2, "Go to move #2"),
        (3, "Go to move #3"),
        (4, "Go to move #4"),
        (5, "Go to move #5"),
    ]


def test_reset_returns_to_empty_board():
    history = scenario_a()
    history.reset()
    assert history.history == [EMPTY_BOARD]
    assert history.current_move == 0


def test_listeners_notified_on_changes_only():
    history = GameHistory()
    calls = []
    unsubscribe = history.subscribe(lambda h: calls.append(h.current_move))

    history.submit_move(0)
    history.submit_move(0)  # rejected
    history.jump_to(0)
    assert calls == [1, 0]

    unsubscribe()
    history.submit_move(4)
    assert calls == [1, 0]


def test_constructor_takes_no_history():
    forged = [EMPTY_BOARD, ("O", "O", "O") + (None,) * 6]
    with pytest.raises(TypeError):
        GameHistory(history=forged)
    with pytest.raises(TypeError):
        GameHistory(current_move=1)


def test_instances_do_not_share_history():
    first = play(GameHistory(), 0)
    second = GameHistory()
    assert second.history == [EMPTY_BOARD]
    assert len(first.history) == 2
