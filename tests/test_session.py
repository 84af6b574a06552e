import pytest

from tictactoe.app import App
from tictactoe.board import GameMode
from tictactoe.database import DatabaseManager
from tictactoe.models import GameRecord, Move
from tictactoe.session import GameSession, Replay, format_history


@pytest.fixture
def db(tmp_path):
    with DatabaseManager(tmp_path / "games.db") as manager:
        yield manager


@pytest.fixture
def app(db):
    return App(db)


@pytest.fixture
def session(app):
    return GameSession(app)


def test_replay_integration(session, app):
    app.game_history.clear()
    app.game_history.append(
        GameRecord("PvP", "Player 1", [Move(0, 0, "X"), Move(0, 1, "O"), Move(1, 1, "X")])
    )
    choices = session.replay_choices()
    assert len(choices) == 2
    assert choices == ["Select a game...", "Game 1"]


def test_replay_choices_empty(session):
    assert session.replay_choices() == []


def test_ai_integration(session):
    board = session.start_game(GameMode.PVAI)
    assert board.play(0, 0)
    count_o = sum(cell == "O" for row in board.board for cell in row)
    assert count_o == 1
    assert board.current_player == "X"
    assert [m.player for m in session.moves] == ["X", "O"]


def test_pvp_win_is_recorded(db):
    password = "password"
    app = App(db)
    app.sign_up("alice", password)
    session = GameSession(app)
    board = session.start_game(GameMode.PVP)
    for row, col in [(0, 0), (1, 0), (0, 1), (1, 1), (0, 2)]:
        assert board.play(row, col)
    assert session.last_message == "Player 1 wins!"
    record = app.game_history[-1]
    assert record.mode == "PvP"
    assert record.winner == "Player 1"
    assert len(record.moves) == 5
    assert session.moves == []
    assert board.board == [[" "] * 3 for _ in range(3)]
    stored = db.load_game_history("alice")
    assert stored[0].moves == record.moves
    assert app.metrics.player_wins == 1
    assert app.metrics.total_games == 1


def test_finish_draw(session, app):
    session.start_game(GameMode.PVAI)
    assert session.finish("Draw") == "It's a draw!"
    assert app.game_history[-1].mode == "PvAI"
    assert app.metrics.draws == 1


@pytest.mark.parametrize("index", [0, -1, 2])
def test_select_replay_bad_index(session, app, index):
    app.game_history.append(GameRecord("PvP", "Draw", [Move(0, 0, "X")]))
    with pytest.raises(ValueError, match="valid game number"):
        session.select_replay(index)


def test_select_replay_without_moves(session, app):
    app.game_history.append(GameRecord("PvP", "Draw", []))
    with pytest.raises(ValueError, match="No move data"):
        session.select_replay(1)


def test_select_replay_returns_moves(session, app):
    moves = [Move(0, 0, "X"), Move(2, 2, "O")]
    app.game_history.append(GameRecord("PvP", "Draw", moves))
    replay = session.select_replay(1)
    assert replay.moves == moves


def test_replay_steps():
    moves = [Move(0, 0, "X"), Move(1, 1, "O")]
    replay = Replay(moves)
    assert replay.step() == moves[0]
    assert replay.grid[0][0] == "X"
    assert replay.step() == moves[1]
    assert replay.grid[1][1] == "O"
    assert replay.step() is None
    assert replay.done


def test_replay_iter_yields_grid_per_move():
    moves = [Move(0, 0, "X"), Move(0, 1, "O"), Move(1, 1, "X")]
    grids = list(Replay(moves))
    assert len(grids) == 3
    assert grids[-1] == [["X", "O", " "], [" ", "X", " "], [" ", " ", " "]]
    assert grids[0] == [["X", " ", " "], [" ", " ", " "], [" ", " ", " "]]


def test_format_history():
    assert format_history([]) == ["No games have been played yet."]
    lines = format_history([GameRecord("PvAI", "AI", [], "then")])
    assert lines == ["Game 1: Mode: PvAI, Winner: AI, Time: then"]