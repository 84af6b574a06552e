from tictactoe.models import GameRecord, Move, decode_moves, encode_moves


def test_encode_moves_format():
    moves = [Move(0, 0, "X"), Move(0, 1, "O"), Move(1, 1, "X")]
    assert encode_moves(moves) == "0-0-X;0-1-O;1-1-X"


def test_encode_empty():
    assert encode_moves([]) == ""


def test_decode_empty():
    assert decode_moves("") == []


def test_round_trip():
    moves = [Move(2, 2, "O"), Move(1, 0, "X"), Move(0, 2, "O")]
    assert decode_moves(encode_moves(moves)) == moves


def test_single_move_round_trip():
    moves = [Move(1, 2, "X")]
    assert decode_moves(encode_moves(moves)) == moves


def test_decode_skips_malformed_tokens():
    assert decode_moves("1-2;0-0-X;1-1-1-O") == [Move(0, 0, "X")]


def test_decode_skips_empty_player():
    assert decode_moves("0-0-;1-1-O") == [Move(1, 1, "O")]


def test_decode_non_numeric_becomes_zero():
    assert decode_moves("a-b-X") == [Move(0, 0, "X")]


def test_decode_uses_first_character_of_player():
    assert decode_moves("2-1-Oops") == [Move(2, 1, "O")]


def test_game_record_defaults():
    record = GameRecord("PvP", "Player 1")
    assert record.moves == []
    assert record.timestamp == ""
    other = GameRecord("PvAI", "AI")
    other.moves.append(Move(0, 0, "X"))
    assert record.moves == []