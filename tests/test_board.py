"""Tests for board validation, digraphs and dictionary filtering."""

from __future__ import annotations

from itertools import permutations

import pytest

from letterbox.board import (
    Board,
    BoardError,
    BoardSpecError,
    DuplicateLetter,
    EmptySide,
    InvalidCharacter,
    InvalidSideCount,
    UnequalSideLengths,
    sides_from_spec,
)
from letterbox.dictionary import Dictionary


class TestValidation:
    def test_valid_board(self) -> None:
        board = Board.from_sides(["vyq", "fig", "ote", "xlu"])
        assert board.sides == ("vyq", "fig", "ote", "xlu")
        assert "".join(board.letters) == "vyqfigotexlu"

    @pytest.mark.parametrize("sides", [
        ["abc", "def", "ghi"],
        ["abc", "def", "ghi", "jkl", "mno"],
        [],
    ])
    def test_wrong_side_count(self, sides: list[str]) -> None:
        with pytest.raises(InvalidSideCount) as exc:
            Board.from_sides(sides)
        assert exc.value.count == len(sides)
        assert "exactly 4 sides" in str(exc.value)

    def test_empty_side(self) -> None:
        with pytest.raises(EmptySide) as exc:
            Board.from_sides(["abc", "", "def", "ghi"])
        assert exc.value.side == "right"

    def test_unequal_lengths_reports_first_mismatch(self) -> None:
        with pytest.raises(UnequalSideLengths) as exc:
            Board.from_sides(["abc", "def", "gh", "ij"])
        err = exc.value
        assert (err.side_a, err.len_a, err.side_b, err.len_b) == ("top", 3, "left", 2)
        assert "top side has length 3" in str(err)

    def test_invalid_character(self) -> None:
        with pytest.raises(InvalidCharacter) as exc:
            Board.from_sides(["abc", "dEf", "ghi", "jkl"])
        assert exc.value.char == "E"
        assert exc.value.side == "right"

    def test_non_ascii_letter_rejected(self) -> None:
        with pytest.raises(InvalidCharacter):
            Board.from_sides(["abc", "def", "ghé", "jkl"])

    def test_duplicate_on_same_side(self) -> None:
        with pytest.raises(DuplicateLetter) as exc:
            Board.from_sides(["aba", "def", "ghi", "jkl"])
        assert exc.value.letter == "a"
        assert exc.value.sides == ("top",)

    def test_duplicate_across_sides(self) -> None:
        with pytest.raises(DuplicateLetter) as exc:
            Board.from_sides(["abc", "def", "ghi", "jkd"])
        assert exc.value.letter == "d"
        assert exc.value.sides == ("right", "bottom")
        assert "right side and the bottom side" in str(exc.value)

    def test_first_failure_wins(self) -> None:
        # Side count is checked before emptiness
        with pytest.raises(InvalidSideCount):
            Board.from_sides(["ab", "", "cd"])
        # Lengths are checked before characters
        with pytest.raises(UnequalSideLengths):
            Board.from_sides(["aB", "cde", "fgh", "ijk"])
        # Characters are checked as the duplicate scan reaches them
        with pytest.raises(InvalidCharacter):
            Board.from_sides(["ab1", "cda", "efg", "hij"])

    def test_all_errors_are_board_errors(self) -> None:
        for cls in (InvalidSideCount, EmptySide, UnequalSideLengths,
                    InvalidCharacter, DuplicateLetter, BoardSpecError):
            assert issubclass(cls, BoardError)
            assert issubclass(cls, ValueError)


class TestDigraphs:
    def test_exhaustive_two_letter_sides(self, small_board: Board) -> None:
        sides = small_board.sides
        expected = {
            c1 + c2
            for i, j in permutations(range(4), 2)
            for c1 in sides[i]
            for c2 in sides[j]
        }
        assert len(expected) == 48
        assert small_board.digraphs == expected

    def test_same_side_pairs_never_legal(self, puzzle_board: Board) -> None:
        for side in puzzle_board.sides:
            for c1 in side:
                for c2 in side:
                    assert c1 + c2 not in puzzle_board.digraphs

    def test_digraphs_are_directional(self, small_board: Board) -> None:
        assert "ac" in small_board.digraphs
        assert "ca" in small_board.digraphs
        assert "ab" not in small_board.digraphs
        assert "ba" not in small_board.digraphs

    def test_count_for_three_letter_sides(self, puzzle_board: Board) -> None:
        # 12 letters, each pairs with the 9 letters on other sides
        assert len(puzzle_board.digraphs) == 12 * 9


class TestLoading:
    def test_from_spec(self) -> None:
        board = Board.from_spec("VYQ,FIG,OTE,XLU")
        assert board.sides == ("vyq", "fig", "ote", "xlu")

    def test_spec_rejects_other_characters(self) -> None:
        with pytest.raises(BoardSpecError):
            sides_from_spec("VYQ;FIG;OTE;XLU")
        with pytest.raises(BoardSpecError):
            sides_from_spec("VYQ, FIG")

    def test_spec_empty(self) -> None:
        with pytest.raises(BoardSpecError):
            sides_from_spec("")

    def test_spec_wrong_count_reaches_board_validation(self) -> None:
        with pytest.raises(InvalidSideCount):
            Board.from_spec("abc,def")

    def test_from_path(self, tmp_path) -> None:
        path = tmp_path / "board.txt"
        path.write_text("VYQ\nFIG\nOTE\nXLU\n\n")
        board = Board.from_path(path)
        assert board.sides == ("vyq", "fig", "ote", "xlu")

    def test_from_missing_path(self, tmp_path) -> None:
        with pytest.raises(OSError):
            Board.from_path(tmp_path / "missing.txt")

    def test_from_path_invalid_utf8(self, tmp_path) -> None:
        path = tmp_path / "board.txt"
        path.write_bytes(b"vyq\nf\xffg\note\nxlu\n")
        with pytest.raises(BoardError, match="not valid UTF-8"):
            Board.from_path(path)

    def test_boards_compare_by_sides(self) -> None:
        assert Board.from_spec("ab,cd,ef,gh") == Board.from_sides(["ab", "cd", "ef", "gh"])
        assert Board.from_spec("ab,cd,ef,gh") != Board.from_spec("ba,cd,ef,gh")


class TestPlayableDictionary:
    BOARD = ["otx", "gmi", "fle", "aun"]

    def test_one_illegal_digraph_drops_the_word(self) -> None:
        board = Board.from_sides(self.BOARD)
        d = Dictionary.from_strings(["fungi", "glue", "mute", "fig"])
        playable = board.playable_dictionary(d)
        assert [w.word for w in playable.words] == ["glue", "mute"]

    def test_shares_digraph_table(self) -> None:
        board = Board.from_sides(self.BOARD)
        d = Dictionary.from_strings(["fungi", "glue", "mute"])
        playable = board.playable_dictionary(d)
        assert playable.digraph_strings is d.digraph_strings
        assert playable.digraph_to_index is d.digraph_to_index

    def test_digraphs_only_from_surviving_words(self) -> None:
        board = Board.from_sides(self.BOARD)
        d = Dictionary.from_strings(["fungi", "glue", "mute"])
        playable = board.playable_dictionary(d)
        assert playable.digraphs == {"gl", "lu", "ue", "mu", "ut", "te"}
        assert playable.digraphs < board.digraphs

    def test_words_are_shared_not_copied(self, puzzle_board, puzzle_dictionary) -> None:
        playable = puzzle_board.playable_dictionary(puzzle_dictionary)
        for w in playable.words:
            assert any(w is original for original in puzzle_dictionary.words)

    def test_idempotent(self, puzzle_board) -> None:
        d = Dictionary.from_strings(["foxglove", "equity", "fig", "vex", "quiet", "tie"])
        once = puzzle_board.playable_dictionary(d)
        twice = puzzle_board.playable_dictionary(once)
        assert once.words == twice.words
        assert once.digraphs == twice.digraphs

    def test_short_words_have_nothing_to_check(self, small_board: Board) -> None:
        d = Dictionary.from_strings(["a", "ab", "ac"])
        playable = small_board.playable_dictionary(d)
        assert [w.word for w in playable.words] == ["a", "ac"]
