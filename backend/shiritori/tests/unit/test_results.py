import pytest

from shiritori.logic.enums import EliminationReason, GameStatus
from shiritori.logic.game import ShiritoriGame
from shiritori.logic.results import build_game_result, build_game_stats
from shiritori.tests.conftest import create_config, create_game_state


class TestBuildGameResult:
    def test_completed_game_rankings(self):
        game = ShiritoriGame(create_config(("a", "b", "c")))
        game.submit_word("りんご", "a")
        game.skip_turn(EliminationReason.TIMEOUT)  # b out
        game.submit_word("ごりら", "c")
        game.submit_word("らいおん", "a")  # a out, c wins

        result = game.result()

        assert result.status == GameStatus.COMPLETED
        assert result.winner.id == "c"
        assert [r.participant.id for r in result.rankings] == ["c", "a", "b"]
        assert [r.rank for r in result.rankings] == [1, 2, 3]
        assert result.rankings[0].is_winner
        assert result.rankings[0].words_contributed == 1
        assert result.rankings[1].elimination_order == 2
        assert result.rankings[1].elimination_reason == EliminationReason.ENDS_WITH_N
        assert result.rankings[2].elimination_reason == EliminationReason.TIMEOUT
        assert result.used_words == ["りんご", "ごりら"]

    def test_draw(self):
        game = ShiritoriGame(create_config(("solo",)))
        game.submit_word("みかん", "solo")
        result = game.result()
        assert result.status == GameStatus.DRAW
        assert result.winner is None

    def test_abandoned_ranks_survivors_by_words(self):
        game = ShiritoriGame(create_config(("a", "b", "c")))
        game.submit_word("りんご", "a")
        game.submit_word("ごりら", "b")
        game.submit_word("らっぱ", "c")
        game.submit_word("ぱせり", "a")
        game.end_game()

        result = game.result()

        assert result.status == GameStatus.ABANDONED
        assert [r.participant.id for r in result.rankings] == ["a", "b", "c"]
        assert result.rankings[0].words_contributed == 2
        assert not any(r.is_winner for r in result.rankings)

    def test_active_game_raises(self):
        with pytest.raises(ValueError, match="in progress"):
            build_game_result(create_game_state())


class TestBuildGameStats:
    def test_stats(self):
        state = create_game_state(used_words=["りんご", "ごりら", "らっぱ", "ぱいなっぷる"])
        stats = build_game_stats(state)
        assert stats.total_words == 4
        assert stats.longest_word == "ぱいなっぷる"
        assert stats.unique_starting_characters == 4

    def test_empty_game(self):
        stats = build_game_stats(create_game_state())
        assert stats.total_words == 0
        assert stats.longest_word is None
        assert stats.unique_starting_characters == 0
