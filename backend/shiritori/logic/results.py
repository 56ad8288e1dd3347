"""
End-of-game rankings and statistics.
"""

from collections import Counter

from shiritori.logic.enums import GameStatus
from shiritori.logic.normalizer import first_chain_character
from shiritori.logic.state import GameState
from shiritori.logic.types import GameResult, GameStats, PlayerRanking


def _game_status(state: GameState) -> GameStatus:
    if state.winner is not None:
        return GameStatus.COMPLETED
    if not state.remaining_ids:
        return GameStatus.DRAW
    return GameStatus.ABANDONED


def _rankings(state: GameState) -> list[PlayerRanking]:
    """
    Order participants for the results screen.

    The winner comes first, then everyone still in the game (more words
    first, ties by turn order), then eliminated participants with the last
    one knocked out ranked highest.
    """
    words_by_author = Counter(state.word_authors)
    records = {record.participant_id: record for record in state.elimination_history}

    survivors = [pid for pid in state.remaining_ids if pid != state.winner]
    survivors.sort(key=lambda pid: -words_by_author[pid])  # stable: keeps turn order on ties
    ordered = [state.winner] if state.winner is not None else []
    ordered += survivors
    ordered += [record.participant_id for record in reversed(state.elimination_history)]

    rankings = []
    for rank, pid in enumerate(ordered, start=1):
        participant = state.config.get_participant(pid)
        if participant is None:
            raise ValueError(f"participant {pid} missing from session config")
        record = records.get(pid)
        rankings.append(
            PlayerRanking(
                participant=participant,
                rank=rank,
                words_contributed=words_by_author[pid],
                elimination_order=record.order if record else None,
                elimination_reason=record.reason if record else None,
                is_winner=pid == state.winner,
            ),
        )
    return rankings


def build_game_stats(state: GameState) -> GameStats:
    return GameStats(
        total_words=len(state.used_words),
        total_turns=state.turn_count,
        longest_word=max(state.used_words, key=len, default=None),
        unique_starting_characters=len({first_chain_character(word) for word in state.used_words}),
    )


def build_game_result(state: GameState) -> GameResult:
    """
    Build the result summary of a finished game.

    Raises:
        ValueError: If the game is still active

    """
    if state.active:
        raise ValueError("cannot build a result for a game in progress")
    return GameResult(
        status=_game_status(state),
        winner=state.winner_participant,
        rankings=_rankings(state),
        stats=build_game_stats(state),
        used_words=list(state.used_words),
    )
