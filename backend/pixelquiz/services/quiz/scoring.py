from typing import Dict, Iterable, List, Optional

from pixelquiz.models import Player, Question

RANKING_SIZE = 10


def record_answer(player: Player, letter: str, question: Question, award: int, now_ms: int) -> bool:
    """Lock in a player's answer for the current question.

    Returns False when the player already answered; the first answer is final
    and only a correct first answer scores.
    """
    if player.current_answer is not None:
        return False
    player.current_answer = letter
    player.answered_at = now_ms
    if letter == question.correct_answer:
        player.score += award
    return True


def compute_results(players: Iterable[Player], question: Optional[Question], letters: List[str]) -> dict:
    """Aggregate answers and rank players. Reads only; scores are not touched."""
    players = list(players)
    correct = question.correct_answer if question else None
    stats: Dict[str, int] = {letter: 0 for letter in letters}
    for p in players:
        if p.current_answer:
            stats[p.current_answer] = stats.get(p.current_answer, 0) + 1

    # sorted() is stable, so ties keep join order
    ranked = sorted(players, key=lambda p: p.score, reverse=True)[:RANKING_SIZE]
    rankings = [
        {
            'id': p.id,
            'name': p.name,
            'score': p.score,
            'answer': p.current_answer,
            'isCorrect': p.current_answer is not None and p.current_answer == correct,
        }
        for p in ranked
    ]
    return {
        'stats': stats,
        'correctAnswer': correct,
        'rankings': rankings,
        'totalPlayers': len(players),
    }
