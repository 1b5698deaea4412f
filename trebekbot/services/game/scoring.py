from typing import Dict, List

from . import keys


class ScoreKeeper:
    """Per-user running totals. Scores are shared across channels and only
    cleared when a game ends."""

    def __init__(self, store):
        self.store = store

    def get(self, user_id: str) -> int:
        key = keys.user_score(user_id)
        raw = self.store.get(key)
        if raw is None:
            self.store.set(key, 0)
            return 0
        return int(raw)

    def add(self, user_id: str, delta: int) -> int:
        """Apply a signed delta and return the new total."""
        return self.store.incr(keys.user_score(user_id), int(delta))

    def all(self) -> List[Dict]:
        scores: Dict[str, int] = {}
        for key in self.store.scan(keys.USER_SCORE_PATTERN):
            user_id = key[len("user_score:"):]
            raw = self.store.get(key)
            if raw is not None:
                scores[user_id] = int(raw)
        return [{'user_id': user_id, 'score': score} for user_id, score in scores.items()]
