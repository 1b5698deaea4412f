from trebekbot.utils import currency_format, sort_scores
from . import keys
from .names import NameResolver
from .scoring import ScoreKeeper

NO_SCORES = "There are no scores yet!"


class LeaderboardService:
    """Ranked score listings, cached for five minutes per direction."""

    def __init__(self, store, scores: ScoreKeeper, names: NameResolver):
        self.store = store
        self.scores = scores
        self.names = names

    def top(self, n: int = 10, use_cache: bool = True) -> str:
        return self._render('desc', n, use_cache)

    def bottom(self, n: int = 10, use_cache: bool = True) -> str:
        return self._render('asc', n, use_cache)

    def rankings(self, order: str = 'desc', n: int = 10):
        return sort_scores(self.scores.all(), order)[:n]

    def _render(self, order: str, n: int, use_cache: bool) -> str:
        cache_key = keys.board_cache(order)
        if use_cache:
            cached = self.store.get(cache_key)
            if cached is not None:
                return cached

        lines = [
            f"{i}. {self.names.display_name(leader['user_id'])}: {currency_format(leader['score'])}"
            for i, leader in enumerate(self.rankings(order, n), 1)
        ]
        if lines:
            which = 'top' if order == 'desc' else 'bottom'
            response = f"Let's take a look at the {which} scores:\n\n" + "\n".join(lines)
        else:
            response = NO_SCORES
        self.store.setex(cache_key, keys.LEADERBOARD_TTL, response)
        return response

    def reset(self) -> None:
        """Wipe every board, question, marker and score."""
        self.store.flush()

    def close_session(self, channel_id: str = None) -> str:
        """Final scores, then a clean slate."""
        text = "And that's it for this session of Jeopardy, everyone.\n\n" + self.top(use_cache=False)
        self.reset()
        return text
