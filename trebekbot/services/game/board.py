import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from trebekbot.errors import BoardPending, NoActiveBoard, NoSuchCategory, NoSuchValue, ProviderExhausted
from . import keys
from .questions import VALUE_LADDER
from .settings import GameSettings

logger = logging.getLogger(__name__)


@dataclass
class TakeResult:
    category: Dict[str, Any]
    value: int
    # True when this take emptied the board
    exhausted: bool = False


def _same_title(left: str, right: str) -> bool:
    return left.strip().strip('`').strip().lower() == right.strip().strip('`').strip().lower()


class BoardManager:
    """Categories and remaining values per channel.

    A board is a JSON list stored under ``current_categories:{channel}``;
    each entry is ``{id, title, values, clues_count}``.
    """

    def __init__(self, store, provider, settings: GameSettings):
        self.store = store
        self.provider = provider
        self.settings = settings

    def get_board(self, channel_id: str) -> Optional[List[Dict[str, Any]]]:
        return self.store.get_json(keys.categories(channel_id)) or None

    def get_or_create_board(self, channel_id: str) -> List[Dict[str, Any]]:
        board = self.get_board(channel_id)
        if board:
            return board
        # The last clue is still open; the hand-off runs when it resolves
        if self.store.exists(keys.board_exhausted(channel_id)):
            raise BoardPending()

        count = self.settings.category_count
        attempts = max(1, self.settings.max_question_retries)
        for attempt in range(1, attempts + 1):
            fetched = self.provider.fetch_categories(count)
            usable = [c for c in fetched if (c.get('title') or '').strip() and int(c.get('clues_count') or 0) > 0]
            if len(usable) >= count:
                break
            logger.info(f"[question-retry] channel={channel_id} got {len(usable)}/{count} usable categories attempt={attempt}")
        else:
            raise ProviderExhausted()

        board = [
            {
                'id': c['id'],
                'title': c['title'].strip(),
                'values': list(VALUE_LADDER),
                'clues_count': int(c.get('clues_count') or 0),
            }
            for c in usable[:count]
        ]
        self.store.set_json(keys.categories(channel_id), board)
        self.store.delete(keys.daily_double(channel_id))
        logger.info(f"[board-created] channel={channel_id} categories={[c['title'] for c in board]}")
        return board

    @staticmethod
    def render(board: List[Dict[str, Any]]) -> str:
        response = "Wonderful. Let's take a look at the categories. They are: \n"
        for category in board:
            values = "`, `".join(str(v) for v in category['values'])
            response += f"`{category['title']}` for `{values}`.\n"
        return response

    def list_remaining(self, channel_id: str) -> str:
        return self.render(self.get_or_create_board(channel_id))

    def _locate(self, channel_id: str, title: str, value: int):
        board = self.get_board(channel_id)
        if not board:
            raise NoActiveBoard()
        category = next((c for c in board if _same_title(c['title'], title)), None)
        if category is None:
            raise NoSuchCategory()
        if int(value) not in category['values']:
            raise NoSuchValue()
        return board, category

    def find_value(self, channel_id: str, title: str, value: int) -> Dict[str, Any]:
        """Return the board category offering ``value`` without taking it."""
        return self._locate(channel_id, title, value)[1]

    def take_value(self, channel_id: str, title: str, value: int) -> TakeResult:
        board, category = self._locate(channel_id, title, value)
        category['values'].remove(int(value))
        if not category['values']:
            board.remove(category)

        if board:
            self.store.set_json(keys.categories(channel_id), board)
            return TakeResult(category=category, value=int(value))

        self.store.delete(keys.categories(channel_id))
        self.store.set(keys.board_exhausted(channel_id), 'true')
        logger.info(f"[board-exhausted] channel={channel_id}")
        return TakeResult(category=category, value=int(value), exhausted=True)
