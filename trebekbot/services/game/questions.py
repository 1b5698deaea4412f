"""Clue acquisition shared by the board and the round controller."""
import logging
import random
from typing import Any, Dict, Optional

from markupsafe import Markup

from trebekbot.errors import EmptyQuestion, ProviderExhausted
from .answers import join_ampersands
from .settings import GameSettings

logger = logging.getLogger(__name__)

VALUE_LADDER = (200, 400, 600, 800, 1000)
DEFAULT_VALUE = 200


def clean_answer(answer: str) -> str:
    """Join '&' with 'and', then drop HTML tags and entities so answers can match."""
    return str(Markup(join_ampersands(answer or '')).striptags())


class QuestionSource:
    def __init__(self, provider, settings: GameSettings):
        self.provider = provider
        self.settings = settings

    def is_usable(self, clue: Optional[Dict[str, Any]]) -> bool:
        if not clue:
            return False
        text = (clue.get('question') or '').strip()
        return bool(text) and not self.settings.is_question_blacklisted(text)

    def prepare(self, clue: Dict[str, Any], request_time: float,
                value: Optional[int] = None, window: Optional[int] = None) -> Dict[str, Any]:
        category = clue.get('category') or {}
        window = self.settings.seconds_to_answer if window is None else window
        return {
            'id': clue.get('id'),
            'question': clue['question'].strip(),
            'answer': clean_answer(clue.get('answer')),
            'value': int(value or clue.get('value') or DEFAULT_VALUE),
            'airdate': clue.get('airdate'),
            'category': {'id': category.get('id', clue.get('category_id')), 'title': category.get('title', '')},
            'expiration': float(request_time) + window,
        }

    def random(self, request_time: float, window: Optional[int] = None) -> Dict[str, Any]:
        """Draw from the unfiltered random pool, retrying unusable clues a bounded number of times."""
        attempts = max(1, self.settings.max_question_retries)
        for attempt in range(1, attempts + 1):
            try:
                clue = self.provider.fetch_random()
            except EmptyQuestion:
                clue = None
            if self.is_usable(clue):
                return self.prepare(clue, request_time, window=window)
            logger.info(f"[question-retry] random draw unusable attempt={attempt}/{attempts}")
        raise ProviderExhausted()

    def from_category(self, category: Dict[str, Any], value: Optional[int], request_time: float,
                      window: Optional[int] = None) -> Dict[str, Any]:
        """Fetch a clue for a board category.

        When the archive returns nothing usable, a random clue is asked
        instead and flagged as a surprise; it keeps the board value.
        """
        span = max(1, int(category.get('clues_count') or 0) // len(VALUE_LADDER))
        try:
            clue = self.provider.fetch_clue(category['id'], value, offset=random.randrange(span))
        except EmptyQuestion:
            clue = None
        if self.is_usable(clue):
            question = self.prepare(clue, request_time, value=value, window=window)
            question['category'] = {'id': category['id'], 'title': category['title']}
            return question

        logger.info(f"[question-retry] category={category.get('title')} value={value} unusable, drawing at random")
        question = self.random(request_time, window=window)
        if value:
            question['value'] = int(value)
        question['surprise'] = True
        return question


def question_identity(question: Dict[str, Any]) -> str:
    """Clue ids can repeat across rounds; the expiration stamp makes each issue unique."""
    return f"{question.get('id')}:{question.get('expiration')}"


def airdate_year(question: Dict[str, Any]) -> Optional[str]:
    airdate = question.get('airdate') or ''
    return airdate[:4] if airdate[:4].isdigit() else None
