"""Single active question per channel.

States: idle -> question active -> (answered | expired) -> idle.

Nothing here takes a lock. Concurrent requests are kept honest by
short-lived markers in the state store: shush flags swallow duplicate
triggers, ``claim`` gives each player one attempt and lets exactly one
request resolve a question, and the expiration callback compares the
question identity it was scheduled for with whatever is current.
"""
import logging
import random
from typing import Any, Callable, Dict, Optional

from trebekbot.errors import AlreadyAnswered
from trebekbot.utils import currency_format
from . import keys, quotes
from .answers import is_correct, is_question_format
from .board import BoardManager
from .questions import QuestionSource, airdate_year, question_identity
from .scoring import ScoreKeeper
from .settings import GameSettings

logger = logging.getLogger(__name__)

# A daily double may fire once per board; a board never outlives a day of play
DAILY_DOUBLE_TTL = 60 * 60 * 24


class RoundController:
    def __init__(self, store, board: BoardManager, questions: QuestionSource, scores: ScoreKeeper,
                 settings: GameSettings, schedule_expiration: Callable[[str, str, float], Any],
                 on_board_exhausted: Callable[[str], str]):
        self.store = store
        self.board = board
        self.questions = questions
        self.scores = scores
        self.settings = settings
        self.schedule_expiration = schedule_expiration
        self.on_board_exhausted = on_board_exhausted

    def current(self, channel_id: str) -> Optional[Dict[str, Any]]:
        return self.store.get_json(keys.current_question(channel_id))

    def issue_question(self, channel_id: str, request_time: float, category: Optional[str] = None,
                       value: Optional[int] = None, pick_random: bool = False) -> str:
        """Ask a new clue, either at random or from the board.

        Returns an empty reply while the question shush flag is up so two
        near-simultaneous requests don't both ask a clue.
        """
        if self.store.exists(keys.shush_question(channel_id)):
            return ""

        if pick_random:
            question = self.questions.random(request_time)
        else:
            if category is None:
                return "And what question in what category would you like me to ask?"
            if value is None:
                return "Typically, you would want to select a question on the board, not just a category."
            board_category = self.board.find_value(channel_id, category, value)
            question = self.questions.from_category(board_category, value, request_time)
            self.board.take_value(channel_id, board_category['title'], value)

        if self._roll_daily_double(channel_id):
            question['value'] = int(question['value']) * 2
            question['daily_double'] = True

        reply = ""
        previous = self.current(channel_id)
        if previous is not None:
            reply = f"The answer is `{previous['answer']}`.\n"
        if question.get('surprise'):
            reply += "Surprise Round! Instead of the question you took, we'll ask you this. "
        if question.get('daily_double'):
            reply += "It's a Daily Double! "
        reply += f"The category is `{question['category']['title']}` for {currency_format(question['value'])}"
        year = airdate_year(question)
        if year:
            reply += f", from `{year}`"
        reply += f": `{question['question']}`"

        self.store.set_json(keys.current_question(channel_id), question)
        self.store.setex(keys.shush_question(channel_id), keys.SHUSH_QUESTION_TTL, 'true')
        self.schedule_expiration(channel_id, question_identity(question), self.settings.seconds_to_answer)
        return reply

    def _roll_daily_double(self, channel_id: str) -> bool:
        if self.settings.dd_chance <= 0 or random.random() >= self.settings.dd_chance:
            return False
        return self.store.claim(keys.daily_double(channel_id), DAILY_DOUBLE_TTL)

    def submit_answer(self, channel_id: str, user_id: str, user_name: str, text: str,
                      request_time: float) -> str:
        question = self.current(channel_id)
        if question is None:
            return self._no_round(channel_id, user_id, user_name)

        seconds = self.settings.seconds_to_answer
        answered_key = keys.user_answer(channel_id, question['id'], user_id)
        if self.store.exists(answered_key):
            raise AlreadyAnswered(f"You had your chance, {user_name}. Let someone else answer.")

        correct = is_correct(question['answer'], text, self.settings.similarity_threshold)
        value = int(question['value'])

        if float(request_time) > float(question['expiration']):
            if not self._resolve(channel_id, question):
                return ""
            if correct:
                reply = (f"That is correct, {user_name}, but time's up! "
                         f"Remember, you only have {seconds} seconds to answer.")
            else:
                reply = (f"Time's up, {user_name}! Remember, you have {seconds} seconds to answer. "
                         f"The correct answer is `{question['answer']}`.")
            return reply + self._after_resolution(channel_id)

        if correct and is_question_format(text):
            if not self._resolve(channel_id, question):
                return ""
            self.store.setex(answered_key, seconds, 'true')
            score = self.scores.add(user_id, value)
            reply = f"That is correct, {user_name}. Your total score is {currency_format(score)}."
            return reply + self._after_resolution(channel_id)

        if not self.store.claim(answered_key, seconds):
            raise AlreadyAnswered(f"You had your chance, {user_name}. Let someone else answer.")
        score = self.scores.add(user_id, -value)
        if correct:
            return (f"That is correct, {user_name}, but responses have to be in the form of a question. "
                    f"Your total score is {currency_format(score)}.")
        return f"@{user_name}:  {quotes.wrong_quote()}  {quotes.wrong_score_lead()} {currency_format(score)}."

    def _no_round(self, channel_id: str, user_id: str, user_name: str) -> str:
        last = self.store.get(keys.last_question(channel_id))
        if last is not None and self.store.exists(keys.user_answer(channel_id, last, user_id)):
            raise AlreadyAnswered(f"You had your chance, {user_name}. Let someone else answer.")
        if self.store.exists(keys.shush_answer(channel_id)):
            return ""
        return quotes.idle_quote(self.settings.bot_username)

    def expire(self, channel_id: str, identity: str) -> Optional[str]:
        """Time's up callback. A no-op unless ``identity`` is still the current question."""
        question = self.current(channel_id)
        if question is None or question_identity(question) != identity:
            logger.info(f"[timer-abort] channel={channel_id} question={identity} no longer current")
            return None
        if not self._resolve(channel_id, question):
            return None
        return f"Time's up! The answer is `{question['answer']}`." + self._after_resolution(channel_id)

    def _resolve(self, channel_id: str, question: Dict[str, Any]) -> bool:
        """Take the right to close ``question``. Only one caller ever wins."""
        identity = question_identity(question)
        ttl = self.settings.seconds_to_answer + keys.SHUSH_QUESTION_TTL
        if not self.store.claim(keys.resolved(channel_id, identity), ttl):
            return False
        current = self.current(channel_id)
        if current is not None and question_identity(current) == identity:
            self.store.delete(keys.current_question(channel_id), keys.shush_question(channel_id))
        self.store.setex(keys.shush_answer(channel_id), keys.SHUSH_ANSWER_TTL, 'true')
        self.store.setex(keys.last_question(channel_id), self.settings.seconds_to_answer, str(question['id']))
        return True

    def _after_resolution(self, channel_id: str) -> str:
        if not self.store.exists(keys.board_exhausted(channel_id)):
            return ""
        self.store.delete(keys.board_exhausted(channel_id))
        return "\n\n" + self.on_board_exhausted(channel_id)
