"""Final Jeopardy: wagers, one shared clue, one shared deadline."""
import json
import logging
from typing import Any, Callable, Dict, List, Optional

from trebekbot.errors import (
    AlreadyAnswered,
    AlreadyFinalRoundConcluded,
    InvalidWager,
    NoActiveQuestion,
    NotAFinalist,
    ProviderUnavailable,
)
from trebekbot.utils import currency_format, sort_scores
from . import keys
from .answers import is_correct, is_question_format
from .names import NameResolver
from .questions import QuestionSource, question_identity
from .scoring import ScoreKeeper
from .settings import GameSettings

logger = logging.getLogger(__name__)

GOODNIGHT = "Thank you for being with us. Goodnight everybody."


def validate_wager(wager: Optional[int], score: int) -> bool:
    return wager is not None and 0 < wager <= score


def _signed(amount: int) -> str:
    return f"+{currency_format(amount)}" if amount > 0 else currency_format(amount)


class FinalRoundController:
    def __init__(self, store, provider, questions: QuestionSource, scores: ScoreKeeper,
                 names: NameResolver, settings: GameSettings,
                 schedule_expiration: Callable[[str, str, float], Any],
                 close_session: Callable[[str], str]):
        self.store = store
        self.provider = provider
        self.questions = questions
        self.scores = scores
        self.names = names
        self.settings = settings
        self.schedule_expiration = schedule_expiration
        self.close_session = close_session

    def is_active(self, channel_id: str) -> bool:
        return self.store.exists(keys.final_finalists(channel_id))

    def finalists(self, channel_id: str) -> List[Dict[str, Any]]:
        return self.store.get_json(keys.final_finalists(channel_id)) or []

    def _wager(self, channel_id: str, user_id: str) -> Optional[int]:
        raw = self.store.get(keys.final_wager(channel_id, user_id))
        return int(raw) if raw is not None else None

    def begin(self, channel_id: str) -> str:
        """Start Final Jeopardy with every player in the black, or end the game if nobody is."""
        leaders = [s for s in sort_scores(self.scores.all()) if s['score'] >= 1]
        if not leaders:
            return "Nobody finished in the black, so there's no Final Jeopardy today.\n" + self.close_session(channel_id)

        try:
            category = self._draw_category()
        except ProviderUnavailable:
            logger.warning(f"[final-round] channel={channel_id} no usable category, ending game")
            return "I couldn't find a Final Jeopardy category, so we'll stop here.\n" + self.close_session(channel_id)

        for pattern in (f"final:wager:{channel_id}:*", f"final:answer:{channel_id}:*"):
            self.store.delete_matching(pattern)
        self.store.delete(keys.final_question(channel_id), keys.final_issuing(channel_id))

        finalists = [
            {'user_id': s['user_id'], 'name': self.names.display_name(s['user_id']), 'score': s['score']}
            for s in leaders
        ]
        self.store.set_json(keys.final_category(channel_id), category)
        self.store.set_json(keys.final_finalists(channel_id), finalists)
        logger.info(f"[final-round] channel={channel_id} finalists={[f['user_id'] for f in finalists]} category={category['title']}")

        lines = "\n".join(f"{i}. {f['name']}: {currency_format(f['score'])}" for i, f in enumerate(finalists, 1))
        return (
            f"It's time for Final Jeopardy! Our finalists are:\n\n{lines}\n\n"
            f"The category is `{category['title']}`. Finalists, place your wagers with "
            f"`{self.settings.bot_username} I wager [amount]`. You can wager anything from $1 up to your current score."
        )

    def _draw_category(self) -> Dict[str, Any]:
        for _ in range(max(1, self.settings.max_question_retries)):
            for category in self.provider.fetch_categories(1):
                if (category.get('title') or '').strip() and int(category.get('clues_count') or 0) > 0:
                    return {
                        'id': category['id'],
                        'title': category['title'].strip(),
                        'clues_count': int(category['clues_count']),
                    }
        raise ProviderUnavailable()

    def submit_wager(self, channel_id: str, user_id: str, user_name: str, wager: Optional[int],
                     request_time: float) -> str:
        finalists = self.finalists(channel_id)
        if not finalists:
            raise AlreadyFinalRoundConcluded()
        if not any(f['user_id'] == user_id for f in finalists):
            raise NotAFinalist(f"Sorry, {user_name}, only finalists can wager in Final Jeopardy.")
        if self.store.exists(keys.final_question(channel_id)):
            return f"Wagers are locked in, {user_name}. Let's hear your response!"

        existing = self._wager(channel_id, user_id)
        if existing is not None:
            reply = f"You've already wagered {currency_format(existing)}, {user_name}."
        else:
            score = self.scores.get(user_id)
            if not validate_wager(wager, score):
                raise InvalidWager(f"{user_name}, your wager has to be between $1 and {currency_format(score)}.")
            self.store.set(keys.final_wager(channel_id, user_id), int(wager))
            reply = f"Thank you, {user_name}. Your wager of {currency_format(wager)} is locked in."

        pending = [f['name'] for f in finalists if self._wager(channel_id, f['user_id']) is None]
        if pending:
            return f"{reply} Still waiting on {', '.join(pending)}."
        if not self.store.claim(keys.final_issuing(channel_id), self.settings.final_seconds_to_answer):
            return reply
        try:
            return f"{reply} All wagers are in!\n" + self._issue_question(channel_id, request_time)
        except ProviderUnavailable:
            # Let the next wager message retry
            self.store.delete(keys.final_issuing(channel_id))
            raise

    def _issue_question(self, channel_id: str, request_time: float) -> str:
        category = self.store.get_json(keys.final_category(channel_id))
        window = self.settings.final_seconds_to_answer
        question = self.questions.from_category(category, None, request_time, window=window)
        self.store.set_json(keys.final_question(channel_id), question)
        self.schedule_expiration(channel_id, question_identity(question), window)
        if question.get('surprise'):
            intro = (f"Surprise! There was nothing usable in `{category['title']}`, so here is a clue "
                     f"from `{question['category']['title']}` instead: `{question['question']}`\n")
        else:
            intro = f"Here is the Final Jeopardy clue in `{category['title']}`: `{question['question']}`\n"
        return intro + f"You have {window} seconds. Remember to answer in the form of a question!"

    def submit_answer(self, channel_id: str, user_id: str, user_name: str, text: str,
                      request_time: float) -> str:
        finalists = self.finalists(channel_id)
        if not finalists:
            raise AlreadyFinalRoundConcluded()
        if not any(f['user_id'] == user_id for f in finalists):
            raise NotAFinalist(f"Only finalists can answer Final Jeopardy, {user_name}.")
        question = self.store.get_json(keys.final_question(channel_id))
        if question is None:
            raise NoActiveQuestion(f"Hold on, {user_name}, we're still waiting on wagers.")

        wager = self._wager(channel_id, user_id) or 0
        late = float(request_time) > float(question['expiration'])
        if not late and is_question_format(text) and is_correct(question['answer'], text, self.settings.similarity_threshold):
            delta = wager
        else:
            delta = -wager
        # The record goes in with the claim so a resolver never sees an empty slot
        record = {'answer': text, 'delta': delta, 'late': late}
        if not self._record_answer(channel_id, user_id, record):
            raise AlreadyAnswered(f"You already locked in your final response, {user_name}.")

        reply = f"Got it, {user_name}. Your final response is locked in."
        if late:
            reply = f"Sorry, {user_name}, time's up! That one won't count."
        if all(self._has_record(channel_id, f['user_id']) for f in finalists):
            return reply + "\n\n" + self._resolve(channel_id, question)
        return reply

    def _record_answer(self, channel_id: str, user_id: str, record: Dict[str, Any]) -> bool:
        return self.store.claim(keys.final_answer(channel_id, user_id),
                                self.settings.final_seconds_to_answer * 10, json.dumps(record))

    def _has_record(self, channel_id: str, user_id: str) -> bool:
        return isinstance(self.store.get_json(keys.final_answer(channel_id, user_id)), dict)

    def expire(self, channel_id: str, identity: str) -> Optional[str]:
        question = self.store.get_json(keys.final_question(channel_id))
        if question is None or question_identity(question) != identity:
            logger.info(f"[timer-abort] channel={channel_id} final={identity} no longer current")
            return None
        for finalist in self.finalists(channel_id):
            wager = self._wager(channel_id, finalist['user_id']) or 0
            self._record_answer(channel_id, finalist['user_id'], {'answer': None, 'delta': -wager, 'late': True})
        return self._resolve(channel_id, question) or None

    def _resolve(self, channel_id: str, question: Dict[str, Any]) -> str:
        """Apply every finalist's delta, reveal the answer and end the game."""
        if not self.store.claim(keys.final_resolved(channel_id, question_identity(question)),
                                self.settings.final_seconds_to_answer * 10):
            return ""
        results = []
        for finalist in self.finalists(channel_id):
            record = self.store.get_json(keys.final_answer(channel_id, finalist['user_id']))
            if not isinstance(record, dict):
                record = {}
            wager = self._wager(channel_id, finalist['user_id']) or 0
            delta = int(record.get('delta', -wager))
            results.append({
                'user_id': finalist['user_id'],
                'name': finalist['name'],
                'answer': record.get('answer'),
                'wager': wager,
                'delta': delta,
                'score': self.scores.add(finalist['user_id'], delta),
            })

        lines = []
        for r in results:
            said = f"`{r['answer']}`" if r['answer'] else "nothing in time"
            lines.append(f"{r['name']} said {said} and wagered {currency_format(r['wager'])}: {_signed(r['delta'])}.")
        standings = "\n".join(
            f"{i}. {r['name']}: {currency_format(r['score'])}" for i, r in enumerate(sort_scores(results), 1)
        )
        logger.info(f"[final-round] channel={channel_id} resolved results={[(r['user_id'], r['delta']) for r in results]}")
        text = (
            f"The correct response was `{question['answer']}`.\n\n" + "\n".join(lines) +
            f"\n\nFinal standings:\n{standings}\n\n{GOODNIGHT}"
        )
        self.store.flush()
        return text
