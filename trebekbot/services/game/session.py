"""Wires the game services together and answers one inbound message."""
from typing import Callable, Dict, Type

from trebekbot import commands as cmd
from trebekbot.clients import JServiceClient, SlackDelivery, SlackDirectory
from trebekbot.errors import ChannelBlacklisted, InvalidToken, TrebekError
from trebekbot.store import StateStore, build_store
from trebekbot.utils import currency_format
from . import quotes
from .board import BoardManager
from .final_round import GOODNIGHT, FinalRoundController
from .leaderboard import LeaderboardService
from .names import NameResolver
from .questions import QuestionSource
from .rounds import RoundController
from .scheduler import ExpirationScheduler
from .scoring import ScoreKeeper
from .settings import GameSettings


FINAL_UNDERWAY = "Final Jeopardy is underway! Finalists, get your wagers and responses in."


class JeopardyGame:
    def __init__(self, store: StateStore, provider, directory, delivery: SlackDelivery,
                 scheduler: ExpirationScheduler, settings: GameSettings, webhook_token: str = ''):
        self.store = store
        self.delivery = delivery
        self.scheduler = scheduler
        self.settings = settings
        self.webhook_token = webhook_token

        self.scores = ScoreKeeper(store)
        self.names = NameResolver(store, directory)
        self.questions = QuestionSource(provider, settings)
        self.board = BoardManager(store, provider, settings)
        self.leaderboard = LeaderboardService(store, self.scores, self.names)
        self.final = FinalRoundController(
            store, provider, self.questions, self.scores, self.names, settings,
            schedule_expiration=self._schedule('final', self._expire_final),
            close_session=self.leaderboard.close_session,
        )
        self.rounds = RoundController(
            store, self.board, self.questions, self.scores, settings,
            schedule_expiration=self._schedule('question', self._expire_question),
            on_board_exhausted=self._board_exhausted,
        )
        self._handlers: Dict[Type, Callable] = {
            cmd.RandomQuestion: self._random_question,
            cmd.TakeQuestion: self._take_question,
            cmd.MyScore: self._my_score,
            cmd.EndGame: self._end_game,
            cmd.Help: self._help,
            cmd.ShowLeaderboard: lambda c, e: self.leaderboard.top(),
            cmd.ShowLoserboard: lambda c, e: self.leaderboard.bottom(),
            cmd.ShowCategories: self._categories,
            cmd.Wager: self._wager,
            cmd.Zork: lambda c, e: "Do I look like zorkbot?",
            cmd.Answer: self._answer,
        }

    def respond(self, event: cmd.MessageEvent) -> str:
        """Reply text for one message. Game errors become their reply."""
        try:
            if event.token != self.webhook_token:
                raise InvalidToken()
            if self.settings.is_channel_blacklisted(event.channel_name):
                raise ChannelBlacklisted()
            command = cmd.parse_command(event.text)
            return self._handlers[type(command)](command, event)
        except TrebekError as exc:
            return exc.reply

    # Command handlers

    def _random_question(self, command, event):
        if self.final.is_active(event.channel_id):
            return FINAL_UNDERWAY
        return self.rounds.issue_question(event.channel_id, event.timestamp, pick_random=True)

    def _take_question(self, command, event):
        if self.final.is_active(event.channel_id):
            return FINAL_UNDERWAY
        return self.rounds.issue_question(event.channel_id, event.timestamp,
                                          category=command.category or None, value=command.value)

    def _my_score(self, command, event):
        return f"{event.user_name}, your score is {currency_format(self.scores.get(event.user_id))}."

    def _end_game(self, command, event):
        self.leaderboard.reset()
        return GOODNIGHT

    def _help(self, command, event):
        return quotes.help_text(self.settings.bot_username, self.settings.seconds_to_answer)

    def _categories(self, command, event):
        if self.final.is_active(event.channel_id):
            return FINAL_UNDERWAY
        return self.board.list_remaining(event.channel_id)

    def _wager(self, command, event):
        return self.final.submit_wager(event.channel_id, event.user_id, event.user_name,
                                       command.amount, event.timestamp)

    def _answer(self, command, event):
        if self.final.is_active(event.channel_id):
            return self.final.submit_answer(event.channel_id, event.user_id, event.user_name,
                                            command.text, event.timestamp)
        return self.rounds.submit_answer(event.channel_id, event.user_id, event.user_name,
                                         command.text, event.timestamp)

    # Transitions and timers

    def _board_exhausted(self, channel_id: str) -> str:
        if self.settings.final_round_enabled:
            return self.final.begin(channel_id)
        return self.leaderboard.close_session(channel_id)

    def _schedule(self, kind: str, callback: Callable[[str, str], None]):
        def schedule(channel_id: str, identity: str, delay: float):
            return self.scheduler.schedule(kind, channel_id, identity, delay, callback)
        return schedule

    def _expire_question(self, channel_id: str, identity: str) -> None:
        try:
            text = self.rounds.expire(channel_id, identity)
        except TrebekError as exc:
            text = exc.reply
        if text:
            self.delivery.post(channel_id, text)

    def _expire_final(self, channel_id: str, identity: str) -> None:
        text = self.final.expire(channel_id, identity)
        if text:
            self.delivery.post(channel_id, text)


def build_game(app, provider=None, directory=None, delivery=None) -> JeopardyGame:
    """Assemble the game from the app config. Collaborators may be injected."""
    config = app.config
    timeout = config.get('HTTP_TIMEOUT_SEC', 5)
    provider = provider or JServiceClient(config.get('QUESTION_API_URL', 'http://jservice.io/api'), timeout=timeout)
    directory = directory or SlackDirectory(config.get('SLACK_API_TOKEN', ''), timeout=timeout)
    delivery = delivery or SlackDelivery(
        config.get('SLACK_INCOMING_WEBHOOK_URL', ''),
        username=config.get('BOT_USERNAME'),
        icon=config.get('BOT_ICON'),
        timeout=timeout,
    )
    return JeopardyGame(
        store=build_store(app),
        provider=provider,
        directory=directory,
        delivery=delivery,
        scheduler=ExpirationScheduler(app),
        settings=GameSettings.from_config(config),
        webhook_token=config.get('OUTGOING_WEBHOOK_TOKEN', ''),
    )
