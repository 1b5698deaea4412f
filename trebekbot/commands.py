"""Inbound Slack messages and the commands they map to.

A message is classified exactly once into one of the command types
below; each carries its already-parsed payload.
"""
import re
import time
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Pattern, Tuple, Union

from trebekbot.utils import parse_amount


@dataclass(frozen=True)
class MessageEvent:
    token: str
    channel_id: str
    channel_name: str
    user_id: str
    user_name: str
    text: str
    trigger_word: str
    timestamp: float

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> 'MessageEvent':
        trigger_word = payload.get('trigger_word') or ''
        text = payload.get('text') or ''
        if trigger_word:
            text = text.replace(trigger_word, '', 1)
        try:
            timestamp = float(payload.get('timestamp'))
        except (TypeError, ValueError):
            timestamp = time.time()
        return cls(
            token=payload.get('token') or '',
            channel_id=payload.get('channel_id') or '',
            channel_name=payload.get('channel_name') or '',
            user_id=payload.get('user_id') or '',
            user_name=payload.get('user_name') or '',
            text=text.strip(),
            trigger_word=trigger_word,
            timestamp=timestamp,
        )


@dataclass(frozen=True)
class RandomQuestion:
    pass


@dataclass(frozen=True)
class MyScore:
    pass


@dataclass(frozen=True)
class EndGame:
    pass


@dataclass(frozen=True)
class Help:
    pass


@dataclass(frozen=True)
class ShowLeaderboard:
    pass


@dataclass(frozen=True)
class ShowLoserboard:
    pass


@dataclass(frozen=True)
class ShowCategories:
    pass


@dataclass(frozen=True)
class TakeQuestion:
    category: str
    value: Optional[int]


@dataclass(frozen=True)
class Wager:
    amount: Optional[int]


@dataclass(frozen=True)
class Zork:
    pass


@dataclass(frozen=True)
class Answer:
    text: str


Command = Union[RandomQuestion, MyScore, EndGame, Help, ShowLeaderboard, ShowLoserboard,
                ShowCategories, TakeQuestion, Wager, Zork, Answer]

# Order matters: first match wins
_ROUTES: List[Tuple[Pattern, Callable[[re.Match], Command]]] = [
    (re.compile(r"^jeopardy me", re.I), lambda m: RandomQuestion()),
    (re.compile(r"my score$", re.I), lambda m: MyScore()),
    (re.compile(r"^end game", re.I), lambda m: EndGame()),
    (re.compile(r"^help$", re.I), lambda m: Help()),
    (re.compile(r"^show (me\s+)?(the\s+)?leaderboard$", re.I), lambda m: ShowLeaderboard()),
    (re.compile(r"^show (me\s+)?(the\s+)?loserboard$", re.I), lambda m: ShowLoserboard()),
    (re.compile(r"^show (me\s+)?(the\s+)?categories$", re.I), lambda m: ShowCategories()),
    (re.compile(r"^let[’']?s play$", re.I), lambda m: ShowCategories()),
    (re.compile(r"^I[’']?ll take (.*) for (.*)", re.I),
     lambda m: TakeQuestion(category=m.group(1).strip(), value=parse_amount(m.group(2)))),
    (re.compile(r"^I wager\s*(.*)$", re.I), lambda m: Wager(amount=parse_amount(m.group(1)))),
    (re.compile(r"^Throw (.*) at (.*)", re.I), lambda m: Zork()),
]


def parse_command(text: str) -> Command:
    text = (text or '').strip()
    for pattern, build in _ROUTES:
        match = pattern.search(text)
        if match:
            return build(match)
    return Answer(text=text)
