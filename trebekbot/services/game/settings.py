from dataclasses import dataclass
from typing import Tuple


def _split(raw: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in (raw or '').split(',') if part.strip())


@dataclass(frozen=True)
class GameSettings:
    """Read-only game tuning, built once from the Flask config."""

    seconds_to_answer: int = 30
    final_seconds_to_answer: int = 60
    similarity_threshold: float = 0.5
    dd_chance: float = 0.05
    category_count: int = 5
    final_round_enabled: bool = True
    max_question_retries: int = 5
    channel_blacklist: Tuple[str, ...] = ()
    question_blacklist: Tuple[str, ...] = ()
    bot_username: str = 'trebekbot'

    @classmethod
    def from_config(cls, config) -> 'GameSettings':
        return cls(
            seconds_to_answer=int(config.get('SECONDS_TO_ANSWER', 30)),
            final_seconds_to_answer=int(config.get('FINAL_SECONDS_TO_ANSWER', 60)),
            similarity_threshold=float(config.get('SIMILARITY_THRESHOLD', 0.5)),
            dd_chance=float(config.get('DD_CHANCE', 0.05)),
            category_count=int(config.get('CATEGORY_COUNT', 5)),
            final_round_enabled=bool(config.get('FINAL_ROUND_ENABLED', True)),
            max_question_retries=int(config.get('MAX_QUESTION_RETRIES', 5)),
            channel_blacklist=tuple(c.replace('#', '') for c in _split(config.get('CHANNEL_BLACKLIST', ''))),
            question_blacklist=_split(config.get('QUESTION_SUBSTRING_BLACKLIST', '')),
            bot_username=config.get('BOT_USERNAME') or 'trebekbot',
        )

    def is_channel_blacklisted(self, channel_name: str) -> bool:
        return (channel_name or '').lstrip('#') in self.channel_blacklist

    def is_question_blacklisted(self, text: str) -> bool:
        return any(phrase in text for phrase in self.question_blacklist)
