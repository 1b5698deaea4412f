"""State store key layout. Channel-scoped unless noted."""

SHUSH_QUESTION_TTL = 10
SHUSH_ANSWER_TTL = 5
LEADERBOARD_TTL = 60 * 5
USER_NAMES_TTL = 60 * 60 * 24 * 30


def categories(channel_id: str) -> str:
    return f"current_categories:{channel_id}"


def current_question(channel_id: str) -> str:
    return f"current_question:{channel_id}"


def last_question(channel_id: str) -> str:
    return f"last_question:{channel_id}"


def shush_question(channel_id: str) -> str:
    return f"shush:question:{channel_id}"


def shush_answer(channel_id: str) -> str:
    return f"shush:answer:{channel_id}"


def user_answer(channel_id: str, question_id, user_id: str) -> str:
    return f"user_answer:{channel_id}:{question_id}:{user_id}"


def resolved(channel_id: str, identity: str) -> str:
    return f"resolved:{channel_id}:{identity}"


def daily_double(channel_id: str) -> str:
    return f"daily_double:{channel_id}"


def board_exhausted(channel_id: str) -> str:
    return f"board_exhausted:{channel_id}"


# Scores are global per user, not per channel
def user_score(user_id: str) -> str:
    return f"user_score:{user_id}"


USER_SCORE_PATTERN = "user_score:*"


def user_names(user_id: str) -> str:
    return f"slack_user_names:2:{user_id}"


def board_cache(order: str) -> str:
    return "leaderboard:1" if order == "desc" else "loserboard:1"


def final_category(channel_id: str) -> str:
    return f"final:category:{channel_id}"


def final_finalists(channel_id: str) -> str:
    return f"final:finalists:{channel_id}"


def final_question(channel_id: str) -> str:
    return f"final:question:{channel_id}"


def final_wager(channel_id: str, user_id: str) -> str:
    return f"final:wager:{channel_id}:{user_id}"


def final_answer(channel_id: str, user_id: str) -> str:
    return f"final:answer:{channel_id}:{user_id}"


def final_issuing(channel_id: str) -> str:
    return f"final:issuing:{channel_id}"


def final_resolved(channel_id: str, identity: str) -> str:
    return f"final:resolved:{channel_id}:{identity}"
