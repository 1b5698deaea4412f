import re
from typing import Optional


def currency_format(number: int, currency: str = "$") -> str:
    """Format a score as currency, e.g. -10000 becomes -$10,000."""
    prefix = currency if number >= 0 else f"-{currency}"
    return f"{prefix}{abs(int(number)):,}"


def sort_scores(scores: list[dict], order: str = "desc") -> list[dict]:
    # Ties keep a stable order by user id
    if order == "desc":
        return sorted(scores, key=lambda s: (-s["score"], s["user_id"]))
    return sorted(scores, key=lambda s: (s["score"], s["user_id"]))


def parse_amount(text) -> Optional[int]:
    """Parse '$1,000' / '1000' into an int. Returns None when unparseable."""
    if text is None:
        return None
    cleaned = re.sub(r"[\s$,`]", "", str(text))
    if not re.fullmatch(r"-?\d+", cleaned):
        return None
    return int(cleaned)
