"""Answer normalization and fuzzy matching.

Both the canonical answer and a player's response go through the same
cleanup before comparison. When they don't match exactly, White's
word-letter-pair similarity (a Dice coefficient over per-word bigrams)
decides whether a typo is close enough.
"""
import re
from typing import List

QUESTION_WORDS = ('what', 'whats', 'where', 'wheres', 'who', 'whos')

_NUMBER_WORDS = (
    ('one', '1'), ('two', '2'), ('three', '3'), ('four', '4'), ('five', '5'),
    ('six', '6'), ('seven', '7'), ('eight', '8'), ('nine', '9'), ('ten', '10'),
)

_PUNCTUATION = re.compile(r"[^\w\s]")
_ARTICLE = re.compile(r"^(the|a|an) ", re.IGNORECASE)
_AMPERSAND = re.compile(r"\s+(&nbsp;|&)\s+", re.IGNORECASE)
_INTERROGATIVE = re.compile(r"^(what|whats|where|wheres|who|whos|when|whens) ", re.IGNORECASE)
_COPULA = re.compile(r"^(is|are|was|were) ", re.IGNORECASE)
_PARENTHETICAL = re.compile(r"\(.*\)")
_QUESTION_FORMAT = re.compile(r"^(%s) " % "|".join(QUESTION_WORDS), re.IGNORECASE)


def _digits(text: str) -> str:
    for word, digit in _NUMBER_WORDS:
        text = re.sub(r"\b%s\b" % word, digit, text, flags=re.IGNORECASE)
    return text


def join_ampersands(text: str) -> str:
    return _AMPERSAND.sub(" and ", text)


def normalize_canonical(answer: str) -> str:
    """Articles, spelled-out numbers, case. Punctuation is left for the variants."""
    text = _ARTICLE.sub("", answer.strip())
    text = _ARTICLE.sub("", text)
    return _digits(text).strip().lower()


def canonical_variants(answer: str) -> List[str]:
    """The punctuation-stripped answer and the same with any parenthetical removed."""
    canonical = normalize_canonical(answer)
    sanitized = _PUNCTUATION.sub("", canonical).strip()
    no_parenthetical = _PUNCTUATION.sub("", _PARENTHETICAL.sub("", canonical)).strip()
    return [sanitized, no_parenthetical]


def normalize_response(response: str) -> str:
    text = join_ampersands(response)
    text = _PUNCTUATION.sub("", text).strip()
    text = _INTERROGATIVE.sub("", text)
    text = _COPULA.sub("", text)
    text = _ARTICLE.sub("", text)
    text = re.sub(r"\?+$", "", text)
    return _digits(text).strip().lower()


def is_question_format(text: str) -> bool:
    """True when the response starts with what/where/who (is). A '?' is optional."""
    return bool(_QUESTION_FORMAT.match(_PUNCTUATION.sub("", text.strip())))


def _word_letter_pairs(text: str) -> List[str]:
    pairs = []
    for word in text.upper().split():
        pairs.extend(word[i:i + 2] for i in range(len(word) - 1))
    return pairs


def white_similarity(first: str, second: str) -> float:
    pairs1 = _word_letter_pairs(first)
    pairs2 = _word_letter_pairs(second)
    union = len(pairs1) + len(pairs2)
    if union == 0:
        return 0.0
    intersection = 0
    for pair in pairs1:
        if pair in pairs2:
            intersection += 1
            pairs2.remove(pair)
    return (2.0 * intersection) / union


def is_correct(canonical: str, submitted: str, threshold: float = 0.5) -> bool:
    response = normalize_response(submitted)
    for solution in canonical_variants(canonical):
        if solution == response or white_similarity(solution, response) >= threshold:
            return True
    return False
