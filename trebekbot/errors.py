"""Game errors.

Every error carries the text the bot says back to the channel. Services
raise them; the game facade turns them into replies so nothing raw ever
reaches a player.
"""


class TrebekError(Exception):
    message = "Something went wrong."

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.reply = message or self.message


class InvalidToken(TrebekError):
    message = "Invalid token"


class ChannelBlacklisted(TrebekError):
    message = "Sorry, can't play in this channel."


class NoActiveBoard(TrebekError):
    message = "There aren't any categories. Say `let's play` to start a new round."


class NoSuchCategory(TrebekError):
    message = "That category isn't on the board."


class NoSuchValue(TrebekError):
    message = "That question is no longer on the board."


class NoActiveQuestion(TrebekError):
    message = "There's no question in play right now."


class AlreadyAnswered(TrebekError):
    message = "You had your chance. Let someone else answer."


class NotAFinalist(TrebekError):
    message = "Only finalists can play Final Jeopardy."


class InvalidWager(TrebekError):
    message = "That's not a valid wager."


class AlreadyFinalRoundConcluded(TrebekError):
    message = "There's no Final Jeopardy round in progress."


class ProviderUnavailable(TrebekError):
    message = "I can't reach the question archive right now. Try again in a bit."


class EmptyQuestion(TrebekError):
    message = "That clue seems to have gone missing."


class ProviderExhausted(ProviderUnavailable):
    message = "I couldn't find a usable clue. Try again in a bit."


class BoardPending(TrebekError):
    message = "That was the last clue on the board. Let's see who gets it before we move on."
