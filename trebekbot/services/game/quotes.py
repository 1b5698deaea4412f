"""Host banter, mostly borrowed from SNL's Celebrity Jeopardy."""
import random

IDLE_QUOTES = [
    "Welcome back to Slack Jeopardy. Before we begin this Jeopardy round, I'd like to ask our contestants once again to please refrain from using ethnic slurs.",
    "Okay, Turd Ferguson.",
    "I hate my job.",
    "Let's just get this over with.",
    "Do you have an answer?",
    "I don't believe this. Where did you get that magic marker? We frisked you on the way in here.",
    "What a ride it has been, but boy, oh boy, these Slack users did not know the right answers to any of the questions.",
    "Back off. I don't have to take that from you.",
    "That is _awful_.",
    "Okay, for the sake of tradition, let's take a look at the answers.",
    "Beautiful. Just beautiful.",
    "Good for you. Well, as always, three perfectly good charities have been deprived of money, here on Slack Jeopardy. I'm {bot}, and all of you should be ashamed of yourselves! Good night!",
    "And welcome back to Slack Jeopardy. Because of what just happened before during the commercial, I'd like to apologize to all blind people and children.",
    "Thank you, thank you. Moving on.",
    "I really thought that was going to work.",
    "Wonderful. Let's take a look at the categories. They are: `Potent Potables`, `Point to your own head`, `Letters or Numbers`, `Will this hurt if you put it in your mouth`, `An album cover`, `Make any noise`, and finally, `Famous Muppet Frogs`. I should add that the answer to every question in that category is `Kermit`.",
    "For the last time, that is not a category.",
    "Unbelievable.",
    "Uh, I see. Get back to your podium.",
    "You look pretty sure of yourself. Think you've got the right answer?",
    "Welcome back to Slack Jeopardy. We've got a real barnburner on our hands here.",
    "And welcome back to Slack Jeopardy. I'd like to once again remind our contestants that there are proper bathroom facilities located in the studio.",
    "Welcome back to Slack Jeopardy. Once again, I'm going to recommend that our viewers watch something else.",
]

WRONG_QUOTES = [
    "You're fast on the button, but your brain's not catching up!",
    "Nope.  It will be goodbye for you today.",
    "Ah, if only you had been able to accumulate more money.",
    "You were having difficulties with that signaling device.  I saw.  You won't be around for Final Jeopardy!",
    "It's a shame you weren't faster on the signaling button in earlier rounds.",
    "Sorry, Nope.  That's wrong.",
    "You made a common error there.",
    "Let me see if I can make you feel better. It's incorrect.",
    "You've been up and down.  Mostly down.",
    "Maybe the categories didn't agree with you last round.  Perhaps you will like them better in this round.",
    "That is incorrect.  And I think you suspected that was wrong.",
    "Ooh, drawing a blank.  That'll cost you.",
    "Yeah.  Incorrect.  You should have stuck with your original thought.",
    "We have to penalize you and once again you are in a negative situation.",
    "The way you said that is exactly the way a contestant on Wheel of Fortune would say it.",
    "Nope.  Not good enough.  Not gonna help you.",
    "Sorry, that ain't gonna do it.",
    "You weren't able to come up with a correct response.",
    "Two words of advice: get serious.",
    "I feared some of you might put that down.  That is incorrect.",
    "You've been burying a very deep hole.  Let's see if you can change that.",
    "Well, THAT narrows it down.",
    "It's very important in life to know when to shut up. You should not be afraid of silence.",
    "Hahahahaha... No.",
    "They teach you that in school in Utah, huh?",
]

WRONG_SCORE_LEADS = [
    "Your score is now",
    "That brings you down to",
    "How much does that leave you with now?  Oh yes,",
    "How much did you wager?  Ouch.  Well at least you have",
]


def idle_quote(bot_username: str = 'trebekbot') -> str:
    return random.choice(IDLE_QUOTES).format(bot=bot_username)


def wrong_quote() -> str:
    return random.choice(WRONG_QUOTES)


def wrong_score_lead() -> str:
    return random.choice(WRONG_SCORE_LEADS)


HELP_TEXT = """Type `{bot} jeopardy me` to start a new round of Slack Jeopardy. I will pick the category and price. Anyone in the channel can respond.
Type `{bot} let's play` or `{bot} show the categories` to see a list of the remaining categories or create a new set of categories.
Type `{bot} [what|where|who] [is|are] [answer]?` to respond to the active round. You have {seconds} seconds to answer. Remember, responses must be in the form of a question, e.g. `{bot} what is dirt?`.
Type `{bot} I'll take [category] for [value]` to start a new round with one of the existing categories.
Type `{bot} I wager [amount]` to place your wager in Final Jeopardy.
Type `{bot} what is my score` to see your current score.
Type `{bot} show the leaderboard` to see the top scores.
Type `{bot} show the loserboard` to see the bottom scores.
Type `{bot} end game` to clear the board and all scores.
"""


def help_text(bot_username: str, seconds_to_answer: int) -> str:
    return HELP_TEXT.format(bot=bot_username, seconds=seconds_to_answer)
