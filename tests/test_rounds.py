import dataclasses

from trebekbot.services.game import keys
from trebekbot.services.game.questions import question_identity


def _washington(provider):
    provider.clues[(1, 200)] = provider.clue(11, "He was the first U.S. president", "George Washington", value=200)


def test_take_question_announces_clue(say, game, provider):
    _washington(provider)
    say("let's play")
    reply = say("I'll take History for $200", ts=1000.0)
    assert reply == "The category is `History` for $200, from `1999`: `He was the first U.S. president`"

    question = game.rounds.current('C1')
    assert question['answer'] == "George Washington"
    assert question['expiration'] == 1030.0
    assert 200 not in game.board.get_board('C1')[0]['values']


def test_second_trigger_is_shushed(say):
    say("let's play")
    assert say("I'll take History for $200") != ""
    assert say("I'll take History for $400") == ""
    assert say("jeopardy me") == ""


def test_correct_answer_scores_once(say, game, provider):
    _washington(provider)
    say("let's play")
    say("I'll take History for $200", ts=1000.0)

    assert say("who is George Washington?", ts=1010.0) == "That is correct, alex. Your total score is $200."
    assert game.rounds.current('C1') is None
    # the same player again, and someone else right behind
    assert say("who is george washington", ts=1011.0) == "You had your chance, alex. Let someone else answer."
    assert say("who is george washington", user='U2', ts=1011.0) == ""
    assert game.scores.get('U1') == 200
    assert game.scores.get('U2') == 0


def test_wrong_answer_costs_the_value_and_locks_the_player_out(say, game, provider):
    _washington(provider)
    say("let's play")
    say("I'll take History for $200", ts=1000.0)

    reply = say("who is abraham lincoln", user='U2', ts=1005.0)
    assert reply.startswith("@ken:  ")
    assert reply.endswith(" -$200.")
    assert say("who is george washington", user='U2', ts=1006.0) == "You had your chance, ken. Let someone else answer."
    assert game.scores.get('U2') == -200
    # still open for everyone else
    assert game.rounds.current('C1') is not None


def test_correct_answer_not_in_question_form_is_penalized(say, game, provider):
    _washington(provider)
    say("let's play")
    say("I'll take History for $200", ts=1000.0)
    assert say("george washington", ts=1005.0) == (
        "That is correct, alex, but responses have to be in the form of a question. Your total score is -$200."
    )
    assert game.rounds.current('C1') is not None


def test_late_answer_closes_the_question(say, game, provider):
    _washington(provider)
    say("let's play")
    say("I'll take History for $200", ts=1000.0)
    assert say("who is george washington", ts=1031.0) == (
        "That is correct, alex, but time's up! Remember, you only have 30 seconds to answer."
    )
    assert game.scores.get('U1') == 0
    assert game.rounds.current('C1') is None


def test_late_wrong_answer_reveals_the_answer(say, provider):
    _washington(provider)
    say("let's play")
    say("I'll take History for $200", ts=1000.0)
    assert say("who is john adams", user='U3', ts=1040.0) == (
        "Time's up, brad! Remember, you have 30 seconds to answer. The correct answer is `George Washington`."
    )


def test_expire_is_a_noop_once_answered_or_superseded(say, game, provider):
    _washington(provider)
    say("let's play")
    say("I'll take History for $200", ts=1000.0)
    identity = question_identity(game.rounds.current('C1'))

    assert game.rounds.expire('C1', 'some-other-question') is None
    say("who is george washington", ts=1010.0)
    assert game.rounds.expire('C1', identity) is None


def test_expire_reveals_answer(say, game, provider):
    _washington(provider)
    say("let's play")
    say("I'll take History for $200", ts=1000.0)
    identity = question_identity(game.rounds.current('C1'))

    assert game.rounds.expire('C1', identity) == "Time's up! The answer is `George Washington`."
    assert game.rounds.current('C1') is None
    assert game.rounds.expire('C1', identity) is None


def test_random_question_and_answer_reveal(say, store):
    assert say("jeopardy me") == "The category is `Geography` for $400, from `1999`: `This city is the capital of France`"
    store.delete(keys.shush_question('C1'))
    assert say("jeopardy me") == (
        "The answer is `Paris`.\n"
        "The category is `Geography` for $400, from `1999`: `This city is the capital of France`"
    )


def test_random_question_gives_up_on_unusable_clues(say, provider):
    provider.random_clues = [
        provider.clue(1, "As seen here, this bird", "Owl"),
        provider.clue(2, "", "Nothing"),
        provider.clue(3, "An audio clue of a train", "Train"),
    ]
    assert say("jeopardy me") == "I couldn't find a usable clue. Try again in a bit."


def test_unusable_board_clue_becomes_surprise_round(say, game, provider):
    provider.clues[(1, 200)] = provider.clue(12, "As seen here, this painting", "Mona Lisa", value=200)
    say("let's play")
    assert say("I'll take History for $200") == (
        "Surprise Round! Instead of the question you took, we'll ask you this. "
        "The category is `Geography` for $200, from `1999`: `This city is the capital of France`"
    )
    assert game.rounds.current('C1')['value'] == 200


def test_daily_double_doubles_the_value_once_per_board(say, game, store):
    game.rounds.settings = dataclasses.replace(game.settings, dd_chance=1.0)
    say("let's play")
    assert say("I'll take History for $200", ts=1000.0).startswith(
        "It's a Daily Double! The category is `History` for $400"
    )
    assert game.rounds.current('C1')['daily_double']

    say("what is answer 1 200", ts=1001.0)
    store.delete(keys.shush_question('C1'))
    assert say("I'll take History for $400", ts=1002.0).startswith("The category is `History` for $400")


def test_idle_answer_gets_a_quote(say):
    assert say("what is love") != ""


def test_last_answer_on_board_starts_final_round(say, game, store, provider):
    store.set_json(keys.categories('C1'), [{'id': 1, 'title': 'History', 'values': [200], 'clues_count': 10}])
    _washington(provider)
    say("I'll take History for $200", ts=1000.0)
    reply = say("who is george washington", ts=1005.0)
    assert reply.startswith("That is correct, alex. Your total score is $200.\n\nIt's time for Final Jeopardy!")
    assert "1. alex: $200" in reply
    assert "The category is `World Capitals`." in reply
    assert game.final.is_active('C1')
    assert say("jeopardy me") == "Final Jeopardy is underway! Finalists, get your wagers and responses in."


def test_exhausted_board_closes_session_without_final_round(say, game, store, provider):
    game.settings = dataclasses.replace(game.settings, final_round_enabled=False)
    store.set_json(keys.categories('C1'), [{'id': 1, 'title': 'History', 'values': [200], 'clues_count': 10}])
    _washington(provider)
    say("I'll take History for $200", ts=1000.0)
    identity = question_identity(game.rounds.current('C1'))
    assert game.rounds.expire('C1', identity) == (
        "Time's up! The answer is `George Washington`.\n\n"
        "And that's it for this session of Jeopardy, everyone.\n\n"
        "There are no scores yet!"
    )
    assert game.scores.all() == []


def test_listing_categories_while_last_clue_is_open_keeps_the_hand_off(say, game, store, provider):
    store.set_json(keys.categories('C1'), [{'id': 1, 'title': 'History', 'values': [200], 'clues_count': 10}])
    _washington(provider)
    say("I'll take History for $200", ts=1000.0)

    assert say("show me the categories", user='U2', ts=1002.0) == (
        "That was the last clue on the board. Let's see who gets it before we move on."
    )
    assert game.board.get_board('C1') is None

    reply = say("who is george washington", ts=1005.0)
    assert "It's time for Final Jeopardy!" in reply
    assert not store.exists(keys.board_exhausted('C1'))
    assert game.final.is_active('C1')
