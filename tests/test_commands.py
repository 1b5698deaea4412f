from trebekbot import commands as cmd


def test_parse_commands():
    assert cmd.parse_command("jeopardy me") == cmd.RandomQuestion()
    assert cmd.parse_command("Jeopardy me please") == cmd.RandomQuestion()
    assert cmd.parse_command("what is my score") == cmd.MyScore()
    assert cmd.parse_command("end game") == cmd.EndGame()
    assert cmd.parse_command("help") == cmd.Help()
    assert cmd.parse_command("show me the leaderboard") == cmd.ShowLeaderboard()
    assert cmd.parse_command("show loserboard") == cmd.ShowLoserboard()
    assert cmd.parse_command("show the categories") == cmd.ShowCategories()
    assert cmd.parse_command("let’s play") == cmd.ShowCategories()
    assert cmd.parse_command("lets play") == cmd.ShowCategories()
    assert cmd.parse_command("Throw a rock at the troll") == cmd.Zork()


def test_take_question_parses_category_and_value():
    assert cmd.parse_command("I'll take Potent Potables for $400") == cmd.TakeQuestion("Potent Potables", 400)
    assert cmd.parse_command("Ill take History for 1,000") == cmd.TakeQuestion("History", 1000)
    assert cmd.parse_command("I'll take History for the win") == cmd.TakeQuestion("History", None)


def test_wager_and_answers():
    assert cmd.parse_command("I wager $1,500") == cmd.Wager(1500)
    assert cmd.parse_command("I wager everything") == cmd.Wager(None)
    assert cmd.parse_command("what is dirt?") == cmd.Answer("what is dirt?")
    assert cmd.parse_command("") == cmd.Answer("")


def test_message_event_strips_trigger_word():
    event = cmd.MessageEvent.from_payload({
        'token': 't',
        'channel_id': 'C1',
        'channel_name': 'jeopardy',
        'user_id': 'U1',
        'user_name': 'alex',
        'text': 'trebekbot what is trebekbot',
        'trigger_word': 'trebekbot',
        'timestamp': '1355517523.000005',
    })
    assert event.text == 'what is trebekbot'
    assert event.timestamp == 1355517523.000005


def test_message_event_defaults_timestamp_to_now():
    event = cmd.MessageEvent.from_payload({'text': 'help'})
    assert event.timestamp > 0
    assert event.trigger_word == ''
