import os
import sys
import pytest

# Ensure the project root (containing the `trebekbot` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from trebekbot import create_app, db
from trebekbot.clients import SlackDelivery


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    STATE_BACKEND = 'sql'
    OUTGOING_WEBHOOK_TOKEN = 'test-token'
    CHANNEL_BLACKLIST = '#general, random'
    QUESTION_SUBSTRING_BLACKLIST = 'seen here,audio clue'
    SECONDS_TO_ANSWER = 30
    FINAL_SECONDS_TO_ANSWER = 60
    SIMILARITY_THRESHOLD = 0.5
    DD_CHANCE = 0.0
    CATEGORY_COUNT = 2
    FINAL_ROUND_ENABLED = True
    MAX_QUESTION_RETRIES = 3
    BOT_USERNAME = 'trebekbot'
    BOT_ICON = ':trebek:'


class FakeProvider:
    """Stands in for the clue archive. Clues are keyed by (category id, value)."""

    def __init__(self):
        self.categories = [
            {'id': 1, 'title': 'History', 'clues_count': 10},
            {'id': 2, 'title': 'Potent Potables', 'clues_count': 10},
        ]
        self.final_categories = [{'id': 9, 'title': 'World Capitals', 'clues_count': 5}]
        self.clues = {}
        self.random_clues = []
        self.calls = []

    def clue(self, clue_id, question, answer, value=None, category=None, airdate='1999-09-14T12:00:00.000Z'):
        category = category or {'id': 1, 'title': 'History'}
        return {
            'id': clue_id,
            'question': question,
            'answer': answer,
            'value': value,
            'airdate': airdate,
            'category': category,
        }

    def fetch_categories(self, count):
        self.calls.append(('categories', count))
        if count == 1:
            return list(self.final_categories)
        return list(self.categories[:count])

    def fetch_clue(self, category_id, value=None, offset=0):
        self.calls.append(('clue', category_id, value))
        key = (category_id, value)
        if key in self.clues:
            return self.clues[key]
        return self.clue(
            100 * category_id + (value or 0) // 100,
            f"Clue for category {category_id} at {value}",
            f"Answer {category_id} {value}",
            value=value,
            category={'id': category_id, 'title': f"Category {category_id}"},
        )

    def fetch_random(self):
        self.calls.append(('random',))
        if self.random_clues:
            return self.random_clues.pop(0)
        return self.clue(777, "This city is the capital of France", "Paris", value=400,
                         category={'id': 5, 'title': 'Geography'})


class FakeDirectory:
    def __init__(self, names=None):
        self.names = names or {}
        self.lookups = []

    def resolve_name(self, user_id):
        self.lookups.append(user_id)
        return {'id': user_id, 'name': self.names.get(user_id, user_id.lower())}


class FakeDelivery(SlackDelivery):
    def __init__(self):
        super().__init__(username='trebekbot', icon=':trebek:')
        self.pushed = []

    def post(self, channel_id, text):
        self.pushed.append((channel_id, text))
        return True


@pytest.fixture()
def provider():
    return FakeProvider()


@pytest.fixture()
def directory():
    return FakeDirectory({'U1': 'alex', 'U2': 'ken', 'U3': 'brad'})


@pytest.fixture()
def delivery():
    return FakeDelivery()


@pytest.fixture()
def flask_app(provider, directory, delivery):
    application = create_app(TestConfig, provider=provider, directory=directory, delivery=delivery)
    with application.app_context():
        # Ensure models are imported so tables are created
        import trebekbot.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def game(flask_app):
    return flask_app.extensions['trebekbot']


@pytest.fixture()
def store(game):
    return game.store


@pytest.fixture()
def say(game, directory):
    """Send one message to the game as a player and return the reply text."""
    from trebekbot.commands import MessageEvent

    def _say(text, user='U1', ts=1000.0, channel='C1', channel_name='jeopardy', token='test-token'):
        event = MessageEvent(
            token=token,
            channel_id=channel,
            channel_name=channel_name,
            user_id=user,
            user_name=directory.names.get(user, user.lower()),
            text=text,
            trigger_word='trebekbot',
            timestamp=ts,
        )
        return game.respond(event)
    return _say
