from unittest.mock import MagicMock

import pytest

from trebekbot.store import RedisStateStore, SqlStateStore, build_store


def test_sql_store_basics(store):
    assert isinstance(store, SqlStateStore)
    assert store.get('missing') is None
    store.set('greeting', 'hello')
    assert store.get('greeting') == 'hello'
    assert store.exists('greeting')
    store.set_json('board', [{'title': 'History'}])
    assert store.get_json('board') == [{'title': 'History'}]
    store.delete('greeting', 'board')
    assert not store.exists('greeting')
    assert store.get_json('board') is None


def test_sql_store_expiry(store):
    store.setex('stale', -1, 'x')
    store.setex('fresh', 60, 'y')
    assert store.get('stale') is None
    assert store.get('fresh') == 'y'
    assert store.scan('*') == ['fresh']


def test_sql_store_claim_and_incr(store):
    assert store.claim('resolved:C1:1', 30)
    assert not store.claim('resolved:C1:1', 30)
    # an expired claim can be taken again
    store.setex('resolved:C1:2', -1, '1')
    assert store.claim('resolved:C1:2', 30)

    assert store.incr('user_score:U1', 200) == 200
    assert store.incr('user_score:U1', -600) == -400
    assert store.get('user_score:U1') == '-400'


def test_sql_store_scan_treats_only_star_as_wildcard(store):
    store.set('user_score:U1', 1)
    store.set('user_score:U2', 2)
    store.set('userXscore:U3', 3)
    store.set('leaderboard:1', 'cached')
    assert sorted(store.scan('user_score:*')) == ['user_score:U1', 'user_score:U2']
    store.delete_matching('user_score:*')
    assert store.scan('user_score:*') == []
    store.flush()
    assert store.scan('*') == []


def test_redis_store_delegates_to_client():
    client = MagicMock()
    store = RedisStateStore(client)

    client.set.return_value = True
    assert store.claim('resolved:C1:1', 0.5)
    client.set.assert_called_with('resolved:C1:1', '1', nx=True, ex=1)
    client.set.return_value = None
    assert not store.claim('resolved:C1:1', 30)

    store.setex('shush:question:C1', 10, 'true')
    client.setex.assert_called_with('shush:question:C1', 10, 'true')

    client.incrby.return_value = 400
    assert store.incr('user_score:U1', 400) == 400

    client.scan_iter.return_value = iter(['user_score:U1'])
    assert store.scan('user_score:*') == ['user_score:U1']

    store.delete()
    client.delete.assert_not_called()
    store.flush()
    client.flushdb.assert_called_once()


def test_build_store_rejects_unknown_backend(flask_app):
    flask_app.config['STATE_BACKEND'] = 'memcached'
    with pytest.raises(ValueError):
        build_store(flask_app)


def test_flush_state_command(flask_app, store):
    store.set('user_score:U1', 100)
    result = flask_app.test_cli_runner().invoke(args=['flush-state'])
    assert 'Game state has been flushed!' in result.output
    assert store.get('user_score:U1') is None


def test_claim_writes_the_given_value(store):
    assert store.claim('final:answer:C1:U1', 60, '{"delta": 600}')
    assert store.get_json('final:answer:C1:U1') == {'delta': 600}
    assert not store.claim('final:answer:C1:U1', 60, '{"delta": -600}')
    assert store.get_json('final:answer:C1:U1') == {'delta': 600}
