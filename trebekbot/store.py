"""Key-value state store.

All game state lives behind this interface; nothing survives a request
in process memory. Two backends are provided: the application database
(a single ``state_entry`` table) and Redis.
"""
import json
import math
import time
from typing import Any, List, Optional

import redis
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from trebekbot import db
from trebekbot.models import StateEntry


class StateStore:
    """Interface shared by the state backends."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def setex(self, key: str, ttl: float, value: Any) -> None:
        raise NotImplementedError

    def exists(self, key: str) -> bool:
        raise NotImplementedError

    def scan(self, pattern: str) -> List[str]:
        raise NotImplementedError

    def delete(self, *keys: str) -> None:
        raise NotImplementedError

    def flush(self) -> None:
        raise NotImplementedError

    def incr(self, key: str, amount: int) -> int:
        raise NotImplementedError

    def claim(self, key: str, ttl: float, value: Any = '1') -> bool:
        """Set ``key`` to ``value`` only if absent. Returns True for the caller that wins."""
        raise NotImplementedError

    def get_json(self, key: str) -> Any:
        raw = self.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def set_json(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        payload = json.dumps(value)
        if ttl:
            self.setex(key, ttl, payload)
        else:
            self.set(key, payload)

    def delete_matching(self, pattern: str) -> None:
        keys = self.scan(pattern)
        if keys:
            self.delete(*keys)


def _like_pattern(pattern: str) -> str:
    escaped = pattern.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
    return escaped.replace('*', '%')


class SqlStateStore(StateStore):
    """State store backed by the ``state_entry`` table.

    Must be used inside an application context. Expired rows read as
    absent and are removed lazily.
    """

    def _live(self, key: str) -> Optional[StateEntry]:
        entry = db.session.get(StateEntry, key)
        if entry is not None and entry.is_expired():
            db.session.delete(entry)
            db.session.commit()
            return None
        return entry

    def _put(self, key: str, value: Any, expires_at: Optional[float]) -> None:
        entry = db.session.get(StateEntry, key)
        if entry is None:
            entry = StateEntry(key=key)
            db.session.add(entry)
        entry.value = str(value)
        entry.expires_at = expires_at
        try:
            db.session.commit()
        except IntegrityError:
            # Another request inserted the same key first; last write wins
            db.session.rollback()
            StateEntry.query.filter_by(key=key).update({'value': str(value), 'expires_at': expires_at})
            db.session.commit()

    def get(self, key):
        entry = self._live(key)
        return entry.value if entry is not None else None

    def set(self, key, value):
        self._put(key, value, None)

    def setex(self, key, ttl, value):
        self._put(key, value, time.time() + float(ttl))

    def exists(self, key):
        return self._live(key) is not None

    def scan(self, pattern):
        now = time.time()
        rows = (
            StateEntry.query
            .filter(StateEntry.key.like(_like_pattern(pattern), escape='\\'))
            .filter(or_(StateEntry.expires_at.is_(None), StateEntry.expires_at > now))
            .all()
        )
        return [row.key for row in rows]

    def delete(self, *keys):
        if not keys:
            return
        StateEntry.query.filter(StateEntry.key.in_(keys)).delete(synchronize_session=False)
        db.session.commit()
        db.session.expire_all()

    def flush(self):
        StateEntry.query.delete()
        db.session.commit()
        db.session.expire_all()

    def incr(self, key, amount):
        entry = StateEntry.query.filter_by(key=key).with_for_update().first()
        if entry is None or entry.is_expired():
            if entry is None:
                entry = StateEntry(key=key)
                db.session.add(entry)
            entry.value = str(int(amount))
            entry.expires_at = None
        else:
            entry.value = str(int(entry.value) + int(amount))
        new_value = int(entry.value)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            return self.incr(key, amount)
        return new_value

    def claim(self, key, ttl, value='1'):
        if self._live(key) is not None:
            return False
        db.session.add(StateEntry(key=key, value=str(value), expires_at=time.time() + float(ttl)))
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            return False
        return True


class RedisStateStore(StateStore):
    """State store backed by a Redis database."""

    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> 'RedisStateStore':
        return cls(redis.Redis.from_url(url, decode_responses=True))

    @staticmethod
    def _seconds(ttl: float) -> int:
        return max(1, int(math.ceil(float(ttl))))

    def get(self, key):
        return self.client.get(key)

    def set(self, key, value):
        self.client.set(key, value)

    def setex(self, key, ttl, value):
        self.client.setex(key, self._seconds(ttl), value)

    def exists(self, key):
        return bool(self.client.exists(key))

    def scan(self, pattern):
        return list(self.client.scan_iter(match=pattern))

    def delete(self, *keys):
        if keys:
            self.client.delete(*keys)

    def flush(self):
        self.client.flushdb()

    def incr(self, key, amount):
        return int(self.client.incrby(key, int(amount)))

    def claim(self, key, ttl, value='1'):
        return bool(self.client.set(key, value, nx=True, ex=self._seconds(ttl)))


def build_store(app) -> StateStore:
    backend = (app.config.get('STATE_BACKEND') or 'sql').lower()
    if backend == 'redis':
        return RedisStateStore.from_url(app.config['REDIS_URL'])
    if backend != 'sql':
        raise ValueError(f"Unknown STATE_BACKEND: {backend}")
    return SqlStateStore()
