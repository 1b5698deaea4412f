import time
from dataclasses import dataclass
from typing import Callable, Optional, Set, Tuple

from trebekbot import socketio


_scheduled_keys: Set[Tuple[str, str, str]] = set()


@dataclass(frozen=True)
class TimerHandle:
    kind: str
    channel_id: str
    identity: str
    deadline: float


class ExpirationScheduler:
    """Deferred expiration callbacks, one per issued question.

    Timers are never cancelled. When one fires it runs the callback inside
    an app context and the callback re-checks the question identity, so a
    question answered early or superseded simply makes the timer a no-op.
    """

    def __init__(self, app):
        self.app = app

    def schedule(self, kind: str, channel_id: str, identity: str, delay: float,
                 callback: Callable[[str, str], None]) -> Optional[TimerHandle]:
        """Run ``callback(channel_id, identity)`` after ``delay`` seconds.

        - No-ops in TESTING mode unless ENABLE_SCHEDULER_IN_TESTS is set
        - Ensures a single timer per (kind, channel, identity)
        """
        app = self.app
        if app.config.get('TESTING') and not app.config.get('ENABLE_SCHEDULER_IN_TESTS'):
            return None

        key = (kind, channel_id, identity)
        handle = TimerHandle(kind=kind, channel_id=channel_id, identity=identity, deadline=time.time() + delay)
        if key in _scheduled_keys:
            app.logger.info(f"[timer-skip] kind={kind} channel={channel_id} question={identity} already scheduled")
            return handle
        _scheduled_keys.add(key)
        app.logger.info(f"[timer-set] kind={kind} channel={channel_id} question={identity} delay={delay}s deadline={handle.deadline}")

        def _worker(expected: Tuple[str, str, str], wait: float):
            # heartbeat sleep loop if enabled
            hb = int(app.config.get('TIMER_HEARTBEAT_SEC', 0) or 0)
            if hb > 0:
                slept = 0.0
                while slept < wait:
                    step = min(hb, wait - slept)
                    time.sleep(step)
                    slept += step
                    app.logger.info(f"[timer-heartbeat] kind={expected[0]} channel={expected[1]} remaining={max(0, wait - slept)}s")
            else:
                time.sleep(wait)
            with app.app_context():
                _scheduled_keys.discard(expected)
                app.logger.info(f"[timer-fire] kind={expected[0]} channel={expected[1]} question={expected[2]}")
                try:
                    callback(expected[1], expected[2])
                except Exception:
                    app.logger.exception(f"[timer-error] kind={expected[0]} channel={expected[1]} question={expected[2]}")

        if app.config.get('TESTING'):
            _worker(key, delay)
        else:
            socketio.start_background_task(_worker, key, delay)
        return handle
