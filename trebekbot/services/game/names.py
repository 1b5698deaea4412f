import logging
from typing import Any, Dict

from . import keys

logger = logging.getLogger(__name__)

PLACEHOLDER_NAME = 'Sean Connery'


class NameResolver:
    """Display names for user ids, cached in the state store for a month."""

    def __init__(self, store, directory):
        self.store = store
        self.directory = directory

    def names(self, user_id: str) -> Dict[str, Any]:
        key = keys.user_names(user_id)
        cached = self.store.get_json(key)
        if cached is not None:
            return cached
        try:
            names = self.directory.resolve_name(user_id)
        except Exception as exc:
            logger.warning(f"[directory-error] user={user_id} {exc}")
            return {'id': user_id, 'name': PLACEHOLDER_NAME}
        if names.get('name') and names['name'] != PLACEHOLDER_NAME:
            self.store.set_json(key, names, ttl=keys.USER_NAMES_TTL)
        return names

    def display_name(self, user_id: str, use_real_name: bool = False) -> str:
        names = self.names(user_id)
        preferred = names.get('real_name') if use_real_name else names.get('first_name')
        return preferred or names.get('name') or PLACEHOLDER_NAME
