"""Outbound HTTP collaborators: the clue archive, the Slack user directory
and the Slack incoming webhook used for pushes outside a request."""
import logging
import random
from typing import Any, Dict, List, Optional

import requests

from trebekbot.errors import EmptyQuestion, ProviderUnavailable

logger = logging.getLogger(__name__)


class JServiceClient:
    """Client for a jService-compatible trivia archive."""

    # Highest category id offset the archive serves
    MAX_CATEGORY_OFFSET = 18418

    def __init__(self, base_url: str, timeout: float = 5, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self, path: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning(f"[provider-error] GET {url} params={params} failed: {exc}")
            raise ProviderUnavailable() from exc
        if not isinstance(data, list):
            raise ProviderUnavailable()
        return data

    def fetch_categories(self, count: int) -> List[Dict[str, Any]]:
        offset = 1 + random.randrange(max(1, self.MAX_CATEGORY_OFFSET // max(count, 1)))
        data = self._get('/categories', {'count': count, 'offset': offset})
        return [
            {'id': c.get('id'), 'title': c.get('title'), 'clues_count': c.get('clues_count', 0)}
            for c in data
        ]

    def fetch_clue(self, category_id: int, value: Optional[int] = None, offset: int = 0) -> Dict[str, Any]:
        params: Dict[str, Any] = {'category': category_id, 'offset': offset}
        if value is not None:
            params['value'] = value
        data = self._get('/clues', params)
        if not data:
            raise EmptyQuestion()
        return data[0]

    def fetch_random(self) -> Dict[str, Any]:
        data = self._get('/random', {'count': 1})
        if not data:
            raise EmptyQuestion()
        return data[0]


class SlackDirectory:
    """Resolves Slack user ids to names; outgoing webhooks only carry ids."""

    PLACEHOLDER_NAME = 'Sean Connery'

    def __init__(self, api_token: str, timeout: float = 5, base_url: str = 'https://slack.com/api'):
        self.api_token = api_token
        self.timeout = timeout
        self.base_url = base_url.rstrip('/')

    def resolve_name(self, user_id: str) -> Dict[str, Any]:
        placeholder = {'id': user_id, 'name': self.PLACEHOLDER_NAME}
        try:
            response = requests.get(
                f"{self.base_url}/users.info",
                params={'user': user_id},
                headers={'Authorization': f"Bearer {self.api_token}"},
                timeout=self.timeout,
            )
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning(f"[directory-error] user={user_id} lookup failed: {exc}")
            return placeholder
        if not data.get('ok') or not data.get('user'):
            logger.warning(f"[directory-error] user={user_id} error={data.get('error')}")
            return placeholder

        user = data['user']
        names = {'id': user_id, 'name': user.get('name') or self.PLACEHOLDER_NAME}
        profile = user.get('profile') or {}
        if user.get('real_name'):
            names['real_name'] = user['real_name']
        if profile.get('first_name'):
            names['first_name'] = profile['first_name']
        if profile.get('last_name'):
            names['last_name'] = profile['last_name']
        return names


class SlackDelivery:
    """Builds reply payloads and pushes messages through an incoming webhook."""

    def __init__(self, webhook_url: str = '', username: Optional[str] = None,
                 icon: Optional[str] = None, timeout: float = 5):
        self.webhook_url = webhook_url
        self.username = username
        self.icon = icon
        self.timeout = timeout

    def payload(self, text: str) -> Dict[str, Any]:
        body: Dict[str, Any] = {'text': text, 'link_names': 1}
        if self.username:
            body['username'] = self.username
        if self.icon:
            body['icon_emoji'] = self.icon
        return body

    def post(self, channel_id: str, text: str) -> bool:
        if not text:
            return False
        if not self.webhook_url:
            logger.warning(f"[delivery-error] channel={channel_id} no incoming webhook configured")
            return False
        body = self.payload(text)
        body['channel'] = channel_id
        try:
            response = requests.post(self.webhook_url, json=body, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.warning(f"[delivery-error] channel={channel_id} push failed: {exc}")
            return False
        return True
