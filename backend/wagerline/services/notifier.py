"""Change notification publishing."""

import json
import logging
from typing import Any, Optional

import redis

from wagerline.exceptions import DownstreamDeliveryFailure

logger = logging.getLogger(__name__)

# Channel names consumed by leaderboards, audit logs and dashboards
EVENT_CREATED = "event_created"
EVENT_UPDATED = "event_updated"
EVENT_DELETED = "event_deleted"
BET_CREATED = "bet_created"
BET_UPDATED = "bet_updated"
BET_DELETED = "bet_deleted"
BET_WINNING_UPDATED = "bet_winning_updated"


class ChangeNotifier:
    """Fire-and-forget publisher of entity lifecycle notifications."""

    def publish(self, channel: str, payload: dict[str, Any]) -> None:
        raise NotImplementedError


class RedisChangeNotifier(ChangeNotifier):
    """Publishes JSON payloads on Redis pub/sub channels."""

    def __init__(
        self,
        client: Optional[redis.Redis] = None,
        redis_url: Optional[str] = None,
    ):
        if client is None:
            if redis_url is None:
                from wagerline.config import get_settings

                redis_url = get_settings().redis_url
            client = redis.from_url(redis_url)
        self.client = client

    def publish(self, channel: str, payload: dict[str, Any]) -> None:
        message = json.dumps(payload)
        try:
            receivers = self.client.publish(channel, message)
        except redis.RedisError as e:
            raise DownstreamDeliveryFailure(channel, str(e)) from e

        logger.debug(f"Published {channel} to {receivers} subscriber(s)")


def create_change_notifier(redis_url: Optional[str] = None) -> RedisChangeNotifier:
    """Create a RedisChangeNotifier for the configured Redis instance."""
    return RedisChangeNotifier(redis_url=redis_url)


def publish_safely(notifier: ChangeNotifier, channel: str, payload: dict[str, Any]) -> bool:
    """
    Publish without letting a delivery failure escape.

    The triggering mutation is already committed at this point, so a failed
    publish is only logged.
    """
    try:
        notifier.publish(channel, payload)
        return True
    except DownstreamDeliveryFailure as e:
        logger.warning(f"Notification dropped: {e}")
        return False
