import logging
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
import redis as _redis
from rq import Queue

logger = logging.getLogger(__name__)

db = SQLAlchemy()
migrate = Migrate()

# Set by init_redis; None / DummyQueue when Redis is unavailable
redis_client: _redis.Redis = None  # type: ignore
task_queue: Queue = None  # type: ignore

APPLY_QUEUE = "apply-options"


class DummyQueue:
    """Stands in for the apply-options queue when Redis is unavailable.

    Jobs are dropped; ``enqueue`` returns None so callers report
    ``queued: false``.
    """

    def enqueue(self, func, *args, **kwargs):
        logger.warning("No Redis queue, dropping job %s for %s", func, kwargs.get("shop"))
        return None


def _disable_queue():
    global redis_client, task_queue
    redis_client = None
    task_queue = DummyQueue()


def init_redis(app):
    """Connect the apply-options queue, or fall back to DummyQueue."""
    global redis_client, task_queue
    redis_url = app.config.get("REDIS_URL", "")
    if not redis_url:
        logger.warning("REDIS_URL not set, applying options to products is disabled")
        _disable_queue()
        return

    try:
        redis_client = _redis.from_url(redis_url)
        redis_client.ping()
    except (_redis.exceptions.RedisError, ValueError) as e:
        logger.warning("Redis unreachable at startup (%s), apply queue disabled", e)
        _disable_queue()
        return
    task_queue = Queue(APPLY_QUEUE, connection=redis_client)
