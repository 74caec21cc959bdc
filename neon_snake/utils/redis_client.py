import redis

from neon_snake import config


def get_redis(host=None, port=None, db=None):
    return redis.Redis(
        host=host or config.REDIS_HOST,
        port=port or config.REDIS_PORT,
        db=config.REDIS_DB if db is None else db,
        decode_responses=True,
    )
