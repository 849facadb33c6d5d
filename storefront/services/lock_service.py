# storefront/services/lock_service.py
import redis
from redis.exceptions import RedisError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
from storefront.utils.settings import CHECKOUT_LOCK_TTL_SECONDS, REDIS_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje skrypt lua atomowo, nikt nie wcisnie sie miedzy GET a DEL
#wiec zwalniamy tylko wlasny lock (token), nigdy cudzy


#tenacity retry, krotki backoff: lacznie ulamek sekundy, duzo ponizej TTL locka
_LOCK_RETRY_ATTEMPTS = 3
_LOCK_RETRY_MAX_WAIT = min(0.5, CHECKOUT_LOCK_TTL_SECONDS / 10)


def lock_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(_LOCK_RETRY_ATTEMPTS),
        wait=wait_exponential(multiplier=0.05, min=0.05, max=_LOCK_RETRY_MAX_WAIT),
        retry=retry_if_exception_type(RedisError),
    )


class LockService:
    """
    -blokada checkoutu per user (jeden checkout naraz)
    -zwalnianie locka tylko przez wlasciciela tokenu
    -atomowosc przy pomocy lua
    """

    def __init__(self, url: str | None = None):
        self.redis = redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def _key(user_id: str) -> str:
        return f"checkout:{user_id}:lock"

    @lock_retry()
    def acquire_checkout_lock(self, user_id: str, token: str, ttl: int) -> bool:
        key = self._key(user_id)
        logger.info(f"Acquire lock {key}")
        #SET checkout:u1:lock "<token>" NX EX 30
        return bool(
            self.redis.set(
                name=key,
                value=token,
                nx=True,  #tylko jesli klucz nie istnieje
                ex=ttl,  #wygasa sam, nawet jak proces padnie w trakcie
            )
        )

    @lock_retry()
    def release_checkout_lock(self, user_id: str, token: str) -> bool:
        key = self._key(user_id)
        logger.info(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)
