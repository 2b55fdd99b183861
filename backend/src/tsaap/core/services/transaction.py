"""Transaction boundary for service methods."""

import functools
import logging

logger = logging.getLogger(__name__)

_DEPTH_KEY = "tsaap.transaction_depth"


def transactional(method):
    """Run a service coroutine method in one transaction on ``self.session``.

    The outermost call commits on success and rolls back on any exception.
    Nested calls (a service calling another service on the same session) join
    the running transaction.
    """

    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        session = self.session
        depth = session.info.get(_DEPTH_KEY, 0)
        session.info[_DEPTH_KEY] = depth + 1
        try:
            result = await method(self, *args, **kwargs)
            if depth == 0:
                await session.commit()
            return result
        except Exception:
            if depth == 0:
                logger.debug(f"Rolling back {method.__qualname__}")
                await session.rollback()
            raise
        finally:
            session.info[_DEPTH_KEY] = depth

    return wrapper
