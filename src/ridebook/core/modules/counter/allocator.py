from dataclasses import dataclass

import structlog
from tenacity import AsyncRetrying, RetryCallState, RetryError, retry_if_exception_type, stop_after_attempt, wait_random_exponential

from ridebook.core.modules.counter.repository import CounterRepository
from ridebook.core.modules.counter.store import TransactionalStore, WriteConflictError
from ridebook.errors import ConflictExhaustedError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded contention retry with randomized exponential backoff.

    Before attempt ``n + 1`` the allocator sleeps a random duration in
    ``[0, min(max_delay, base_delay * 2 ** (n - 1))]``.
    """

    max_attempts: int = 5
    base_delay: float = 0.01
    max_delay: float = 0.5

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError("Backoff delays must be non-negative")


class SequenceAllocator:
    """Hands out the next integer of a namespace through one optimistic store transaction."""

    def __init__(self, store: TransactionalStore, policy: RetryPolicy | None = None) -> None:
        self._store = store
        self._repository = CounterRepository()
        self.policy = policy or RetryPolicy()

    async def allocate(self, namespace: str) -> int:
        """Allocate and return ``current + 1`` for namespace.

        Raises:
            ConflictExhaustedError: every attempt lost a write race.
            StoreUnavailableError: the store failed for a reason other than a conflict.
        """
        if not namespace:
            raise ValueError("Namespace must be a non-empty string")

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.policy.max_attempts),
            wait=wait_random_exponential(multiplier=self.policy.base_delay, max=self.policy.max_delay),
            retry=retry_if_exception_type(WriteConflictError),
            before_sleep=self._log_conflict,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    value = await self._attempt(namespace)
        except RetryError as e:
            attempts = e.last_attempt.attempt_number
            logger.warning("counter_conflict_exhausted", namespace=namespace, attempts=attempts)
            raise ConflictExhaustedError(namespace, attempts) from e

        logger.debug("sequence_allocated", namespace=namespace, value=value)
        return value

    async def _attempt(self, namespace: str) -> int:
        txn = self._store.begin()
        current = await self._repository.read_or_default(txn, namespace)
        value = current + 1
        self._repository.write(txn, namespace, value)
        await txn.commit()
        return value

    @staticmethod
    def _log_conflict(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.info(
            "counter_write_conflict",
            namespace=getattr(error, "key", None),
            attempt=retry_state.attempt_number,
            sleep=round(retry_state.upcoming_sleep, 4),
        )
