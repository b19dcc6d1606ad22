from ridebook.core.core import Service
from ridebook.core.modules.counter.allocator import RetryPolicy, SequenceAllocator
from ridebook.core.modules.counter.models import Counter
from ridebook.core.modules.counter.repository import counter_value
from ridebook.core.modules.counter.store import TransactionalStore


class CounterService(Service):
    """Service for allocating sequence numbers from per-namespace counters."""

    def __init__(self, store: TransactionalStore) -> None:
        super().__init__(store)
        self._allocator: SequenceAllocator | None = None

    @property
    def allocator(self) -> SequenceAllocator:
        """Allocator configured with the retry policy from application config."""
        if self._allocator is None:
            config = self.core.config
            policy = RetryPolicy(
                max_attempts=config.allocation_max_attempts,
                base_delay=config.allocation_base_delay,
                max_delay=config.allocation_max_delay,
            )
            self._allocator = SequenceAllocator(self.store, policy)
        return self._allocator

    async def get_next_sequence(self, namespace: str) -> int:
        """Atomically increment and return the next sequence number for a namespace."""
        return await self.allocator.allocate(namespace)

    async def get_counter(self, namespace: str) -> Counter:
        """Get the committed counter without incrementing. Absent counters read as 0."""
        document = await self.store.get(namespace)
        return Counter(namespace=namespace, current_value=counter_value(document))
