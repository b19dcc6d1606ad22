from typing import Any

from ridebook.core.modules.counter.models import CURRENT_VALUE_FIELD
from ridebook.core.modules.counter.store import Transaction


def counter_value(document: dict[str, Any] | None) -> int:
    """Extract the counter value from a stored document; 0 when absent or unusable."""
    if document is None:
        return 0
    value = document.get(CURRENT_VALUE_FIELD)
    # Older writers stored whole numbers as doubles
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    # bool is an int subclass
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        return 0
    return value


class CounterRepository:
    """Reads and stages counter documents inside a caller-owned transaction.

    Never commits and never caches: a cached value would go stale the moment
    another process allocates from the same namespace.
    """

    async def read_or_default(self, txn: Transaction, namespace: str) -> int:
        """Return the stored value for namespace, or 0 when there is no usable counter yet."""
        return counter_value(await txn.get(namespace))

    def write(self, txn: Transaction, namespace: str, value: int) -> None:
        """Stage value as the namespace's current value, creating the document if absent."""
        if value < 0:
            raise ValueError(f"Counter value must be non-negative, got {value}")
        txn.set(namespace, {CURRENT_VALUE_FIELD: value})
