from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ridebook.core.modules.counter.models import Counter
from ridebook.web.deps import AppDep
from ridebook.web.openapi import ErrorResponse

router = APIRouter(tags=["counters"])


class CounterView(BaseModel):
    """Committed state of one allocation namespace (API representation)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    namespace: str = Field(..., description="Counter namespace, e.g. bookingId_OP001")
    current_value: int = Field(..., description="Last allocated number; 0 when nothing was allocated yet")

    @classmethod
    def from_domain(cls, counter: Counter) -> "CounterView":
        return cls(namespace=counter.namespace, current_value=counter.current_value)


@router.get(
    "/counters/{namespace}",
    summary="Get counter",
    description="Read the last allocated number of a namespace without allocating a new one.",
    operation_id="getCounter",
    responses={
        200: {"description": "Current counter state"},
        503: {"model": ErrorResponse, "description": "Counter store unavailable"},
    },
)
async def get_counter(namespace: str, app: AppDep) -> CounterView:
    counter = await app.get_counter(namespace)
    return CounterView.from_domain(counter)
