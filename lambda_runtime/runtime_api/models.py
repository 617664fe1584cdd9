"""Pydantic models for Runtime API payloads."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from lambda_runtime.types import JSONValue


class NextInvocation(BaseModel):
    """One event delivered by ``GET /runtime/invocation/next``."""

    model_config = ConfigDict(frozen=True)

    request_id: str = Field(min_length=1)
    deadline_ms: int = Field(default=0)
    invoked_function_arn: str = Field(default="")
    event: JSONValue = None


class ErrorEnvelope(BaseModel):
    """Error body posted to ``/runtime/invocation/{request_id}/error``.

    Serialized with camelCase keys (``errorType``, ``errorMessage``,
    ``stackTrace``) as the platform expects.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    error_type: str
    error_message: str
    stack_trace: list[str] = Field(default_factory=list)

    def to_payload(self) -> dict[str, object]:
        """Return the wire representation of the envelope."""
        return self.model_dump(by_alias=True)
