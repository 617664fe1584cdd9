"""Sample handler served by the runtime with the default ``mod.handler`` spec."""

import platform
from datetime import UTC, datetime
from typing import Any


def handler(event: Any, context: Any) -> dict[str, Any]:
    """Echo the event back with runtime details.

    Args:
        event: Invocation payload.
        context: Invocation context.

    Returns:
        Greeting, echoed event, interpreter version and timestamp.
    """
    return {
        "message": "Hello from Python on Lambda!",
        "echo": event,
        "runtime": f"Python {platform.python_version()}",
        "request_id": context.aws_request_id,
        "ts": datetime.now(UTC).isoformat(),
    }
