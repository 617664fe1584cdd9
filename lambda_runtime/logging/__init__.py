"""Structured logging for the runtime client.

Usage:
    from lambda_runtime.logging import bind_invocation, setup_logging, unbind_invocation

    setup_logging()
    bind_invocation(context)
    try:
        ...
    finally:
        unbind_invocation()
"""

from lambda_runtime.logging.context import bind_invocation, unbind_invocation
from lambda_runtime.logging.logger import reset_logging, setup_logging

__all__ = [
    "bind_invocation",
    "reset_logging",
    "setup_logging",
    "unbind_invocation",
]
