"""Handler specification parsing and dynamic handler loading.

Usage:
    from lambda_runtime.handler import HandlerResolver, parse_handler_spec

    resolver = HandlerResolver("/var/task", [".py", ".pyc"])
    handler = resolver.resolve(parse_handler_spec("mod.handler"))
"""

from lambda_runtime.handler.resolver import HandlerResolver
from lambda_runtime.handler.spec import DEFAULT_EXPORT_NAME, HandlerSpec, parse_handler_spec

__all__ = [
    "DEFAULT_EXPORT_NAME",
    "HandlerResolver",
    "HandlerSpec",
    "parse_handler_spec",
]
