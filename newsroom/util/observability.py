"""Logfire setup for the API process.

Services and repositories emit spans and events directly::

    with logfire.span("comment_service.delete_comment", comment_id=str(cid)):
        logfire.info("Comment subtree deleted", deleted_count=3)

This module only wires the exporter and the framework integrations.
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from newsroom.config import ObservabilitySettings, Settings

SERVICE_NAME = "newsroom-api"
SERVICE_VERSION = "0.1.0"

# Path parameters copied onto request spans so a trace can be found by resource
_TRACED_PATH_PARAMS = ("slug", "comment_id", "user_id")


def should_send(observability: ObservabilitySettings) -> bool:
    """Explicit ``send_to_logfire`` wins; otherwise send iff a token is set."""
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the current environment.

    Without a token (or with ``OBSERVABILITY__SEND_TO_LOGFIRE=false``)
    spans only go to the console.

    Args:
        settings: Application settings
    """
    send = should_send(settings.observability)
    console = logfire.ConsoleOptions(
        colors="auto",
        span_style="show-parents",
        include_timestamps=True,
        verbose=settings.debug,
    )

    options: dict[str, Any] = {}
    if settings.observability.logfire_token:
        options["token"] = settings.observability.logfire_token

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=SERVICE_VERSION,
        environment=settings.environment,
        send_to_logfire=send,
        console=console,
        **options,
    )
    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send,
    )


def _request_attributes(request: Any, attributes: dict[str, Any]) -> dict[str, Any]:
    result = {**attributes, "path": request.url.path}
    method = getattr(request, "method", None)
    if method:
        result["method"] = method
    for name in _TRACED_PATH_PARAMS:
        value = request.path_params.get(name)
        if value is not None:
            result[name] = value
    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request, tagging spans with the post, comment or user id."""
    logfire.instrument_fastapi(app, request_attributes_mapper=_request_attributes)
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries on the async engine's underlying sync engine."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
    logfire.info("SQLAlchemy instrumented")
