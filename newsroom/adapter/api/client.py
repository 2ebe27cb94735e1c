"""HTTP client for the Newsroom API.

Implements ``CommentApi`` so a ``CommentThread`` can drive a remote server.
Responses are parsed into the same domain shapes the server produces, and
failures are raised as ``ApiError`` subclasses.
"""

from typing import Any
from uuid import UUID

import httpx
import logfire

from newsroom.adapter.error import (
    ApiAuthorizationError,
    ApiError,
    ApiNotFoundError,
    ApiTransientError,
    ApiValidationError,
)
from newsroom.application.usecase.auth import GetCurrentIdentityResponse
from newsroom.config import ClientSettings
from newsroom.domain.tree import CommentNode, Forest
from newsroom.domain.value import CommentId, PostId


def error_for_response(response: httpx.Response) -> ApiError:
    """Map an unsuccessful response onto the API error taxonomy."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and "detail" in body:
        message = str(body["detail"])
    else:
        # Not a FastAPI error body, e.g. a proxy page or a bare JSON list
        message = response.text or response.reason_phrase

    code = response.status_code
    if code in (401, 403):
        return ApiAuthorizationError(message, code)
    if code == 404:
        return ApiNotFoundError(message, code)
    if code in (400, 409, 422):
        return ApiValidationError(message, code)
    if code >= 500:
        return ApiTransientError(message, code)
    return ApiError(message, code)


class NewsroomClient:
    """Async client for the comment endpoints of the Newsroom API."""

    def __init__(
        self,
        settings: ClientSettings,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Newsroom client.

        Args:
            settings: Base URL and timeout
            token: Session token sent as a Bearer header, if signed in
            transport: Optional transport (tests pass ``httpx.MockTransport``)
        """
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = httpx.AsyncClient(
            base_url=settings.base_url,
            timeout=settings.timeout,
            headers=headers,
            transport=transport,
        )

    async def __aenter__(self) -> "NewsroomClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self, method: str, url: str, json: dict[str, Any] | None = None
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            ApiTransientError: On network errors and timeouts
            ApiError: Subclass matching the response status
        """
        with logfire.span("newsroom_client.request", method=method, url=url):
            try:
                response = await self._client.request(method, url, json=json)
            except httpx.TimeoutException as e:
                logfire.warn("Newsroom API timed out", method=method, url=url)
                raise ApiTransientError(f"Request timed out: {e}") from e
            except httpx.HTTPError as e:
                logfire.warn("Newsroom API unreachable", url=url, error=str(e))
                raise ApiTransientError(f"Network error: {e}") from e

            if response.is_error:
                error = error_for_response(response)
                logfire.warn(
                    "Newsroom API request failed",
                    method=method,
                    url=url,
                    status_code=response.status_code,
                    error=error.message,
                )
                raise error

            return response.json()

    async def get_current_identity(self) -> GetCurrentIdentityResponse:
        data = await self._request("GET", "/auth/me")
        return GetCurrentIdentityResponse.model_validate(data)

    async def get_comments(self, slug: str) -> Forest:
        """Fetch the comment forest of a post."""
        data = await self._request("GET", f"/posts/{slug}/comments")
        return tuple(CommentNode.model_validate(item) for item in data["comments"])

    async def create_comment(
        self,
        post_id: PostId,
        content: str,
        parent_id: CommentId | None = None,
    ) -> CommentNode:
        """Create a root comment, or a reply when ``parent_id`` is given."""
        payload: dict[str, Any] = {"content": content, "post_id": str(post_id)}
        if parent_id is not None:
            payload["parent_id"] = str(parent_id)
        data = await self._request("POST", "/comments", json=payload)
        return CommentNode.model_validate(data)

    async def update_comment(self, comment_id: CommentId, content: str) -> CommentNode:
        data = await self._request(
            "PATCH", f"/comments/{comment_id}", json={"content": content}
        )
        return CommentNode.model_validate(data)

    async def delete_comment(self, comment_id: CommentId) -> list[CommentId]:
        """Delete a comment and its replies.

        Returns:
            Ids removed by the server
        """
        data = await self._request("DELETE", f"/comments/{comment_id}")
        return [CommentId(UUID(value)) for value in data["deleted_ids"]]
