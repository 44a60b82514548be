"""Base class for portal API resources."""

from typing import Any, ClassVar

import httpx

from portalclient.core.pipeline import RequestPipeline
from portalclient.models import HTTPMethod, RequestSpec


def decode_body(response: httpx.Response) -> Any:
    """Decode a JSON response body; empty bodies decode to None."""
    if not response.content:
        return None
    return response.json()


class ApiResource:
    """A group of endpoints under one path prefix.

    Every call goes through the request pipeline, so failures surface as
    ``ApiError`` carrying a classified ``NormalizedError``.
    """

    # Subclasses must define this
    prefix: ClassVar[str]

    def __init__(self, pipeline: RequestPipeline) -> None:
        self.pipeline = pipeline

    def path(self, *parts: object) -> str:
        """Join the resource prefix and path parts."""
        segments = [self.prefix.strip("/"), *(str(p).strip("/") for p in parts)]
        return "/" + "/".join(s for s in segments if s)

    async def call(
        self,
        method: HTTPMethod,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        context: str | None = None,
    ) -> Any:
        """Send a request and return the decoded body.

        Raises:
            ApiError: On terminal failure
        """
        spec = RequestSpec(
            method=method, url=path, json=json, params=params, context=context
        )
        response = await self.pipeline.request(spec)
        return decode_body(response)

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.call(HTTPMethod.GET, path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.call(HTTPMethod.POST, path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        return await self.call(HTTPMethod.PUT, path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.call(HTTPMethod.DELETE, path, **kwargs)
