from __future__ import annotations
import logging, uuid
from typing import Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .endpoints import DOG_API_BASE_URL, Endpoint
from .errors import DecodingError, HttpError, InvalidURLError, NoDataError, UnknownNetworkError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

class ApiClient:
    """
    - Async client for the Dog CEO API with:
      - base_url
      - httpx timeouts
      - one exchange per call (no retries)
      - failures mapped onto the NetworkError taxonomy
    """

    def __init__(
        self,
        base_url: str = DOG_API_BASE_URL,
        connect_timeout: float = 5.0,
        read_timeout: float = 30.0,
        *,
        default_headers: Optional[dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = httpx.Timeout(
            connect=connect_timeout,
            read=read_timeout,
            write=read_timeout,
            pool=read_timeout,
        )
        self.default_headers = {"Accept": "application/json", **(default_headers or {})}
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self._client = httpx.AsyncClient(timeout=self.timeout, headers=self.default_headers, transport=self._transport)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(self, endpoint: Endpoint, response_model: Type[ModelT]) -> ModelT:
        """
        Send `endpoint` and decode the body into `response_model`.

        Order of checks: URL, transport, HTTP status, empty body, decode.
        The status check runs before the body is looked at, so a 404 is
        reported as HttpError(404) whatever it carries.
        """
        assert self._client is not None
        url = endpoint.url(self.base_url)
        if url is None:
            raise InvalidURLError()

        req_id = str(uuid.uuid4())
        try:
            resp = await self._client.request(
                endpoint.method,
                url,
                headers={"X-Request-Id": req_id},
            )
        except Exception as e:
            logger.debug("[req#%s] %s %s failed: %r", req_id, endpoint.method, url, e)
            raise UnknownNetworkError(e) from e

        status = resp.status_code
        logger.debug("[req#%s] %s %s -> %s", req_id, endpoint.method, url, status)
        if not (200 <= status < 300):
            raise HttpError(status)

        if not resp.content:
            raise NoDataError()

        try:
            return response_model.model_validate_json(resp.content)
        except ValidationError as e:
            raise DecodingError(e) from e
