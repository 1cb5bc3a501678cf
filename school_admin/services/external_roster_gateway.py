# school_admin/services/external_roster_gateway.py
import asyncio
import logging
import httpx
from typing import List, Optional
from pydantic import ValidationError as PydanticValidationError

from ..core.config import settings
from ..core.exceptions import UpstreamError
from ..schemas.roster_schemas import RosterEntry

logger = logging.getLogger(__name__)


class ExternalRosterGateway:
    """Client for the externally-owned student roster.

    Unavailability of the remote service never fails a listing: every error
    is logged and `fetch_students` returns an empty list.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.external_api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.external_api_timeout
        self.transport = transport

    async def _get_payload(self, params: dict):
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.get(f"{self.base_url}/students", params=params)
            response.raise_for_status()
            return response.json()

    async def _request_students(self, class_code: str, offset: int, limit: int) -> List[RosterEntry]:
        params = {"class": class_code, "offset": offset, "limit": limit}
        try:
            # httpx timeouts apply per step; a slow-dripping body needs an overall cap
            payload = await asyncio.wait_for(self._get_payload(params), self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException):
            raise UpstreamError(f"External roster request timed out after {self.timeout}s")
        except httpx.HTTPStatusError as e:
            raise UpstreamError(f"External roster HTTP error: {e.response.status_code}")
        except httpx.HTTPError as e:
            raise UpstreamError(f"External roster transport error: {e}")
        except ValueError as e:
            raise UpstreamError(f"External roster returned invalid JSON: {e}")
        except Exception as e:
            raise UpstreamError(f"Unexpected external roster error: {e}")

        try:
            students = payload.get("students") or []
            return [RosterEntry.model_validate(student) for student in students]
        except (AttributeError, TypeError, PydanticValidationError) as e:
            raise UpstreamError(f"Invalid external roster response format: {e}")

    async def fetch_students(self, class_code: str, offset: int, limit: int) -> List[RosterEntry]:
        try:
            return await self._request_students(class_code, offset, limit)
        except UpstreamError as e:
            logger.warning(f"Failed to fetch external students: {e.message}")
            return []
