"""
Async Microsoft Graph client for Planner resources.

Wraps an httpx.AsyncClient configured with the BearerTokenTransport, so every
request carries the access token. Only the three list calls the Planner
probe needs are exposed. Graph records are treated as opaque: the models
below keep the `id` and drop every other field.
"""

from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError

from planner_integration.config import DEFAULT_GRAPH_BASE_URL
from planner_integration.exceptions import ApiError
from planner_integration.transports.bearer import BearerTokenTransport


# Narrow models for Graph records (only fields this service reads)


class GraphEntity(BaseModel):
    """Any Graph record; only the identifier is kept."""

    model_config = ConfigDict(extra="ignore")

    id: str


class Group(GraphEntity):
    """Microsoft 365 group."""


class Plan(GraphEntity):
    """Planner plan owned by a group."""


class Task(GraphEntity):
    """Planner task inside a plan."""


class GraphCollection(BaseModel):
    """Graph collection envelope (`{"value": [...]}`)."""

    model_config = ConfigDict(extra="ignore")

    value: List[Dict[str, Any]] = []


EntityT = TypeVar("EntityT", bound=GraphEntity)


def _graph_error_message(response: httpx.Response) -> str:
    """Extract `error.message` from a Graph error body, falling back to raw text."""
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason_phrase

    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return response.text or response.reason_phrase


class GraphClient:
    """Planner-focused Microsoft Graph client."""

    def __init__(self, http_client: httpx.AsyncClient):
        self._http = http_client

    async def _get_collection(self, path: str, model: Type[EntityT]) -> List[EntityT]:
        """
        GET a Graph collection and parse its items.

        Args:
            path: Path relative to the Graph base URL (e.g., "/groups")
            model: Model each item is parsed into

        Returns:
            Parsed items of the first page

        Raises:
            ApiError: On transport failure, non-2xx status or malformed body
        """
        logger.debug(f"GET {path}")
        try:
            response = await self._http.get(path)
            response.raise_for_status()
            collection = GraphCollection(**response.json())
            return [model(**item) for item in collection.value]
        except httpx.HTTPStatusError as e:
            message = _graph_error_message(e.response)
            raise ApiError(
                f"GET {path} failed ({e.response.status_code}): {message}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise ApiError(f"GET {path} failed: {e}") from e
        except (ValueError, TypeError, ValidationError) as e:
            raise ApiError(f"GET {path} returned an unexpected body: {e}") from e

    async def list_groups(self) -> List[Group]:
        """List groups visible to the application."""
        return await self._get_collection("/groups", Group)

    async def list_plans(self, group_id: str) -> List[Plan]:
        """List Planner plans owned by a group."""
        return await self._get_collection(f"/groups/{group_id}/planner/plans", Plan)

    async def list_tasks(self, plan_id: str) -> List[Task]:
        """List tasks in a Planner plan."""
        return await self._get_collection(f"/planner/plans/{plan_id}/tasks", Task)

    async def aclose(self) -> None:
        """Close the underlying HTTP client and its transport."""
        await self._http.aclose()


def build_client(
    token: str,
    *,
    base_url: str = DEFAULT_GRAPH_BASE_URL,
    timeout: float = 30.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> GraphClient:
    """
    Wrap an access token into a Graph client.

    The token is not validated here; an expired or under-privileged token
    shows up as an ApiError on the first call.

    Args:
        token: Bearer access token
        base_url: Graph API root (version included)
        timeout: Request timeout in seconds
        transport: Optional underlying transport (tests inject a MockTransport)

    Returns:
        GraphClient ready for Planner calls
    """
    http_client = httpx.AsyncClient(
        transport=BearerTokenTransport(token, transport),
        base_url=base_url.rstrip("/"),
        timeout=httpx.Timeout(timeout),
        headers={"Accept": "application/json"},
    )
    return GraphClient(http_client)
