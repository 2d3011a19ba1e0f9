"""GraphQL-over-HTTP transport shared by the subgraph, hub and ENS lookups."""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from .logger import StructuredLogger, get_logger
from .normalize import adjust_url


class QueryError(ValueError):
    """Raised when a query fails at the HTTP or GraphQL level."""
    pass


@dataclass(frozen=True)
class GraphQLQuery:
    text: str
    variables: Dict[str, Any] = field(default_factory=dict)

    def payload(self) -> Dict[str, Any]:
        return {"query": self.text, "variables": self.variables}


def graphql_request(
    url: str,
    query: GraphQLQuery,
    source: str = "subgraph",
    timeout: float = 15,
    logger: Optional[StructuredLogger] = None,
) -> Dict[str, Any]:
    """POST a GraphQL query with standardized error handling and logging.

    Args:
        url: Endpoint URL; hosted-service explorer URLs are rewritten first
        query: Query text and variables
        source: Source name for logs and metrics (e.g. 'subgraph', 'hub')
        timeout: HTTP timeout in seconds

    Returns:
        The response's ``data`` object ({} when the server returned none)

    Raises:
        QueryError: On any HTTP error, timeout, malformed body or GraphQL error
    """
    logger = logger or get_logger()
    endpoint = adjust_url(url)
    logger.record_query_attempt(source)
    try:
        resp = requests.post(endpoint, json=query.payload(), timeout=timeout)
        resp.raise_for_status()
        body = resp.json()
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "HTTPError"
        logger.record_query_failure(source, f"HTTPError_{status}")
        logger.error(f"{source.capitalize()} request failed", url=endpoint, status=status)
        raise QueryError(f"{source.capitalize()} request failed ({status}): {endpoint}")
    except requests.exceptions.Timeout:
        logger.record_query_failure(source, "Timeout")
        logger.warning(f"{source.capitalize()} request timed out", url=endpoint)
        raise QueryError(f"{source.capitalize()} request timed out. Try again later.")
    except requests.exceptions.RequestException as e:
        logger.record_query_failure(source, "RequestException")
        logger.error(f"{source.capitalize()} request error", url=endpoint, error=str(e))
        raise QueryError(f"{source.capitalize()} request error: {e}")
    except ValueError as e:
        logger.record_query_failure(source, "InvalidJSON")
        logger.error(f"{source.capitalize()} returned a non-JSON body", url=endpoint)
        raise QueryError(f"{source.capitalize()} returned a non-JSON body: {e}")

    if not isinstance(body, dict):
        logger.record_query_failure(source, "InvalidJSON")
        raise QueryError(f"{source.capitalize()} returned an unexpected body: {endpoint}")

    errors = body.get("errors")
    if errors:
        messages = [err.get("message", str(err)) if isinstance(err, dict) else str(err) for err in errors]
        logger.record_query_failure(source, "GraphQLError")
        logger.error(f"{source.capitalize()} query rejected", url=endpoint, errors=messages)
        raise QueryError(f"{source.capitalize()} query rejected: {'; '.join(messages)}")

    logger.record_query_success(source)
    return body.get("data") or {}


class GraphQLTransport:
    """Runs blocking GraphQL requests off the event loop."""

    def __init__(self, timeout: float = 15, logger: Optional[StructuredLogger] = None):
        self.timeout = timeout
        self.logger = logger

    async def request(
        self, endpoint: str, query: GraphQLQuery, source: str = "subgraph"
    ) -> Dict[str, Any]:
        return await asyncio.to_thread(
            graphql_request,
            endpoint,
            query,
            source,
            self.timeout,
            self.logger,
        )
