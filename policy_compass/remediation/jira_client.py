from typing import Any

import httpx

from policy_compass.remediation.exceptions import TicketCreationError

_GENERIC_ERROR = "Failed to create Jira ticket"


class JiraClient:
    """Creates single issues through the Jira Cloud REST API."""

    def __init__(
        self,
        *,
        base_url: str,
        email: str,
        api_token: str,
        timeout_seconds: int = 30,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self._base_url,
            auth=httpx.BasicAuth(email, api_token),
            timeout=timeout_seconds,
            headers={"Accept": "application/json", "Content-Type": "application/json"},
            transport=transport,
        )

    def issue_url(self, key: str) -> str:
        return f"{self._base_url}/browse/{key}"

    def create_issue(self, fields: dict[str, Any]) -> str:
        """Create one issue and return its key.

        Raises:
            TicketCreationError: on transport failure, a non-2xx response, or a
                response without a key.
        """
        try:
            response = self._client.post("/rest/api/3/issue", json={"fields": fields})
        except httpx.HTTPError as exc:
            raise TicketCreationError(f"Jira request failed: {exc}") from exc

        if response.is_error:
            raise TicketCreationError(
                extract_error_message(response), status_code=response.status_code
            )
        try:
            key = response.json().get("key")
        except (ValueError, AttributeError) as exc:
            raise TicketCreationError("Jira returned an unreadable response") from exc
        if not isinstance(key, str) or not key:
            raise TicketCreationError("Jira response did not include an issue key")
        return key

    def close(self) -> None:
        self._client.close()


def extract_error_message(response: httpx.Response) -> str:
    """Join Jira's ``errorMessages`` and field ``errors``, else a generic message."""
    try:
        body = response.json()
    except ValueError:
        return f"{_GENERIC_ERROR} (HTTP {response.status_code})"
    if not isinstance(body, dict):
        return f"{_GENERIC_ERROR} (HTTP {response.status_code})"
    messages = [m for m in body.get("errorMessages") or [] if isinstance(m, str) and m]
    field_errors = body.get("errors") or {}
    if isinstance(field_errors, dict):
        messages.extend(f"{name}: {text}" for name, text in field_errors.items())
    if not messages:
        return f"{_GENERIC_ERROR} (HTTP {response.status_code})"
    return "; ".join(messages)
