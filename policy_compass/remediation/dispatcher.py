"""Fan remediation items out to the issue tracker, one ticket per item.

Each item is attempted independently: a failure is captured into that
item's outcome and processing continues with the next one. Only
whole-operation preconditions raise, and they are checked before any
ticket is attempted.
"""

from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from policy_compass.analysis.models import RemediationItem
from policy_compass.auth.identity import Identity, require_identity
from policy_compass.errors import FailedPreconditionError, InvalidArgumentError
from policy_compass.logging.logger import Log
from policy_compass.remediation.exceptions import TicketCreationError
from policy_compass.remediation.jira_client import JiraClient
from policy_compass.remediation.models import (
    DispatchReport,
    SourceItem,
    TicketError,
    TicketOutcome,
    TicketRecord,
)
from policy_compass.remediation.ticket_builder import build_issue_fields

_GENERIC_ITEM_ERROR = "Failed to create Jira ticket"


class RemediationDispatcher:
    """Creates one ticket per remediation item with per-item failure isolation."""

    def __init__(
        self,
        *,
        client: JiraClient | None,
        project_key: str,
        issue_type: str = "Task",
        max_workers: int = 1,
    ) -> None:
        self._client = client
        self._project_key = project_key
        self._issue_type = issue_type
        self._max_workers = max(1, max_workers)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()

    def dispatch(self, identity: Identity | None, items: Any) -> DispatchReport:
        """Create tickets for ``items`` and report every outcome in input order.

        Raises:
            UnauthenticatedError: if no valid identity is present.
            InvalidArgumentError: if ``items`` is not a list.
            FailedPreconditionError: if ticketing credentials are unavailable.
        """
        require_identity(identity)
        if not isinstance(items, (list, tuple)):
            raise InvalidArgumentError("actionItems must be a list")
        if self._client is None or not self._project_key:
            raise FailedPreconditionError("Jira credentials are not configured")

        Log.info(f"Dispatching {len(items)} remediation items to Jira")
        outcomes = self._run_all(self._client, items)
        report = DispatchReport(outcomes=tuple(outcomes))
        Log.info(
            f"Jira dispatch complete: {report.total_created} created, "
            f"{report.total_errors} failed"
        )
        return report

    def _run_all(
        self, client: JiraClient, items: Sequence[SourceItem]
    ) -> list[TicketOutcome]:
        if self._max_workers == 1 or len(items) < 2:
            return [self._dispatch_one(client, item) for item in items]
        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            futures = [
                (index, pool.submit(self._dispatch_one, client, item))
                for index, item in enumerate(items)
            ]
            tagged = [(index, future.result()) for index, future in futures]
        tagged.sort(key=lambda pair: pair[0])
        return [outcome for _, outcome in tagged]

    def _dispatch_one(self, client: JiraClient, item: SourceItem) -> TicketOutcome:
        try:
            fields = build_issue_fields(
                _as_mapping(item),
                project_key=self._project_key,
                issue_type=self._issue_type,
            )
            key = client.create_issue(fields)
        except TicketCreationError as exc:
            message = str(exc) or _GENERIC_ITEM_ERROR
            Log.warning(f"Ticket creation failed for item {_item_id(item)}: {message}")
            return TicketError(item=item, message=message)
        except Exception as exc:
            Log.warning(f"Ticket creation failed for item {_item_id(item)}: {exc}")
            return TicketError(item=item, message=str(exc) or _GENERIC_ITEM_ERROR)
        Log.info(f"Created Jira ticket {key} for item {_item_id(item)}")
        return TicketRecord(key=key, url=client.issue_url(key), item=item)


def _as_mapping(item: SourceItem) -> Any:
    if isinstance(item, RemediationItem):
        return item.to_dict()
    return item


def _item_id(item: SourceItem) -> str:
    if isinstance(item, RemediationItem):
        return item.id
    if isinstance(item, Mapping):
        return str(item.get("id", "?"))
    return "?"
