from dataclasses import dataclass, field
from typing import Any

from policy_compass.analysis.models import RemediationItem

SourceItem = RemediationItem | dict[str, Any]


@dataclass(frozen=True)
class TicketRecord:
    """A ticket created for one remediation item."""

    key: str
    url: str
    item: SourceItem
    ok: bool = True


@dataclass(frozen=True)
class TicketError:
    """A remediation item whose ticket could not be created."""

    item: SourceItem
    message: str
    ok: bool = False


TicketOutcome = TicketRecord | TicketError


def _item_payload(item: SourceItem) -> Any:
    if isinstance(item, RemediationItem):
        return item.to_dict()
    return item


@dataclass(frozen=True)
class DispatchReport:
    """One outcome per input item, in input order."""

    outcomes: tuple[TicketOutcome, ...] = field(default_factory=tuple)

    @property
    def created_tickets(self) -> list[TicketRecord]:
        return [o for o in self.outcomes if isinstance(o, TicketRecord)]

    @property
    def errors(self) -> list[TicketError]:
        return [o for o in self.outcomes if isinstance(o, TicketError)]

    @property
    def total_created(self) -> int:
        return len(self.created_tickets)

    @property
    def total_errors(self) -> int:
        return len(self.errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "createdTickets": [
                {"jiraKey": t.key, "jiraUrl": t.url, "actionItem": _item_payload(t.item)}
                for t in self.created_tickets
            ],
            "errors": [
                {"actionItem": _item_payload(e.item), "error": e.message}
                for e in self.errors
            ],
            "totalCreated": self.total_created,
            "totalErrors": self.total_errors,
        }
