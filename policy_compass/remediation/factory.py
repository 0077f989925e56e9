from policy_compass.config.settings import Settings
from policy_compass.remediation.dispatcher import RemediationDispatcher
from policy_compass.remediation.jira_client import JiraClient


class DispatcherFactory:
    """Creates the remediation dispatcher from settings.

    Missing Jira credentials yield a dispatcher without a client, which
    reports FailedPreconditionError when used.
    """

    @classmethod
    def create(cls, settings: Settings) -> RemediationDispatcher:
        client = None
        if settings.jira_base_url and settings.jira_email and settings.jira_api_token:
            client = JiraClient(
                base_url=settings.jira_base_url,
                email=settings.jira_email,
                api_token=settings.jira_api_token,
                timeout_seconds=settings.jira_timeout_seconds,
            )
        return RemediationDispatcher(
            client=client,
            project_key=settings.jira_project_key,
            issue_type=settings.jira_issue_type,
            max_workers=settings.dispatch_max_workers,
        )
