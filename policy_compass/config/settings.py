from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pdfplumber"
    min_document_bytes: int = 1024
    max_document_bytes: int = 10 * 1024 * 1024
    preview_scale: float = 0.5

    analysis_provider: str = "gemini"
    analysis_model_name: str = "gemini-2.5-flash"
    analysis_api_key: str = ""
    analysis_base_url: str = ""
    analysis_timeout_seconds: int = 60
    analysis_temperature: float = 0.0
    analysis_default_variant: str = "strict"

    jira_base_url: str = ""
    jira_email: str = ""
    jira_api_token: str = ""
    jira_project_key: str = "SCRUM"
    jira_issue_type: str = "Task"
    jira_timeout_seconds: int = 30

    dispatch_max_workers: int = 1

    identity_user_id: str = ""
    identity_token: str = ""
