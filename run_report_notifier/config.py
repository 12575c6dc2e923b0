"""Configuration for the run report notifier."""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, SecretStr, field_validator

DEFAULT_ACTIVITY_IMAGE = "https://docs.pytest.org/en/stable/_static/pytest1.png"


class LaunchServiceConfig(BaseModel):
    """Connection details for the launch-tracking service.

    ``endpoint`` is the versioned API root, e.g.
    ``https://reportportal.example.com/api/v1``. The UI link is derived from
    it by stripping the API version segment.
    """

    endpoint: str
    api_key: SecretStr
    project: str


class NotifierConfig(BaseModel):
    """Configuration consumed by the summary reporter."""

    webhook_url: str
    environment: str = ""
    launch_service: LaunchServiceConfig | None = None
    timezone: str = "Europe/Amsterdam"
    activity_image: str = DEFAULT_ACTIVITY_IMAGE

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, value: str) -> str:
        """Reject zone names the tz database does not know."""
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {value}") from e
        return value
