"""Per-controller request configuration and the library defaults."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_ENDPOINT = "https://generativelanguage.googleapis.com"
DEFAULT_API_VERSION = "v1beta"
DEFAULT_TIMEOUT = 180.0


class RequestOptions(BaseModel):
    """Options applied to every call made by a controller.

    Attributes:
        timeout: Deadline in seconds for a whole call, measured from its start.
            ``None`` means ``DEFAULT_TIMEOUT``.
        api_version: API surface used as the first path segment, e.g. ``v1beta``.
        endpoint: Base URL of the service.
    """

    model_config = ConfigDict(frozen=True)

    timeout: Optional[float] = Field(default=None, gt=0)
    api_version: str = DEFAULT_API_VERSION
    endpoint: str = DEFAULT_ENDPOINT

    @field_validator("api_version")
    @classmethod
    def _check_api_version(cls, value: str) -> str:
        value = value.strip("/")
        if not value:
            raise ValueError("api_version must not be empty")
        return value

    @field_validator("endpoint")
    @classmethod
    def _check_endpoint(cls, value: str) -> str:
        value = value.rstrip("/")
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"endpoint must be an http(s) URL, got '{value}'")
        return value

    @property
    def effective_timeout(self) -> float:
        """The deadline to apply, falling back to ``DEFAULT_TIMEOUT``."""
        return self.timeout if self.timeout is not None else DEFAULT_TIMEOUT
