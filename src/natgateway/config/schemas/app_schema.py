"""Main application configuration schema."""
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from natgateway.config.defaults import LogDestination, LogLevel
from natgateway.domain.core.exceptions import ConfigurationError


class AWSConfig(BaseModel):
    """EC2 client settings."""
    region: str = "us-east-1"
    endpoint_url: Optional[str] = None
    connection_timeout_ms: int = Field(10000, ge=100)
    request_retry_attempts: int = Field(3, ge=0, le=10)

    @field_validator('endpoint_url')
    @classmethod
    def empty_endpoint_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    def to_client_config(self) -> Dict[str, Any]:
        """Settings in the form AWSClient expects."""
        return {
            'AWS_ENDPOINT_URL': self.endpoint_url,
            'AWS_CONNECTION_TIMEOUT_MS': self.connection_timeout_ms,
            'AWS_REQUEST_RETRY_ATTEMPTS': self.request_retry_attempts,
        }


class HandlerConfig(BaseModel):
    """Lifecycle handler settings."""
    callback_delay_seconds: int = Field(15, ge=0, description="Delay the caller should wait between polls")
    stabilization_timeout_seconds: int = Field(1800, gt=0, description="Caller-enforced stabilization budget")
    list_page_size: Optional[int] = Field(None, description="MaxResults for list calls; None lets EC2 decide")
    reserved_tag_prefix: str = Field("aws:", description="Tags with this key prefix are system-managed")

    @field_validator('list_page_size')
    @classmethod
    def validate_page_size(cls, v: Optional[int]) -> Optional[int]:
        if not v:
            return None
        if v < 5 or v > 1000:
            raise ValueError("list_page_size must be between 5 and 1000")
        return v


class LogFileConfig(BaseModel):
    """Rotating log file settings."""
    path: str = "logs/natgateway.log"
    max_size_mb: int = Field(10, gt=0)
    backup_count: int = Field(5, ge=0)


class LoggingConfig(BaseModel):
    """Logging settings."""
    level: LogLevel = LogLevel.INFO
    destination: LogDestination = LogDestination.STDOUT
    file: LogFileConfig = Field(default_factory=LogFileConfig)

    @field_validator('level', mode='before')
    @classmethod
    def upper_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator('destination', mode='before')
    @classmethod
    def lower_destination(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v


class AppConfig(BaseModel):
    """Application configuration."""
    aws: AWSConfig = Field(default_factory=AWSConfig)
    handler: HandlerConfig = Field(default_factory=HandlerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'AppConfig':
        """
        Build typed configuration from the flat ConfigurationManager dictionary.

        Raises:
            ConfigurationError: If any value fails validation
        """
        try:
            return cls(
                aws=AWSConfig(
                    region=config.get("AWS_REGION") or "us-east-1",
                    endpoint_url=config.get("AWS_ENDPOINT_URL"),
                    connection_timeout_ms=config.get("AWS_CONNECTION_TIMEOUT_MS", 10000),
                    request_retry_attempts=config.get("AWS_REQUEST_RETRY_ATTEMPTS", 3),
                ),
                handler=HandlerConfig(**config.get("HANDLER_CONFIG", {})),
                logging=LoggingConfig(**config.get("LOGGING_CONFIG", {})),
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}")
