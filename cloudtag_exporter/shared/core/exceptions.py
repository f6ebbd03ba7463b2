from typing import Any, Dict, List, Optional


class CloudTagException(Exception):
    """Base exception for all exporter errors."""
    def __init__(
        self,
        message: str,
        code: str = "internal_error",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

class ConfigurationError(CloudTagException):
    """Raised when a job or the exporter configuration is invalid. Never retried."""
    def __init__(self, message: str, code: str = "config_error", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=code, details=details)

class AdapterError(CloudTagException):
    """Raised when an external cloud adapter fails."""
    def __init__(self, message: str, code: str = "adapter_error", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=code, details=details)

class DiscoveryError(AdapterError):
    """
    Raised when a paginated provider call fails part-way through a discovery job.

    `resources` holds whatever was accumulated before the failure; callers must
    treat it as possibly incomplete.
    """
    def __init__(
        self,
        message: str,
        resource_type: str,
        region: str,
        resources: Optional[List[Any]] = None,
    ):
        super().__init__(
            message,
            code="discovery_error",
            details={"resource_type": resource_type, "region": region},
        )
        self.resource_type = resource_type
        self.region = region
        self.resources = list(resources or [])
