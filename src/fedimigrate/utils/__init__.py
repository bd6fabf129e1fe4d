"""fedimigrate utility modules."""

from fedimigrate.utils.logging import configure_logging
from fedimigrate.utils.retry import retry_storage

__all__ = ["configure_logging", "retry_storage"]
