"""fedimigrate: versioned data migration runner for fediverse publishing stores."""

__version__ = "1.0.0"
