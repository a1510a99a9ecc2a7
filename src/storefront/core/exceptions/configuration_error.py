class ConfigurationError(Exception):
    """Raised when configuration is invalid or incomplete."""
