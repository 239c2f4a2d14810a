class ClickShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:clickshortener_error'


class InvalidURLError(ClickShortenerError):
    """Raised when a URL fails normalization or validation before allocation."""

    error_code = 'app:invalid_url_error'


class ConfigurationError(ClickShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
