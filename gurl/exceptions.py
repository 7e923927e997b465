class GurlError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:gurl_error'


class ClientError(GurlError):
    """Base exception for malformed or missing client input."""

    error_code = 'client:client_error'


class EmptyArgumentError(ClientError):
    """Raised when a required request argument carries no usable value."""

    error_code = 'client:empty_argument_error'


class ConfigurationError(GurlError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
