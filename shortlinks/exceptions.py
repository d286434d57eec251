class ShortLinksError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shortlinks_error'


class ConfigurationError(ShortLinksError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class ValidationError(ShortLinksError):
    """Raised when a request field fails boundary validation."""

    error_code = 'request:validation_error'

    def __init__(self, field: str, message: str):
        super().__init__(f'{field}: {message}')
        self.field = field
        self.message = message


class ShortLinkServiceError(ShortLinksError):
    """Base exception for short link lifecycle errors."""

    error_code = 'link:service_error'

    def __init__(self, shortcode: str | None = None, message: str | None = None):
        super().__init__(message or self.__class__.__doc__)
        self.shortcode = shortcode


class AliasConflictError(ShortLinkServiceError):
    """Requested custom alias is already taken."""

    error_code = 'link:alias_conflict'


class GenerationExhaustedError(ShortLinkServiceError):
    """Could not generate a free shortcode within the attempt limit."""

    error_code = 'link:generation_exhausted'


class LinkNotFoundError(ShortLinkServiceError):
    """Short link does not exist."""

    error_code = 'link:not_found'


class LinkExpiredError(ShortLinkServiceError):
    """Short link exists but has expired."""

    error_code = 'link:expired'
