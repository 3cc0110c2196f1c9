"""
Configuration Validation for the Blog Admin Client

This module contains configuration validation logic and the non-secret
configuration summary used for startup logging.
"""

from utils.exceptions import ConfigurationError


def validate_settings():
    """
    Validate that all required settings are properly configured.

    Raises:
        ConfigurationError: If required settings are missing or invalid.
    """
    # Import settings here to avoid circular imports
    from config import settings

    errors = []

    # Keyring identifiers must be present or the credential cannot be found again
    required_vars = [
        ("KEYRING_SERVICE", settings.KEYRING_SERVICE),
        ("KEYRING_ACCOUNT", settings.KEYRING_ACCOUNT),
        ("PREFERENCES_FILE", settings.PREFERENCES_FILE),
    ]

    for var_name, var_value in required_vars:
        if not var_value:
            errors.append(f"Missing required setting: {var_name}")

    # Validate numeric settings are within reasonable bounds
    numeric_validations = [
        ("DEFAULT_SERVER_PORT", settings.DEFAULT_SERVER_PORT, 1, 65535),
        ("MAX_POST_LENGTH", settings.MAX_POST_LENGTH, 1, 10000),
        ("DEFAULT_PAGE", settings.DEFAULT_PAGE, 1, 100000),
        ("DEFAULT_PAGE_LIMIT", settings.DEFAULT_PAGE_LIMIT, 1, 1000),
    ]

    for name, value, min_val, max_val in numeric_validations:
        if value < min_val or value > max_val:
            errors.append(f"{name} must be between {min_val} and {max_val}, got {value}")

    if settings.REQUEST_TIMEOUT <= 0:
        errors.append(f"REQUEST_TIMEOUT must be positive, got {settings.REQUEST_TIMEOUT}")

    # Raise all errors at once
    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigurationError(error_msg)

    return True


def get_config_summary() -> dict:
    """
    Returns a summary of current configuration (without sensitive values).
    Useful for logging startup state.
    """
    # Import settings here to avoid circular imports
    from config import settings

    return {
        "storage": {
            "preferences_file": str(settings.PREFERENCES_FILE),
            "keyring_service": settings.KEYRING_SERVICE,
            "keyring_account": settings.KEYRING_ACCOUNT,
        },
        "protocol": {
            "default_port": settings.DEFAULT_SERVER_PORT,
            "request_timeout": settings.REQUEST_TIMEOUT,
        },
        "content_settings": {
            "max_post_length": settings.MAX_POST_LENGTH,
            "default_page_limit": settings.DEFAULT_PAGE_LIMIT,
        },
    }
