"""
Configuration Settings for the Blog Admin Client

This module centralizes all configuration settings for the Blog Admin client,
including environment overrides, local storage locations and protocol constants.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Determine the application root directory
APP_ROOT = Path(__file__).resolve().parent.parent

# Load environment variables from .env file
load_dotenv(dotenv_path=os.path.join(APP_ROOT, '.env'))

# =============================================================================
# Local Storage Settings
# =============================================================================

# Non-secret server settings (host, port) live in an ordinary preferences file
PREFERENCES_FILE = os.getenv("BLOG_PREFERENCES_FILE", os.path.join(APP_ROOT, "preferences.env"))
PREFERENCES_HOST_KEY = "SERVER_HOST"
PREFERENCES_PORT_KEY = "SERVER_PORT"

# The API key lives in the OS keyring under a fixed service/account pair
KEYRING_SERVICE = os.getenv("BLOG_KEYRING_SERVICE", "com.blog.BlogApp")
KEYRING_ACCOUNT = os.getenv("BLOG_KEYRING_ACCOUNT", "apiKey")

# =============================================================================
# Server Protocol Settings
# =============================================================================

DEFAULT_SERVER_PORT = 8081
API_KEY_HEADER = "X-API-KEY"
UNKNOWN_ERROR_MESSAGE = "Unknown error"

# Seconds; handed to requests, the client has no timeout logic of its own
REQUEST_TIMEOUT = float(os.getenv("BLOG_REQUEST_TIMEOUT", "10"))

# =============================================================================
# Content Settings
# =============================================================================

MAX_POST_LENGTH = 280                # Code points, after trimming whitespace
DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 50
