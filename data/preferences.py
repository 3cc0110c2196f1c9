"""
Preferences Module for the Blog Admin Client

This module persists the non-secret server settings (host and port) in an
ordinary dotenv-format preferences file. The API key is never written here;
it lives in the credential vault.
"""

import os
import tempfile
from typing import Dict, Optional

from dotenv import dotenv_values

from config import settings
from data.models import ServerConfiguration
from utils.logger import get_logger

logger = get_logger(__name__)


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class ConfigurationStore:
    """Dotenv-file store for the server host and port."""

    def __init__(self, path: Optional[str] = None):
        """
        Initialize the store.

        Args:
            path: Preferences file path. Defaults to settings.PREFERENCES_FILE.
        """
        self.path = str(path or settings.PREFERENCES_FILE)

    def _read(self) -> Dict[str, Optional[str]]:
        if not os.path.exists(self.path):
            return {}
        try:
            return dict(dotenv_values(self.path, interpolate=False))
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read preferences file {self.path}: {e}")
            return {}

    def _write(self, values: Dict[str, Optional[str]]) -> None:
        """Replace the file in one step so readers never see a half-written pair."""
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        lines = [f"{key}={_quote(value)}" for key, value in values.items() if value is not None]
        fd, tmp_path = tempfile.mkstemp(prefix=".preferences-", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write("\n".join(lines) + ("\n" if lines else ""))
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def save(self, host: str, port: int) -> None:
        """
        Persist host and port together.

        Args:
            host: Server host name or address.
            port: Server TCP port.
        """
        values = self._read()
        values[settings.PREFERENCES_HOST_KEY] = host
        values[settings.PREFERENCES_PORT_KEY] = str(int(port))
        self._write(values)
        logger.info(f"Saved server configuration {host}:{port}")

    def load(self) -> ServerConfiguration:
        """
        Load the last saved settings.

        Returns:
            ServerConfiguration: Saved values, with defaults for anything
            missing or malformed.
        """
        values = self._read()
        host = values.get(settings.PREFERENCES_HOST_KEY) or ""

        port = settings.DEFAULT_SERVER_PORT
        raw_port = values.get(settings.PREFERENCES_PORT_KEY)
        if raw_port:
            try:
                parsed_port = int(raw_port.strip())
            except ValueError:
                logger.warning(f"Ignoring malformed stored port {raw_port!r}")
            else:
                if 0 < parsed_port <= 65535:
                    port = parsed_port
                elif parsed_port != 0:
                    logger.warning(f"Ignoring out-of-range stored port {raw_port!r}")

        return ServerConfiguration(host=host, port=port)

    def clear(self) -> None:
        """Remove host and port, returning the store to its defaults."""
        values = self._read()
        if not values:
            return
        values.pop(settings.PREFERENCES_HOST_KEY, None)
        values.pop(settings.PREFERENCES_PORT_KEY, None)
        self._write(values)
        logger.info("Cleared server configuration")
