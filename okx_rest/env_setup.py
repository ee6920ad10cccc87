"""Environment configuration setup utilities.

This module provides functions for loading OKX credentials from .env files
or the process environment.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from okx_rest.errors import MissingCredentialsError
from okx_rest.helpers import DEFAULT_API_URL

log = logging.getLogger(__name__)


def setup_environment() -> tuple[str, str, str, str, str | None]:
    """Load and return the OKX client configuration.

    Loads environment variables from a .env file if present, otherwise falls
    back to system environment variables. Reads environment-specific variables
    based on the ENVIRONMENT variable (defaults to 'production').

    Returns:
        Tuple:
            - api_endpoint: The API base URL
            - api_key: The API key
            - secret_key: The secret key used for signing
            - passphrase: The API key passphrase
            - proxy: Optional forward proxy URL

    Raises:
        MissingCredentialsError: If the key, secret or passphrase is not set

    """
    env_file_path = Path(".env")
    if env_file_path.exists():
        log.info("Loading environment variables from .env file")
        load_dotenv(env_file_path)
    else:
        log.info(".env file not found. Falling back to Bash Environment variables.")

    environment = os.getenv("ENVIRONMENT", "production").lower()
    log.info("Using %s environment", environment)
    suffix = environment.upper()

    api_endpoint = os.environ.get(f"OKX_API_ENDPOINT_{suffix}", DEFAULT_API_URL)
    api_key = os.environ.get(f"OKX_API_KEY_{suffix}")
    secret_key = os.environ.get(f"OKX_SECRET_KEY_{suffix}")
    passphrase = os.environ.get(f"OKX_PASSPHRASE_{suffix}")
    proxy = os.environ.get(f"OKX_PROXY_{suffix}") or None

    if not api_key:
        raise MissingCredentialsError(f"OKX_API_KEY_{suffix}")
    if not secret_key:
        raise MissingCredentialsError(f"OKX_SECRET_KEY_{suffix}")
    if not passphrase:
        raise MissingCredentialsError(f"OKX_PASSPHRASE_{suffix}")

    return api_endpoint, api_key, secret_key, passphrase, proxy
