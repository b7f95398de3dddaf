"""
Configuration module for the stargazer exporter.
Handles environment variable loading, logging, and API constants.
"""

import os
import pathlib
import sys
import logging
from dotenv import load_dotenv
from errors import ConfigError

# Log to stderr so stdout stays clean for the MCP stdio transport
logging.basicConfig(
    level=logging.INFO,
    handlers=[logging.StreamHandler(sys.stderr)],
    format="%(asctime)s [star-tracker] %(message)s"
)

logger = logging.getLogger(__name__)

# Load environment variables (.env files)
# Strategy: 1. Project-level .env, then 2. current working directory .env
script_dir = pathlib.Path(__file__).parent
load_dotenv(script_dir / ".env")
load_dotenv(pathlib.Path.cwd() / ".env")

GRAPHQL_URL = "https://api.github.com/graphql"
USER_AGENT = "star-tracker/v0"

# Maximum number of edges GitHub returns per connection page
PAGE_SIZE = 100

# Fixed self-imposed pause before every request
REQUEST_DELAY_SECONDS = 3.0
REQUEST_TIMEOUT_SECONDS = 30.0

TOKEN_ENV_VAR = "GH_TOKEN"
FALLBACK_TOKEN_ENV_VAR = "GITHUB_TOKEN"


def get_github_token(token=None):
    """
    Resolve the bearer token used for the GraphQL API.

    An explicit token wins, then GH_TOKEN, then GITHUB_TOKEN.
    """
    for candidate in (token, os.getenv(TOKEN_ENV_VAR), os.getenv(FALLBACK_TOKEN_ENV_VAR)):
        if candidate and str(candidate).strip().lower() not in ("none", ""):
            return str(candidate).strip()
    raise ConfigError(
        f"a GitHub token is required: set {TOKEN_ENV_VAR} in the environment or a .env file"
    )


def set_verbose(verbose):
    """Switch the root logger between INFO and DEBUG."""
    logging.getLogger().setLevel(logging.DEBUG if verbose else logging.INFO)
