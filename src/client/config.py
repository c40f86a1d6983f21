import json
import logging
import os
from typing import Mapping, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

RUNTIME_ENV_FILE = os.getenv("RUNTIME_ENV_FILE", "env-config.json")


def load_runtime_env(path: str) -> Optional[dict]:
    """
    Read the object a deployment injects at container start.

    The entrypoint writes something like ``{"API_URL": "https://api.example.com"}``
    next to the client. No file means nothing was injected.
    """
    if not os.path.exists(path):
        return None
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


_env_ = load_runtime_env(RUNTIME_ENV_FILE)


def resolve_api_url(
    runtime_env: Optional[Mapping] = None,
    build_env: Optional[Mapping] = None,
) -> Optional[str]:
    runtime_env = _env_ if runtime_env is None else runtime_env
    build_env = os.environ if build_env is None else build_env

    if runtime_env and runtime_env.get("API_URL"):
        return runtime_env["API_URL"]
    return build_env.get("API_URL")


API_URL = resolve_api_url()
