"""
Environment configuration for the Swarm blockstore client.

Reads Bee connection settings from environment variables, optionally
after loading a ``.env`` file:

- BEE_API_URL: Bee node API URL (default: http://localhost:1633)
- BEE_POSTAGE_BATCH_ID: Default postage batch ID
- BEE_REDUNDANCY_LEVEL: Default erasure coding level (0-4)
- BEE_PIN: Pin every upload (true/false)
- BEE_TIMEOUT_MS: Total request timeout in milliseconds
"""

from __future__ import annotations

import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import ValidationError as PydanticValidationError

from swarm_blockstore.constants import DEFAULT_REQUEST_TIMEOUT_MS
from swarm_blockstore.errors import ValidationError
from swarm_blockstore.storage.types import BeeConfig

DEFAULT_API_URL = "http://localhost:1633"

ENV_API_URL = "BEE_API_URL"
ENV_POSTAGE_BATCH_ID = "BEE_POSTAGE_BATCH_ID"
ENV_REDUNDANCY_LEVEL = "BEE_REDUNDANCY_LEVEL"
ENV_PIN = "BEE_PIN"
ENV_TIMEOUT_MS = "BEE_TIMEOUT_MS"

_TRUE_VALUES = ("1", "true", "yes", "on")


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in _TRUE_VALUES


def _parse_timeout(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValidationError(
            f"{ENV_TIMEOUT_MS} must be an integer",
            field=ENV_TIMEOUT_MS,
            details={"value": value},
        ) from None


def load_config_from_env(
    dotenv_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> BeeConfig:
    """
    Build a BeeConfig from environment variables.

    Args:
        dotenv_path: Optional ``.env`` file loaded first (existing
            variables are not overridden)
        environ: Mapping to read instead of ``os.environ``

    Returns:
        BeeConfig

    Raises:
        ValidationError: If a variable has an invalid value
    """
    if dotenv_path is not None:
        load_dotenv(dotenv_path)
    env = os.environ if environ is None else environ

    try:
        return BeeConfig(
            api_url=env.get(ENV_API_URL) or DEFAULT_API_URL,
            postage_batch_id=env.get(ENV_POSTAGE_BATCH_ID, ""),
            redundancy_level=env.get(ENV_REDUNDANCY_LEVEL) or None,
            pin=_parse_bool(env.get(ENV_PIN, "")),
            timeout=_parse_timeout(env.get(ENV_TIMEOUT_MS) or str(DEFAULT_REQUEST_TIMEOUT_MS)),
        )
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise ValidationError(
            f"Invalid Bee configuration: {field}: {first['msg']}",
            field=field,
        ) from exc
