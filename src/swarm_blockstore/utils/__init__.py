"""
Swarm blockstore utilities.

This module provides logging, validation and stream helpers for the client.
"""

from swarm_blockstore.utils.logging import (
    LogContext,
    configure_logging,
    disable_logging,
    enable_debug,
    get_logger,
    set_level,
)
from swarm_blockstore.utils.streams import UploadData, aiter_file, to_request_content
from swarm_blockstore.utils.validation import (
    require_signature,
    require_stamp,
    validate_api_url,
    validate_filename,
    validate_owner,
    validate_reference,
    validate_topic,
)

__all__ = [
    # Structured logging
    "get_logger",
    "configure_logging",
    "set_level",
    "disable_logging",
    "enable_debug",
    "LogContext",
    # Streams
    "UploadData",
    "aiter_file",
    "to_request_content",
    # Validation
    "validate_api_url",
    "validate_reference",
    "validate_owner",
    "validate_topic",
    "validate_filename",
    "require_stamp",
    "require_signature",
]
