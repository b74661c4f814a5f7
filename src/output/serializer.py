"""Registry document encoders (msgpack or indented JSON)."""

from __future__ import annotations

import json
import logging
import sys
from typing import BinaryIO, Optional

import msgpack

from constants import Constants
from versioning.models import OutputFormat, Registry

logger = logging.getLogger(__name__)


def serialize_registry(registry: Registry, output_format: OutputFormat) -> bytes:
    """Encode ``registry`` in the requested format."""
    if output_format == OutputFormat.JSON:
        return json.dumps(registry, indent=Constants.JSON_INDENT, ensure_ascii=False).encode("utf-8")
    if output_format == OutputFormat.MSGPACK:
        return msgpack.packb(registry, use_bin_type=True)
    raise ValueError(f"Unsupported output format: {output_format}")


def write_registry(
    registry: Registry, output_format: OutputFormat, stream: Optional[BinaryIO] = None
) -> int:
    """Write the encoded registry to ``stream`` (stdout by default).

    Returns:
        int: Number of bytes written.
    """
    payload = serialize_registry(registry, output_format)
    out = stream if stream is not None else sys.stdout.buffer
    out.write(payload)
    out.flush()
    logger.info("Wrote %d package(s) as %s (%d bytes)", len(registry), output_format.value, len(payload))
    return len(payload)
