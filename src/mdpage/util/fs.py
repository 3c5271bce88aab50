"""Byte-level file reading off the event loop"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from mdpage.errors import IncludeError, IncludeNotFoundError


logger = logging.getLogger(__name__)


async def read_file(path: str | Path) -> bytes:
    """Read path in the loop's default executor; OS errors become IncludeError."""
    p = Path(path)
    loop = asyncio.get_running_loop()
    try:
        data = await loop.run_in_executor(None, p.read_bytes)
    except FileNotFoundError as e:
        raise IncludeNotFoundError(p, f"Include file not found: {p}") from e
    except OSError as e:
        raise IncludeError(p, f"Include file not readable: {p} ({e.strerror or e})") from e
    logger.debug("read %s (%d bytes)", p, len(data))
    return data


async def read_text(path: str | Path, encoding: str = "utf-8") -> str:
    """Read path and decode it; undecodable content is reported as an IncludeError."""
    data = await read_file(path)
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as e:
        raise IncludeError(path, f"Include file is not valid {encoding}: {path}") from e
