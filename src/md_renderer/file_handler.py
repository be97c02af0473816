"""File handler module: path validation and encoding-aware read/write.

Markdown files in the wild are not always UTF-8; input encoding is
detected so that ``--in-place`` rewrites keep the original encoding.
"""

import codecs
import logging
from pathlib import Path

from charset_normalizer import from_bytes

logger = logging.getLogger(__name__)


def validate_file_path(path_str: str) -> Path:
    """Validate and resolve an input file path.

    Args:
        path_str: Path string to an existing file.

    Returns:
        Resolved Path object pointing to the real file.

    Raises:
        ValueError: If path doesn't exist or is not a file.
    """
    resolved = Path(path_str).expanduser().resolve()
    if not resolved.exists():
        raise ValueError(f"File not found: {path_str}")
    if not resolved.is_file():
        raise ValueError(f"Path is not a file: {path_str}")
    return resolved


def decode_bytes(raw: bytes) -> tuple[str, str]:
    """Decode raw bytes, preferring UTF-8.

    Valid UTF-8 (and so plain ASCII) is returned as is. Only input that
    fails to decode goes through charset-normalizer detection.

    Returns:
        Tuple of (content_string, detected_encoding).
    """
    if not raw:
        return ("", "utf-8")

    try:
        return (raw.decode("utf-8"), "utf-8")
    except UnicodeDecodeError:
        pass

    result = from_bytes(raw).best()
    if result is None:
        logger.warning("Could not detect input encoding, assuming UTF-8")
        return (raw.decode("utf-8", errors="replace"), "utf-8")

    encoding = codecs.lookup(result.encoding).name
    logger.debug("Detected input encoding %s", encoding)
    return (str(result), encoding)


def read_file_with_encoding(path: Path) -> tuple[str, str]:
    """Read a file with automatic encoding detection.

    Returns:
        Tuple of (content_string, detected_encoding).
    """
    return decode_bytes(path.read_bytes())


def write_file(path: Path, content: str, encoding: str = "utf-8") -> int:
    """Write content to a file, creating parent directories as needed.

    Returns:
        Number of bytes written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    encoded = content.encode(encoding)
    path.write_bytes(encoded)
    return len(encoded)
