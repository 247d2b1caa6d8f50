# =============================================================================
# Sim World - Text File Storage
# =============================================================================
# Small UTF-8 file helpers used to persist arena snapshots. Failures are
# logged and reported through the return value, never raised.
# =============================================================================

from pathlib import Path
from typing import Optional, Union

from loguru import logger

PathLike = Union[str, Path]


def write_text_file(filename: PathLike, content: str) -> bool:
    """
    Write content to a file, replacing any existing content.

    Returns:
        True on success, False if the write failed
    """
    path = Path(filename)
    try:
        path.write_text(content, encoding='utf-8')
    except OSError as e:
        logger.error(f"Error writing to file: {path} ({e})")
        return False
    logger.info("File saved successfully: {}", path)
    return True


def append_text_file(filename: PathLike, content: str) -> bool:
    """Append content to a file, creating it if needed."""
    path = Path(filename)
    try:
        with path.open('a', encoding='utf-8') as f:
            f.write(content)
    except OSError as e:
        logger.error(f"Error appending to file: {path} ({e})")
        return False
    logger.info("Content appended successfully to file: {}", path)
    return True


def read_text_file(filename: PathLike) -> Optional[str]:
    """
    Read a whole file as UTF-8.

    Returns:
        File content, or None if the read failed
    """
    path = Path(filename)
    try:
        content = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error reading from file: {path} ({e})")
        return None
    logger.info("File read successfully: {}", path)
    return content


def delete_text_file(filename: PathLike) -> bool:
    """Delete a file. Returns False if it did not exist or could not be removed."""
    path = Path(filename)
    try:
        if not path.exists():
            logger.warning("File not found, cannot delete: {}", path)
            return False
        path.unlink()
    except OSError as e:
        logger.error(f"Error deleting file: {path} ({e})")
        return False
    logger.info("File deleted successfully: {}", path)
    return True
