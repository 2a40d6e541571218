"""
Site file discovery and line reading.

A data directory holds one JSON-lines file per site; the site is named
after the file without its extension.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from .errors import DataDirectoryNotFoundError, NoMatchingFilesError

logger = logging.getLogger(__name__)

SITE_FILE_EXTENSION = ".jsonl"


def find_site_files(data_dir: Union[str, Path], extension: str = SITE_FILE_EXTENSION) -> List[Path]:
    """
    List the site files of a data directory, sorted by path.

    Args:
        data_dir: Directory to scan (not recursively)
        extension: File extension to keep, including the dot

    Returns:
        Sorted list of file paths with the given extension

    Raises:
        DataDirectoryNotFoundError: If the directory cannot be opened
        NoMatchingFilesError: If no file has the given extension
    """
    data_dir = Path(data_dir)
    try:
        entries = list(data_dir.iterdir())
    except OSError as e:
        raise DataDirectoryNotFoundError(data_dir) from e

    site_files = sorted(path for path in entries if path.suffix == extension and path.is_file())
    if not site_files:
        raise NoMatchingFilesError(data_dir, extension)

    logger.info(f"Found {len(site_files)} site files in {data_dir}")
    return site_files


def site_name(path: Union[str, Path]) -> Optional[str]:
    """Site name for a file: its name without the extension, None if empty."""
    return Path(path).stem or None


def read_line_chunks(path: Union[str, Path], chunk_size: int) -> List[List[str]]:
    """
    Read a site file as consecutive chunks of at most chunk_size lines.

    Raises:
        OSError: If the file cannot be opened or read
    """
    chunks: List[List[str]] = []
    current: List[str] = []
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for line in f:
            current.append(line)
            if len(current) == chunk_size:
                chunks.append(current)
                current = []
    if current:
        chunks.append(current)
    return chunks
