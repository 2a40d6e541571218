"""
Run configuration for the site statistics CLI.
"""

from dataclasses import dataclass
from typing import Optional

from .engine import DEFAULT_CHUNK_SIZE
from .errors import ConfigurationError
from .executor import BACKENDS, MAX_WORKERS
from .files import SITE_FILE_EXTENSION
from .report import DEFAULT_TOP_N

DEFAULT_DATA_DIR = "data"
DEFAULT_PADRON = "108225"


@dataclass
class RunConfig:
    """Configuration for one aggregation run

    Attributes:
        num_workers (int): Worker pool size, 1..MAX_WORKERS
        data_dir (str): Directory holding one site file per site
        extension (str): Extension of site files, including the dot
        padron (str): Identifier echoed at the top of the report
        chunk_size (int): Lines per fold task
        top_n (int): Length of the "chatty" rankings
        backend (str): "thread" or "process" worker pool
        indent (int): JSON indentation of the printed report
        output (str, optional): File to write the report to, stdout if None
    """
    num_workers: int
    data_dir: str = DEFAULT_DATA_DIR
    extension: str = SITE_FILE_EXTENSION
    padron: str = DEFAULT_PADRON
    chunk_size: int = DEFAULT_CHUNK_SIZE
    top_n: int = DEFAULT_TOP_N
    backend: str = "thread"
    indent: int = 4
    output: Optional[str] = None

    def __post_init__(self):
        if not 1 <= self.num_workers <= MAX_WORKERS:
            raise ConfigurationError(
                f"Invalid number of worker threads: {self.num_workers} "
                f"(expected 1..{MAX_WORKERS})"
            )
        if self.chunk_size < 1:
            raise ConfigurationError(f"Chunk size must be positive, got {self.chunk_size}")
        if self.top_n < 0:
            raise ConfigurationError(f"Top N must not be negative, got {self.top_n}")
        if self.backend not in BACKENDS:
            raise ConfigurationError(f"Unknown backend '{self.backend}', expected one of {BACKENDS}")
        if not self.extension.startswith("."):
            self.extension = "." + self.extension
