"""
Corpus: the collection of every site of a data directory.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .engine import DEFAULT_CHUNK_SIZE, aggregate_sites, aggregate_tags
from .executor import ExecutionContext
from .files import SITE_FILE_EXTENSION, find_site_files
from .report import DEFAULT_TOP_N, build_report
from .stats.site_stat import SiteStat
from .stats.tag_stat import TagStatSet

logger = logging.getLogger(__name__)


class Corpus:
    """
    Sites aggregated from a data directory.

    `sites` is None until load_sites completes. The cross-site tag set is
    computed on demand and never stored.
    """

    def __init__(self):
        self._sites: Optional[List[SiteStat]] = None

    @property
    def sites(self) -> Optional[List[SiteStat]]:
        return self._sites

    def load_sites(
        self,
        data_dir: Union[str, Path],
        context: ExecutionContext,
        extension: str = SITE_FILE_EXTENSION,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        """
        Aggregate every site file of data_dir on the given pool.

        Raises:
            DataDirectoryNotFoundError: If data_dir cannot be opened
            NoMatchingFilesError: If data_dir holds no file with the extension
        """
        paths = find_site_files(data_dir, extension)
        self._sites = aggregate_sites(paths, context, chunk_size=chunk_size)
        skipped = len(paths) - len(self._sites)
        if skipped:
            logger.warning(f"{skipped} of {len(paths)} site files could not be read")

    def _loaded_sites(self) -> List[SiteStat]:
        if self._sites is None:
            raise RuntimeError("Sites have not been loaded; call load_sites first")
        return self._sites

    def global_tags(self, context: ExecutionContext) -> TagStatSet:
        """Tags aggregated across every loaded site."""
        return aggregate_tags(self._loaded_sites(), context)

    def generate_report(
        self, padron: Any, context: ExecutionContext, top_n: int = DEFAULT_TOP_N
    ) -> Dict[str, Any]:
        sites = self._loaded_sites()
        return build_report(sites, self.global_tags(context), padron=padron, top_n=top_n)
