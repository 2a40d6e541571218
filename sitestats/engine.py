"""
Fork-join aggregation engine.

Two parallel phases run on the same ExecutionContext:

1. Sites: every file is read by its own task, its lines are split into
   chunks, every chunk is folded into a partial SiteStat by its own task,
   and the partials of a file are merged into one SiteStat per file.
2. Tags: the site list is split across the workers, each worker folds its
   sites' tag sets into a fresh TagStatSet, and the partial sets are merged
   into the cross-site TagStatSet.

Partial results are merged in completion order, which varies between runs;
the result does not, because merge is commutative and associative.
"""

import logging
from concurrent.futures import Future, as_completed
from functools import reduce
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, TypeVar

from .errors import MalformedRecordError
from .executor import ExecutionContext, chunkify
from .files import read_line_chunks, site_name
from .stats.question import QuestionStat, decode_question
from .stats.site_stat import SiteStat
from .stats.tag_stat import TagStatSet

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1000

A = TypeVar("A", SiteStat, TagStatSet)
Decoder = Callable[[str], QuestionStat]


def merge_all(partials: Iterable[A], identity: A) -> A:
    """Reduce partial accumulators into `identity` with their merge operation."""
    return reduce(lambda accumulated, partial: accumulated.merge(partial), partials, identity)


def fold_lines(name: Optional[str], lines: Iterable[str], decoder: Decoder = decode_question) -> SiteStat:
    """
    Fold raw lines into a SiteStat.

    Blank lines are ignored. Lines the decoder rejects are logged and
    dropped without touching any counter.
    """
    site = SiteStat(name)
    dropped = 0
    for line in lines:
        if not line.strip():
            continue
        try:
            question = decoder(line)
        except MalformedRecordError as e:
            dropped += 1
            logger.warning(f"Dropping malformed record in site {name}: {e}")
            continue
        site.add_question(question)

    if dropped:
        logger.debug(f"Chunk of site {name}: {site.question_count} questions, {dropped} dropped")
    return site


def load_site_chunks(path: Path, chunk_size: int) -> Optional[List[List[str]]]:
    """Read a site file in line chunks, or None if it cannot be read."""
    try:
        return read_line_chunks(path, chunk_size)
    except OSError as e:
        logger.warning(f"Skipping unreadable site file {path}: {e}")
        return None


def aggregate_sites(
    paths: Sequence[Path],
    context: ExecutionContext,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    decoder: Decoder = decode_question,
) -> List[SiteStat]:
    """
    Build one SiteStat per readable file.

    Args:
        paths: Site files, in the order the sites should be listed
        context: Worker pool to run reads and folds on
        chunk_size: Lines per fold task
        decoder: Turns one line into a QuestionStat or raises MalformedRecordError

    Returns:
        SiteStats in the order of `paths`, unreadable files left out
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    paths = list(dict.fromkeys(paths))

    read_futures: Dict[Future, Path] = {
        context.submit(load_site_chunks, path, chunk_size): path for path in paths
    }

    # Folds of a file are submitted as soon as that file is read.
    fold_futures: Dict[Path, List[Future]] = {}
    for future in as_completed(read_futures):
        path = read_futures[future]
        chunks = future.result()
        if chunks is None:
            continue
        name = site_name(path)
        fold_futures[path] = [context.submit(fold_lines, name, chunk, decoder) for chunk in chunks]
        logger.debug(f"Site {name}: {len(chunks)} chunks submitted")

    sites = []
    for path in paths:
        if path not in fold_futures:
            continue
        partials = (future.result() for future in as_completed(fold_futures[path]))
        site = merge_all(partials, SiteStat(site_name(path)))
        logger.info(f"Site {site.name}: {site.question_count} questions, {site.word_count} words")
        sites.append(site)

    return sites


def fold_tag_sets(sites: Iterable[SiteStat]) -> TagStatSet:
    """Merge the tag sets of the given sites into a new TagStatSet."""
    return merge_all((site.tags for site in sites), TagStatSet())


def aggregate_tags(sites: List[SiteStat], context: ExecutionContext) -> TagStatSet:
    """Cross-site TagStatSet. The sites' own tag sets are left untouched."""
    futures = [context.submit(fold_tag_sets, chunk) for chunk in chunkify(sites, context.num_workers)]
    return merge_all((future.result() for future in as_completed(futures)), TagStatSet())
