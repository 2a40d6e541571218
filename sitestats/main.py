"""
Site Statistics Command Line

Aggregates every site file of a data directory on a pool of worker threads
(or processes) and prints the JSON report: per-site and per-tag question and
word counts, plus the chattiest sites and tags by words per question.

Features:
- Configurable worker count, chunk size and ranking length
- Thread or process worker pool
- Benchmark mode comparing a single worker against the requested pool,
  with a correctness check that both produce the same report
"""

# Standard library imports
import argparse
import json
import logging
import sys
import time
from typing import Any, Dict, List, Optional, Tuple

# Third-party imports
import psutil

# Local imports
from .configs import DEFAULT_DATA_DIR, DEFAULT_PADRON, RunConfig
from .corpus import Corpus
from .engine import DEFAULT_CHUNK_SIZE
from .errors import SiteStatsError
from .executor import BACKENDS, ExecutionContext
from .report import DEFAULT_TOP_N

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def run(config: RunConfig, num_workers: Optional[int] = None) -> Dict[str, Any]:
    """Load every site of config.data_dir and build the report."""
    workers = num_workers if num_workers is not None else config.num_workers
    with ExecutionContext(workers, backend=config.backend) as context:
        corpus = Corpus()
        corpus.load_sites(
            config.data_dir,
            context,
            extension=config.extension,
            chunk_size=config.chunk_size,
        )
        return corpus.generate_report(config.padron, context, top_n=config.top_n)


def get_memory_usage() -> float:
    """Get current memory usage in MB"""
    process = psutil.Process()
    return process.memory_info().rss / (1024 * 1024)


def timed_run(config: RunConfig, num_workers: int) -> Tuple[Dict[str, Any], float]:
    start_time = time.time()
    report = run(config, num_workers=num_workers)
    return report, time.time() - start_time


def benchmark(config: RunConfig) -> Tuple[Dict[str, Any], bool]:
    """
    Run with one worker and with config.num_workers, and compare.

    Returns:
        The parallel report and whether it matches the single-worker one
    """
    sequential_report, sequential_time = timed_run(config, num_workers=1)
    parallel_report, parallel_time = timed_run(config, num_workers=config.num_workers)
    matches = sequential_report == parallel_report

    out = sys.stderr
    print(f"\n{'=' * 60}", file=out)
    print("PERFORMANCE ANALYSIS", file=out)
    print(f"{'=' * 60}", file=out)
    print(f"Sequential time:     {sequential_time:.4f} seconds", file=out)
    print(f"Parallel time:       {parallel_time:.4f} seconds ({config.num_workers} workers)", file=out)
    if parallel_time > 0:
        speedup = sequential_time / parallel_time
        print(f"Speedup:             {speedup:.2f}x", file=out)
        print(f"Efficiency:          {speedup / config.num_workers:.2f}", file=out)
    print(f"Logical CPUs:        {psutil.cpu_count(logical=True)}", file=out)
    print(f"Memory usage:        {get_memory_usage():.1f} MB", file=out)
    if matches:
        print("✓ Sequential and parallel reports are identical", file=out)
    else:
        print("✗ Sequential and parallel reports differ", file=out)
    print(f"{'=' * 60}", file=out)

    return parallel_report, matches


def write_report(report: Dict[str, Any], config: RunConfig) -> None:
    text = json.dumps(report, indent=config.indent, ensure_ascii=False)
    if config.output is None:
        print(text)
        return
    with open(config.output, "w", encoding="utf-8") as f:
        f.write(text + "\n")
    logger.info(f"Report written to {config.output}")


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments for the site statistics run."""
    parser = argparse.ArgumentParser(
        description="Per-site and per-tag question statistics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m sitestats.main 4                          # 4 worker threads over ./data
  python -m sitestats.main 8 --data-dir ./archive     # Another data directory
  python -m sitestats.main 4 --backend process        # Worker processes instead of threads
  python -m sitestats.main 4 --output report.json     # Write the report to a file
  python -m sitestats.main 8 --benchmark              # Compare 1 worker against 8
        """,
    )

    parser.add_argument(
        "num_workers",
        type=int,
        help="Number of worker threads",
    )

    parser.add_argument(
        "--data-dir",
        type=str,
        default=DEFAULT_DATA_DIR,
        help=f"Directory containing one .jsonl file per site (default: {DEFAULT_DATA_DIR})",
    )

    parser.add_argument(
        "--extension",
        type=str,
        default=".jsonl",
        help="Extension of site files (default: .jsonl)",
    )

    parser.add_argument(
        "--padron",
        type=str,
        default=DEFAULT_PADRON,
        help=f"Identifier written at the top of the report (default: {DEFAULT_PADRON})",
    )

    parser.add_argument(
        "--chunk-size",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help=f"Lines per fold task (default: {DEFAULT_CHUNK_SIZE})",
    )

    parser.add_argument(
        "--top-n",
        type=int,
        default=DEFAULT_TOP_N,
        help=f"Length of the chatty site and tag rankings (default: {DEFAULT_TOP_N})",
    )

    parser.add_argument(
        "--backend",
        choices=BACKENDS,
        default="thread",
        help="Worker pool type (default: thread)",
    )

    parser.add_argument(
        "--indent",
        type=int,
        default=4,
        help="JSON indentation of the report (default: 4)",
    )

    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the report to this file instead of stdout",
    )

    parser.add_argument(
        "--benchmark",
        action="store_true",
        help="Also run with a single worker and compare time and results",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level, logs go to stderr (default: WARNING)",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> RunConfig:
    return RunConfig(
        num_workers=args.num_workers,
        data_dir=args.data_dir,
        extension=args.extension,
        padron=args.padron,
        chunk_size=args.chunk_size,
        top_n=args.top_n,
        backend=args.backend,
        indent=args.indent,
        output=args.output,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    try:
        config = build_config(args)
        if args.benchmark:
            report, matches = benchmark(config)
            if not matches:
                return 1
        else:
            report = run(config)
    except SiteStatsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    write_report(report, config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
