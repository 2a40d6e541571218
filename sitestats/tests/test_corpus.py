"""
Integration tests: loading data directories into a Corpus and reporting.
"""

import random

import pytest

from sitestats.corpus import Corpus
from sitestats.errors import DataDirectoryNotFoundError, NoMatchingFilesError
from sitestats.executor import ExecutionContext
from sitestats.stats.tag_stat import TagStat


def load(data_dir, num_workers=2, **kwargs):
    corpus = Corpus()
    with ExecutionContext(num_workers) as context:
        corpus.load_sites(data_dir, context, **kwargs)
        report = corpus.generate_report("108225", context)
    return corpus, report


def test_sites_are_none_before_loading():
    assert Corpus().sites is None


def test_global_tags_before_loading_fails(context):
    with pytest.raises(RuntimeError):
        Corpus().global_tags(context)


def test_we_can_load_one_site(testing_data):
    """Scenario A: two valid questions in one file."""
    corpus, report = load(testing_data / "one_file")

    [site] = corpus.sites
    assert site.name == "site.example.com"
    assert site.question_count == 2
    assert site.word_count == 8
    assert site.tags["a"] == TagStat(2, 8)
    assert site.tags["b"] == TagStat(1, 3)
    assert report["padron"] == "108225"


def test_we_can_load_multiple_sites(testing_data, context):
    """Scenario B: two identical files double every global count."""
    corpus, report = load(testing_data / "two_files")

    assert [site.name for site in corpus.sites] == ["alpha.example.com", "beta.example.com"]
    tags = corpus.global_tags(context)
    assert tags["a"] == TagStat(4, 16)
    assert tags["b"] == TagStat(2, 6)
    assert report["totals"]["chatty_sites"] == ["alpha.example.com", "beta.example.com"]
    assert all(site.ratio() == 4.0 for site in corpus.sites)


def test_invalid_line_is_dropped(testing_data):
    """Scenario C: an invalid line followed by a valid one."""
    corpus, report = load(testing_data / "with_invalid")

    [site] = corpus.sites
    assert site.question_count == 1
    assert site.word_count == 4
    assert site.tags["x"] == TagStat(1, 4)
    assert report["sites"]["mixed.example.com"]["questions"] == 1


def test_missing_directory(tmp_path, context):
    with pytest.raises(DataDirectoryNotFoundError):
        Corpus().load_sites(tmp_path / "nope", context)


def test_path_that_is_a_file(write_site, context):
    path = write_site("site.jsonl", [])
    with pytest.raises(DataDirectoryNotFoundError):
        Corpus().load_sites(path, context)


def test_directory_without_site_files(tmp_path, context):
    (tmp_path / "notes.txt").write_text("hello\n")
    with pytest.raises(NoMatchingFilesError):
        Corpus().load_sites(tmp_path, context)


def test_custom_extension(write_site, tmp_path):
    write_site("site.json", ['{"texts": ["a b"], "tags": ["t"]}'])
    corpus, _ = load(tmp_path, extension=".json")
    assert [site.name for site in corpus.sites] == ["site"]


def random_line(rng):
    words = " ".join("w" for _ in range(rng.randint(0, 30)))
    tags = ", ".join(f'"{rng.choice("abcdefgh")}"' for _ in range(rng.randint(0, 3)))
    if rng.random() < 0.1:
        return '{"texts": ["' + words + '"], "tags": [' + tags
    return '{"texts": ["' + words + '"], "tags": [' + tags + "]}"


def test_report_is_invariant_to_parallelism(write_site, tmp_path):
    """Worker counts 1, 2 and 8 and any chunk size give the same report."""
    rng = random.Random(2024)
    for index in range(6):
        lines = [random_line(rng) for _ in range(rng.randint(0, 120))]
        write_site(f"site{index}.jsonl", lines)

    reports = []
    for num_workers in (1, 2, 8):
        for chunk_size in (1, 7, 1000):
            _, report = load(tmp_path, num_workers=num_workers, chunk_size=chunk_size)
            reports.append(report)

    assert all(report == reports[0] for report in reports[1:])
    assert len(reports[0]["sites"]) == 6
