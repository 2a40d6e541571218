"""
Site statistics over line-delimited question archives.

Aggregates per-site and per-tag question/word counts from a directory of
JSON-lines files using a fork-join reduction over a worker pool, and ranks
the most "chatty" sites and tags by average words per question.
"""
