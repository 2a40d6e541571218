"""
Statistics module for site aggregation.

This module contains the mergeable accumulators (tag, tag set and site
statistics) and the decoder that turns one raw line into a question record.
"""
