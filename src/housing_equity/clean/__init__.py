"""Cleaning utilities for the pipeline.

Provides functions to normalize raw HMDA loan application fields into the
record contract used by the aggregation helpers, validate the result and
write the Clean layer to disk.
"""
