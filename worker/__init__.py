"""Book Search Benchmark - Worker Package.

The scoring engine lives in ``worker.scoring``; it has no I/O and is
shared by the API and the offline scripts.
"""
