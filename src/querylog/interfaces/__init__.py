"""Helpers that feed a QueryLog from application code."""
from .blocks import watch_query, watch_transaction, watch_bucket
