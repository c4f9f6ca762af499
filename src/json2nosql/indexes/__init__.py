"""Index suggestion heuristics."""

from json2nosql.indexes.advisor import (
    IndexAdvice,
    IndexCandidate,
    advise_indexes,
    sample_document,
)

__all__ = [
    "IndexAdvice",
    "IndexCandidate",
    "advise_indexes",
    "sample_document",
]
