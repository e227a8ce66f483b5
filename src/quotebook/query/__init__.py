# ABOUTME: Query package: structured requests, fuzzy scoring, and the search engine.
# ABOUTME: Exports QueryEngine and the request types front-ends build.

from quotebook.query.engine import QueryEngine
from quotebook.query.request import DateRange, QueryRequest, TargetField
from quotebook.query.scoring import Scorer, subsequence_score

__all__ = [
    "DateRange",
    "QueryEngine",
    "QueryRequest",
    "Scorer",
    "TargetField",
    "subsequence_score",
]
