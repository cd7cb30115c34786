"""Deterministic evaluation of the SIMON implementation.

Provides known-answer checks, algebraic unit testing (roundtrip
verification) and avalanche / SAC statistics.

Research / education only. Do NOT use in production.
"""

from .kat import KnownAnswerVector, KATResult, KNOWN_ANSWER_VECTORS, check_known_answer, check_known_answers
from .roundtrip import RoundtripResult, RoundtripFailure, run_roundtrip_tests, run_all_variants
from .avalanche import SACResult, compute_sac, avalanche_mean
from .report import EvaluationReport

__all__ = [
    "KnownAnswerVector",
    "KATResult",
    "KNOWN_ANSWER_VECTORS",
    "check_known_answer",
    "check_known_answers",
    "RoundtripResult",
    "RoundtripFailure",
    "run_roundtrip_tests",
    "run_all_variants",
    "SACResult",
    "compute_sac",
    "avalanche_mean",
    "EvaluationReport",
]
