"""Matching pipeline: normalizer, classifier, tokenizer, generators, ranker, engine."""

from catalog_resolver.matching.classifier import QueryFeatures, analyze, classify
from catalog_resolver.matching.engine import MatchEngine
from catalog_resolver.matching.generators import (
    GENERATOR_PLAN,
    BlockGenerator,
    CandidateGenerator,
    ExactGenerator,
    FuzzyGenerator,
    SynonymGenerator,
    plan_for,
)
from catalog_resolver.matching.normalizer import normalize, tokens
from catalog_resolver.matching.ranker import merge, rank, score
from catalog_resolver.matching.tokenizer import tokenize

__all__ = [
    "BlockGenerator",
    "CandidateGenerator",
    "ExactGenerator",
    "FuzzyGenerator",
    "GENERATOR_PLAN",
    "MatchEngine",
    "QueryFeatures",
    "SynonymGenerator",
    "analyze",
    "classify",
    "merge",
    "normalize",
    "plan_for",
    "rank",
    "score",
    "tokenize",
    "tokens",
]
