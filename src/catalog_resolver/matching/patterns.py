"""Regex patterns shared by the classifier and the tokenizer."""

import re

KNOWN_BRANDS = ["РИДАН", "FORBO", "DIN", "BROEN", "DANFOSS", "ARLIGHT"]

# Extraction order inside each group matters: earlier patterns consume
# their matches before later ones run.
DIMENSION_PATTERNS = [
    r"DN\d+",
    r"Ду\d+",
    r"\d+[x×*]\d+",
    r"\d+мм",
]

ARTICLE_PATTERNS = [
    r"[A-Z]+[-_][A-Z0-9]+",
    r"\d{3}[A-Z]\d+[A-Z]?",
    r"\d{6,}",
    r"BVR-?[A-Z]?",
]

KNOWN_BRAND_PATTERN = r"\b(?:" + "|".join(KNOWN_BRANDS) + r")\b"
QUOTED_PATTERN = r'"([^"]+)"'

COMPILED_DIMENSION_PATTERNS = [re.compile(p, re.IGNORECASE) for p in DIMENSION_PATTERNS]
COMPILED_ARTICLE_PATTERNS = [re.compile(p, re.IGNORECASE) for p in ARTICLE_PATTERNS]
COMPILED_KNOWN_BRAND = re.compile(KNOWN_BRAND_PATTERN, re.IGNORECASE)
COMPILED_QUOTED = re.compile(QUOTED_PATTERN)

# Classifier features. Case-sensitive on purpose: an all-caps Latin run
# reads as a brand, a lowercase one does not.
ARTICLE_HINT = re.compile(r"[A-Za-z]+\d+|[A-Z]+[-_]\d+")
UPPERCASE_RUN = re.compile(r"[A-Z]{2,}")
SPECIAL_CHARS = re.compile(r"[-_()\[\]{}#№@&%]")
NON_RUSSIAN_FILTER = re.compile(r"[^A-Za-z0-9_а-яёА-ЯЁ\s]")
RUSSIAN_ONLY = re.compile(r"[а-яё\s\d]+", re.IGNORECASE)
