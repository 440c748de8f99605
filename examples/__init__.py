"""Catalog Resolver Examples.

Run the example with:
    python examples/basic_usage.py

Requires:
    - pip install catalog-resolver
"""
