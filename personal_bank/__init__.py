"""
Personal Bank - Source Package

A single-user personal finance tracker: a checking and a savings
balance, an optional savings goal and a rolling history of the most
recent transactions, all kept in a local key-value store.

DESIGN PRINCIPLES:
1. Validate, then commit: rejected input changes nothing
2. Every accepted change is persisted immediately
3. Corrupt stored data is discarded, never fatal
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Personal Bank Team"
