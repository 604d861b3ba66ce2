"""
Test suite for the Star Traders engine

Contains:
- tests/unit/          : Unit tests for individual modules
"""
