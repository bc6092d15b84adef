"""
Test suite for gridcurve

Contains:
- tests/unit/          : Unit tests for individual modules
"""
