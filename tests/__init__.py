"""
Test suite for reflect-ledger

Contains:
- tests/unit/          : Unit tests for individual modules and token scenarios
"""
