"""
Core domain models, integer math primitives, error taxonomy and contracts.

This module contains the foundational building blocks that are independent
of any particular token host (chain, database, service).
"""
