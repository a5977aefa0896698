"""
Ledger - Source Package

A personal finance ledger: deposits and payments recorded in a
pipe-delimited text file, with listings and reports over it.

DESIGN PRINCIPLES:
1. The data file is an append-only log; records are never edited
2. Fail early, fail visibly
3. No silent corrections
4. Every step must be auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Ledger Team"
