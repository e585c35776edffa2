"""
Test suite for the shed production backend.

Test Organization:
- unit/ - bird accounting, validation and correction helpers (no database)
- integration/ - store queries, submission, corrections, reporting and API
"""
