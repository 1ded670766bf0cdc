"""Rollover readiness evaluation utilities.

Responsibilities:
  - Provide the eligibility decision, dry-run dispatch, and listener contract.
  - Must not read cluster state directly; consumes an index snapshot.
"""
