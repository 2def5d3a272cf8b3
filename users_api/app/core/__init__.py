"""
Cross‑cutting plumbing shared by every layer: settings, logging,
database helpers, locking primitives and domain errors.
"""
