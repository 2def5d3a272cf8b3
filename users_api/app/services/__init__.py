"""
Service layer abstraction.

Services encapsulate business logic.  They receive a repository at
construction time, so the storage backend can be swapped without changing
API handlers or the rules enforced here.
"""
