"""State/store layer.

This package owns the three persisted documents (dataset, summary,
update marker) and the staleness policy that decides when they must be
refetched.
"""
