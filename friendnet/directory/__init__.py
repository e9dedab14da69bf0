"""
User directory.

Responsibilities:
- Own the in-memory user records and their relationship sets.
- Hand out snapshots so callers never share the stored collections.
- Answer the candidate lookups used by recommendation retrieval.
- Apply two-sided relationship changes under a single lock.
"""
