"""
Friend recommendation engine.

Responsibilities:
- Build the subject's exclusion set (friends, sent and pending requests, self).
- Gather candidates sharing an interest or a friend with the subject.
- Score candidates on mutual friends and mutual interests.
- Rank deterministically and cap the result for API serialisation.
"""
