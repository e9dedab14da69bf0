"""
Friend-request lifecycle.

Responsibilities:
- Send, cancel and accept friend requests.
- Remove friendships in both directions.
- List friends and pending requests, and search users by username prefix.
"""
