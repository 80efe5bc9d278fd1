import itertools
from collections import defaultdict


class MemoryStore:
    """Process-local stand-in for the database, used when it is unavailable."""

    def __init__(self):
        self.users = {}
        self.products = {}
        self.carts = {}  # keyed by user_id
        self.orders = {}
        self.revoked_tokens = {}  # jti -> expiry
        self._sequences = defaultdict(lambda: itertools.count(1))

    def next_id(self, kind: str) -> int:
        return next(self._sequences[kind])
