"""
Account storage port and the in-memory implementation used by tests and
local runs.  The SQL-backed store lives in ``database.accounts``.
"""

from __future__ import annotations

from typing import Dict, Optional, Protocol

from auth.models import Account


class AccountStore(Protocol):
    async def find_by_username(self, username: str) -> Optional[Account]: ...

    async def insert_if_absent(self, account: Account) -> bool:
        """Persist ``account``; return ``False`` if the username is taken."""
        ...


class InMemoryAccountStore:
    """Dict keyed by username; check-and-insert runs without yielding."""

    def __init__(self) -> None:
        self._accounts: Dict[str, Account] = {}

    async def find_by_username(self, username: str) -> Optional[Account]:
        return self._accounts.get(username)

    async def insert_if_absent(self, account: Account) -> bool:
        if account.username in self._accounts:
            return False
        self._accounts[account.username] = account
        return True

    def __len__(self) -> int:
        return len(self._accounts)
