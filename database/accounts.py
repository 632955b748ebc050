"""
SQL-backed ``AccountStore``.

Uniqueness is enforced by the ``accounts.username`` unique constraint; a
losing concurrent insert surfaces as ``IntegrityError`` and is reported as
"already taken" rather than as a fault.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from auth.models import Account
from database.models import AccountRecord

logger = logging.getLogger(__name__)


class SqlAccountStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find_by_username(self, username: str) -> Optional[Account]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(AccountRecord).where(AccountRecord.username == username)
            )
            record = result.scalar_one_or_none()
        if record is None:
            return None
        return Account(
            username=record.username,
            email=record.email,
            password_hash=record.password_hash,
        )

    async def insert_if_absent(self, account: Account) -> bool:
        async with self._session_factory() as session:
            session.add(
                AccountRecord(
                    username=account.username,
                    email=account.email,
                    password_hash=account.password_hash,
                )
            )
            try:
                await session.commit()
            except IntegrityError:
                await session.rollback()
                logger.info("Insert rejected by unique constraint: %s", account.username)
                return False
        return True
