from __future__ import annotations

import logging
import uuid
from collections.abc import Awaitable, Callable, Iterable
from datetime import datetime, timezone
from typing import TypeVar

from sqlalchemy import Select, delete, func, or_, select, update
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from prompthub.database.database import create_schema, create_session_factory
from prompthub.dto.entities import Category, Prompt, PromptWithCategory, SavedPrompt
from prompthub.dto.req.category_req import CategoryCreate
from prompthub.dto.req.prompt_req import PromptCreate, PromptUpdate
from prompthub.models.category import CategoryRecord
from prompthub.models.prompt import PromptRecord
from prompthub.models.saved_prompt import SavedPromptRecord
from prompthub.storage.errors import CategoryInUseError, StorageUnavailableError, StorageValidationError
from prompthub.storage.seed_data import seed_categories, seed_prompts
from prompthub.storage.storage import Storage, as_utc, check_seed_references, next_updated_at

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Connection-level failures worth another attempt.
TRANSIENT_ERRORS = (OperationalError, InterfaceError)


def _to_category(row: CategoryRecord) -> Category:
    return Category(id=row.id, name=row.name, icon=row.icon, color=row.color, description=row.description)


def _to_prompt(row: PromptRecord) -> Prompt:
    return Prompt(
        id=row.id,
        title=row.title,
        description=row.description,
        content=row.content,
        category_id=row.category_id,
        is_featured=bool(row.is_featured),
        views=row.views or 0,
        likes=row.likes or 0,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


def _to_prompt_with_category(prompt: PromptRecord, category: CategoryRecord) -> PromptWithCategory:
    return PromptWithCategory(**_to_prompt(prompt).model_dump(), category=_to_category(category).model_dump())


def _to_saved(row: SavedPromptRecord) -> SavedPrompt:
    return SavedPrompt(id=row.id, prompt_id=row.prompt_id, user_id=row.user_id, created_at=as_utc(row.created_at))


class SqlStorage(Storage):
    """
    SQLAlchemy-backed store (SQLite via aiosqlite, Postgres via asyncpg).

    Each operation runs in its own session/transaction. Counter increments are
    single UPDATE statements and save idempotency is backed by a unique
    constraint, so concurrent requests cannot lose updates or duplicate rows.
    Transient connection errors are retried, except for creates and counter
    increments, which run once.
    """

    def __init__(self, engine: AsyncEngine, *, retry_attempts: int = 3) -> None:
        self._engine = engine
        self._session_factory = create_session_factory(engine)
        self._retry_attempts = max(1, retry_attempts)

    async def create_schema(self) -> None:
        await self._run_raw(lambda: create_schema(self._engine))

    async def dispose(self) -> None:
        await self._engine.dispose()

    async def _run_raw(self, fn: Callable[[], Awaitable[T]], *, retry: bool = True) -> T:
        """
        Retry transient connection errors, then surface them as StorageUnavailableError.

        Pass retry=False for writes that must not be applied twice; a failure after
        commit cannot be told apart from one before it.
        """
        attempts = self._retry_attempts if retry else 1
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(attempts),
                wait=wait_exponential_jitter(initial=0.1, max=2),
                retry=retry_if_exception_type(TRANSIENT_ERRORS),
                reraise=True,
            ):
                with attempt:
                    result = await fn()
        except TRANSIENT_ERRORS as e:
            logger.error(f"Storage backend unavailable after {attempts} attempt(s): {e}")
            raise StorageUnavailableError("Storage backend is unavailable.") from e
        return result

    async def _run(self, op: Callable[[AsyncSession], Awaitable[T]], *, retry: bool = True) -> T:
        async def in_session() -> T:
            async with self._session_factory() as db:
                return await op(db)

        return await self._run_raw(in_session, retry=retry)

    @staticmethod
    def _joined() -> Select:
        return (
            select(PromptRecord, CategoryRecord)
            .join(CategoryRecord, CategoryRecord.id == PromptRecord.category_id)
            .order_by(PromptRecord.created_at.desc(), PromptRecord.id)
        )

    async def _fetch_joined(self, stmt: Select) -> list[PromptWithCategory]:
        async def op(db: AsyncSession) -> list[PromptWithCategory]:
            res = await db.execute(stmt)
            return [_to_prompt_with_category(p, c) for p, c in res.all()]

        return await self._run(op)

    # Categories

    async def list_categories(self) -> list[Category]:
        async def op(db: AsyncSession) -> list[Category]:
            res = await db.execute(select(CategoryRecord).order_by(CategoryRecord.name, CategoryRecord.id))
            return [_to_category(c) for c in res.scalars().all()]

        return await self._run(op)

    async def get_category(self, category_id: str) -> Category | None:
        async def op(db: AsyncSession) -> Category | None:
            row = await db.get(CategoryRecord, category_id)
            return _to_category(row) if row else None

        return await self._run(op)

    async def create_category(self, data: CategoryCreate) -> Category:
        async def op(db: AsyncSession) -> Category:
            row = CategoryRecord(id=str(uuid.uuid4()), **data.model_dump())
            db.add(row)
            await db.commit()
            return _to_category(row)

        return await self._run(op, retry=False)

    async def delete_category(self, category_id: str) -> bool:
        async def op(db: AsyncSession) -> bool:
            row = await db.get(CategoryRecord, category_id)
            if row is None:
                return False
            in_use = await db.scalar(
                select(func.count(PromptRecord.id)).where(PromptRecord.category_id == category_id)
            )
            if in_use:
                raise CategoryInUseError(category_id, int(in_use))
            await db.delete(row)
            await db.commit()
            return True

        return await self._run(op)

    # Prompts

    async def list_prompts(self) -> list[PromptWithCategory]:
        return await self._fetch_joined(self._joined())

    async def get_prompt(self, prompt_id: str) -> PromptWithCategory | None:
        found = await self._fetch_joined(self._joined().where(PromptRecord.id == prompt_id))
        return found[0] if found else None

    async def list_prompts_by_category(self, category_id: str) -> list[PromptWithCategory]:
        return await self._fetch_joined(self._joined().where(PromptRecord.category_id == category_id))

    async def list_featured_prompts(self) -> list[PromptWithCategory]:
        return await self._fetch_joined(self._joined().where(PromptRecord.is_featured.is_(True)))

    async def search_prompts(self, query: str) -> list[PromptWithCategory]:
        q = query.lower()
        return await self._fetch_joined(
            self._joined().where(
                or_(
                    func.lower(PromptRecord.title).contains(q, autoescape=True),
                    func.lower(PromptRecord.description).contains(q, autoescape=True),
                    func.lower(PromptRecord.content).contains(q, autoescape=True),
                )
            )
        )

    async def create_prompt(self, data: PromptCreate) -> Prompt:
        async def op(db: AsyncSession) -> Prompt:
            if await db.get(CategoryRecord, data.category_id) is None:
                raise StorageValidationError(f"Category {data.category_id} does not exist.")
            now = datetime.now(timezone.utc)
            row = PromptRecord(
                id=str(uuid.uuid4()), **data.model_dump(), views=0, likes=0, created_at=now, updated_at=now
            )
            db.add(row)
            await db.commit()
            return _to_prompt(row)

        return await self._run(op, retry=False)

    async def update_prompt(self, prompt_id: str, data: PromptUpdate) -> Prompt | None:
        changes = data.changes()

        async def op(db: AsyncSession) -> Prompt | None:
            row = await db.get(PromptRecord, prompt_id)
            if row is None:
                return None
            if "category_id" in changes and await db.get(CategoryRecord, changes["category_id"]) is None:
                raise StorageValidationError(f"Category {changes['category_id']} does not exist.")
            for field, value in changes.items():
                setattr(row, field, value)
            row.updated_at = next_updated_at(row.updated_at)
            await db.commit()
            return _to_prompt(row)

        return await self._run(op)

    async def delete_prompt(self, prompt_id: str) -> bool:
        async def op(db: AsyncSession) -> bool:
            row = await db.get(PromptRecord, prompt_id)
            if row is None:
                return False
            # SQLite does not enforce ON DELETE CASCADE unless foreign keys are switched on.
            await db.execute(delete(SavedPromptRecord).where(SavedPromptRecord.prompt_id == prompt_id))
            await db.delete(row)
            await db.commit()
            return True

        return await self._run(op)

    async def _increment(self, prompt_id: str, column: str) -> None:
        async def op(db: AsyncSession) -> None:
            counter = getattr(PromptRecord, column)
            await db.execute(update(PromptRecord).where(PromptRecord.id == prompt_id).values({column: counter + 1}))
            await db.commit()

        await self._run(op, retry=False)

    async def increment_views(self, prompt_id: str) -> None:
        await self._increment(prompt_id, "views")

    async def increment_likes(self, prompt_id: str) -> None:
        await self._increment(prompt_id, "likes")

    # Saved prompts

    @staticmethod
    def _saved_row(prompt_id: str, user_id: str) -> Select:
        return select(SavedPromptRecord).where(
            SavedPromptRecord.prompt_id == prompt_id,
            SavedPromptRecord.user_id == user_id,
        )

    async def list_saved_prompts(self, user_id: str) -> list[PromptWithCategory]:
        # Inner joins drop saved rows whose prompt no longer exists.
        stmt = (
            select(PromptRecord, CategoryRecord)
            .join(SavedPromptRecord, SavedPromptRecord.prompt_id == PromptRecord.id)
            .join(CategoryRecord, CategoryRecord.id == PromptRecord.category_id)
            .where(SavedPromptRecord.user_id == user_id)
            .order_by(SavedPromptRecord.created_at, SavedPromptRecord.id)
        )
        return await self._fetch_joined(stmt)

    async def save_prompt(self, prompt_id: str, user_id: str) -> SavedPrompt:
        async def op(db: AsyncSession) -> SavedPrompt:
            existing = await db.scalar(self._saved_row(prompt_id, user_id))
            if existing is not None:
                return _to_saved(existing)
            if await db.get(PromptRecord, prompt_id) is None:
                raise StorageValidationError(f"Prompt {prompt_id} does not exist.")
            row = SavedPromptRecord(
                id=str(uuid.uuid4()),
                prompt_id=prompt_id,
                user_id=user_id,
                created_at=datetime.now(timezone.utc),
            )
            db.add(row)
            try:
                await db.commit()
            except IntegrityError:
                # A concurrent save won the unique constraint; report its row.
                await db.rollback()
                existing = await db.scalar(self._saved_row(prompt_id, user_id))
                if existing is None:
                    raise
                return _to_saved(existing)
            return _to_saved(row)

        return await self._run(op)

    async def unsave_prompt(self, prompt_id: str, user_id: str) -> None:
        async def op(db: AsyncSession) -> None:
            await db.execute(
                delete(SavedPromptRecord).where(
                    SavedPromptRecord.prompt_id == prompt_id,
                    SavedPromptRecord.user_id == user_id,
                )
            )
            await db.commit()

        await self._run(op)

    async def is_prompt_saved(self, prompt_id: str, user_id: str) -> bool:
        async def op(db: AsyncSession) -> bool:
            return await db.scalar(self._saved_row(prompt_id, user_id)) is not None

        return await self._run(op)

    # Bootstrap

    async def load_seed(self, categories: Iterable[Category], prompts: Iterable[Prompt]) -> None:
        categories = list(categories)
        prompts = list(prompts)

        async def op(db: AsyncSession) -> None:
            existing_ids = (await db.execute(select(CategoryRecord.id))).scalars().all()
            check_seed_references(categories, prompts, existing_ids)
            for c in categories:
                await db.merge(CategoryRecord(**c.model_dump()))
            # Categories must exist before prompts reference them.
            await db.flush()
            for p in prompts:
                await db.merge(PromptRecord(**p.model_dump()))
            await db.commit()

        await self._run(op)

    async def seed_if_empty(self) -> bool:
        """Load the bootstrap catalog when no categories exist. Returns True if it seeded."""

        async def op(db: AsyncSession) -> int:
            return int(await db.scalar(select(func.count(CategoryRecord.id))) or 0)

        if await self._run(op):
            return False
        await self.load_seed(seed_categories(), seed_prompts())
        logger.info("SQL storage was empty; loaded bootstrap catalog")
        return True
