"""기본 CRUD 레포지토리, 모든 레포지토리의 부모 클래스.

Base CRUD Repository. Provides generic Create, Read, Update, Delete
operations with optional company scoping.

Usage:
    class ProjectRepository(BaseRepository[Project]):
        def __init__(self) -> None:
            super().__init__(Project)
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.database import Base

# 제네릭 타입 변수 (Generic type variable representing a SQLAlchemy model)
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """제네릭 CRUD 레포지토리.

    Generic CRUD repository. Queries are scoped by company_id when the
    model has the column and a company filter is given.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        self.model: type[ModelType] = model

    def _scoped(self, query: Select, company_id: UUID | None) -> Select:
        # 모델에 company_id 컬럼이 있고 필터가 주어진 경우에만 회사 범위 적용
        if company_id is not None and hasattr(self.model, "company_id"):
            query = query.where(self.model.company_id == company_id)
        return query

    async def get_by_id(
        self,
        db: AsyncSession,
        record_id: UUID,
        company_id: UUID | None = None,
    ) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다.

        Retrieve a single record by its UUID.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 조회할 레코드의 UUID (UUID of the record to retrieve)
            company_id: 회사 범위 필터, None이면 미적용
                        (Company scope filter; None skips company filtering)

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        query: Select = self._scoped(select(self.model).where(self.model.id == record_id), company_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_all(
        self,
        db: AsyncSession,
        company_id: UUID | None = None,
        filters: dict[str, Any] | None = None,
        order_by: Any | None = None,
    ) -> Sequence[ModelType]:
        """조건에 맞는 모든 레코드를 조회합니다.

        Retrieve all records matching the given filters. None values in
        filters are ignored.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            company_id: 회사 범위 필터 (Company scope filter)
            filters: 추가 필터 딕셔너리 {'컬럼명': 값} (Additional equality filters)
            order_by: 정렬 기준 컬럼 (Column to order by)

        Returns:
            Sequence[ModelType]: 조회된 레코드 목록 (List of matching records)
        """
        query: Select = self._scoped(select(self.model), company_id)

        if filters:
            for column_name, value in filters.items():
                if hasattr(self.model, column_name) and value is not None:
                    query = query.where(getattr(self.model, column_name) == value)

        if order_by is not None:
            query = query.order_by(order_by)

        result = await db.execute(query)
        return result.scalars().all()

    async def create(
        self,
        db: AsyncSession,
        obj_data: dict[str, Any],
    ) -> ModelType:
        """새 레코드를 생성합니다 (Create and flush a new record)."""
        db_obj: ModelType = self.model(**obj_data)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def create_many(
        self,
        db: AsyncSession,
        rows: Sequence[dict[str, Any]],
    ) -> list[ModelType]:
        """여러 레코드를 한 번에 생성합니다 (Bulk insert in one flush)."""
        objs: list[ModelType] = [self.model(**row) for row in rows]
        db.add_all(objs)
        await db.flush()
        return objs

    async def update(
        self,
        db: AsyncSession,
        record_id: UUID,
        update_data: dict[str, Any],
        company_id: UUID | None = None,
    ) -> ModelType | None:
        """기존 레코드를 업데이트합니다.

        Update an existing record by its UUID. Only keys present in
        update_data are written, None values included.

        Returns:
            ModelType | None: 업데이트된 레코드 또는 None (Updated record or None)
        """
        db_obj: ModelType | None = await self.get_by_id(db, record_id, company_id)
        if db_obj is None:
            return None

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def delete(
        self,
        db: AsyncSession,
        record_id: UUID,
        company_id: UUID | None = None,
    ) -> bool:
        """레코드를 삭제합니다. 없으면 False (Delete by UUID)."""
        db_obj: ModelType | None = await self.get_by_id(db, record_id, company_id)
        if db_obj is None:
            return False

        await db.delete(db_obj)
        await db.flush()
        return True

    async def exists(
        self,
        db: AsyncSession,
        filters: dict[str, Any],
        exclude_id: UUID | None = None,
    ) -> bool:
        """주어진 조건에 일치하는 레코드가 존재하는지 확인합니다.

        Check if a record matching the given filters exists, optionally
        ignoring one record (the one being updated).
        """
        query: Select = select(func.count()).select_from(self.model)
        for column_name, value in filters.items():
            if hasattr(self.model, column_name):
                query = query.where(getattr(self.model, column_name) == value)
        if exclude_id is not None:
            query = query.where(self.model.id != exclude_id)

        count: int = (await db.execute(query)).scalar() or 0
        return count > 0
