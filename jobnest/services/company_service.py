"""
Company service - business logic for company listing and management.
"""
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from jobnest.core.exceptions import CompanyNotFoundException
from jobnest.core.logging import get_logger
from jobnest.models.company import Company
from jobnest.repositories.company_repository import CompanyRepository
from jobnest.schemas.company import CompanyCreate, CompanyResponse, CompanyUpdate

logger = get_logger(__name__)


class CompanyService:
    """Handles company listing, search and management."""

    def __init__(self):
        self.company_repo = CompanyRepository()

    async def list_companies(
        self,
        db: AsyncSession,
    ) -> List[CompanyResponse]:
        """
        All companies with job/review stats.

        Not paginated: list semantics beyond "everything, by name" are
        left to clients.
        """
        companies = await self.company_repo.list_by_name(db)
        return [await self._to_response(db, company) for company in companies]

    async def search_companies(
        self,
        db: AsyncSession,
        keyword: str,
    ) -> List[CompanyResponse]:
        """Keyword search over name and description."""
        companies = await self.company_repo.search(db, keyword)
        return [await self._to_response(db, company) for company in companies]

    async def get_company(
        self,
        db: AsyncSession,
        company_id: UUID,
    ) -> CompanyResponse:
        return await self._to_response(db, await self._get_or_404(db, company_id))

    async def create_company(
        self,
        db: AsyncSession,
        data: CompanyCreate,
    ) -> CompanyResponse:
        company = await self.company_repo.create(db, **data.model_dump())
        await db.commit()
        logger.info("company_created", company_id=str(company.id), name=company.name)
        return await self._to_response(db, company)

    async def update_company(
        self,
        db: AsyncSession,
        company_id: UUID,
        data: CompanyUpdate,
    ) -> CompanyResponse:
        """Apply the non-null fields of the update."""
        company = await self._get_or_404(db, company_id)
        updates = data.model_dump(exclude_none=True)
        if updates:
            company = await self.company_repo.update(db, company, **updates)
            await db.commit()
        return await self._to_response(db, company)

    async def delete_company(
        self,
        db: AsyncSession,
        company_id: UUID,
    ) -> None:
        """Hard delete. Jobs and reviews go with it."""
        company = await self._get_or_404(db, company_id)
        await db.delete(company)
        await db.commit()
        logger.info("company_deleted", company_id=str(company_id))

    async def _get_or_404(self, db: AsyncSession, company_id: UUID) -> Company:
        company = await self.company_repo.get_by_id(db, company_id)
        if not company:
            raise CompanyNotFoundException()
        return company

    async def _to_response(self, db: AsyncSession, company: Company) -> CompanyResponse:
        stats = await self.company_repo.get_stats(db, company.id)
        return CompanyResponse(
            id=company.id,
            name=company.name,
            description=company.description,
            careers_url=company.careers_url,
            logo_url=company.logo_url,
            created_at=company.created_at,
            updated_at=company.updated_at,
            **stats,
        )
