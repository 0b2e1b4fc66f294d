import logging
import re
from typing import Iterable, List, Optional

from sqlalchemy import select

from database.models import Company, TechStack, Specialty
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def _slugify(name: str) -> str:
    return re.sub(r'[^a-z0-9]+', '-', name.lower()).strip('-')


class CompanyRepository(BaseRepository):
    def get_by_id(self, company_id: str) -> Optional[Company]:
        return self.db.get(Company, company_id)

    def get_candidates(self, verified_only: bool = False) -> List[Company]:
        """Companies eligible for matching; further filtering happens in core.matching."""
        stmt = select(Company).where(Company.accepts_new_projects.is_(True))
        if verified_only:
            stmt = stmt.where(Company.is_verified.is_(True))
        stmt = stmt.order_by(Company.created_at, Company.id)
        return list(self.db.execute(stmt).scalars().all())

    def get_or_create_tech_stack(self, name: str, category: str = 'OTHER') -> TechStack:
        stmt = select(TechStack).where(TechStack.name == name)
        tech = self.db.execute(stmt).scalar_one_or_none()
        if tech is None:
            tech = TechStack(name=name, slug=_slugify(name), category=category)
            self.db.add(tech)
            self.db.flush()
        return tech

    def get_or_create_specialty(self, name: str) -> Specialty:
        stmt = select(Specialty).where(Specialty.name == name)
        specialty = self.db.execute(stmt).scalar_one_or_none()
        if specialty is None:
            specialty = Specialty(name=name, slug=_slugify(name))
            self.db.add(specialty)
            self.db.flush()
        return specialty

    def create_company(
        self,
        name: str,
        tech_stacks: Iterable[str] = (),
        specialties: Iterable[str] = (),
        is_verified: bool = False,
        accepts_new_projects: bool = True,
        average_rating: float = 0.0,
        review_count: int = 0,
        slug: Optional[str] = None
    ) -> Company:
        company = Company(
            name=name,
            slug=slug or _slugify(name),
            is_verified=is_verified,
            accepts_new_projects=accepts_new_projects,
            average_rating=average_rating if review_count else 0.0,
            review_count=review_count,
        )
        company.tech_stacks = [self.get_or_create_tech_stack(t) for t in tech_stacks]
        company.specialties = [self.get_or_create_specialty(s) for s in specialties]
        self.db.add(company)
        self.db.flush()
        logger.debug(f"Created company {company.id} ({name})")
        return company
