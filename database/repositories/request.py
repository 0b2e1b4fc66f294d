import logging
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import select, update

from core.matching.models import ProjectType
from core.proposals.states import RequestStatus
from database.models import Request
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class RequestRepository(BaseRepository):
    def get_by_id(self, request_id: str, for_update: bool = False) -> Optional[Request]:
        stmt = select(Request).where(Request.id == request_id)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        return self.db.execute(stmt).scalar_one_or_none()

    def create_request(
        self,
        user_id: str,
        title: str,
        description: str,
        project_type: ProjectType,
        budget_min: Optional[int] = None,
        budget_max: Optional[int] = None,
        requirements: Optional[Dict[str, Any]] = None,
        status: RequestStatus = RequestStatus.DRAFT,
        published_at: Optional[datetime] = None
    ) -> Request:
        request = Request(
            user_id=user_id,
            title=title,
            description=description,
            project_type=project_type,
            budget_min=budget_min,
            budget_max=budget_max,
            requirements=requirements,
            status=status,
            published_at=published_at,
        )
        self.db.add(request)
        self.db.flush()
        return request

    def _transition(self, request_id: str, expected: RequestStatus, values: Dict[str, Any]) -> int:
        """Compare-and-set status update. Returns the number of rows changed (0 or 1)."""
        self.db.flush()
        stmt = (
            update(Request)
            .where(Request.id == request_id, Request.status == expected)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        count = self.db.execute(stmt).rowcount
        if count:
            # Reload identity-mapped rows on next access
            self.db.expire_all()
        return count

    def publish_if_draft(self, request_id: str, published_at: datetime) -> int:
        return self._transition(
            request_id,
            RequestStatus.DRAFT,
            {'status': RequestStatus.PUBLISHED, 'published_at': published_at}
        )

    def close_if_published(self, request_id: str, closed_at: datetime) -> int:
        return self._transition(
            request_id,
            RequestStatus.PUBLISHED,
            {'status': RequestStatus.CLOSED, 'closed_at': closed_at}
        )
