import uuid

from sqlalchemy import Column, Text, Integer, TIMESTAMP, Enum, JSON, Index, CheckConstraint, func
from sqlalchemy.orm import relationship

from core.matching.models import ProjectType
from core.proposals.states import RequestStatus
from .base import Base


class Request(Base):
    """
    Quote request published by a requester.

    `requirements` holds the optional matching payload:
    {"techStacks": [...], "specialties": [...], "location": "..."}
    """
    __tablename__ = 'requests'

    id = Column(Text, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(Text, nullable=False)  # owner, managed by the auth layer

    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    project_type = Column(Enum(ProjectType, name='project_type'), nullable=False)

    budget_min = Column(Integer)
    budget_max = Column(Integer)
    requirements = Column(JSON)

    status = Column(Enum(RequestStatus, name='request_status'), nullable=False, default=RequestStatus.DRAFT)
    published_at = Column(TIMESTAMP(timezone=True))
    closed_at = Column(TIMESTAMP(timezone=True))

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    proposals = relationship("Proposal", back_populates="request")

    __table_args__ = (
        CheckConstraint(
            'budget_min IS NULL OR budget_max IS NULL OR budget_min < budget_max',
            name='ck_requests_budget_range'
        ),
        Index('idx_requests_user', 'user_id'),
        Index('idx_requests_status', 'status'),
        Index('idx_requests_project_type', 'project_type'),
    )
