import uuid

from sqlalchemy import Column, Text, Integer, TIMESTAMP, ForeignKey, Enum, JSON, UniqueConstraint, Index, func
from sqlalchemy.orm import relationship

from core.proposals.states import ProposalStatus
from .base import Base


class Proposal(Base):
    """
    A company's response to a request and its lifecycle status.

    At most one row exists per (request, company) pair. Rows start as
    PENDING when a company is invited, or as RESPONDED on a direct
    submission, and are never deleted by the service layer.
    """
    __tablename__ = 'proposal'

    id = Column(Text, primary_key=True, default=lambda: str(uuid.uuid4()))
    request_id = Column(Text, ForeignKey('requests.id', ondelete='CASCADE'), nullable=False)
    company_id = Column(Text, ForeignKey('companies.id', ondelete='CASCADE'), nullable=False)

    estimated_cost = Column(Integer)
    estimated_duration = Column(Text)
    proposal = Column(Text)
    attachments = Column(JSON, nullable=False, default=list)

    status = Column(Enum(ProposalStatus, name='proposal_status'), nullable=False, default=ProposalStatus.PENDING)
    responded_at = Column(TIMESTAMP(timezone=True))
    selected_at = Column(TIMESTAMP(timezone=True))

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    request = relationship("Request", back_populates="proposals")
    company = relationship("Company", back_populates="proposals")

    __table_args__ = (
        UniqueConstraint('request_id', 'company_id', name='uq_proposal_request_company'),
        Index('idx_proposal_request', 'request_id'),
        Index('idx_proposal_company', 'company_id'),
        Index('idx_proposal_status', 'status'),
    )
