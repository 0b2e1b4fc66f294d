import uuid

from sqlalchemy import Column, Text, Boolean, Integer, Float, TIMESTAMP, ForeignKey, Table, Index, func
from sqlalchemy.orm import relationship

from .base import Base


company_tech_stacks = Table(
    'company_tech_stacks',
    Base.metadata,
    Column('company_id', Text, ForeignKey('companies.id', ondelete='CASCADE'), primary_key=True),
    Column('tech_stack_id', Text, ForeignKey('tech_stacks.id', ondelete='CASCADE'), primary_key=True),
)

company_specialties = Table(
    'company_specialties',
    Base.metadata,
    Column('company_id', Text, ForeignKey('companies.id', ondelete='CASCADE'), primary_key=True),
    Column('specialty_id', Text, ForeignKey('specialties.id', ondelete='CASCADE'), primary_key=True),
)


class Company(Base):
    """
    Development company that can be matched against requests.

    Rating statistics are maintained by the review aggregation outside
    this service; average_rating stays 0 while review_count is 0.
    """
    __tablename__ = 'companies'

    id = Column(Text, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(Text, nullable=False)
    slug = Column(Text, nullable=False, unique=True)
    description = Column(Text)

    is_verified = Column(Boolean, nullable=False, default=False)
    verified_at = Column(TIMESTAMP(timezone=True))
    accepts_new_projects = Column(Boolean, nullable=False, default=True)

    average_rating = Column(Float, nullable=False, default=0.0)
    review_count = Column(Integer, nullable=False, default=0)
    project_count = Column(Integer, nullable=False, default=0)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    tech_stacks = relationship("TechStack", secondary=company_tech_stacks, lazy="selectin")
    specialties = relationship("Specialty", secondary=company_specialties, lazy="selectin")
    proposals = relationship("Proposal", back_populates="company")

    __table_args__ = (
        Index('idx_companies_verified', 'is_verified'),
        Index('idx_companies_accepts', 'accepts_new_projects'),
    )


class TechStack(Base):
    __tablename__ = 'tech_stacks'

    id = Column(Text, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(Text, nullable=False, unique=True)
    slug = Column(Text, nullable=False, unique=True)
    category = Column(Text, nullable=False, default='OTHER')  # LANGUAGE|FRAMEWORK|DATABASE|CLOUD|TOOL|OTHER


class Specialty(Base):
    __tablename__ = 'specialties'

    id = Column(Text, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(Text, nullable=False, unique=True)
    slug = Column(Text, nullable=False, unique=True)
    description = Column(Text)
