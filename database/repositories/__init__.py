from database.repositories.base import BaseRepository
from database.repositories.company import CompanyRepository
from database.repositories.request import RequestRepository
from database.repositories.proposal import ProposalRepository

__all__ = [
    'BaseRepository',
    'CompanyRepository',
    'RequestRepository',
    'ProposalRepository',
]
