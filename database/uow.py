import contextlib
import logging
from dataclasses import dataclass
from typing import Generator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import ServiceException, TransactionFailedException
from database.database import Database
from database.repositories import CompanyRepository, RequestRepository, ProposalRepository

logger = logging.getLogger(__name__)


@dataclass
class Repositories:
    """Repositories sharing one Session, and therefore one transaction."""
    session: Session
    companies: CompanyRepository
    requests: RequestRepository
    proposals: ProposalRepository


@contextlib.contextmanager
def marketplace_uow(
    database: Database,
    isolation_level: Optional[str] = None
) -> Generator[Repositories, None, None]:
    """Per-unit-of-work transaction scope.

    Yields repositories bound to a fresh Session. Commits on success,
    rolls back on exception, always closes. Database errors (including
    a failed commit) surface as TransactionFailedException so callers
    never assume a partial write.

    Usage:
        with marketplace_uow(database) as repos:
            proposal = repos.proposals.get_by_id(proposal_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    session = database.SessionLocal()
    try:
        if isolation_level:
            session.connection(execution_options={"isolation_level": isolation_level})
        yield Repositories(
            session=session,
            companies=CompanyRepository(session),
            requests=RequestRepository(session),
            proposals=ProposalRepository(session),
        )
        session.commit()
    except ServiceException:
        session.rollback()
        raise
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Transaction rolled back: {e}", exc_info=True)
        raise TransactionFailedException(f"Transaction failed: {e.__class__.__name__}") from e
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
