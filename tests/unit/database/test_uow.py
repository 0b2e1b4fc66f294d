#!/usr/bin/env python3
"""
Tests for the marketplace unit of work.

These tests require a database - marked with @pytest.mark.db
"""

import pytest
from sqlalchemy.exc import OperationalError

from core.exceptions import StateConflictException, TransactionFailedException
from core.proposals.states import RequestStatus
from database.uow import marketplace_uow
from tests import seed_request


def request_status(database, request_id):
    with marketplace_uow(database) as repos:
        return repos.requests.get_by_id(request_id).status


@pytest.mark.db
class TestMarketplaceUow:

    def test_commits_on_success(self, database):
        request_id = seed_request(database, status=RequestStatus.DRAFT)
        with marketplace_uow(database) as repos:
            repos.requests.get_by_id(request_id).title = "Renamed request"

        with marketplace_uow(database) as repos:
            assert repos.requests.get_by_id(request_id).title == "Renamed request"

    def test_service_exception_rolls_back(self, database):
        request_id = seed_request(database, status=RequestStatus.DRAFT)
        with pytest.raises(StateConflictException):
            with marketplace_uow(database) as repos:
                repos.requests.publish_if_draft(request_id, None)
                raise StateConflictException("abort")

        assert request_status(database, request_id) == RequestStatus.DRAFT

    def test_database_error_becomes_transaction_failed(self, database):
        request_id = seed_request(database, status=RequestStatus.DRAFT)
        with pytest.raises(TransactionFailedException) as exc_info:
            with marketplace_uow(database) as repos:
                repos.requests.publish_if_draft(request_id, None)
                raise OperationalError("UPDATE requests", {}, Exception("could not serialize access"))

        assert isinstance(exc_info.value.__cause__, OperationalError)
        assert request_status(database, request_id) == RequestStatus.DRAFT

    def test_repositories_share_session(self, database):
        with marketplace_uow(database) as repos:
            assert repos.companies.db is repos.session
            assert repos.requests.db is repos.session
            assert repos.proposals.db is repos.session

    def test_isolation_level_applies_to_one_unit_of_work(self, database):
        with marketplace_uow(database, isolation_level="READ UNCOMMITTED") as repos:
            assert repos.session.connection().get_isolation_level() == "READ UNCOMMITTED"

        with marketplace_uow(database) as repos:
            level = repos.session.connection().get_isolation_level()
            assert level == database.engine.dialect.default_isolation_level
