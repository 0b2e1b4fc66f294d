#!/usr/bin/env python3
"""
Concurrent selection against a database shared by several threads.

Each round submits a few proposals and then selects all of them at once
from separate threads. Exactly one selection may win; the others must
fail with a conflict or a failed transaction and leave nothing behind.

Uses a file-backed SQLite database (real per-thread connections) unless
TEST_DATABASE_URL points elsewhere.
"""

import os
import shutil
import tempfile
import threading
import unittest

import pytest

from core.exceptions import StateConflictException, TransactionFailedException
from core.proposals.service import ProposalService
from core.proposals.states import ProposalStatus, RequestStatus
from database.database import Database
from database.repositories import ProposalRepository, RequestRepository
from tests import OWNER_ID, get_test_db_url, seed_company, seed_request

NARRATIVE = "We have shipped a dozen storefronts on this stack and can start next month."


@pytest.mark.db
class TestConcurrentSelection(unittest.TestCase):

    ROUNDS = 5
    CONTENDERS = 3

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp(prefix="quotematch-")
        url = get_test_db_url()
        if url.startswith("sqlite"):
            url = f"sqlite:///{os.path.join(self.tmpdir, 'selection.db')}"

        self.database = Database(url)
        self.database.drop_all()
        self.database.create_all()
        self.service = ProposalService(self.database, isolation_level="SERIALIZABLE")
        self.companies = [seed_company(self.database, f"Studio {i}") for i in range(self.CONTENDERS)]

    def tearDown(self):
        self.database.drop_all()
        self.database.dispose()
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def submit_all(self, request_id):
        return [
            self.service.submit_proposal(
                request_id=request_id,
                company_id=company_id,
                estimated_cost=1_500_000,
                estimated_duration="3 months",
                proposal=NARRATIVE,
            ).id
            for company_id in self.companies
        ]

    def select_concurrently(self, proposal_ids):
        barrier = threading.Barrier(len(proposal_ids))
        outcomes = {}

        def select(proposal_id):
            barrier.wait()
            try:
                outcomes[proposal_id] = self.service.select_proposal(proposal_id, owner_id=OWNER_ID)
            except Exception as e:
                outcomes[proposal_id] = e

        threads = [threading.Thread(target=select, args=(pid,)) for pid in proposal_ids]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)
        return outcomes

    def test_exactly_one_concurrent_selection_wins(self):
        for round_no in range(self.ROUNDS):
            request_id = seed_request(self.database)
            proposal_ids = self.submit_all(request_id)

            outcomes = self.select_concurrently(proposal_ids)

            with self.subTest(round=round_no):
                self.assertEqual(len(outcomes), len(proposal_ids))
                winners = [pid for pid, result in outcomes.items() if not isinstance(result, Exception)]
                self.assertEqual(len(winners), 1)

                for pid, result in outcomes.items():
                    if pid != winners[0]:
                        self.assertIsInstance(result, (StateConflictException, TransactionFailedException))

                with self.database.session_scope() as session:
                    proposals = ProposalRepository(session).list_for_request(request_id, submitted_only=False)
                    statuses = {p.id: p.status for p in proposals}
                    request = RequestRepository(session).get_by_id(request_id)
                    self.assertEqual(request.status, RequestStatus.CLOSED)

                self.assertEqual(statuses.pop(winners[0]), ProposalStatus.SELECTED)
                self.assertEqual(set(statuses.values()), {ProposalStatus.REJECTED})
                self.assertEqual(outcomes[winners[0]].rejected_count, len(proposal_ids) - 1)


if __name__ == '__main__':
    unittest.main()
