#!/usr/bin/env python3
"""Tests for request creation and publishing."""

import unittest
from datetime import datetime, timezone

import pytest

from core.exceptions import (
    PermissionDeniedException,
    RequestNotFoundException,
    StateConflictException,
    ValidationException,
)
from core.matching.models import ProjectType
from core.proposals.states import RequestStatus
from core.quote_requests.service import RequestService
from tests import OWNER_ID, make_test_database, teardown_test_database

PUBLISHED_AT = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)


@pytest.mark.db
class TestRequestService(unittest.TestCase):

    def setUp(self):
        self.database = make_test_database()
        self.service = RequestService(self.database, clock=lambda: PUBLISHED_AT)

    def tearDown(self):
        teardown_test_database(self.database)

    def create(self, title="Inventory dashboard", description="Internal dashboard for warehouse stock levels.", **kwargs):
        return self.service.create_request(
            user_id=OWNER_ID,
            title=title,
            description=description,
            project_type=kwargs.pop("project_type", ProjectType.WEB_DEVELOPMENT),
            **kwargs
        )

    def test_create_is_draft(self):
        record = self.create(budget_min=500_000, budget_max=800_000, requirements={"techStacks": ["Vue"]})

        self.assertEqual(record.status, RequestStatus.DRAFT)
        self.assertEqual(record.project_type, ProjectType.WEB_DEVELOPMENT)
        self.assertEqual(record.requirements, {"techStacks": ["Vue"]})
        self.assertIsNone(record.published_at)

    def test_create_rejects_inverted_budget(self):
        with self.assertRaises(ValidationException):
            self.create(budget_min=800_000, budget_max=500_000)
        with self.assertRaises(ValidationException):
            self.create(budget_min=500_000, budget_max=500_000)

    def test_open_ended_budget_allowed(self):
        record = self.create(budget_min=500_000)
        self.assertIsNone(record.budget_max)

    def test_publish(self):
        record = self.create()
        published = self.service.publish_request(record.id, owner_id=OWNER_ID)

        self.assertEqual(published.status, RequestStatus.PUBLISHED)
        self.assertIsNotNone(published.published_at)
        self.assertEqual(self.service.get_request(record.id).status, RequestStatus.PUBLISHED)

    def test_publish_twice_conflicts(self):
        record = self.create()
        self.service.publish_request(record.id, owner_id=OWNER_ID)
        with self.assertRaises(StateConflictException) as ctx:
            self.service.publish_request(record.id, owner_id=OWNER_ID)
        self.assertEqual(ctx.exception.current_state, RequestStatus.PUBLISHED)

    def test_publish_validates_lengths(self):
        short_title = self.create(title="App")
        with self.assertRaises(ValidationException):
            self.service.publish_request(short_title.id, owner_id=OWNER_ID)

        short_description = self.create(description="Too short")
        with self.assertRaises(ValidationException):
            self.service.publish_request(short_description.id, owner_id=OWNER_ID)

        self.assertEqual(self.service.get_request(short_title.id).status, RequestStatus.DRAFT)

    def test_publish_requires_owner(self):
        record = self.create()
        with self.assertRaises(PermissionDeniedException):
            self.service.publish_request(record.id, owner_id="someone-else")

    def test_unknown_request(self):
        with self.assertRaises(RequestNotFoundException):
            self.service.get_request("missing")
        with self.assertRaises(RequestNotFoundException):
            self.service.publish_request("missing", owner_id=OWNER_ID)


if __name__ == '__main__':
    unittest.main()
