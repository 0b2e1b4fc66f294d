#!/usr/bin/env python3
"""
Property checks for the matcher over seeded random inputs.

Each test draws a fixed number of cases from a seeded generator so
failures are reproducible.
"""

import random
import unittest

from core.config_loader import MatchingConfig
from core.matching.finder import find_matching_companies
from core.matching.models import CompanyProfile, MatchingFilters, ProjectType, RequestProfile
from core.matching.scoring import calculate_match_score, calculate_tech_stack_score
from core.matching.tiers import get_match_tier

TECH_POOL = ["React", "Vue", "Angular", "Node.js", "Python", "Django", "Go", "Java", "Swift", "Kotlin", "PostgreSQL"]
SPECIALTY_POOL = [
    "Web Development", "Frontend", "Mobile App", "iOS", "Machine Learning",
    "Consulting", "API Integration", "Maintenance", "Payments", "Logistics"
]
CASES = 300


def random_case(value: str, rng: random.Random) -> str:
    return rng.choice([value, value.lower(), value.upper()])


def random_company(rng: random.Random, index: int) -> CompanyProfile:
    review_count = rng.choice([0, 0, 3, 7, 12, 25, 80])
    return CompanyProfile(
        id=f"c{index}",
        is_verified=rng.random() < 0.6,
        accepts_new_projects=rng.random() < 0.85,
        average_rating=round(rng.uniform(1, 5), 1) if review_count else 0.0,
        review_count=review_count,
        tech_stacks=rng.sample(TECH_POOL, rng.randint(0, 5)),
        specialties=rng.sample(SPECIALTY_POOL, rng.randint(0, 3)),
    )


def random_request(rng: random.Random) -> RequestProfile:
    budget_min = budget_max = None
    if rng.random() < 0.8:
        budget_min = rng.randint(1, 500) * 10_000
        budget_max = budget_min + rng.randint(1, 500) * 10_000
    return RequestProfile(
        id="r",
        project_type=rng.choice(list(ProjectType)),
        budget_min=budget_min,
        budget_max=budget_max,
        tech_stacks=[random_case(t, rng) for t in rng.sample(TECH_POOL, rng.randint(0, 4))],
        specialties=[s.lower() for s in rng.sample(SPECIALTY_POOL, rng.randint(0, 2))],
    )


class TestScoreProperties(unittest.TestCase):

    def setUp(self):
        self.rng = random.Random(20240611)

    def test_sub_scores_within_bounds(self):
        for i in range(CASES):
            score = calculate_match_score(random_company(self.rng, i), random_request(self.rng))
            with self.subTest(case=i):
                self.assertTrue(0 <= score.tech_stack_score <= 40)
                self.assertTrue(0 <= score.specialty_score <= 30)
                self.assertTrue(0 <= score.budget_score <= 20)
                self.assertTrue(0 <= score.rating_score <= 10)
                self.assertTrue(0 <= score.total <= 100)
                self.assertEqual(
                    score.total,
                    score.tech_stack_score + score.specialty_score + score.budget_score + score.rating_score
                )

    def test_tech_stack_score_ignores_case(self):
        for i in range(CASES):
            company = random_company(self.rng, i)
            requested = self.rng.sample(TECH_POOL, self.rng.randint(1, 4))
            lower = calculate_tech_stack_score(company.tech_stacks, [t.lower() for t in requested])
            upper = calculate_tech_stack_score(company.tech_stacks, [t.upper() for t in requested])
            with self.subTest(case=i):
                self.assertEqual(lower.score, upper.score)
                self.assertEqual(len(lower.matched), len(upper.matched))

    def test_matched_stacks_come_from_request(self):
        for i in range(CASES):
            company = random_company(self.rng, i)
            request = random_request(self.rng)
            result = calculate_tech_stack_score(company.tech_stacks, request.tech_stacks)
            company_lower = {t.lower() for t in company.tech_stacks}
            with self.subTest(case=i):
                for tech in result.matched:
                    self.assertIn(tech, request.tech_stacks)
                    self.assertIn(tech.lower(), company_lower)

    def test_tier_agrees_with_total(self):
        for i in range(CASES):
            total = calculate_match_score(random_company(self.rng, i), random_request(self.rng)).total
            self.assertEqual(get_match_tier(total), get_match_tier(float(total)))


class TestFinderProperties(unittest.TestCase):

    def setUp(self):
        self.rng = random.Random(7)

    def test_ranking_invariants(self):
        for case in range(60):
            companies = [random_company(self.rng, i) for i in range(self.rng.randint(0, 30))]
            request = random_request(self.rng)
            config = MatchingConfig(
                min_score=self.rng.randint(0, 80),
                max_results=self.rng.randint(1, 25)
            )
            filters = MatchingFilters(
                verified_only=self.rng.random() < 0.5,
                min_rating=self.rng.choice([None, 0, 3.0, 4.5])
            )

            matches = find_matching_companies(companies, request, filters, config)
            totals = [m.match_score.total for m in matches]

            with self.subTest(case=case):
                self.assertLessEqual(len(matches), config.max_results)
                self.assertEqual(totals, sorted(totals, reverse=True))
                for m in matches:
                    self.assertGreaterEqual(m.match_score.total, config.min_score)
                    self.assertTrue(m.company.accepts_new_projects)
                    if filters.verified_only:
                        self.assertTrue(m.company.is_verified)
                    if filters.min_rating:
                        self.assertGreaterEqual(m.company.average_rating, filters.min_rating)

                # Equal totals keep input order
                positions = {c.id: idx for idx, c in enumerate(companies)}
                for a, b in zip(matches, matches[1:]):
                    if a.match_score.total == b.match_score.total:
                        self.assertLess(positions[a.company.id], positions[b.company.id])

    def test_repeatable(self):
        companies = [random_company(self.rng, i) for i in range(40)]
        request = random_request(self.rng)
        config = MatchingConfig(min_score=0)
        first = find_matching_companies(companies, request, config=config)
        second = find_matching_companies(companies, request, config=config)
        self.assertEqual(
            [(m.company.id, m.match_score) for m in first],
            [(m.company.id, m.match_score) for m in second]
        )


if __name__ == '__main__':
    unittest.main()
