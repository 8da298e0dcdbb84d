"""Scenarios for generating sample cooperative data."""

from coop_loans.scenarios.cooperative import CooperativeScenario

__all__ = ["CooperativeScenario"]
