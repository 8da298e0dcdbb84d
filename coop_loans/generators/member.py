"""Member generator."""

from __future__ import annotations

import itertools
import random
from decimal import Decimal
from typing import Iterator

from coop_loans.generators.base import BaseGenerator
from coop_loans.models import Member, MemberStatus


class MemberGenerator(BaseGenerator):
    """Generate cooperative members with sequential IDs (``M001``, ``M002``, ...)."""

    # Monthly income range (THB)
    INCOME_RANGE = (8000, 45000)

    def __init__(
        self,
        seed: int | None = None,
        inactive_rate: float = 0.05,
        frozen_rate: float = 0.03,
        start: int = 1,
    ) -> None:
        super().__init__(seed)
        self.inactive_rate = inactive_rate
        self.frozen_rate = frozen_rate
        self._ids = itertools.count(start)

    def generate(self) -> Member:
        """Generate a single member."""
        status = (
            MemberStatus.INACTIVE if random.random() < self.inactive_rate else MemberStatus.ACTIVE
        )
        income = random.randint(*self.INCOME_RANGE) // 500 * 500

        return Member(
            member_id=f"M{next(self._ids):03d}",
            status=status,
            is_frozen=random.random() < self.frozen_rate,
            full_name=self.fake.name(),
            monthly_income=Decimal(income),
            joined_date=self.fake.date_between(start_date="-15y", end_date="-30d"),
        )

    def generate_batch(self, count: int) -> Iterator[Member]:
        """Generate multiple members.

        Parameters
        ----------
        count : int
            Number of members to generate.

        Yields
        ------
        Member
            Generated members.
        """
        for _ in range(count):
            yield self.generate()
