"""Sample cooperative: members, loans and guarantors that respect policy."""

from __future__ import annotations

import logging
import random
from dataclasses import replace

from coop_loans.config import GuarantorPolicy, ScenarioConfig
from coop_loans.generators import LoanGenerator, MemberGenerator
from coop_loans.models import Loan, LoanStatus, MemberStatus
from coop_loans.store import CoopDataStore

logger = logging.getLogger(__name__)


class CooperativeScenario:
    """Generate a village cooperative's loan book.

    This scenario creates:
    - Members, a few of them inactive or frozen
    - Loans for a share of the active members
    - Guarantors for each loan, chosen only among members who pass the
      guarantor eligibility check at the time the loan is added
    """

    def __init__(
        self,
        config: ScenarioConfig | None = None,
        seed: int | None = None,
        policy: GuarantorPolicy | None = None,
    ) -> None:
        """Initialize the scenario.

        Parameters
        ----------
        config : ScenarioConfig | None
            Member count and rates (default: ``ScenarioConfig()``).
        seed : int | None
            Random seed for reproducibility.
        policy : GuarantorPolicy | None
            Guarantor policy applied when picking guarantors.
        """
        self.config = config or ScenarioConfig()
        self.seed = seed
        self.policy = policy or GuarantorPolicy()

        if seed is not None:
            random.seed(seed)

        self.store = CoopDataStore()
        self._member_gen = MemberGenerator(
            seed=seed,
            inactive_rate=self.config.inactive_rate,
            frozen_rate=self.config.frozen_rate,
        )
        self._loan_gen = LoanGenerator(seed=seed, default_rate=self.config.default_rate)

    def generate(self) -> CoopDataStore:
        """Generate all data for the scenario.

        Returns
        -------
        CoopDataStore
            Store containing the generated members and loans.
        """
        logger.info(
            "Starting cooperative scenario: %d members, %.0f%% borrowing",
            self.config.num_members,
            self.config.loans_per_member * 100,
        )

        self.store.add_members(self._member_gen.generate_batch(self.config.num_members))

        borrowers = [
            m for m in self.store.members.values() if m.status == MemberStatus.ACTIVE
        ]
        num_loans = int(len(self.store.members) * self.config.loans_per_member)
        for _ in range(num_loans):
            if not borrowers:
                break
            borrower = random.choice(borrowers)
            loan = self._loan_gen.generate(borrower.member_id)
            if loan.status not in (LoanStatus.PENDING, LoanStatus.REJECTED):
                loan = self._with_guarantors(loan)
            self.store.add_loan(loan)

        logger.info("Generated %s", self.store.summary())
        return self.store

    def _with_guarantors(self, loan: Loan) -> Loan:
        """Attach up to ``max_guarantors_per_loan`` eligible guarantors."""
        candidates = list(self.store.members)
        random.shuffle(candidates)

        chosen: list[str] = []
        for candidate_id in candidates:
            if len(chosen) >= self.config.max_guarantors_per_loan:
                break
            result = self.store.check_guarantor(
                candidate_id, loan.member_id, chosen, self.policy
            )
            if result.eligible:
                chosen.append(candidate_id)

        if len(chosen) < self.config.max_guarantors_per_loan:
            logger.debug("Loan %s has only %d eligible guarantors", loan.loan_id, len(chosen))

        return replace(loan, guarantor_ids=frozenset(chosen))
