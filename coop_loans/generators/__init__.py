"""Sample data generators."""

from coop_loans.generators.loan import LoanGenerator
from coop_loans.generators.member import MemberGenerator

__all__ = ["LoanGenerator", "MemberGenerator"]
