"""Configuration management for coop-loans."""

from dataclasses import dataclass, field
from pathlib import Path

from coop_loans.exceptions import ConfigurationError
from coop_loans.models.enums import LoanStatus


@dataclass(frozen=True)
class GuarantorPolicy:
    """Business policy applied when a member is proposed as a guarantor.

    ``exposure_statuses`` lists the loan states that still count against a
    guarantor's limit; ``credit_risk_statuses`` lists the borrower loan states
    that disqualify a candidate outright.
    """

    max_guarantees: int = 2
    exposure_statuses: frozenset[LoanStatus] = frozenset(
        {LoanStatus.ACTIVE, LoanStatus.APPROVED, LoanStatus.DEFAULTED}
    )
    credit_risk_statuses: frozenset[LoanStatus] = frozenset({LoanStatus.DEFAULTED})

    def __post_init__(self) -> None:
        if self.max_guarantees < 0:
            raise ConfigurationError(
                f"max_guarantees must be non-negative, got {self.max_guarantees}"
            )


@dataclass
class OutputConfig:
    """Output configuration."""

    snapshot_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class ScenarioConfig:
    """Configuration for sample cooperative generation."""

    num_members: int = 50
    loans_per_member: float = 0.6
    inactive_rate: float = 0.05
    frozen_rate: float = 0.03
    default_rate: float = 0.05
    max_guarantors_per_loan: int = 2


@dataclass
class CoopConfig:
    """Main configuration for coop-loans."""

    guarantor_policy: GuarantorPolicy = field(default_factory=GuarantorPolicy)
    output: OutputConfig = field(default_factory=OutputConfig)
    scenario: ScenarioConfig = field(default_factory=ScenarioConfig)
    seed: int | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "CoopConfig":
        """Create config from environment variables."""
        import os

        defaults = GuarantorPolicy()
        try:
            max_guarantees = int(os.getenv("COOP_MAX_GUARANTEES", str(defaults.max_guarantees)))
        except ValueError as e:
            raise ConfigurationError(f"COOP_MAX_GUARANTEES must be an integer: {e}") from e

        policy = GuarantorPolicy(
            max_guarantees=max_guarantees,
            exposure_statuses=_parse_statuses(
                "COOP_EXPOSURE_STATUSES", defaults.exposure_statuses
            ),
            credit_risk_statuses=_parse_statuses(
                "COOP_CREDIT_RISK_STATUSES", defaults.credit_risk_statuses
            ),
        )

        output = OutputConfig(
            snapshot_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        seed_str = os.getenv("SEED")
        try:
            seed = int(seed_str) if seed_str else None
        except ValueError as e:
            raise ConfigurationError(f"SEED must be an integer: {e}") from e

        return cls(
            guarantor_policy=policy,
            output=output,
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


def _parse_statuses(var: str, default: frozenset[LoanStatus]) -> frozenset[LoanStatus]:
    """Parse a comma-separated list of loan statuses from the environment."""
    import os

    raw = os.getenv(var)
    if not raw:
        return default
    try:
        return frozenset(LoanStatus(s.strip().upper()) for s in raw.split(",") if s.strip())
    except ValueError as e:
        raise ConfigurationError(f"{var} contains an unknown loan status: {e}") from e
