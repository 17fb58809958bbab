"""Grading policy configuration.

The policy holds the credit-limit tiers and the academic-status thresholds used
by the grade calculator. Defaults match the registrar's standard rules; a YAML
file can override any of them::

    credit_tiers:
      - {min_gpa: 3.0, max_credits: 24}
      - {min_gpa: 2.5, max_credits: 21}
      - {min_gpa: 2.0, max_credits: 18}
    base_credits: 15
    early_semester_max: 2
    early: {active_min: 2.0}
    middle_semester_max: 4
    middle: {active_min: 2.25, probation_min: 2.0}
    senior: {active_min: 2.5, probation_min: 2.0}
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

POLICY_FILE_ENV = "REGISTRAR_POLICY_FILE"


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass(frozen=True)
class CreditTier:
    """Students with ``gpa >= min_gpa`` may take up to ``max_credits``."""

    min_gpa: float
    max_credits: int


@dataclass(frozen=True)
class StatusThresholds:
    """Status cut-offs for one semester band.

    Attributes:
        active_min: Lowest GPA that is still ACTIVE.
        probation_min: Lowest GPA that is PROBATION rather than SUSPENDED.
            None means the band never suspends.
    """

    active_min: float
    probation_min: float | None = None


def _default_tiers() -> list[CreditTier]:
    return [
        CreditTier(min_gpa=3.0, max_credits=24),
        CreditTier(min_gpa=2.5, max_credits=21),
        CreditTier(min_gpa=2.0, max_credits=18),
    ]


@dataclass
class GradingPolicy:
    """Thresholds for credit limits and academic status."""

    credit_tiers: list[CreditTier] = field(default_factory=_default_tiers)
    base_credits: int = 15
    early_semester_max: int = 2
    early: StatusThresholds = field(default_factory=lambda: StatusThresholds(2.0))
    middle_semester_max: int = 4
    middle: StatusThresholds = field(default_factory=lambda: StatusThresholds(2.25, 2.0))
    senior: StatusThresholds = field(default_factory=lambda: StatusThresholds(2.5, 2.0))

    def __post_init__(self) -> None:
        self.credit_tiers = sorted(self.credit_tiers, key=lambda t: t.min_gpa, reverse=True)

    def thresholds_for(self, semester: int) -> StatusThresholds:
        """Get the status thresholds for a semester."""
        if semester <= self.early_semester_max:
            return self.early
        if semester <= self.middle_semester_max:
            return self.middle
        return self.senior

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GradingPolicy:
        """Create a policy from a dictionary. Omitted keys keep their defaults.

        Args:
            data: Policy mapping, usually parsed from YAML.

        Returns:
            Parsed policy.

        Raises:
            ConfigError: If a value has the wrong shape or type.
        """
        defaults = cls()
        try:
            tiers = defaults.credit_tiers
            if "credit_tiers" in data:
                tiers = [
                    CreditTier(min_gpa=float(t["min_gpa"]), max_credits=int(t["max_credits"]))
                    for t in data["credit_tiers"]
                ]
            policy = cls(
                credit_tiers=tiers,
                base_credits=int(data.get("base_credits", defaults.base_credits)),
                early_semester_max=int(
                    data.get("early_semester_max", defaults.early_semester_max)
                ),
                early=_thresholds(data.get("early"), defaults.early),
                middle_semester_max=int(
                    data.get("middle_semester_max", defaults.middle_semester_max)
                ),
                middle=_thresholds(data.get("middle"), defaults.middle),
                senior=_thresholds(data.get("senior"), defaults.senior),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid grading policy: {e}") from e
        policy.validate()
        return policy

    def validate(self) -> None:
        """Check that the semester bands and thresholds are consistent.

        Raises:
            ConfigError: If a band is empty or out of order, or a probation
                cut-off lies above its active cut-off.
        """
        if self.early_semester_max < 1:
            raise ConfigError("Invalid grading policy: early_semester_max must be at least 1")
        if self.middle_semester_max < self.early_semester_max:
            raise ConfigError(
                "Invalid grading policy: middle_semester_max must not be below early_semester_max"
            )
        for band in ("early", "middle", "senior"):
            thresholds = getattr(self, band)
            if (
                thresholds.probation_min is not None
                and thresholds.probation_min > thresholds.active_min
            ):
                raise ConfigError(
                    f"Invalid grading policy: {band} probation_min "
                    f"{thresholds.probation_min} is above active_min {thresholds.active_min}"
                )

    @classmethod
    def from_env(cls) -> GradingPolicy:
        """Load the policy named by REGISTRAR_POLICY_FILE, or the defaults."""
        path = os.environ.get(POLICY_FILE_ENV)
        if not path:
            return cls()
        return load_policy(path)


def _thresholds(data: Any, default: StatusThresholds) -> StatusThresholds:
    if data is None:
        return default
    if not isinstance(data, dict):
        raise ConfigError(
            f"Invalid grading policy: semester band must be a mapping, got {type(data).__name__}"
        )
    probation_min = data.get("probation_min")
    return StatusThresholds(
        active_min=float(data["active_min"]),
        probation_min=float(probation_min) if probation_min is not None else None,
    )


def load_policy(policy_path: Path | str) -> GradingPolicy:
    """Load a grading policy from a YAML file.

    Args:
        policy_path: Path to the policy file.

    Returns:
        Parsed policy.

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    policy_path = Path(policy_path)

    if not policy_path.exists():
        raise ConfigError(f"Policy file not found: {policy_path}")

    try:
        with open(policy_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {policy_path}: {e}") from e

    if data is None:
        return GradingPolicy()
    if not isinstance(data, dict):
        raise ConfigError(f"Policy must be a YAML mapping, got {type(data).__name__}")

    return GradingPolicy.from_dict(data)
