"""
Input validation for planner assumptions before they enter the engine.

The engine never rejects anything; it just produces an empty or meaningless
trajectory for bad ages. This module is where bad input gets caught:
- Age ordering (blocking)
- Negative money amounts (blocking)
- Values outside the form's usual ranges (informational)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from core.schema import RetirementInputs

# (field, low, high, label), same bounds as the planner form inputs
SOFT_RANGES = (
    ("current_age", 18, 100, "Current age"),
    ("retirement_age", 40, 100, "Retirement age"),
    ("lifespan", 60, 120, "Lifespan"),
    ("annual_return", 0, 20, "Annual return (%)"),
    ("annual_inflation", 0, 10, "Annual inflation (%)"),
)


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for one set of inputs."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def validate_inputs(inputs: RetirementInputs) -> ValidationResult:
    """
    Run all checks on one set of inputs.
    Returns a ValidationResult with errors (blocking) and warnings (informational).
    """
    result = ValidationResult()

    # --- Age ordering ---
    if inputs.retirement_age <= inputs.current_age:
        result.errors.append("Retirement age must be after current age")
    if inputs.lifespan <= inputs.retirement_age:
        result.errors.append("Lifespan must be after retirement age")

    # --- Money ---
    for name, label in [
        ("current_savings", "Current savings"),
        ("annual_contributions", "Annual contributions"),
        ("retirement_spending", "Retirement spending"),
    ]:
        if getattr(inputs, name) < 0:
            result.errors.append(f"{label} cannot be negative.")

    # --- Soft ranges ---
    for name, low, high, label in SOFT_RANGES:
        value = getattr(inputs, name)
        if value < low or value > high:
            result.warnings.append(f"{label} of {value:g} is outside the usual range {low} to {high}.")

    if inputs.retirement_spending == 0:
        result.warnings.append("Retirement spending is 0; withdrawals will never reduce the balance.")

    return result
