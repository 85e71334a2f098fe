"""
Profiles — form sanitizing, input validation, saving and loading planner inputs.
"""

from .form import RetirementForm
from .loader import load_profile, save_profile
from .validators import ValidationResult, validate_inputs

__all__ = [
    "RetirementForm",
    "load_profile",
    "save_profile",
    "ValidationResult",
    "validate_inputs",
]
