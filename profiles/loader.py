from __future__ import annotations

import json
import os

from core.schema import INPUT_FIELDS, RetirementInputs

from .form import RetirementForm

DEFAULT_PROFILE_PATH = os.path.join(os.path.expanduser("~"), ".nestegg_profile.json")


def load_profile(path: str = DEFAULT_PROFILE_PATH) -> RetirementInputs:
    """
    Load saved planner inputs. A missing file gives the form defaults.
    Keys may be snake_case or the camelCase form names.
    """
    if not os.path.exists(path):
        return RetirementForm().to_inputs()

    with open(path) as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Profile {path} must contain a JSON object.")

    known = set(INPUT_FIELDS) | {
        info.alias for info in RetirementForm.model_fields.values() if info.alias
    }
    unknown = sorted(k for k in data if k not in known)
    if unknown:
        raise ValueError(f"Unknown profile keys in {path}: {unknown}")

    return RetirementForm(**data).to_inputs()


def save_profile(inputs: RetirementInputs, path: str = DEFAULT_PROFILE_PATH) -> None:
    """Persist planner inputs (never simulation results) to disk."""
    data = {name: getattr(inputs, name) for name in INPUT_FIELDS}
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
