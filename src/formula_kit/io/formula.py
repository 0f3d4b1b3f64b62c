"""Formula file I/O."""

from pathlib import Path

import yaml

from formula_kit.models.formula import Formula


def load_formula(formula_path: Path) -> Formula:
    """Load a formula YAML file.

    Raises:
        FileNotFoundError: If the formula file does not exist
        ValueError: If the file is not valid YAML or fails validation
    """
    if not formula_path.exists():
        raise FileNotFoundError(f"Formula file not found: {formula_path}")

    try:
        data = yaml.safe_load(formula_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in formula {formula_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Formula {formula_path} must contain a YAML mapping")

    return Formula.model_validate(data)
