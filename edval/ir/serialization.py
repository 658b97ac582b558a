"""
IR Serialization — JSON import/export for validation results.
"""

from pathlib import Path
from typing import Union

from edval.core.versioning import check_ir_compatibility
from edval.ir.schema import ValidationResult


def to_json(result: ValidationResult, indent: int = 2) -> str:
    """Serialize a ValidationResult to JSON string."""
    return result.model_dump_json(indent=indent)


def from_json(json_str: str) -> ValidationResult:
    """
    Deserialize a ValidationResult from JSON string.

    Raises:
        ValueError: If the result was written by an incompatible IR version
    """
    result = ValidationResult.model_validate_json(json_str)
    if not check_ir_compatibility(result.version):
        raise ValueError(f"Incompatible IR version: {result.version}")
    return result


def save(result: ValidationResult, path: Union[str, Path]) -> None:
    """Save a ValidationResult to a JSON file."""
    path = Path(path)
    path.write_text(to_json(result))


def load(path: Union[str, Path]) -> ValidationResult:
    """Load a ValidationResult from a JSON file."""
    path = Path(path)
    return from_json(path.read_text())
