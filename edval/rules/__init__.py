"""Rules — Validation rules for EDVAL."""

from edval.rules.r10_marks import RULE_NAME as MARKS_RULE
from edval.rules.r10_marks import validate as validate_marks
from edval.rules.r20_images import RULE_NAME as IMAGES_RULE
from edval.rules.r20_images import validate as validate_images

# Registry of all rules, in the order they run
RULES = {
    MARKS_RULE: validate_marks,
    IMAGES_RULE: validate_images,
}

__all__ = [
    "IMAGES_RULE",
    "MARKS_RULE",
    "RULES",
    "validate_images",
    "validate_marks",
]
