"""
EDVAL — Educational Content Validator

A rule-based validator for HTML-like educational worksheets. It scans
document text for authoring mistakes in image references and grading
annotations and reports positioned diagnostics with suggested fixes.

Rules report findings. Hosts decide what to do with them.
"""

__version__ = "0.1.0"
__ir_version__ = "0.1.0"
