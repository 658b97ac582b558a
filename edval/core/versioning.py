"""
Versioning — Version constants and compatibility checks.
"""

from edval import __ir_version__, __version__

PACKAGE_VERSION = __version__
IR_VERSION = __ir_version__


def check_ir_compatibility(ir_version: str) -> bool:
    """
    Check if a serialized result's IR version can be read by this package.
    
    Requires an exact match on major.minor.
    """
    current_parts = IR_VERSION.split(".")
    check_parts = ir_version.split(".")
    if len(check_parts) < 2:
        return False

    return current_parts[0] == check_parts[0] and current_parts[1] == check_parts[1]
