"""
Config Models — Data structures for validator settings.
"""

from dataclasses import dataclass, field
from typing import Optional

from edval.ir.schema import DEFAULT_SOURCE


@dataclass
class RuleToggle:
    """Enable/disable switch for one registered rule."""
    id: str
    enabled: bool = True
    description: str = ""


@dataclass
class ImageRuleSettings:
    """Tunables for the image reference rule."""
    # Characters inspected on each side of a bare image path for tag typos
    typo_window: int = 50
    # Characters added on each side of a bare path in the fallback warning
    stray_path_padding: int = 5
    # Expected image folder is "<document stem><folder_suffix>"
    folder_suffix: str = "_files"
    # Image numbers are zero-padded to this width in messages
    number_width: int = 2
    first_number: int = 1


@dataclass
class ValidatorSettings:
    """Complete validator configuration.

    Defaults reproduce the stock worksheet conventions, so rules can run
    without any profile being loaded.
    """
    name: str = "default"
    description: str = ""
    source: str = DEFAULT_SOURCE
    html_extensions: list[str] = field(default_factory=lambda: [".html", ".htm"])
    html_language_ids: list[str] = field(default_factory=lambda: ["html", "php"])
    rules: list[RuleToggle] = field(default_factory=list)
    images: ImageRuleSettings = field(default_factory=ImageRuleSettings)

    def get_toggle(self, rule_id: str) -> Optional[RuleToggle]:
        """Get the toggle for a rule, if the profile lists one."""
        for toggle in self.rules:
            if toggle.id == rule_id:
                return toggle
        return None

    def is_enabled(self, rule_id: str) -> bool:
        """Rules not listed in the profile are enabled."""
        toggle = self.get_toggle(rule_id)
        return toggle is None or toggle.enabled
