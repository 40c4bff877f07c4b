"""
Daily menu composition.

Builds a day of meals from the default menu, then layers the BMI override
and the symptom overrides on top of it.
"""

import logging
from typing import Optional, Sequence

from .models import DailyMenu, HealthSnapshot
from .menu_rules import BMI_OVERRIDES, DEFAULT_MENU, SYMPTOM_OVERRIDES
from .rules import MenuOverrideRule, RuleContext, apply_override

logger = logging.getLogger(__name__)


class DailyMenuComposer:
    """
    Composes a daily menu for a health snapshot and symptom presence set.

    Overrides run in three layers: the default menu, the first matching BMI
    override, then every matching symptom override in table order. Each
    override only touches the fields it declares, so a later rule wins on
    any field it shares with an earlier one.
    """

    def __init__(
        self,
        default_menu: Optional[DailyMenu] = None,
        bmi_overrides: Sequence[MenuOverrideRule] = BMI_OVERRIDES,
        symptom_overrides: Sequence[MenuOverrideRule] = SYMPTOM_OVERRIDES,
    ):
        """
        Initialize the composer.

        Args:
            default_menu: Menu used before any override is applied
            bmi_overrides: BMI category overrides; at most one is applied
            symptom_overrides: Symptom overrides in priority order
        """
        self.default_menu = default_menu or DEFAULT_MENU
        self.bmi_overrides = tuple(bmi_overrides)
        self.symptom_overrides = tuple(symptom_overrides)

    def compose_menu(self, snapshot: HealthSnapshot, presence: frozenset) -> DailyMenu:
        """
        Compose the menu for one request.

        Args:
            snapshot: Latest health snapshot (zero-valued when none exists)
            presence: Symptom presence set

        Returns:
            Fully populated DailyMenu; the default menu is never modified
        """
        context = RuleContext.from_snapshot(snapshot, presence)
        menu = self.default_menu.model_copy(deep=True)

        for rule in self.bmi_overrides:
            if rule.predicate.matches(context):
                logger.debug("Applying BMI menu override %s", rule.name)
                menu = apply_override(menu, rule.overrides)
                break

        for rule in self.symptom_overrides:
            if rule.predicate.matches(context):
                logger.debug("Applying symptom menu override %s", rule.name)
                menu = apply_override(menu, rule.overrides)

        return menu


_default_composer = DailyMenuComposer()


def compose_menu(snapshot: HealthSnapshot, presence: frozenset) -> DailyMenu:
    """Compose a daily menu with the built-in override tables."""
    return _default_composer.compose_menu(snapshot, presence)
