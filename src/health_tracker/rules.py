"""
Rule primitives shared by the recommendation catalogs and the menu composer.

A rule pairs a predicate with data. Predicates are evaluated against a
``RuleContext`` built once per request; rule tables are plain ordered tuples
and their declaration order is the evaluation order.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Sequence, Union

from pydantic import BaseModel

from .bmi import BMICategory, classify
from .models import ActivityLevel, EmotionalState, HealthSnapshot
from .symptoms import SymptomName, is_present, is_present_any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleContext:
    """Everything a predicate may look at."""
    bmi_category: BMICategory
    activity_level: ActivityLevel
    emotional_state: EmotionalState
    presence: frozenset

    @classmethod
    def from_snapshot(
        cls,
        snapshot: HealthSnapshot,
        presence: frozenset,
        default_activity_level: Union[ActivityLevel, str] = ActivityLevel.UNSPECIFIED,
    ) -> "RuleContext":
        """
        Build a context from a snapshot.

        The snapshot's activity level wins; the profile default is used only
        when the snapshot does not state one.
        """
        activity_level = snapshot.activity_level
        if activity_level == ActivityLevel.UNSPECIFIED:
            activity_level = ActivityLevel(default_activity_level)
        return cls(
            bmi_category=classify(snapshot.bmi),
            activity_level=activity_level,
            emotional_state=snapshot.emotional_state,
            presence=frozenset(presence),
        )


class Predicate(Protocol):
    def matches(self, context: RuleContext) -> bool: ...


@dataclass(frozen=True)
class BMICategoryEquals:
    categories: frozenset

    def matches(self, context: RuleContext) -> bool:
        return context.bmi_category in self.categories


@dataclass(frozen=True)
class ActivityLevelEquals:
    level: ActivityLevel

    def matches(self, context: RuleContext) -> bool:
        return context.activity_level == self.level


@dataclass(frozen=True)
class EmotionalStateEquals:
    state: EmotionalState

    def matches(self, context: RuleContext) -> bool:
        return context.emotional_state == self.state


@dataclass(frozen=True)
class SymptomPresent:
    name: SymptomName

    def matches(self, context: RuleContext) -> bool:
        return is_present(context.presence, self.name)


@dataclass(frozen=True)
class SymptomPresentAnyOf:
    names: tuple

    def matches(self, context: RuleContext) -> bool:
        return is_present_any(context.presence, self.names)


def bmi_is(*categories: BMICategory) -> BMICategoryEquals:
    return BMICategoryEquals(frozenset(categories))


def symptom_any(*names: SymptomName) -> Union[SymptomPresent, SymptomPresentAnyOf]:
    if len(names) == 1:
        return SymptomPresent(names[0])
    return SymptomPresentAnyOf(tuple(names))


@dataclass(frozen=True)
class RecommendationRule:
    """A predicate and the entry appended when it holds."""
    predicate: Predicate
    payload: BaseModel

    @property
    def identity_key(self) -> str:
        return self.payload.identity_key


@dataclass(frozen=True)
class MenuOverrideRule:
    """
    A predicate and the menu fields it replaces.

    Override values are either a full replacement for the field or, for a
    meal slot, a dict of the slot fields to change.
    """
    name: str
    predicate: Predicate
    overrides: Mapping[str, Any]


def apply_rules(
    rules: Sequence[RecommendationRule],
    context: RuleContext,
    output: list,
    dedup: bool = False,
) -> list:
    """
    Append the payload of every matching rule to ``output`` in rule order.

    Args:
        rules: Ordered rule table
        context: Evaluation context
        output: Accumulated entries, extended in place
        dedup: Skip entries whose identity key is already in ``output``

    Returns:
        The same ``output`` list
    """
    for rule in rules:
        if not rule.predicate.matches(context):
            continue
        if dedup and any(entry.identity_key == rule.identity_key for entry in output):
            logger.debug("Skipping duplicate entry %s", rule.identity_key)
            continue
        logger.debug("Rule matched: %s", rule.identity_key)
        # Catalog payloads are shared
        output.append(rule.payload.model_copy(deep=True))
    return output


def apply_override(target: BaseModel, overrides: Mapping[str, Any]) -> BaseModel:
    """
    Return a copy of ``target`` with the override fields replaced.

    Dict values update the nested model field by field; anything else
    replaces the field wholesale.
    """
    update = {}
    for field, value in overrides.items():
        if isinstance(value, dict):
            current = getattr(target, field)
            update[field] = current.model_copy(update=copy.deepcopy(value))
        else:
            update[field] = copy.deepcopy(value)
    return target.model_copy(update=update)
