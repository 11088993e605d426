"""Rule tables for the per-flow classifiers.

A rule is a named predicate with the level it assigns and the text it
reports. Orphan and anomaly detection are both an ordered walk over a
tuple of rules, so each rule can be tested on its own.
"""

from dataclasses import dataclass
from typing import Callable, Iterator, Sequence

from analytics.models import Flow
from core.constants import Level


@dataclass(frozen=True)
class Rule:
    """One classification rule.

    ``message`` renders the reported text for a flow; wrap constant
    text with ``fixed``.
    """
    name: str
    level: Level
    predicate: Callable[[Flow], bool]
    message: Callable[[Flow], str]
    recommendation: str = ""

    def matches(self, flow: Flow) -> bool:
        return bool(self.predicate(flow))

    def describe(self, flow: Flow) -> str:
        return self.message(flow)


def matching_rules(rules: Sequence[Rule], flow: Flow) -> Iterator[Rule]:
    """Yield the rules a flow triggers, in table order."""
    for rule in rules:
        if rule.matches(flow):
            yield rule


def fixed(text: str) -> Callable[[Flow], str]:
    """Message renderer that ignores the flow."""
    return lambda flow: text
