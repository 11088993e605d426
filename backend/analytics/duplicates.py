"""Near-duplicate flow detection.

Every unordered pair is scored once:

    0.4 * name similarity + 0.3 * same trigger type + 0.3 * action overlap

A pair whose score exceeds the threshold is a duplicate candidate. Groups
are headed by the earlier flow of each pair, in input order. A flow listed
as a duplicate may still head its own later group.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from analytics.models import Flow
from analytics.similarity import action_set_similarity, string_similarity

NAME_WEIGHT = 0.4
TRIGGER_WEIGHT = 0.3
ACTION_WEIGHT = 0.3
DEFAULT_THRESHOLD = 0.7


@dataclass(frozen=True)
class PairScore:
    """Component and composite similarity for one pair of flows."""
    name: float
    trigger: float
    actions: float

    @property
    def total(self) -> float:
        return (
            NAME_WEIGHT * self.name
            + TRIGGER_WEIGHT * self.trigger
            + ACTION_WEIGHT * self.actions
        )


@dataclass
class DuplicateGroup:
    """A flow and the later flows that look like copies of it."""
    flow: Flow
    duplicates: List[Flow]
    similarity: float
    reason: str
    scores: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "flow": self.flow.ref(),
            "duplicates": [d.ref() for d in self.duplicates],
            "similarity": round(self.similarity, 4),
            "reason": self.reason,
            "scores": {flow_id: round(s, 4) for flow_id, s in self.scores.items()},
        }


def score_pair(first: Flow, second: Flow) -> PairScore:
    """Score how alike two flows are."""
    return PairScore(
        name=string_similarity(first.name, second.name),
        trigger=1.0 if first.trigger.type == second.trigger.type else 0.0,
        actions=action_set_similarity(first.actions, second.actions),
    )


def _describe(pairs: Sequence[PairScore]) -> str:
    signals = []
    if any(p.name >= 0.5 for p in pairs):
        signals.append("similar name")
    if any(p.trigger == 1.0 for p in pairs):
        signals.append("same trigger")
    if any(p.actions > 0 for p in pairs):
        signals.append("overlapping actions")
    detail = ", ".join(signals) or "combined similarity"
    return f"{detail[0].upper()}{detail[1:]} detected"


def detect_duplicates(
    flows: Sequence[Flow],
    threshold: float = DEFAULT_THRESHOLD,
) -> List[DuplicateGroup]:
    """
    Group near-duplicate flows.

    Args:
        flows: Flows to compare, in display order
        threshold: Composite score a pair must strictly exceed

    Returns:
        One group per flow with at least one later look-alike. ``similarity``
        is the mean of the group's pair scores.
    """
    groups: List[DuplicateGroup] = []

    for index, flow in enumerate(flows):
        matches: List[Tuple[Flow, PairScore]] = []
        for other in flows[index + 1:]:
            pair = score_pair(flow, other)
            if pair.total > threshold:
                matches.append((other, pair))

        if not matches:
            continue

        totals = [pair.total for _, pair in matches]
        groups.append(DuplicateGroup(
            flow=flow,
            duplicates=[other for other, _ in matches],
            similarity=sum(totals) / len(totals),
            reason=_describe([pair for _, pair in matches]),
            scores={other.id: pair.total for other, pair in matches},
        ))

    return groups
