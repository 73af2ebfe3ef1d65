"""
Default routing for jobs created from a quote.

One production operation per line item, sized from the item's quantity,
followed by a single trailing inspection operation.
"""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from ..entities.operation import LineItem, Operation
from ..value_objects.enums import OperationKind

INSPECTION_NAME = "Quality Control & Inspection"
INSPECTION_MINUTES = 60


@dataclass(frozen=True)
class ProcessRule:
    kind: OperationKind
    name: str
    keywords: tuple[str, ...]
    minutes_per_unit: int
    minimum_minutes: int
    skill_tag: str | None


PROCESS_RULES: tuple[ProcessRule, ...] = (
    ProcessRule(OperationKind.MACHINING, "Machining", ("machin",), 10, 60, "machining"),
    ProcessRule(OperationKind.WELDING, "Welding", ("weld",), 5, 30, "welding"),
    ProcessRule(OperationKind.ASSEMBLY, "Assembly", ("assembl",), 8, 45, "assembly"),
)

DEFAULT_RULE = ProcessRule(OperationKind.PRODUCTION, "Production", (), 5, 30, None)


def match_rule(description: str) -> ProcessRule:
    """First process rule whose keyword occurs in the description."""
    text = description.lower()
    for rule in PROCESS_RULES:
        if any(keyword in text for keyword in rule.keywords):
            return rule
    return DEFAULT_RULE


def estimate_minutes(rule: ProcessRule, quantity: int) -> int:
    return max(rule.minimum_minutes, math.ceil(rule.minutes_per_unit * quantity))


def generate_operations_from_line_items(
    line_items: Sequence[LineItem],
    preferred_work_centers: Mapping[OperationKind, str] | None = None,
) -> list[Operation]:
    """
    Synthesize an operation list for a job without explicit routing.

    Args:
        line_items: Quote line items in quote order
        preferred_work_centers: Optional work center id per operation kind

    Returns:
        Operations with sequence orders 1..n+1, inspection last. Empty when
        there are no line items.
    """
    if not line_items:
        return []
    preferred = dict(preferred_work_centers or {})

    operations = []
    for order, item in enumerate(line_items, start=1):
        rule = match_rule(item.description)
        operations.append(
            Operation(
                id=f"op-{order}",
                name=f"{rule.name} - {item.description}",
                sequence_order=order,
                estimated_duration=estimate_minutes(rule, item.quantity),
                preferred_work_center_id=preferred.get(rule.kind),
                skill_requirements=frozenset({rule.skill_tag} if rule.skill_tag else ()),
            )
        )

    order = len(operations) + 1
    operations.append(
        Operation(
            id=f"op-{order}",
            name=INSPECTION_NAME,
            sequence_order=order,
            estimated_duration=INSPECTION_MINUTES,
            preferred_work_center_id=preferred.get(OperationKind.INSPECTION),
            skill_requirements=frozenset({"inspection"}),
        )
    )
    return operations
