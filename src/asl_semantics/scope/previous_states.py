"""
Reverse adjacency of a workflow.

The map answers "which states can hand control to this state?" for every scope of the
workflow. Keys are (scope_path, state_id) so that identical ids declared in different
Map sub-workflows or Parallel branches never alias each other.
"""

import logging
from typing import Any, Dict, List, Tuple

from ..asl.graph import BranchPath, StatePath, VisitResult, get_next_state_ids, visit_all_states

logger = logging.getLogger(__name__)

PreviousStatesKey = Tuple[BranchPath, str]
PreviousStatesMap = Dict[PreviousStatesKey, List[str]]


def build_previous_states_map(asl: Dict[str, Any]) -> PreviousStatesMap:
    """
    Build the reverse adjacency of every scope of a workflow.

    Forward edges are the ones listed by get_next_state_ids: Next, Choice rule Next,
    Default and Catch rule Next.

    Args:
        asl: Workflow definition

    Returns:
        Mapping of (scope_path, successor_id) to the ordered, de-duplicated list of predecessor ids
    """
    previous_states: PreviousStatesMap = {}

    def record_edges(state_id: str, state: Dict[str, Any], parent: Dict[str, Any], path: StatePath):
        scope_path = path[:-1]
        for next_state_id in get_next_state_ids(state):
            predecessors = previous_states.setdefault((scope_path, next_state_id), [])
            if state_id not in predecessors:
                predecessors.append(state_id)
        return VisitResult.CONTINUE

    visit_all_states(asl, record_edges)
    logger.debug("Built previous states map with %d entries", len(previous_states))
    return previous_states


def get_previous_states(previous_states: PreviousStatesMap, scope_path: BranchPath, state_id: str) -> List[str]:
    return previous_states.get((tuple(scope_path), state_id), [])
