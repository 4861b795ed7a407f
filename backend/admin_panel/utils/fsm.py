from __future__ import annotations
"""Simple finite state machine utility for enforcing allowed state transitions.

Used by the login flow; works for any small lifecycle keyed by string states.
Usage:
    from admin_panel.utils.fsm import TransitionValidator
    LOGIN_FSM = TransitionValidator({
        'AWAITING_PHONE': {'AWAITING_CODE'},
        'AWAITING_CODE': {'AWAITING_PHONE', 'AUTHENTICATED'},
        'AUTHENTICATED': {'AWAITING_PHONE'},
    }, field_name='login state')
    LOGIN_FSM.assert_can_transition(current_state, target_state)

Raises InvalidTransitionError if invalid.
"""
from typing import Dict, Set
from admin_panel.errors import InvalidTransitionError

class TransitionValidator:
    def __init__(self, graph: Dict[str, Set[str]], field_name: str = 'status'):
        self.graph = graph
        self.field_name = field_name

    def can_transition(self, current: str, target: str) -> bool:
        return target in self.graph.get(current, set())

    def assert_can_transition(self, current: str, target: str):
        if not self.can_transition(current, target):
            raise InvalidTransitionError(f"Invalid {self.field_name} transition {current} -> {target}")
        return True

__all__ = ['TransitionValidator']
