"""Read-side rollups over a loaded form graph (blocks, sessions, responses)."""
from dataclasses import dataclass, asdict

from .registry import is_actionable


@dataclass(frozen=True)
class FormStats:
    blocks_count: int
    action_blocks_count: int
    responses_count: int
    total_sessions: int

    def to_dict(self) -> dict:
        return asdict(self)


def _blocks(form):
    return getattr(form, 'blocks', None) or []


def blocks_count(form) -> int:
    return len(_blocks(form))


def action_blocks_count(form) -> int:
    return sum(1 for block in _blocks(form) if is_actionable(block.type))


def responses_count(form) -> int:
    # one per response row, a session answering two blocks counts twice
    return sum(len(block.responses or []) for block in _blocks(form))


def total_sessions(form) -> int:
    sessions = getattr(form, 'sessions', None) or []
    return sum(1 for session in sessions if session.responses)


def compute(form) -> FormStats:
    return FormStats(
        blocks_count=blocks_count(form),
        action_blocks_count=action_blocks_count(form),
        responses_count=responses_count(form),
        total_sessions=total_sessions(form),
    )
