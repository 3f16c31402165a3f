"""
Per-status retry policy for upstream calls.

Each upstream status code maps to a StatusPolicy describing what kind of
failure it is and what the orchestrator should do next:

- 429: back off exponentially and retry the same model
- 404: the model isn't served under this API version, move to the next model
- 403: permission problem, move to the next model and log loudly
- anything else (400, 5xx, transport failure): retry with a linear delay,
  then move on once the attempts run out
"""

from dataclasses import dataclass
from enum import Enum

from ..errors import UpstreamErrorKind


class Action(str, Enum):
    BACKOFF = "backoff"
    ADVANCE = "advance"
    RETRY = "retry"


@dataclass(frozen=True)
class StatusPolicy:
    kind: UpstreamErrorKind
    action: Action
    base_delay_s: float = 0.0
    escalate: bool = False


@dataclass(frozen=True)
class Decision:
    policy: StatusPolicy
    retry: bool
    delay_s: float


POLICIES: dict[int, StatusPolicy] = {
    429: StatusPolicy(UpstreamErrorKind.RATE_LIMITED, Action.BACKOFF, base_delay_s=0.5),
    404: StatusPolicy(UpstreamErrorKind.NOT_FOUND, Action.ADVANCE),
    403: StatusPolicy(UpstreamErrorKind.FORBIDDEN, Action.ADVANCE, escalate=True),
}

DEFAULT_POLICY = StatusPolicy(UpstreamErrorKind.TRANSIENT, Action.RETRY, base_delay_s=0.4)


def policy_for(status: int) -> StatusPolicy:
    return POLICIES.get(status, DEFAULT_POLICY)


def decide(status: int, attempt: int, max_retries: int) -> Decision:
    """
    Decide what follows a failed attempt.

    attempt is zero-based. A BACKOFF decision always asks for a retry; the
    caller's attempt loop is what bounds it, so a 429 on the last attempt
    still sleeps before the loop gives up on the model.
    """
    policy = policy_for(status)

    if policy.action is Action.BACKOFF:
        return Decision(policy, retry=True, delay_s=policy.base_delay_s * (2 ** attempt))

    if policy.action is Action.RETRY and attempt + 1 < max_retries:
        return Decision(policy, retry=True, delay_s=policy.base_delay_s * (attempt + 1))

    if policy.action is Action.RETRY:
        # Out of attempts for a transient error: give up on this model loudly
        return Decision(
            StatusPolicy(policy.kind, Action.ADVANCE, escalate=True),
            retry=False,
            delay_s=0.0,
        )

    return Decision(policy, retry=False, delay_s=0.0)
