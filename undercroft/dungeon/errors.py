"""Generation failures that callers may want to tell apart from bad configuration.

Configuration problems (empty builder pool, impossible room sizes, empty
ranges) raise ``ValueError`` at construction time and are not wrapped here.
"""

from __future__ import annotations


class UngeneratableRequirementError(RuntimeError):
    """A room builder used up its attempt budget without meeting the exit requirement."""

    def __init__(self, builder: str, requirement, attempts: int):
        self.builder = builder
        self.requirement = requirement
        self.attempts = attempts
        exits = ",".join(str(d) for d in getattr(requirement, "exits", ())) or "-"
        super().__init__(f"{builder} could not satisfy exits [{exits}] within {attempts} attempts")


__all__ = ["UngeneratableRequirementError"]
