"""Domain entity describing a workflow stakeholder."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Stakeholder:
    """Person who must be told they were attached to a workflow."""

    name: str
    role: str
    email: str | None = None


__all__ = ["Stakeholder"]
