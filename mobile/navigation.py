from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Route:
    name: str
    params: dict[str, Any] = field(default_factory=dict)


class Navigator:
    """Stack of visited screens."""

    def __init__(self):
        self.history: list[Route] = []

    def navigate(self, name: str, params: dict[str, Any] | None = None) -> None:
        self.history.append(Route(name, dict(params or {})))

    @property
    def current(self) -> Route | None:
        return self.history[-1] if self.history else None
