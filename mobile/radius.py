"""
Application-wide search radius shared between screens.
"""

from collections.abc import Callable

from mobile.config import DEFAULT_RADIUS_KM, MAX_RADIUS_KM, MIN_RADIUS_KM

RadiusListener = Callable[[int], None]


def clamp_radius(value: float) -> int:
    """Snap to a whole kilometre inside the slider's range."""
    return max(MIN_RADIUS_KM, min(MAX_RADIUS_KM, int(round(value))))


class RadiusContext:
    """
    Holds the radius (km) and notifies subscribers when it changes.

    Setting the current value again is not a change.
    """

    def __init__(self, radius: float = DEFAULT_RADIUS_KM):
        self._radius = clamp_radius(radius)
        self._listeners: list[RadiusListener] = []

    @property
    def radius(self) -> int:
        return self._radius

    def set_radius(self, value: float) -> None:
        radius = clamp_radius(value)
        if radius == self._radius:
            return
        self._radius = radius
        for listener in list(self._listeners):
            listener(radius)

    def subscribe(self, listener: RadiusListener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
