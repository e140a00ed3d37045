"""Log follow pipeline."""

from kubedeck.controllers.logs.controller import LogFollowController

__all__ = ["LogFollowController"]
