"""
The game as the outside world sees it.

``TreasureRunGame`` ties the World, the simulation step and the session
lifecycle together. UI code drives it with ``start``/``pause``/``reset``,
calls ``tick`` once per frame and drains the queued events to show messages.
"""

from collections import deque

from gymnasium.utils import seeding

from treasure_run.config import GameConfig
from treasure_run.controls import NO_INPUT
from treasure_run.events import GameOver
from treasure_run.session import GameSession
from treasure_run.simulation import reset_world, step
from treasure_run.world import new_world


class TreasureRunGame:

    def __init__(self, config=None, seed=None):
        self.config = config or GameConfig()
        self.seed = seed
        self.world = None
        self.session = None
        self.events = deque()
        self.init()

    def init(self):
        """Create the world for level 1 and go to the idle state."""
        self.world = new_world(self.config, seed=self.seed)
        self.session = GameSession()
        self.events.clear()
        reset_world(self.world)

    # --- Lifecycle ---

    def start(self):
        if self.session.state_id != "idle":
            return False
        self.session.begin()
        return True

    def pause(self):
        """Toggle pause; ignored unless a game is in progress."""
        if self.session.is_ticking:
            self.session.pause()
        elif self.session.is_paused:
            self.session.resume()
        else:
            return False
        return True

    def resume(self):
        if not self.session.is_paused:
            return False
        self.session.resume()
        return True

    def reset(self, seed=None):
        """Back to level 1, score 0 and full lives, from any state."""
        if seed is not None:
            self.world.rng, _ = seeding.np_random(seed)
        self.session.restart()
        self.events.clear()
        reset_world(self.world)

    # --- Simulation ---

    def tick(self, controls=NO_INPUT):
        """Run one simulation step if the game is running.

        Returns the events of this tick; they are also queued for
        ``drain_events``. Paused, idle and finished games do nothing.
        """
        if not self.session.is_ticking:
            return []
        events = step(self.world, controls)
        if events and isinstance(events[-1], GameOver):
            self.session.lose()
        self.events.extend(events)
        return events

    def drain_events(self):
        events = list(self.events)
        self.events.clear()
        return events

    # --- Read-only state for the UI ---

    @property
    def score(self):
        return self.world.score

    @property
    def lives(self):
        return self.world.lives

    @property
    def level(self):
        return self.world.level

    @property
    def state(self):
        return self.session.state_id

    @property
    def is_running(self):
        return self.session.is_running

    @property
    def is_paused(self):
        return self.session.is_paused

    @property
    def is_over(self):
        return self.session.is_over
