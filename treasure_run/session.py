"""Game session lifecycle: idle -> running <-> paused -> over -> idle."""

from statemachine import State, StateMachine


class GameSession(StateMachine):
    """Guards which lifecycle transitions are legal.

    - begin: only from idle
    - pause/resume: only between running and paused
    - lose: running -> over, which stays put until restart
    - restart: from anywhere back to idle
    """

    idle = State("Idle", initial=True)
    running = State("Running")
    paused = State("Paused")
    over = State("GameOver")

    begin = idle.to(running)
    pause = running.to(paused)
    resume = paused.to(running)
    lose = running.to(over)
    restart = idle.to(idle) | running.to(idle) | paused.to(idle) | over.to(idle)

    @property
    def state_id(self) -> str:
        return self.current_state.id

    @property
    def is_running(self) -> bool:
        # Paused games are still in progress.
        return self.state_id in ("running", "paused")

    @property
    def is_paused(self) -> bool:
        return self.state_id == "paused"

    @property
    def is_over(self) -> bool:
        return self.state_id == "over"

    @property
    def is_ticking(self) -> bool:
        return self.state_id == "running"
