import os

import gymnasium as gym
from gymnasium.spaces import MultiDiscrete
import numpy as np

from treasure_run.config import GameConfig, MIN_CANVAS_HEIGHT, MIN_CANVAS_WIDTH, Variant
from treasure_run.controls import Controls
from treasure_run.events import LifeLost
from treasure_run.game import TreasureRunGame
from treasure_run.render import Renderer

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")


class TreasureRunEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"]}

    # Must be a short, user-facing control string:
    user_guide = (
        "Controls: WASD or arrow keys to move. In platformer mode, Up/W or Space jumps."
    )

    # Must be a short, user-facing description of the game:
    game_description = (
        "Collect every treasure to clear the level while dodging obstacles and "
        "the rising death zone at the bottom of the screen."
    )

    # Should frames auto-advance or wait for user input?
    auto_advance = True

    LIFE_LOST_PENALTY = 10.0
    SCORE_SCALE = 100.0

    def __init__(self, render_mode="rgb_array", config=None):
        super().__init__()
        self.render_mode = render_mode
        self.config = config or GameConfig()

        # --- Spaces ---
        # movement (none/up/down/left/right), jump, unused
        self.observation_space = gym.spaces.Box(
            low=0, high=255, shape=(self.config.height, self.config.width, 3), dtype=np.uint8
        )
        self.action_space = MultiDiscrete([5, 2, 2])

        self.renderer = Renderer(self.config.width, self.config.height)
        self.game = TreasureRunGame(self.config)

        self.steps = 0
        self.reset()
        self.validate_implementation()

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)
        self.steps = 0
        # The layout is drawn from the env generator so seeding reset() is reproducible.
        self.game.world.rng = self.np_random
        self.game.reset()
        self.game.start()
        return self._get_observation(), self._get_info()

    def step(self, action):
        if self.game.is_over:
            # Already terminated; keep returning the final frame.
            return self._get_observation(), 0.0, True, False, self._get_info()

        score_before = self.game.score
        events = self.game.tick(Controls.from_action(action))
        self.steps += 1

        reward = (self.game.score - score_before) / self.SCORE_SCALE
        reward -= self.LIFE_LOST_PENALTY * sum(isinstance(e, LifeLost) for e in events)

        terminated = self.game.is_over
        truncated = self.steps >= self.config.max_steps

        return (
            self._get_observation(),
            float(reward),
            terminated,
            truncated,
            self._get_info()
        )

    def render(self):
        return self._get_observation()

    def _get_observation(self):
        return self.renderer.observation(self.game.world, self.game.state)

    def _get_info(self):
        world = self.game.world
        return {
            "score": world.score,
            "lives": world.lives,
            "level": world.level,
            "steps": self.steps,
            "treasures_left": sum(not t.collected for t in world.treasures),
            "player_pos": (world.player.x, world.player.y),
        }

    def close(self):
        self.renderer.close()

    def validate_implementation(self):
        assert self.config.width >= MIN_CANVAS_WIDTH
        assert self.config.height >= MIN_CANVAS_HEIGHT
        assert self.config.fps > 0 and self.config.starting_lives > 0

        # Test action space
        assert self.action_space.shape == (3,)
        assert self.action_space.nvec.tolist() == [5, 2, 2]

        # Test observation space
        test_obs = self._get_observation()
        assert test_obs.shape == (self.config.height, self.config.width, 3)
        assert test_obs.dtype == np.uint8

        # Test reset
        obs, info = self.reset()
        assert obs.shape == (self.config.height, self.config.width, 3)
        assert isinstance(info, dict)

        # Test step
        test_action = self.action_space.sample()
        obs, reward, term, trunc, info = self.step(test_action)
        assert obs.shape == (self.config.height, self.config.width, 3)
        assert isinstance(reward, (int, float))
        assert isinstance(term, bool)
        assert trunc == False
        assert isinstance(info, dict)

        self.reset()


def make_env(platformer=False, **config_kwargs):
    variant = Variant.PLATFORMER if platformer else Variant.CLASSIC
    return TreasureRunEnv(config=GameConfig(variant=variant, **config_kwargs))
