"""
Pygame drawing of a World.

Nothing here changes game state, so a different front end can replace this
module without touching the simulation.
"""

import math

import numpy as np
import pygame
import pygame.gfxdraw


# Colors
COLOR_BG = (26, 26, 46)
COLOR_PLAYER = (255, 107, 107)
COLOR_EYE = (255, 255, 255)
COLOR_PUPIL = (0, 0, 0)
COLOR_TREASURE = (255, 215, 0)
COLOR_SPARKLE = (255, 255, 255)
COLOR_OBSTACLE = (139, 69, 19)
COLOR_OBSTACLE_TEXTURE = (101, 67, 33)
COLOR_MOVING_OBSTACLE = (139, 0, 0)
COLOR_MOVING_TEXTURE = (102, 0, 0)
COLOR_MOVING_MARK = (255, 0, 0)
COLOR_PLATFORM = (90, 110, 140)
COLOR_PLATFORM_EDGE = (150, 170, 200)
COLOR_DEATH_ZONE = (255, 0, 0)
COLOR_DEATH_STRIPE = (255, 255, 0)
COLOR_PARTICLE = (255, 215, 0)
COLOR_UI_TEXT = (255, 255, 255)
COLOR_UI_WARN = (255, 80, 80)

PARTICLE_SIZE = 3


class Renderer:
    """Draws a World onto an off-screen surface of the canvas size."""

    def __init__(self, width, height):
        pygame.init()
        pygame.font.init()
        self.width, self.height = width, height
        self.screen = pygame.Surface((width, height))
        self.font_ui = pygame.font.Font(None, 28)
        self.font_large = pygame.font.Font(None, 56)
        self.frame = 0

    def draw(self, world, state="running", banner=None):
        self.frame += 1
        self.screen.fill(COLOR_BG)
        self._draw_death_zone(world)
        for plat in world.platforms:
            self._draw_platform(plat)
        for treasure in world.treasures:
            if not treasure.collected:
                self._draw_treasure(treasure)
        for obstacle in world.obstacles:
            self._draw_obstacle(obstacle)
        for particle in world.particles:
            self._draw_particle(particle)
        self._draw_player(world.player)
        self._draw_ui(world, state, banner)
        return self.screen

    def observation(self, world, state="running", banner=None):
        """The drawn frame as an (H, W, 3) uint8 array."""
        self.draw(world, state, banner)
        arr = pygame.surfarray.array3d(self.screen)
        return np.transpose(arr, (1, 0, 2)).astype(np.uint8)

    def _draw_death_zone(self, world):
        top = world.ground_y
        dz = world.death_zone_height
        pygame.draw.rect(self.screen, COLOR_DEATH_ZONE, (0, top, self.width, dz))
        for x in range(0, self.width, 20):
            pygame.draw.rect(self.screen, COLOR_DEATH_STRIPE, (x, top, 10, dz))

    def _draw_platform(self, plat):
        rect = pygame.Rect(int(plat.x), int(plat.y), int(plat.width), int(plat.height))
        pygame.draw.rect(self.screen, COLOR_PLATFORM, rect)
        pygame.draw.line(self.screen, COLOR_PLATFORM_EDGE, rect.topleft, rect.topright, 2)

    def _draw_treasure(self, t):
        x, y = int(t.x), int(t.y)
        pygame.draw.rect(self.screen, COLOR_TREASURE, (x, y, int(t.width), int(t.height)))
        # Sparkle pulses so the treasure catches the eye
        size = 3 + int(abs(math.sin(self.frame * 0.1 + t.x)) * 2)
        for sx, sy in ((8, 2), (2, 8), (14, 14)):
            pygame.draw.rect(self.screen, COLOR_SPARKLE, (x + sx, y + sy, size, size))

    def _draw_obstacle(self, o):
        rect = pygame.Rect(int(o.x), int(o.y), int(o.width), int(o.height))
        body = COLOR_MOVING_OBSTACLE if o.moving else COLOR_OBSTACLE
        texture = COLOR_MOVING_TEXTURE if o.moving else COLOR_OBSTACLE_TEXTURE
        pygame.draw.rect(self.screen, body, rect)
        for i in range(0, rect.width, 10):
            pygame.draw.rect(self.screen, texture, (rect.x + i, rect.y, 2, rect.height))
        if o.moving:
            cx, cy = rect.center
            pygame.draw.rect(self.screen, COLOR_MOVING_MARK, (cx - 2, cy - 2, 4, 4))

    def _draw_particle(self, p):
        alpha = int(255 * p.alpha)
        if alpha <= 0:
            return
        temp_surf = pygame.Surface((PARTICLE_SIZE, PARTICLE_SIZE), pygame.SRCALPHA)
        temp_surf.fill((*COLOR_PARTICLE, alpha))
        self.screen.blit(temp_surf, (int(p.x), int(p.y)))

    def _draw_player(self, p):
        x, y = int(p.x), int(p.y)
        w, h = int(p.width), int(p.height)
        pygame.draw.rect(self.screen, COLOR_PLAYER, (x, y, w, h))

        # Eyes, pupils and a smile, scaled to the player size
        eye = max(2, w // 5)
        left_eye = (x + w // 6, y + h // 6)
        right_eye = (x + w - w // 6 - eye, y + h // 6)
        for ex, ey in (left_eye, right_eye):
            pygame.draw.rect(self.screen, COLOR_EYE, (ex, ey, eye, eye))
            pygame.draw.rect(self.screen, COLOR_PUPIL, (ex + eye // 3, ey + eye // 3, 2, 2))
        radius = max(2, w // 4)
        pygame.gfxdraw.arc(self.screen, x + w // 2, y + 2 * h // 3 - radius // 2,
                           radius, 0, 180, COLOR_PUPIL)

    def _draw_ui(self, world, state, banner):
        lives_color = COLOR_UI_TEXT if world.lives > 1 else COLOR_UI_WARN
        for i, (text, color) in enumerate((
            (f"Score: {world.score}", COLOR_UI_TEXT),
            (f"Lives: {world.lives}", lives_color),
            (f"Level: {world.level}", COLOR_UI_TEXT),
        )):
            surf = self.font_ui.render(text, True, color)
            self.screen.blit(surf, (10 + i * 160, 10))

        message = banner
        if state == "over":
            message = "GAME OVER"
        elif state == "paused":
            message = "PAUSED"
        elif state == "idle":
            message = "PRESS ENTER TO START"
        if message:
            overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
            overlay.fill((0, 0, 0, 150))
            self.screen.blit(overlay, (0, 0))
            msg_surf = self.font_large.render(message, True, COLOR_TREASURE)
            msg_rect = msg_surf.get_rect(center=(self.width / 2, self.height / 2))
            self.screen.blit(msg_surf, msg_rect)

    def close(self):
        pygame.quit()
