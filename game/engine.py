"""
Main game engine - handles the pygame loop, input translation, and game switching.
"""
import pygame

from config import CANVAS_SIZES, FPS, GAME_IDS, GAME_TITLE, MENU_SIZE
from game.arcade import create_simulation
from game.graphics.font_cache import clear_caches
from game.graphics.pygame_surface import PygameSurface
from game.graphics.render_context import RenderSurfaceError
from game.sim.contracts import Action
from game.ui.menu import GAME_TITLES, GameSelectMenu
from variation.loader import VariationLoader

KEY_ACTIONS = {
    pygame.K_UP: Action.UP,
    pygame.K_w: Action.UP,
    pygame.K_DOWN: Action.DOWN,
    pygame.K_s: Action.DOWN,
    pygame.K_LEFT: Action.LEFT,
    pygame.K_a: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_d: Action.RIGHT,
    pygame.K_SPACE: Action.FLAP,
    pygame.K_RETURN: Action.PRIMARY,
    pygame.K_KP_ENTER: Action.PRIMARY,
    pygame.K_r: Action.RESTART,
}

GAME_KEYS = {
    pygame.K_1: GAME_IDS[0],
    pygame.K_2: GAME_IDS[1],
    pygame.K_3: GAME_IDS[2],
}

# Actions sent every frame while their key is held (paddle movement) instead of once per press.
HELD_ACTIONS = {
    "breakout": (Action.LEFT, Action.RIGHT),
}


class ArcadeEngine:
    """Owns the window, the variation loader and at most one active simulation."""

    def __init__(self, initial_game: str = None, loader: VariationLoader = None):
        pygame.init()
        pygame.font.init()

        self.screen = None
        self.surface = None
        self._set_canvas(MENU_SIZE)
        self.clock = pygame.time.Clock()
        self.running = True

        self.loader = loader or VariationLoader()
        self.menu = GameSelectMenu()
        self.simulation = None

        if initial_game:
            self.switch_to(initial_game)

    def _set_canvas(self, size):
        self.screen = pygame.display.set_mode(size)
        self.surface = PygameSurface(self.screen)

    @property
    def game_id(self):
        return self.simulation.game_id if self.simulation is not None else None

    def switch_to(self, game_id: str):
        """Tear down the current game completely, then build the next one."""
        self.close_simulation()
        self._set_canvas(CANVAS_SIZES[game_id])
        pygame.display.set_caption(f"{GAME_TITLE} - {GAME_TITLES.get(game_id, game_id)}")
        try:
            simulation = create_simulation(game_id, self.surface, self.loader)
        except RenderSurfaceError as e:
            print(f"[engine] cannot start {game_id}: {e}")
            self.back_to_menu(error=str(e))
            return
        simulation.start()
        self.simulation = simulation
        print(f"[engine] playing {game_id}")

    def close_simulation(self):
        if self.simulation is not None:
            self.simulation.stop()
            self.simulation = None

    def back_to_menu(self, error: str = None):
        self.close_simulation()
        self._set_canvas(MENU_SIZE)
        pygame.display.set_caption(GAME_TITLE)
        if error:
            self.menu.show_error(error)

    def handle_events(self):
        """Process input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.KEYDOWN:
                self.handle_keydown(event)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if self.simulation is not None:
                    self.simulation.handle_action(Action.FLAP)

            elif event.type == pygame.MOUSEMOTION:
                if self.simulation is not None:
                    self.simulation.handle_pointer(event.pos[0])

    def handle_keydown(self, event):
        if event.key == pygame.K_ESCAPE:
            if self.simulation is not None:
                self.back_to_menu()
            else:
                self.running = False
            return

        if event.key in GAME_KEYS:
            self.switch_to(GAME_KEYS[event.key])
            return

        action = KEY_ACTIONS.get(event.key)
        if action is None:
            return
        if self.simulation is None:
            chosen = self.menu.handle_action(action)
            if chosen:
                self.switch_to(chosen)
            return
        if action in HELD_ACTIONS.get(self.game_id, ()):
            return
        self.simulation.handle_action(action)

    def _send_held_actions(self):
        held = HELD_ACTIONS.get(self.game_id, ())
        if not held:
            return
        pressed = pygame.key.get_pressed()
        for key, action in KEY_ACTIONS.items():
            if action in held and pressed[key]:
                self.simulation.handle_action(action)

    def update(self, dt_ms: float):
        if self.simulation is None:
            return
        self._send_held_actions()
        self.simulation.advance(dt_ms)

    def render(self):
        if self.simulation is not None:
            self.simulation.draw()
        else:
            self.menu.draw(self.surface)
        pygame.display.flip()

    def run(self):
        """Main game loop."""
        try:
            while self.running:
                dt_ms = self.clock.tick(FPS)
                self.handle_events()
                self.update(dt_ms)
                self.render()
        finally:
            self.close_simulation()
            self.loader.stop()
            clear_caches()
            pygame.quit()
