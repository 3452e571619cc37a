import logging
import os

os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
import pytest

from fill_the_air.audio import InflateLoop, SoundBank
from fill_the_air.config import WINDOW_HEIGHT, WINDOW_WIDTH, GenerationPolicy
from fill_the_air.game import MAX_STEPS_PER_FRAME, STEP, Game, build_parser
from fill_the_air.scoring import MemoryScoreStore
from fill_the_air.session import Phase


@pytest.fixture
def game():
    g = Game(store=MemoryScoreStore(), seed=123, sound=False)
    yield g
    pygame.quit()


def key(kind: int, k: int) -> pygame.event.Event:
    return pygame.event.Event(kind, key=k)


def mouse(kind: int) -> pygame.event.Event:
    return pygame.event.Event(kind, button=1, pos=(10, 10))


def test_game_init(game: Game) -> None:
    """Window matches the field and the session waits for a start signal."""
    assert game.screen.get_size() == (WINDOW_WIDTH, WINDOW_HEIGHT)
    assert game.session.phase is Phase.START
    assert not game.sounds.enabled
    assert len(game.session.world.gaps) == 5


def test_press_starts_then_inflates(game: Game) -> None:
    game.handle_input(mouse(pygame.MOUSEBUTTONDOWN))
    assert game.session.phase is Phase.PLAYING
    assert not game.session.bubble.is_growing
    game.handle_input(mouse(pygame.MOUSEBUTTONDOWN))
    assert game.session.bubble.is_growing
    game.handle_input(mouse(pygame.MOUSEBUTTONUP))
    assert not game.session.bubble.is_growing


def test_space_hold_and_release(game: Game) -> None:
    game.handle_input(key(pygame.KEYDOWN, pygame.K_RETURN))
    assert game.session.phase is Phase.PLAYING
    game.handle_input(key(pygame.KEYDOWN, pygame.K_SPACE))
    assert game.session.bubble.is_growing
    game.handle_input(key(pygame.KEYUP, pygame.K_SPACE))
    assert not game.session.bubble.is_growing


def test_press_after_game_over_restarts(game: Game) -> None:
    game.press()
    game.session.scores.score = 20
    game.session.bubble.y = 5000
    game.session.tick()
    assert game.session.phase is Phase.GAME_OVER
    game.press()
    assert game.session.phase is Phase.PLAYING
    assert game.session.score == 0
    assert game.session.best_score == 20


def test_fixed_step_update(game: Game) -> None:
    game.press()
    assert game.update(STEP * 3 + STEP / 2) == 3
    assert game.session.ticks == 3
    # Long stalls are capped instead of fast-forwarding
    assert game.update(2.0) == MAX_STEPS_PER_FRAME


def test_draw_every_phase(game: Game) -> None:
    game.draw()
    game.press()
    game.press()
    for _ in range(10):
        game.update(STEP)
    game.draw()
    game.session.bubble.y = 5000
    game.session.tick()
    game.draw()
    assert game.session.phase is Phase.GAME_OVER


def test_escape_posts_quit(game: Game) -> None:
    pygame.event.clear()
    game.handle_input(key(pygame.KEYDOWN, pygame.K_ESCAPE))
    assert any(e.type == pygame.QUIT for e in pygame.event.get())


def test_parser_defaults_and_preset() -> None:
    args = build_parser().parse_args([])
    assert args.preset == "revised"
    assert args.seed is None
    args = build_parser().parse_args(["--preset", "classic", "--seed", "9", "--no-save", "--mute"])
    assert args.preset == "classic"
    assert args.seed == 9
    assert args.no_save and args.mute


def test_classic_preset_builds_loose_world() -> None:
    from fill_the_air.config import PRESETS

    assert PRESETS["classic"]().generation_policy is GenerationPolicy.LOOSE
    assert PRESETS["revised"]().generation_policy is GenerationPolicy.SAFE


class FakeChannel:
    def __init__(self) -> None:
        self.faded = False

    def fadeout(self, ms: int) -> None:
        self.faded = True


class FakeSound:
    def __init__(self) -> None:
        self.plays = 0

    def play(self, loops: int = 0, fade_ms: int = 0) -> FakeChannel:
        self.plays += 1
        return FakeChannel()


def test_inflate_loop_start_stop_idempotent() -> None:
    sound = FakeSound()
    loop = InflateLoop(sound)
    loop.start()
    loop.start()
    assert sound.plays == 1
    assert loop.active
    channel = loop.channel
    loop.stop()
    loop.stop()
    assert channel.faded
    assert not loop.active


def test_muted_sound_bank_ignores_events() -> None:
    bank = SoundBank(enabled=False)
    bank.on_grow_start()
    bank.on_grow_stop()
    bank.on_terminal("Bubble popped on obstacle!")
    bank.close()
    assert not bank.enabled


def test_sound_bank_plays_through_mixer() -> None:
    pygame.init()
    try:
        bank = SoundBank()
        assert bank.enabled
        bank.on_grow_start()
        assert bank.inflate.active
        bank.on_grow_stop()
        assert not bank.inflate.active
        bank.on_grow_start()
        bank.on_terminal("Bubble popped on obstacle!")
        assert not bank.inflate.active
        bank.close()
    finally:
        pygame.quit()


def test_sound_bank_disabled_when_mixer_fails(monkeypatch, caplog) -> None:
    def broken(samples):
        raise pygame.error("no audio device")

    monkeypatch.setattr("fill_the_air.audio.make_sound", broken)
    pygame.init()
    try:
        with caplog.at_level(logging.WARNING, logger="fill_the_air.audio"):
            bank = SoundBank()
        assert bank.enabled is False
        assert "audio disabled" in caplog.text
        bank.on_grow_start()
        bank.on_grow_stop()
        bank.on_terminal("Bubble popped on obstacle!")
        bank.close()
        assert bank.inflate is None
    finally:
        pygame.quit()
