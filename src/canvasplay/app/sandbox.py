"""Desktop canvas sandbox (application entrypoint).

Provides the async `main_async` runner for the interactive window, a
headless runner for CI, and the one-shot demo renderer.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os

from pydantic import ValidationError

from canvasplay.config import RuntimeConfig, make_runtime_config
from canvasplay.core.clock import RealClock
from canvasplay.core.input import DIRECTION_KEYS
from canvasplay.render.demos import DEMOS
from canvasplay.settings.values import RESTART_POLICIES

logger = logging.getLogger(__name__)


def _print_help() -> None:
    print(
        "Keys: w/a/s/d move square, arrows step circle, "
        "1 restart, 2 stop, q/ESC quit"
    )


def _load_config(args: argparse.Namespace) -> RuntimeConfig:
    try:
        return make_runtime_config(args=args)
    except ValidationError as e:
        raise SystemExit(f"[sandbox] invalid configuration: {e}") from None


async def main_async(args: argparse.Namespace) -> None:
    from canvasplay.platform.display.pygame_backend import PygameDisplayBackend
    from canvasplay.platform.input.pygame_input import PygameInputBackend
    from canvasplay.ui.controllers import SandboxController

    cfg = _load_config(args)
    display = PygameDisplayBackend(
        size=(cfg.width, cfg.height),
        chrome_height=int(cfg.buttons.get("bar_height", 36)),
        background=cfg.background,
        create_window=True,
    )
    if not display.has_window:
        print("[sandbox] no window available; rendering offscreen")

    ui = SandboxController(
        display=display,
        clock=RealClock(),
        cfg=cfg,
        input_source=PygameInputBackend(),
    )
    _print_help()
    ui_task = asyncio.create_task(ui.run(), name="ui")
    try:
        await ui_task
    finally:
        if not ui_task.done():
            ui_task.cancel()
        await asyncio.gather(ui_task, return_exceptions=True)
        if args.save_png:
            display.save_png(args.save_png)


async def _main_headless_async(args: argparse.Namespace) -> None:
    """Run a fixed number of frames without a window.

    Keys listed in ``--hold`` are pressed before the first frame and held for
    the whole run, which is enough to drive the square into the obstacle
    deterministically in CI.
    """
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    from canvasplay.platform.display.pygame_backend import PygameDisplayBackend
    from canvasplay.ui.controllers import SandboxController

    cfg = _load_config(args)
    display = PygameDisplayBackend(
        size=(cfg.width, cfg.height), background=cfg.background
    )
    ui = SandboxController(display=display, clock=RealClock(), cfg=cfg)
    for key in args.hold:
        ui.loop.on_key_down(key)

    ui.loop.start()
    for _ in range(max(0, int(args.frames))):
        if not ui.loop.running:
            break
        ui.step()
        await asyncio.sleep(0)

    print(
        f"[sandbox] session {ui.loop.session}: {ui.loop.phase.value} "
        f"after {ui.loop.frames} frame(s), square at "
        f"({ui.loop.square.x:.1f}, {ui.loop.square.y:.1f})"
    )
    await ui.stop()
    if args.save_png:
        display.save_png(args.save_png)


def render_demo(args: argparse.Namespace) -> None:
    """Draw one demo on a blank canvas and save it."""
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    from canvasplay.platform.display.pygame_backend import PygameDisplayBackend

    cfg = _load_config(args)
    display = PygameDisplayBackend(
        size=(cfg.width, cfg.height), background=cfg.background
    )
    DEMOS[args.demo](display.surface())
    out = args.save_png or f"{args.demo}.png"
    display.save_png(out)
    print(f"[sandbox] wrote {args.demo} demo to {out}")


def _hold_keys(s: str) -> list[str]:
    keys = [k.strip() for k in s.split(",") if k.strip()]
    bad = [k for k in keys if k not in DIRECTION_KEYS]
    if bad:
        raise argparse.ArgumentTypeError(
            f"--hold accepts only {', '.join(DIRECTION_KEYS)}; got {', '.join(bad)}"
        )
    return keys


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments.

    When ``argv`` is None the values are read from ``sys.argv`` as usual.
    Accepting an ``argv`` list makes the parser testable programmatically.
    """
    p = argparse.ArgumentParser(description="canvasplay 2D canvas sandbox")
    p.add_argument("--width", type=int, default=None, help="Canvas width in px")
    p.add_argument("--height", type=int, default=None, help="Canvas height in px")
    p.add_argument(
        "--fps",
        type=float,
        default=None,
        help="Display refresh rate the animation runs at (default: 60)",
    )
    p.add_argument(
        "--restart-policy",
        dest="restart_policy",
        choices=list(RESTART_POLICIES),
        default=None,
        help="What the restart key does after a game over (default: reset)",
    )
    p.add_argument(
        "--headless",
        dest="headless",
        action="store_true",
        help="Run without a window (lightweight mode suitable for CI/tests)",
    )
    p.add_argument(
        "--frames",
        type=int,
        default=600,
        help="Frames to run in --headless mode (default: 600)",
    )
    p.add_argument(
        "--hold",
        type=_hold_keys,
        default=[],
        help="Comma separated w/a/s/d keys held during --headless runs",
    )
    p.add_argument(
        "--demo",
        choices=sorted(k for k in DEMOS if k != "clear"),
        default=None,
        help="Render a single drawing demo to --save-png and exit",
    )
    p.add_argument(
        "--save-png",
        dest="save_png",
        type=str,
        default=None,
        help="Write the final frame to this PNG path",
    )
    p.add_argument(
        "--log-level",
        dest="log_level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    p.add_argument(
        "--version",
        action="store_true",
        help="Print the version and exit",
    )
    return p.parse_args(argv)


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level))
    try:
        if args.demo:
            render_demo(args)
        elif args.headless:
            asyncio.run(_main_headless_async(args))
        else:
            asyncio.run(main_async(args))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
