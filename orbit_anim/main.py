# orbit_anim/main.py
import logging
import sys

import matplotlib

from orbit_anim.cli import parse_args
from orbit_anim.config import settings

# --- Setup logger ------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-7s  %(message)s",
    datefmt="%H:%M:%S"
)
log = logging.getLogger("main")

NON_INTERACTIVE_BACKENDS = ("agg", "cairo", "pdf", "pgf", "ps", "svg", "template")


def _has_display() -> bool:
    backend = matplotlib.get_backend().lower()
    if backend.startswith("module://"):
        return "inline" not in backend
    return backend not in NON_INTERACTIVE_BACKENDS


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    settings.validate_settings()

    if args.export or args.headless:
        # Offscreen rendering never needs a display.
        matplotlib.use("Agg")

    from orbit_anim.visualization import animation

    if args.headless:
        animation.render_headless(frames=args.frames, fps=args.fps, dpr=args.dpr)
        return 0

    if args.export:
        try:
            animation.export_animation(args.export, frames=args.frames, fps=args.fps, dpr=args.dpr)
        except Exception:
            log.exception("Export to %s failed", args.export)
            return 1
        return 0

    # The animation is decorative: without a usable display it simply does not run.
    if not _has_display():
        log.warning("No interactive matplotlib backend (%s); animation not started.",
                    matplotlib.get_backend())
        return 0
    try:
        animation.show_interactive()
    except Exception as e:
        log.warning("Animation unavailable, not started: %s", e)
        log.debug("startup failure", exc_info=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
