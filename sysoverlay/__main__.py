import argparse
import logging
import signal
import sys

from . import host
from .gpu import GpuProbe
from .report import render_text, take_snapshot
from .settings import load_settings

ONCE_CPU_INTERVAL = 0.5


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="sysoverlay", description="Always-on-top system telemetry overlay")
    parser.add_argument("--once", action="store_true", help="Print one report to stdout and exit (no window)")
    parser.add_argument("--interval", type=int, metavar="MS", help="Refresh interval in milliseconds for this session")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log probe failures")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.once:
        print(render_text(take_snapshot(host.const_info(), GpuProbe(), cpu_interval=ONCE_CPU_INTERVAL)))
        return 0

    settings = load_settings()
    if args.interval is not None:
        if args.interval <= 0:
            logging.error("--interval must be positive")
            return 2
        settings['refresh_ms'] = args.interval

    from .overlay import SystemOverlayApp

    app = SystemOverlayApp(settings)
    def signal_handler(sig, frame):
        print("\nCtrl+C detected. Shutting down...")
        app.quit()
    signal.signal(signal.SIGINT, signal_handler)
    app.create_settings_window()
    return 0


if __name__ == "__main__":
    sys.exit(main())
