# --- mazecam.py ---
import argparse
import dataclasses
import logging
import sys

from mazecam_lib.analysis import (
    DeadEndClassifier,
    FrameProcessor,
    QuadtreeBuilder,
)
from mazecam_lib.capture import CameraSource, CaptureUnavailableError, ImageSequenceSource
from mazecam_lib.config import ConfigService, load_settings, validate_settings
from mazecam_lib.log_utils import setup_logging
from mazecam_lib.pipeline import NavigationPipeline
from mazecam_lib.rendering import ASCIIRenderer, NullSink, WindowSink


def get_cli_args(argv=None):
    """Configures and parses command-line arguments."""
    p = argparse.ArgumentParser(
        description="Finds maze dead ends and a movement direction in camera frames."
    )
    g_in = p.add_argument_group("Input")
    src = g_in.add_mutually_exclusive_group()
    src.add_argument(
        "--camera",
        metavar="DEVICE",
        help="Camera index or video file path (default: from config, else 0).",
    )
    src.add_argument(
        "--images", nargs="+", metavar="PATH", help="Replay still images instead of a camera."
    )
    p.add_argument("-c", "--config", metavar="FILE", help="Path to a mazecam.cfg INI file.")
    p.add_argument(
        "--init-config",
        metavar="FILE",
        help="Write the default configuration to FILE and exit.",
    )
    g_tune = p.add_argument_group("Tuning")
    g_tune.add_argument("--delay-ms", type=int, help="Pause after each frame (default: 33).")
    g_tune.add_argument("--canny-low", type=int, help="Canny low threshold (default: 50).")
    g_tune.add_argument("--canny-high", type=int, help="Canny high threshold (default: 150).")
    g_tune.add_argument(
        "--min-node-size", type=int, help="Smallest quadtree node side in px (default: 10)."
    )
    g_tune.add_argument(
        "--density-threshold",
        type=float,
        help="Edge density a dead end must exceed (default: 0.05).",
    )
    g_tune.add_argument(
        "--intersection-threshold",
        type=int,
        help="Max branch pixels in a dead end (default: 1).",
    )
    g_tune.add_argument(
        "--max-frames", type=int, help="Stop after this many processed frames."
    )
    g_tune.add_argument(
        "--headless", action="store_true", help="Do not open a window; only log decisions."
    )
    # Logging arguments
    g_log = p.add_argument_group("Logging & Output")
    g_log.add_argument(
        "-v", "--verbose", action="store_true", help="Enable INFO logging."
    )
    g_log.add_argument(
        "--color-logs", action="store_true", help="Enable colored logging."
    )
    g_log.add_argument(
        "--log-file", metavar="FILE", help="Redirect log output to a file."
    )
    g_log.add_argument(
        "--ascii-debug",
        action="store_true",
        help="Log an ASCII map of each frame's quadtree leaves.",
    )
    g_log.add_argument(
        "-d",
        "--debug",
        nargs="?",
        const="all",
        dest="debug_topics",
        metavar="TOPICS",
        help="Enable DEBUG logging "
        "(all,capture,edges,quadtree,deadend,direction,frame,render,config).",
    )
    return p.parse_args(argv)


def apply_overrides(settings, args):
    """Command-line flags win over config file values."""
    overrides = {
        "delay_ms": args.delay_ms,
        "canny_low": args.canny_low,
        "canny_high": args.canny_high,
        "min_node_size": args.min_node_size,
        "density_threshold": args.density_threshold,
        "intersection_threshold": args.intersection_threshold,
    }
    changes = {k: v for k, v in overrides.items() if v is not None}
    if args.camera is not None:
        changes["device"] = int(args.camera) if args.camera.isdigit() else args.camera
    if args.headless:
        changes["headless"] = True
    settings = dataclasses.replace(settings, **changes)
    validate_settings(settings)
    return settings


def make_ascii_hook(settings, builder, classifier):
    """Returns an on_frame callback that logs the quadtree of the frame's edges."""
    log = logging.getLogger("mazecam.main")

    def hook(frame, mask, result):
        if mask is None or mask.is_empty:
            return
        renderer = ASCIIRenderer(cell_size=max(settings.min_node_size, 1))
        renderer.render_tree(builder.build(mask), mask, classifier)
        log.info("\n%s", renderer.get_output(), extra={"raw": True})

    return hook


def main(argv=None):
    """Main entry point for the mazecam CLI."""
    args = get_cli_args(argv)
    log_level = logging.INFO if args.verbose else logging.WARNING
    if args.debug_topics:
        log_level = logging.DEBUG

    setup_logging(log_level, args.color_logs, args.debug_topics, args.log_file)
    log = logging.getLogger("mazecam.main")

    log.info("--- MAZECAM CLI Initialized ---")
    log.debug("Arguments received: %s", vars(args))

    if args.init_config:
        try:
            ConfigService(args.init_config).save_defaults()
        except IOError:
            return 1
        return 0

    try:
        settings = apply_overrides(load_settings(args.config), args)
    except ValueError as e:
        log.critical("Invalid configuration: %s", e)
        return 1
    log.debug("Effective settings: %s", settings)

    if args.images:
        source = ImageSequenceSource(args.images)
    else:
        source = CameraSource(settings.device)
    sink = NullSink() if settings.headless else WindowSink(settings.window_name)

    builder = QuadtreeBuilder(settings.min_node_size)
    classifier = DeadEndClassifier(
        settings.density_threshold, settings.intersection_threshold
    )
    processor = FrameProcessor(builder=builder, classifier=classifier)

    on_frame = make_ascii_hook(settings, builder, classifier) if args.ascii_debug else None
    pipeline = NavigationPipeline(
        source,
        sink,
        processor,
        canny_low=settings.canny_low,
        canny_high=settings.canny_high,
        delay_ms=settings.delay_ms,
        on_frame=on_frame,
    )

    try:
        stats = pipeline.run(max_frames=args.max_frames)
    except CaptureUnavailableError as e:
        log.critical("Capture unavailable: %s", e)
        return 1
    except KeyboardInterrupt:
        log.info("Interrupted; shutting down.")
        return 0

    log.info("--- Processing complete (%d frames). ---", stats.frames_processed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
