"""
CLI entry point for rendering a celebration to video.

Usage:
    inevitable-celebrate --attempts 42 -o celebration.mp4 [options]
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Iterator

import numpy as np

from inevitable.celebration.overlay import CelebrationOverlay, overlay_duration_ms
from inevitable.celebration.particles import CelebrationConfig
from inevitable.io.encoder import encode_video
from inevitable.motion import MotionPreference
from inevitable.scheduler import FrameScheduler


PROFILES = {
    "low": {"width": 854, "height": 480, "fps": 30, "quality": "fast"},
    "medium": {"width": 1280, "height": 720, "fps": 60, "quality": "medium"},
    "high": {"width": 1920, "height": 1080, "fps": 60, "quality": "high"},
}


def _progress_bar(current: int, total: int, width: int = 35):
    """Print a progress bar to stdout."""
    pct = current / max(total, 1) * 100
    filled = int(width * current / max(total, 1))
    bar = "#" * filled + "-" * (width - filled)
    if sys.stdout.isatty():
        sys.stdout.write(f"\r[{bar}] {pct:5.1f}%  frame {current}/{total}")
        sys.stdout.flush()
        if current >= total:
            sys.stdout.write("\n")
    else:
        if current % max(1, total // 20) == 0 or current >= total:
            print(f"{pct:5.1f}%  frame {current}/{total}", flush=True)


def render_frames(overlay: CelebrationOverlay, total_frames: int) -> Iterator[np.ndarray]:
    """
    Drive the overlay's scheduler one frame at a time and yield frames.

    Frames before the first draw (or after the overlay ends) are blank.
    """
    cfg = overlay.cfg
    blank = np.zeros((cfg.height, cfg.width, 3), dtype=np.uint8)
    blank[:, :] = cfg.background_color
    scheduler = overlay.scheduler
    for _ in range(total_frames):
        scheduler.advance_frames(1)
        frame = overlay.frame()
        yield blank if frame is None else frame


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inevitable-celebrate",
        description="Render the success celebration to an MP4",
    )
    parser.add_argument(
        "-a", "--attempts", type=int, default=0,
        help="Attempt count driving intensity (default: 0)",
    )
    parser.add_argument(
        "-o", "--output", type=Path, default=Path("celebration.mp4"),
        help="Output MP4 path (default: celebration.mp4)",
    )
    parser.add_argument(
        "-p", "--profile", type=str, default="medium",
        choices=list(PROFILES),
        help="Target profile (low: 480p 30fps, medium: 720p 60fps, high: 1080p 60fps)",
    )
    parser.add_argument("--width", type=int, default=None, help="Video width (overrides profile)")
    parser.add_argument("--height", type=int, default=None, help="Video height (overrides profile)")
    parser.add_argument("-f", "--fps", type=int, default=None, help="Frames per second (overrides profile)")
    parser.add_argument(
        "--reduced-motion", action="store_true",
        help="Render the static low-motion variant",
    )
    parser.add_argument("--no-glow", action="store_true", help="Disable glow")
    parser.add_argument(
        "--max-duration", type=float, default=None,
        help="Limit output to N seconds",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--audio", type=Path, default=None,
        help="Optional soundtrack to mux in (clip ends with the shorter stream)",
    )
    parser.add_argument(
        "-q", "--quality", type=str, default=None,
        choices=["high", "medium", "fast"],
        help="Encoding quality (defaults to profile quality)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None):
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.attempts < 0:
        print("Error: --attempts must be >= 0", file=sys.stderr)
        sys.exit(1)

    if args.audio is not None and not args.audio.exists():
        print(f"Error: Audio file not found: {args.audio}", file=sys.stderr)
        sys.exit(1)

    p_cfg = PROFILES[args.profile]
    width = args.width or p_cfg["width"]
    height = args.height or p_cfg["height"]
    fps = args.fps or p_cfg["fps"]
    quality = args.quality or p_cfg["quality"]

    config = CelebrationConfig(
        width=width,
        height=height,
        fps=fps,
        glow_enabled=not args.no_glow,
    )

    duration_s = overlay_duration_ms(args.attempts, args.reduced_motion, config) / 1000.0
    if args.max_duration is not None:
        duration_s = min(duration_s, args.max_duration)
    total_frames = int(duration_s * fps)

    print(f"Celebrating {args.attempts} attempts")
    print(f"  Mode: {'reduced motion' if args.reduced_motion else 'full motion'}")
    print(f"  Duration: {duration_s:.1f}s ({total_frames} frames)")
    if args.audio is not None:
        print(f"  Audio: {args.audio}")
    print(f"\nRendering at {width}x{height} @ {fps}fps")

    scheduler = FrameScheduler(fps=fps)
    overlay = CelebrationOverlay(
        scheduler,
        attempts=args.attempts,
        config=config,
        motion=MotionPreference(args.reduced_motion),
        seed=args.seed,
    )
    overlay.start()

    t0 = time.time()
    try:
        encode_video(
            frame_iterator=render_frames(overlay, total_frames),
            output_path=args.output,
            width=width,
            height=height,
            fps=fps,
            quality=quality,
            audio_path=args.audio,
            total_frames=total_frames,
            progress_callback=_progress_bar,
        )
    finally:
        overlay.teardown()

    elapsed = time.time() - t0
    file_size_mb = args.output.stat().st_size / 1024 / 1024

    print(f"\nDone! {file_size_mb:.1f} MB")
    print(f"  Render+encode took {elapsed:.1f}s ({total_frames / max(elapsed, 0.01):.1f} fps)")
    print(f"  Output: {args.output}")


if __name__ == "__main__":
    main()
