"""Tests for the FFmpeg video encoder."""

import shutil
from pathlib import Path

import numpy as np
import pytest

from inevitable.io.encoder import build_command, encode_video


needs_ffmpeg = pytest.mark.skipif(shutil.which("ffmpeg") is None, reason="ffmpeg not installed")


def _solid_frames(n: int, width: int, height: int, color=(200, 40, 120)):
    """Generate N solid-color frames."""
    frame = np.full((height, width, 3), color, dtype=np.uint8)
    for _ in range(n):
        yield frame.copy()


class TestBuildCommand:
    def test_video_only(self):
        cmd = build_command(Path("out.mp4"), 320, 240, 30, quality="fast")
        assert cmd[:4] == ["ffmpeg", "-y", "-loglevel", "error"]
        assert "320x240" in cmd
        assert cmd[cmd.index("-preset") + 1] == "ultrafast"
        assert "-c:a" not in cmd
        assert "-t" not in cmd
        assert cmd[-1] == "out.mp4"

    def test_audio_and_duration(self):
        cmd = build_command(Path("out.mp4"), 320, 240, 30, audio_path=Path("song.mp3"), duration=2.5)
        assert cmd.count("-i") == 2
        assert "song.mp3" in cmd
        assert "-shortest" in cmd
        assert cmd[cmd.index("-t") + 1] == "2.5"

    def test_unknown_quality_falls_back_to_high(self):
        cmd = build_command(Path("out.mp4"), 64, 64, 30, quality="bogus")
        assert cmd[cmd.index("-crf") + 1] == "18"


@needs_ffmpeg
class TestEncoder:
    def test_produces_mp4(self, tmp_path):
        output = tmp_path / "nested" / "clip.mp4"
        result = encode_video(
            frame_iterator=_solid_frames(15, 160, 120),
            output_path=output,
            width=160,
            height=120,
            fps=30,
            quality="fast",
        )
        assert result == output
        assert result.stat().st_size > 0

    def test_progress_callback(self, tmp_path):
        progress = []
        encode_video(
            frame_iterator=_solid_frames(10, 160, 120),
            output_path=tmp_path / "progress.mp4",
            width=160,
            height=120,
            fps=30,
            quality="fast",
            total_frames=10,
            progress_callback=lambda c, t: progress.append((c, t)),
        )
        assert progress[-1] == (10, 10)
        assert len(progress) == 10

    def test_ffmpeg_failure_raises(self, tmp_path):
        with pytest.raises(RuntimeError):
            encode_video(
                frame_iterator=_solid_frames(2, 160, 120),
                output_path=tmp_path / "bad.mp4",
                width=160,
                height=120,
                fps=30,
                quality="fast",
                audio_path=tmp_path / "missing.mp3",
            )
