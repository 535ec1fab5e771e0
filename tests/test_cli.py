"""Tests for the command-line interface.

main() initializes Taichi itself, so it is only called here on paths that
fail before initialization; rendering goes through render_to_output().
"""

import io

import pytest


class TestArgumentParsing:
    """Tests for parse_args() and build_settings()."""

    def test_defaults(self):
        from spheretracer.cli import build_settings, parse_args

        args = parse_args([])
        settings = build_settings(args)

        assert args.scene == "default"
        assert args.output == "-"
        assert not args.quiet
        assert (settings.width, settings.height) == (400, 225)
        assert settings.samples_per_pixel == 100
        assert settings.max_depth == 50

    def test_height_from_aspect_ratio(self):
        from spheretracer.cli import build_settings, parse_args

        settings = build_settings(parse_args(["--width", "300", "--aspect-ratio", "1.5"]))

        assert settings.height == 200

    def test_explicit_height_wins(self):
        from spheretracer.cli import build_settings, parse_args

        settings = build_settings(
            parse_args(["--width", "300", "--height", "50", "--aspect-ratio", "1.5"])
        )

        assert settings.height == 50

    def test_all_options(self):
        from spheretracer.cli import build_settings, parse_args

        args = parse_args(
            [
                "--samples", "3",
                "--max-depth", "4",
                "--seed", "9",
                "--scene", "showcase",
                "--output", "out.png",
                "--quiet",
            ]
        )
        settings = build_settings(args)

        assert settings.samples_per_pixel == 3
        assert settings.max_depth == 4
        assert settings.seed == 9
        assert args.scene == "showcase"
        assert args.output == "out.png"
        assert args.quiet

    def test_unknown_scene_rejected(self):
        from spheretracer.cli import parse_args

        with pytest.raises(SystemExit):
            parse_args(["--scene", "cornell"])

    def test_invalid_settings_raise(self):
        from spheretracer.cli import build_settings, parse_args

        with pytest.raises(ValueError):
            build_settings(parse_args(["--samples", "0"]))


class TestMain:
    def test_invalid_settings_exit_with_error(self, capsys):
        from spheretracer.cli import main

        assert main(["--width", "1"]) == 1
        assert capsys.readouterr().err.startswith("Error: ")


class TestRenderToOutput:
    """Tests for render_to_output()."""

    def _settings(self):
        from spheretracer.config import RenderSettings

        return RenderSettings(width=6, height=4, samples_per_pixel=2, max_depth=3)

    def test_ppm_to_stdout_with_progress(self):
        from spheretracer.cli import render_to_output

        stdout = io.StringIO()
        stderr = io.StringIO()
        render_to_output(self._settings(), stdout=stdout, stderr=stderr)

        lines = stdout.getvalue().splitlines()
        assert lines[:3] == ["P3", "6 4", "255"]
        assert len(lines) == 3 + 4
        progress = stderr.getvalue()
        assert "Scanlines remaining: 3" in progress
        assert "Scanlines remaining: 0" in progress
        assert "Done." in progress

    def test_quiet_suppresses_progress(self):
        from spheretracer.cli import render_to_output

        stdout = io.StringIO()
        stderr = io.StringIO()
        render_to_output(self._settings(), quiet=True, stdout=stdout, stderr=stderr)

        assert stderr.getvalue() == ""
        assert stdout.getvalue().startswith("P3\n")

    def test_png_output_file(self, tmp_path):
        from PIL import Image as PILImage

        from spheretracer.cli import render_to_output

        path = tmp_path / "showcase.png"
        stdout = io.StringIO()
        render_to_output(
            self._settings(),
            scene_name="showcase",
            output_path=str(path),
            quiet=True,
            stdout=stdout,
        )

        assert stdout.getvalue() == ""
        with PILImage.open(path) as loaded:
            assert loaded.size == (6, 4)
