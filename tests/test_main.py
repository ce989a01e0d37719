"""Tests for the command-line entry point."""

import numpy as np
from PIL import Image

from main import build_parser, main


TINY_SCENE = """
render:
  width: 40
  height: 40
  samples: 50
materials:
  matte:
    type: lambertian
    albedo: [0.5, 0.5, 0.5]
objects:
  - type: sphere
    center: [0, 0, -1]
    radius: 0.5
    material: matte
"""


class TestArguments:
    """Test argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.scene == 'demo'
        assert args.width is None
        assert args.seed is None
        assert args.quiet is False

    def test_overrides(self):
        args = build_parser().parse_args(['--width', '64', '--samples', '3', '--threads', '0'])
        assert args.width == 64
        assert args.samples == 3
        assert args.threads == 0


class TestMain:
    """Test end-to-end runs of the CLI."""

    def test_scene_file_with_overrides(self, tmp_path):
        scene = tmp_path / "tiny.yaml"
        scene.write_text(TINY_SCENE)
        output = tmp_path / "out" / "tiny.png"

        code = main(['--scene', str(scene), '--width', '6', '--height', '4', '--samples', '2',
                     '--depth', '3', '--seed', '7', '--quiet', '--output', str(output)])

        assert code == 0
        with Image.open(output) as img:
            assert img.size == (6, 4)

    def test_seeded_runs_are_identical(self, tmp_path):
        scene = tmp_path / "tiny.yaml"
        scene.write_text(TINY_SCENE)
        common = ['--scene', str(scene), '--width', '5', '--height', '5', '--samples', '2',
                  '--seed', '3', '--quiet']

        assert main(common + ['--output', str(tmp_path / "a.png")]) == 0
        assert main(common + ['--threads', '2', '--output', str(tmp_path / "b.png")]) == 0

        with Image.open(tmp_path / "a.png") as a, Image.open(tmp_path / "b.png") as b:
            assert np.array_equal(np.asarray(a), np.asarray(b))

    def test_builtin_scene(self, tmp_path):
        output = tmp_path / "demo.ppm"
        code = main(['--scene', 'demo', '--width', '4', '--height', '3', '--samples', '1',
                     '--depth', '2', '--seed', '1', '--quiet', '--output', str(output)])
        assert code == 0
        assert output.exists()

    def test_reports_progress(self, tmp_path, capsys):
        output = tmp_path / "demo.png"
        code = main(['--scene', 'demo', '--width', '3', '--height', '2', '--samples', '1',
                     '--depth', '1', '--seed', '1', '--output', str(output)])
        assert code == 0
        err = capsys.readouterr().err
        assert "Scanlines remaining: 1" in err
        assert "Scanlines remaining: 0" in err

    def test_missing_scene_file(self, tmp_path, capsys):
        code = main(['--scene', str(tmp_path / "missing.yaml"), '--output', str(tmp_path / "x.png")])
        assert code == 1
        assert "not found" in capsys.readouterr().err

    def test_invalid_settings(self, tmp_path):
        code = main(['--scene', 'demo', '--width', '0', '--output', str(tmp_path / "x.png")])
        assert code == 1

    def test_negative_seed(self, tmp_path, capsys):
        output = tmp_path / "x.png"
        code = main(['--scene', 'demo', '--width', '2', '--height', '2', '--samples', '1',
                     '--seed', '-1', '--quiet', '--output', str(output)])
        assert code == 1
        assert "seed" in capsys.readouterr().err
        assert not output.exists()

    def test_null_render_section(self, tmp_path):
        scene = tmp_path / "nulls.yaml"
        scene.write_text("render:\ncamera:\n")
        code = main(['--scene', str(scene), '--width', '2', '--height', '2', '--samples', '1',
                     '--seed', '0', '--quiet', '--output', str(tmp_path / "x.png")])
        assert code == 0

    def test_malformed_camera_section(self, tmp_path, capsys):
        scene = tmp_path / "bad.yaml"
        scene.write_text("camera: [1, 2, 3]\n")
        code = main(['--scene', str(scene), '--output', str(tmp_path / "x.png")])
        assert code == 1
        assert "must be a mapping" in capsys.readouterr().err
