"""Tests for the command-line entry point."""
import os

import pytest

from config import Config
from main import build_parser, main


class TestParser:
    """Tests for argument parsing."""

    def test_subcommand_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_cubes_defaults(self):
        args = build_parser().parse_args(['cubes', '-o', 'dial.nc'])
        assert args.outer_rad == 16.0
        assert args.trim_factor == 0.82
        assert args.tool == 23
        assert not args.overwrite

    def test_ticks_repeatable_skip(self):
        args = build_parser().parse_args(['ticks', '-o', 't.nc', '--skip', '5', '--skip', '3'])
        assert args.skip == [5, 3]

    def test_coolant_can_be_turned_off(self, monkeypatch):
        monkeypatch.setattr(Config, 'COOLANT', True)
        parser = build_parser()

        assert parser.parse_args(['ticks', '-o', 't.nc']).coolant
        assert not parser.parse_args(['ticks', '-o', 't.nc', '--no-coolant']).coolant

    def test_rotary_defaults(self):
        gear = build_parser().parse_args(['gear', '-o', 'g.nc', '-t', '20', '-w', '5'])
        assert gear.rpm == 650
        assert gear.feed == 60
        assert gear.tool == 1

        slit = build_parser().parse_args(['slit', '-o', 's.nc'])
        assert not hasattr(slit, 'feed')


class TestMain:
    """End-to-end runs writing into a temporary directory."""

    def test_ticks_written(self, tmp_path, capsys):
        output = str(tmp_path / "ticks.nc")

        assert main(['ticks', '-o', output, '--count', '4', '--name', 'Ticks']) == 0

        with open(output) as f:
            content = f.read()
        assert content.startswith("(Ticks)\n")
        assert content.endswith("M30\n")
        assert "G0 Z1." in content
        assert "✅" in capsys.readouterr().out

    def test_refuses_existing_file(self, tmp_path, capsys):
        output = str(tmp_path / "ticks.nc")
        assert main(['ticks', '-o', output, '--count', '4']) == 0

        assert main(['ticks', '-o', output, '--count', '4']) == 1
        assert "already exists" in capsys.readouterr().out

        assert main(['ticks', '-o', output, '--count', '2', '--overwrite']) == 0

    def test_invalid_parameters(self, tmp_path, capsys):
        output = str(tmp_path / "spiral.nc")

        assert main(['spiral', '-o', output, '--min-depth', '0.5', '--max-depth', '0.1']) == 1
        assert not os.path.exists(output)
        assert "Invalid parameters" in capsys.readouterr().out

    def test_spiral_with_preview(self, tmp_path):
        output = str(tmp_path / "spiral.nc")

        assert main([
            'spiral', '-o', output,
            '--outer-rad', '2', '--inner-rad', '1', '--steps-per-turn', '12',
            '--preview'
        ]) == 0

        assert os.path.exists(output)
        assert os.path.exists(str(tmp_path / "spiral_preview.png"))

    def test_cubes(self, tmp_path):
        output = str(tmp_path / "cubes.nc")

        assert main(['cubes', '-o', output, '--outer-rad', '6', '--coolant']) == 0

        with open(output) as f:
            lines = f.read().splitlines()
        assert "M8" in lines
        assert "(Tick marks)" in lines

    def test_zero_tick_skip_rejected(self, tmp_path, capsys):
        output = str(tmp_path / "ticks.nc")

        assert main(['ticks', '-o', output, '--skip', '0']) == 1
        assert not os.path.exists(output)
        assert "Skip value 1 must be greater than 0" in capsys.readouterr().out

    def test_flinque(self, tmp_path):
        output = str(tmp_path / "flinque.nc")

        assert main(['flinque', '-o', output, '--outer-rad', '3', '--steps-per-turn', '12']) == 0

        with open(output) as f:
            lines = f.read().splitlines()
        assert "(Circle 2)" in lines
        assert "G1 Z-0.2000 F300." in lines

    def test_gear(self, tmp_path):
        output = str(tmp_path / "gear.nc")

        assert main(['gear', '-o', output, '-t', '6', '-w', '5']) == 0

        with open(output) as f:
            lines = f.read().splitlines()
        assert "(Tooth 6 of 6)" in lines
        assert "G0 A60." in lines
        assert "G1 X-5. F60." in lines

    def test_gear_cutter_too_small(self, tmp_path, capsys):
        output = str(tmp_path / "gear.nc")

        assert main(['gear', '-o', output, '-t', '6', '-w', '5', '--cutter-dia', '6']) == 1
        assert not os.path.exists(output)
        assert "Error generating G-code" in capsys.readouterr().out

    def test_knurl(self, tmp_path):
        output = str(tmp_path / "knurl.nc")

        assert main(['knurl', '-o', output, '--dia', '6', '--preview']) == 0

        with open(output) as f:
            lines = f.read().splitlines()
        assert "G93 (Inverse time feed)" in lines
        assert "S9500 M3" in lines
        assert os.path.exists(str(tmp_path / "knurl_preview.png"))

    def test_knurl_invalid_spiral_angle(self, tmp_path, capsys):
        output = str(tmp_path / "knurl.nc")

        assert main(['knurl', '-o', output, '--dia', '6', '--spiral-angle', '90']) == 1
        assert "Spiral angle" in capsys.readouterr().out

    def test_slit(self, tmp_path):
        output = str(tmp_path / "slit.nc")

        assert main(['slit', '-o', output, '--slits', '2']) == 0

        with open(output) as f:
            lines = f.read().splitlines()
        assert "(Slit 2 of 2)" in lines
        assert "G0 X3. Y0. A180." in lines

    def test_flute(self, tmp_path):
        output = str(tmp_path / "flute.nc")

        assert main(['flute', '-o', output, '--flutes', '3', '--depth', '1', '--dia', '8',
                     '--len', '2']) == 0

        with open(output) as f:
            lines = f.read().splitlines()
        assert "(Flute 3 of 3)" in lines
        assert "S4500 M3" in lines
