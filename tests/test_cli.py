import os
import sys
import logging
import subprocess
import argparse
import contextlib

import pytest
from PIL import Image

from bdf2bmh import cli
from bdf2bmh import terminal
from bdf2bmh.errors import TransportUnavailable

from conftest import make_bdf


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)


class FakePanel:

    def __init__(self):
        self.frames = []

    def show(self, image):
        self.frames.append(image.copy())


def test_default_conversion(font_8x8_file, capsys):
    assert cli.main([str(font_8x8_file)]) == 0
    out, err = capsys.readouterr()
    assert out.count('0x') == 95 * 8
    assert err == ''


def test_header_and_verbose(font_8x8_file, capsys):
    assert cli.main(['-h', '-v', '-l', str(font_8x8_file)]) == 0
    out, _ = capsys.readouterr()
    lines = out.splitlines()
    assert lines[0] == '// test8x8.bdf'
    assert '// Converted font size 8x8, 95 glyphs (32-126), 8 bytes per glyph, 760 bytes' in lines
    assert len([line for line in lines if not line.startswith('//')]) == 95


def test_verbose_without_header(font_8x8_file, capsys):
    assert cli.main(['-v', '-l', str(font_8x8_file)]) == 0
    out, _ = capsys.readouterr()
    assert '// Converted' not in out
    assert len(out.splitlines()) == 95


def test_transform_flags(font_8x8_file, capsys):
    assert cli.main(['--rotate', '--flip', '--droplast', '--ascender', '2', '-l', str(font_8x8_file)]) == 0
    out, _ = capsys.readouterr()
    first = out.splitlines()[0]
    # 10 rows round up to 16, rotated 8 columns of 2 bytes, last byte dropped
    assert first.count('0x') == 15


def test_subset_and_all(tmp_path, capsys):
    path = tmp_path / 'wide.bdf'
    path.write_text(make_bdf({code: [code & 0xFF] * 8 for code in (10, 65, 66, 300)}))
    assert cli.main(['-l', '-s', '66-65', str(path)]) == 0
    assert len(capsys.readouterr().out.splitlines()) == 2
    assert cli.main(['-l', '--all', str(path)]) == 0
    out = capsys.readouterr().out
    assert len(out.splitlines()) == 4
    assert out.splitlines()[-1].endswith('// 300')


def test_empty_selection(font_8x8_file, capsys):
    assert cli.main(['-s', '200-300', str(font_8x8_file)]) == -1
    out, err = capsys.readouterr()
    assert out == ''
    assert "Unable to convert" in err
    assert '200-300' in err


def test_malformed_source(tmp_path, capsys):
    path = tmp_path / 'bad.bdf'
    path.write_text(make_bdf({65: [0] * 8}).replace('\n00\n', '\nXY\n', 1))
    assert cli.main([str(path)]) == -1
    out, err = capsys.readouterr()
    assert out == ''
    assert f"Unable to convert '{path}'" in err
    assert 'not hexadecimal' in err


def test_missing_file(tmp_path, capsys):
    assert cli.main([str(tmp_path / 'nothing.bdf')]) == -1
    out, err = capsys.readouterr()
    assert out == ''
    assert 'Unable to convert' in err


def test_failure_exit_status(tmp_path):
    # main returns -1, the shell sees 255
    root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    result = subprocess.run(
        [sys.executable, '-m', 'bdf2bmh', str(tmp_path / 'nothing.bdf')],
        cwd=root, capture_output=True, text=True)
    assert result.returncode == 255
    assert result.stdout == ''
    assert 'Unable to convert' in result.stderr


def test_run_exits_with_main_status(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, 'argv', ['bdf2bmh', str(tmp_path / 'nothing.bdf')])
    with pytest.raises(SystemExit) as excinfo:
        cli.run()
    assert excinfo.value.code == -1


def test_usage_error(font_8x8_file, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(['-s', 'abc', str(font_8x8_file)])
    assert excinfo.value.code == 2


def test_c_array_name(font_8x8_file, capsys):
    assert cli.main(['-N', 'font_8x8', '-l', str(font_8x8_file)]) == 0
    out, _ = capsys.readouterr()
    assert out.startswith('static const uint8_t font_8x8[760] = {\n')


def test_png_preview(font_8x8_file, tmp_path, capsys):
    png = tmp_path / 'preview.png'
    assert cli.main(['-p', str(png), str(font_8x8_file)]) == 0
    with Image.open(png) as img:
        assert img.size[0] > 0
        assert img.mode == 'RGB'


@pytest.mark.parametrize('text, expected', [('3d', 0x3D), ('3C', 0x3C), ('80', 0x3C), ('0', 0x3C), ('77', 0x77)])
def test_i2c_address(text, expected):
    assert cli.i2c_address(text) == expected


def test_i2c_address_invalid():
    with pytest.raises(argparse.ArgumentTypeError):
        cli.i2c_address('zz')


def test_display_arguments():
    parser = cli.build_parser()
    assert parser.parse_args(['font.bdf']).display is None
    assert parser.parse_args(['font.bdf', '-d']).display == 0x3C
    assert parser.parse_args(['-d', '3d', 'font.bdf']).display == 0x3D


def test_display_unavailable(font_8x8_file, monkeypatch, capsys):
    def no_bus(bus_index, address, updown):
        raise TransportUnavailable(bus_index, address, 'No such file or directory')

    monkeypatch.setattr(cli, 'open_panel', no_bus)
    assert cli.main([str(font_8x8_file), '-d']) == -1
    out, err = capsys.readouterr()
    # the conversion output is already written
    assert out.count('0x') == 95 * 8
    assert 'Unable to open i2c bus 1' in err


def test_display_preview(font_8x8_file, monkeypatch, capsys):
    panel = FakePanel()
    opened = []

    @contextlib.contextmanager
    def fake_panel(bus_index, address, updown):
        opened.append((bus_index, address, updown))
        yield panel

    keys = iter('q')
    monkeypatch.setattr(cli, 'open_panel', fake_panel)
    monkeypatch.setattr(terminal, 'raw_mode', contextlib.nullcontext)
    monkeypatch.setattr(terminal, 'getch', lambda stream=None: next(keys))
    assert cli.main([str(font_8x8_file), '-u', '-d', '3d']) == 0
    assert opened == [(1, 0x3D, True)]
    assert len(panel.frames) == 1
    assert "'q' to exit" in capsys.readouterr().err
