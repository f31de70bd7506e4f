"""Test the command-line front end.

Test cases:
    - test_list_prints_catalog()
    - test_generate_writes_zip()
    - test_generate_rejects_bad_count()
    - test_generate_rejects_unknown_category()
    - test_category_numbers_match_list()
    - test_generate_rejects_bad_category_numbers()
    - test_second_interrupt_is_not_intercepted()
    - test_preview_writes_pngs()

Run:
    pytest tests/test_cli.py -v
"""

import signal
import zipfile

import pytest

from map_symbols.cli import EXIT_INPUT, EXIT_OK, _interrupt_handler, _resolve_categories, main


def test_list_prints_catalog(capsys):
    assert main(["list"]) == EXIT_OK
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 10
    assert lines[0].startswith("01 city-hall")


def test_list_with_planned(capsys):
    assert main(["--include-planned", "list"]) == EXIT_OK
    assert len(capsys.readouterr().out.strip().splitlines()) == 17


def test_generate_writes_zip(tmp_path):
    code = main([
        "generate", "--count", "2", "--size", "8",
        "--category", "hospital", "--category", "1", "--category", "police-box",
        "--out", str(tmp_path),
    ])
    assert code == EXIT_OK
    (archive,) = list(tmp_path.glob("map_symbol_icons_*.zip"))
    with zipfile.ZipFile(archive) as zf:
        assert zf.namelist() == [
            "01_city-hall/0001.png",
            "01_city-hall/0002.png",
            "02_police-box/0001.png",
            "02_police-box/0002.png",
            "03_hospital/0001.png",
            "03_hospital/0002.png",
        ]


def test_generate_rejects_bad_count(tmp_path, capsys):
    assert main(["generate", "--count", "abc", "--out", str(tmp_path)]) == EXIT_INPUT
    assert "invalid input" in capsys.readouterr().err
    assert not list(tmp_path.iterdir())


def test_generate_rejects_unknown_category(tmp_path):
    assert main(["generate", "--count", "1", "--category", "volcano", "--out", str(tmp_path)]) == EXIT_INPUT


def test_category_numbers_match_list(registry, capsys):
    main(["list"])
    first, second = capsys.readouterr().out.splitlines()[:2]
    assert _resolve_categories(registry, ["1", " 2 "]) == [0, 1]
    assert first.split()[1] == registry.get(0).key
    assert second.split()[1] == registry.get(1).key


@pytest.mark.parametrize("token", ["\u00b2", "\u0661", "0", "11"])
def test_generate_rejects_bad_category_numbers(tmp_path, capsys, token):
    assert main(["generate", "--count", "1", "--category", token, "--out", str(tmp_path)]) == EXIT_INPUT
    assert "invalid input" in capsys.readouterr().err
    assert not list(tmp_path.iterdir())


class FakeLoop:
    def __init__(self):
        self.removed = []

    def remove_signal_handler(self, sig):
        self.removed.append(sig)
        return True


class FakePipeline:
    def __init__(self):
        self.cancels = 0

    def cancel(self):
        self.cancels += 1
        return True


def test_second_interrupt_is_not_intercepted(capsys):
    loop, pipeline = FakeLoop(), FakePipeline()
    handler = _interrupt_handler(loop, pipeline)
    handler()
    assert pipeline.cancels == 1
    assert loop.removed == [signal.SIGINT]
    assert "Ctrl-C again" in capsys.readouterr().err


def test_preview_writes_pngs(tmp_path, capsys):
    assert main(["preview", "--size", "24", "--out", str(tmp_path)]) == EXIT_OK
    written = sorted(p.name for p in tmp_path.iterdir())
    assert written[0] == "01_city-hall.png"
    assert len(written) == 10
