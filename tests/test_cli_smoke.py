from __future__ import annotations

import shutil
from pathlib import Path

import orjson
import pytest

from cli import main

_FIXTURES = Path(__file__).parent / "fixtures" / "bzip2"


def _fixture_dump(path: str, *, nm: str, nm_args) -> list[str]:
    listing = _FIXTURES / f"{Path(path).stem}.nm"
    return listing.read_text(encoding="utf-8").splitlines()


@pytest.fixture
def object_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Stand-in build tree whose ``nm`` output comes from fixture listings."""
    build = tmp_path / "build"
    build.mkdir()
    for listing in _FIXTURES.glob("*.nm"):
        (build / f"{listing.stem}.o").write_bytes(b"")
    shutil.copy(_FIXTURES / "bz2.masks", tmp_path / "bz2.masks")
    monkeypatch.setattr("report.generate.dump_symbols", _fixture_dump)
    monkeypatch.chdir(tmp_path)
    return build


def test_cli_no_files_prints_usage(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main([])

    assert exit_code == 1
    assert "uselex - look for USEless EXports" in capsys.readouterr().out


def test_cli_help_is_usage_path(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["--help", "a.o"])

    assert exit_code == 1
    assert "THEORY OF OPERATION" in capsys.readouterr().out


def test_cli_version(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["-V"]) == 0
    assert capsys.readouterr().out == "uselex-0.0.1\n"


def test_cli_reports_bzip2_exports(
    object_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main([str(object_dir)])

    assert exit_code == 0
    bzip2 = object_dir / "bzip2.o"
    bzlib = object_dir / "bzlib.o"
    assert capsys.readouterr().out.splitlines() == [
        f"blockSize100k: [R]: exported from: {bzip2}",
        f"deleteOutputOnInterrupt: [R]: exported from: {bzip2}",
        f"exitValue: [R]: exported from: {bzip2}",
        f"BZ2_bzWriteClose: [R]: exported from: {bzlib}",
        f"BZ2_bzwrite: [R]: exported from: {bzlib}",
    ]


def test_cli_mask_and_exported(
    object_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(
        [
            "-m",
            "bz2.masks",
            "-x",
            "exitValue",
            str(object_dir / "bzip2.o"),
            str(object_dir / "bzlib.o"),
        ]
    )

    assert exit_code == 0
    bzip2 = object_dir / "bzip2.o"
    assert capsys.readouterr().out.splitlines() == [
        f"blockSize100k: [R]: exported from: {bzip2}",
        f"deleteOutputOnInterrupt: [R]: exported from: {bzip2}",
    ]


def test_cli_whitelist_from_config(
    object_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (object_dir.parent / "public.txt").write_text(
        "# kept for ABI\nblockSize100k\n", encoding="utf-8"
    )
    (object_dir.parent / "uselex.toml").write_text(
        'whitelist = ["public.txt"]\nmasks = ["bz2.masks"]\n', encoding="utf-8"
    )

    exit_code = main([str(object_dir)])

    assert exit_code == 0
    bzip2 = object_dir / "bzip2.o"
    assert capsys.readouterr().out.splitlines() == [
        f"deleteOutputOnInterrupt: [R]: exported from: {bzip2}",
        f"exitValue: [R]: exported from: {bzip2}",
    ]


def test_cli_jsonl_format(object_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["--format", "jsonl", "-m", "bz2.masks", str(object_dir)])

    assert exit_code == 0
    records = [orjson.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert [record["symbol"] for record in records] == [
        "blockSize100k",
        "deleteOutputOnInterrupt",
        "exitValue",
    ]
    assert all(record["tag"] == "R" for record in records)


def test_cli_unknown_symbol_type_is_fatal(
    object_dir: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    (object_dir / "broken.o").write_bytes(b"")

    def dump(path: str, *, nm: str, nm_args) -> list[str]:
        if Path(path).stem == "broken":
            return ["00000000 Z weird"]
        return _fixture_dump(path, nm=nm, nm_args=nm_args)

    monkeypatch.setattr("report.generate.dump_symbols", dump)
    exit_code = main([str(object_dir)])

    captured = capsys.readouterr()
    assert exit_code == 2
    assert captured.out == ""
    assert "unknown sym type: '00000000 Z weird'" in captured.err


def test_cli_bad_mask_is_fatal(
    object_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (object_dir.parent / "bad.masks").write_text("(\n", encoding="utf-8")

    exit_code = main(["-m", "bad.masks", str(object_dir)])

    captured = capsys.readouterr()
    assert exit_code == 2
    assert captured.out == ""
    assert "Invalid mask pattern" in captured.err


def test_cli_missing_whitelist_is_fatal(
    object_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(["-w", "missing.txt", str(object_dir)])

    assert exit_code == 2
    assert "Failed to read missing.txt" in capsys.readouterr().err


def test_cli_non_utf8_whitelist_is_fatal(
    object_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (object_dir.parent / "wl.txt").write_bytes(b"caf\xe9_symbol\n")

    exit_code = main(["-w", "wl.txt", str(object_dir)])

    captured = capsys.readouterr()
    assert exit_code == 2
    assert captured.out == ""
    assert "error: Failed to read wl.txt" in captured.err


def test_cli_non_utf8_config_is_fatal(
    object_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (object_dir.parent / "uselex.toml").write_bytes(b'nm = "\xe9"\n')

    exit_code = main([str(object_dir)])

    captured = capsys.readouterr()
    assert exit_code == 2
    assert captured.out == ""
    assert "error: Failed to read" in captured.err


def test_cli_empty_directory_warns(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.chdir(tmp_path)
    empty = tmp_path / "empty"
    empty.mkdir()
    (empty / "notes.txt").write_text("no objects here\n", encoding="utf-8")

    exit_code = main([str(empty)])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert captured.out == ""
    assert f"[uselex] warning: no object files found in {empty}\n" in captured.err
