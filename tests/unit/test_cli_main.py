from __future__ import annotations

from pathlib import Path

from order_manifest.cli import main as cli_main

from conftest import fixed_header, fixed_row, make_excel


def test_cli_no_files_success(temp_workdir: Path, capsys):
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY files=0 success=0 failed=0 lines=0" in out


def test_cli_source_directory_missing(temp_workdir: Path, capsys):
    (temp_workdir / "config" / "manifest.yml").write_text(
        "source_directory: ./missing_dir\n", encoding="utf-8"
    )
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR Directory not found:" in out


def test_cli_invalid_config(temp_workdir: Path, capsys):
    (temp_workdir / "config" / "manifest.yml").write_text("bogus: 1\n", encoding="utf-8")
    code = cli_main([])
    assert code == 1
    assert "ERROR config:" in capsys.readouterr().out


def test_cli_explicit_file_missing(temp_workdir: Path, capsys):
    code = cli_main(["nope.xlsx"])
    assert code == 1
    assert "ERROR file not found: nope.xlsx" in capsys.readouterr().out


def test_cli_debug_mode_enables_debug_output(orders_xlsx: Path, capsys):
    code = cli_main(["--debug", str(orders_xlsx)])
    out = capsys.readouterr().out
    assert code == 0
    assert "DEBUG debug mode enabled" in out
    assert "DEBUG header row=1 layout=fixed" in out


def test_cli_inspect_data(temp_workdir: Path, capsys):
    make_excel(temp_workdir / "data" / "a.xlsx", [{"A": "banner"}, fixed_header(), fixed_row()])
    code = cli_main(["--inspect-data"])
    out = capsys.readouterr().out
    assert code == 0
    assert "FILE: a.xlsx" in out
    assert "header_row=1 layout=Standard TikTok" in out
    assert "'phone': 'AW'" in out
    # inspect ではマニフェストを書き出さない
    assert list((temp_workdir / "output").iterdir()) == []


def test_cli_output_dir_option(orders_xlsx: Path, temp_workdir: Path, capsys):
    out_dir = temp_workdir / "custom"
    code = cli_main(["--output-dir", str(out_dir), str(orders_xlsx)])
    assert code == 0
    written = list(out_dir.glob("*.xlsx"))
    assert len(written) == 1
    assert written[0].name.startswith("邮局小包-Capypie")
