"""CLI parser and command behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from repotree import cli
from repotree.cli import _build_parser
from repotree.orchestrator import Orchestrator


@pytest.fixture
def patched_orchestrator(monkeypatch: pytest.MonkeyPatch, fake_github) -> None:
    monkeypatch.setattr(
        cli,
        "Orchestrator",
        lambda config: Orchestrator(fake_github.client, config=config),
    )


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "analyze", "acme/widgets"])
    assert args.verbose is True
    assert args.command == "analyze"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["analyze", "acme/widgets", "--verbose"])
    assert args.verbose is True
    assert args.repository == "acme/widgets"


def test_analyze_defaults() -> None:
    args = _build_parser().parse_args(["analyze", "acme/widgets"])
    assert args.verbose is False
    assert args.format == "summary"
    assert args.search == ""
    assert args.filter_mode == "all"
    assert args.output is None


def test_analyze_accepts_view_options(tmp_path: Path) -> None:
    args = _build_parser().parse_args(
        ["analyze", "acme/widgets", "-f", "list", "--search", "lib", "--filter", "files", "-o", str(tmp_path / "out.txt")]
    )
    assert args.format == "list"
    assert args.search == "lib"
    assert args.filter_mode == "files"
    assert args.output == tmp_path / "out.txt"


def test_analyze_rejects_unknown_format() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args(["analyze", "acme/widgets", "--format", "pdf"])


def test_serve_options() -> None:
    args = _build_parser().parse_args(["serve", "--port", "9001"])
    assert args.command == "serve"
    assert args.host == "127.0.0.1"
    assert args.port == 9001


@pytest.mark.usefixtures("patched_orchestrator")
def test_main_prints_tree(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["--config", str(tmp_path), "analyze", "https://github.com/acme/widgets", "--format", "tree"])

    out = capsys.readouterr().out
    assert out.splitlines() == [
        "├── 📝 README.md",
        "├── 📋 package.json",
        "└── 📁 src",
        "    ├── ⚡ index.ts",
        "    └── 📁 lib",
        "        └── ⚡ util.ts",
    ]


@pytest.mark.usefixtures("patched_orchestrator")
def test_main_writes_output_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    target = tmp_path / "files.txt"

    cli.main(
        ["--config", str(tmp_path), "analyze", "acme/widgets", "-f", "list", "--filter", "files", "-o", str(target)]
    )

    assert target.read_text(encoding="utf-8") == "README.md\npackage.json\nsrc/index.ts\nsrc/lib/util.ts\n"
    assert "Wrote list view" in capsys.readouterr().out


@pytest.mark.usefixtures("patched_orchestrator")
def test_main_reports_missing_repository(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--config", str(tmp_path), "analyze", "acme/unknown"])

    assert excinfo.value.code == 1
    assert "Repository not found" in capsys.readouterr().err


def test_main_rejects_malformed_reference(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["analyze", "widgets"])

    assert excinfo.value.code == 2
    assert "owner/repo" in capsys.readouterr().err


def test_main_reports_invalid_config(tmp_path: Path) -> None:
    (tmp_path / ".repotree.yml").write_text("api:\n  timeout: -1\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--config", str(tmp_path), "analyze", "acme/widgets"])

    assert excinfo.value.code == 1


def test_analyze_accepts_detail_and_expand_options() -> None:
    args = _build_parser().parse_args(
        ["analyze", "acme/widgets", "--detailed", "--expand", "src", "--expand", "src/lib"]
    )
    assert args.detailed is True
    assert args.expand == ["src", "src/lib"]


@pytest.mark.usefixtures("patched_orchestrator")
def test_main_prints_collapsed_tree(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["--config", str(tmp_path), "analyze", "acme/widgets", "-f", "tree", "--expand", "src"])

    assert capsys.readouterr().out.splitlines() == [
        "├── 📝 README.md",
        "├── 📋 package.json",
        "└── 📁 src",
        "    ├── ⚡ index.ts",
        "    └── 📁 lib",
    ]


@pytest.mark.usefixtures("patched_orchestrator")
def test_main_prints_detailed_list(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["--config", str(tmp_path), "analyze", "acme/widgets", "-f", "list", "--filter", "folders", "--detailed"])

    assert capsys.readouterr().out.splitlines() == ["📁 src", "📁 src/lib"]


@pytest.mark.usefixtures("patched_orchestrator")
def test_main_rejects_unknown_folder(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--config", str(tmp_path), "analyze", "acme/widgets", "-f", "tree", "--expand", "docs"])

    assert excinfo.value.code == 2
    assert "'docs' is not a folder" in capsys.readouterr().err
