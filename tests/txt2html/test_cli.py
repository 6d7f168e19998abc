import json
import logging
from pathlib import Path

import pytest

from txt2html import __version__
from txt2html.application.filters import linkify, url_to_image
from txt2html.domain.configuration import ConverterConfig
from txt2html.domain.models import HookRegistry, Stage
from txt2html.presentation.cli.main import apply_cli, build_parser, main


def test_cli_version_output(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0
    assert capsys.readouterr().out.strip() == __version__


def test_build_parser_defaults() -> None:
    args = build_parser().parse_args([])
    assert args.source == "-"
    assert args.destination is None
    assert args.linkify is False
    assert args.images is False
    assert args.verbose == 0


def test_apply_cli_appends_filters_after_config_hooks() -> None:
    config = ConverterConfig(hooks=HookRegistry({Stage.PRE: [str.upper]}))
    args = build_parser().parse_args(["--linkify", "--images", "-t", "Title", "-f", "--no-copy", "-vv"])

    updated = apply_cli(config, args)

    assert updated.hooks.hooks_for(Stage.PRE) == (str.upper, linkify, url_to_image)
    assert updated.title == "Title"
    assert updated.batch.force is True
    assert updated.batch.copy_other_files is False
    assert updated.logging.level == logging.DEBUG


def test_apply_cli_quiet() -> None:
    args = build_parser().parse_args(["-q"])
    assert apply_cli(ConverterConfig(), args).logging.level == logging.ERROR


def test_main_converts_file_to_stdout(tmp_path: Path, capsys) -> None:
    source = tmp_path / "demo.txt"
    source.write_text("Hello & <world>", encoding="utf-8")

    exit_code = main([str(source), "-t", "demo"])

    assert exit_code == 0
    assert capsys.readouterr().out == (
        "<!DOCTYPE html>\n<title>demo</title>\n<pre>Hello &amp; &lt;world&gt;</pre>\n"
    )


def test_main_with_config_and_flags(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps({"title": "Configured", "hooks": {"pre": ["url_to_image"]}}),
        encoding="utf-8",
    )
    source = tmp_path / "page.txt"
    source.write_text("[a] /docs/\n./pic.jpg\n", encoding="utf-8")
    target = tmp_path / "page.html"

    exit_code = main(["-c", str(config_path), "--linkify", str(source), str(target)])

    assert exit_code == 0
    html = target.read_text(encoding="utf-8")
    assert "<title>Configured</title>" in html
    assert '[a] <a href="/docs/">/docs/</a>' in html
    assert '<img src="./pic.jpg">' in html


def test_main_reports_missing_source(tmp_path: Path, caplog) -> None:
    with caplog.at_level(logging.ERROR, logger="txt2html"):
        exit_code = main([str(tmp_path / "missing.txt"), str(tmp_path / "out.html")])
    assert exit_code == 1
    assert "Source not found" in caplog.text


def test_main_reports_bad_config(tmp_path: Path, caplog) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"hooks": {"pre": ["nonexistent"]}}), encoding="utf-8")
    with caplog.at_level(logging.ERROR, logger="txt2html"):
        exit_code = main(["-c", str(config_path)])
    assert exit_code == 1
    assert "Unknown hook 'nonexistent'" in caplog.text


@pytest.mark.parametrize(
    "config_text",
    ["batch: [1, 2]\n", "hooks:\n  pre: 5\n", "logging: verbose\n"],
)
def test_main_exits_cleanly_on_wrongly_typed_config(tmp_path: Path, config_text: str) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(config_text, encoding="utf-8")
    source = tmp_path / "a.txt"
    source.write_text("x", encoding="utf-8")

    exit_code = main(["-c", str(config_path), str(source), str(tmp_path / "a.html")])

    assert exit_code == 1


def test_main_writes_undecodable_bytes_to_stdout(tmp_path: Path, capsysbinary) -> None:
    source = tmp_path / "latin1.txt"
    source.write_bytes(b"caf\xe9 & cr\xe8me\r\n")

    exit_code = main([str(source), "-t", "menu"])

    assert exit_code == 0
    assert capsysbinary.readouterr().out == (
        b"<!DOCTYPE html>\n<title>menu</title>\n<pre>caf\xe9 &amp; cr\xe8me\r</pre>\n"
    )
