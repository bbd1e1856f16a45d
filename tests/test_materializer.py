# tests/test_materializer.py
import os
from pathlib import Path

import pytest

from vsxgen.core.errors import ConfigError
from vsxgen.rendering import materializer
from vsxgen.rendering.materializer import materialize, output_path_for
from vsxgen.settings import Settings


def _tree(root: Path) -> dict:
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def workspace(tmp_path, write_config):
    config_dir = tmp_path / "config"
    write_config(config_dir, {"title": "Hello", "name": "my-ext", "version": "1.2.3"})

    template = tmp_path / "template"
    (template / "src" / "nested").mkdir(parents=True)
    (template / "greet.txt.ejs").write_text("Hello <%= title %>", encoding="utf-8")
    (template / "package.json.ejs").write_text(
        '{"name": "<%= name %>", "version": "<%= version %>"}\n', encoding="utf-8"
    )
    (template / "src" / "extension.ts").write_text("export {}\n", encoding="utf-8")
    (template / "src" / "nested" / "logo.bin").write_bytes(bytes(range(256)))
    (template / "empty").mkdir()
    return config_dir, template


def test_renders_greeting_scenario(tmp_path, workspace):
    config_dir, template = workspace
    out = tmp_path / "out"

    report = materialize(config_dir, template, out)

    assert (out / "greet.txt").read_text(encoding="utf-8") == "Hello Hello"
    assert not (out / "greet.txt.ejs").exists()
    assert report.ok
    assert report.icon_job is None


def test_templates_lose_suffix_and_get_values(tmp_path, workspace):
    config_dir, template = workspace
    out = tmp_path / "out"

    report = materialize(config_dir, template, out)

    assert (out / "package.json").read_text(encoding="utf-8") == (
        '{"name": "my-ext", "version": "1.2.3"}\n'
    )
    assert sorted(p.name for p in report.rendered) == ["greet.txt", "package.json"]


def test_other_files_are_byte_identical(tmp_path, workspace):
    config_dir, template = workspace
    out = tmp_path / "out"

    materialize(config_dir, template, out)

    for rel in ("src/extension.ts", "src/nested/logo.bin"):
        assert (out / rel).read_bytes() == (template / rel).read_bytes()
    assert (out / "empty").is_dir()


def test_runs_are_identical(tmp_path, workspace):
    config_dir, template = workspace

    materialize(config_dir, template, tmp_path / "first")
    materialize(config_dir, template, tmp_path / "second")

    assert _tree(tmp_path / "first") == _tree(tmp_path / "second")


def test_render_failure_does_not_stop_walk(tmp_path, workspace):
    config_dir, template = workspace
    (template / "broken.md.ejs").write_text("<%= missing_key %>", encoding="utf-8")
    out = tmp_path / "out"

    report = materialize(config_dir, template, out)

    assert not report.ok
    assert [rel for rel, _ in report.failures] == [Path("broken.md.ejs")]
    assert not (out / "broken.md").exists()
    assert (out / "greet.txt").exists()
    assert (out / "src" / "extension.ts").exists()


def test_missing_input_dir_is_created_and_empty(tmp_path, write_config):
    config_dir = tmp_path / "config"
    write_config(config_dir, {})
    template = tmp_path / "does-not-exist"
    out = tmp_path / "out"

    report = materialize(config_dir, template, out)

    assert template.is_dir()
    assert out.is_dir()
    assert list(out.iterdir()) == []
    assert report.rendered == [] and report.copied == []


def test_missing_config_raises(tmp_path):
    with pytest.raises(ConfigError):
        materialize(tmp_path, tmp_path / "template", tmp_path / "out")


def test_custom_template_suffix(tmp_path, write_config):
    config_dir = tmp_path / "config"
    write_config(config_dir, {"who": "world"})
    template = tmp_path / "template"
    template.mkdir()
    (template / "hi.txt.tpl").write_text("hi <%= who %>", encoding="utf-8")
    (template / "keep.txt.ejs").write_text("<%= who %>", encoding="utf-8")
    out = tmp_path / "out"

    materialize(config_dir, template, out, settings=Settings(template_suffix=".tpl"))

    assert (out / "hi.txt").read_text(encoding="utf-8") == "hi world"
    assert (out / "keep.txt.ejs").read_text(encoding="utf-8") == "<%= who %>"


@pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
def test_rendered_file_keeps_template_mode(tmp_path, write_config):
    config_dir = tmp_path / "config"
    write_config(config_dir, {"cmd": "echo hi"})
    template = tmp_path / "template"
    template.mkdir()
    script = template / "run.sh.ejs"
    script.write_text("#!/bin/sh\n<%= cmd %>\n", encoding="utf-8")
    script.chmod(0o755)
    out = tmp_path / "out"

    materialize(config_dir, template, out)

    assert (out / "run.sh").stat().st_mode & 0o777 == 0o755


def test_output_path_for():
    base = Path("out")
    assert output_path_for(Path("a/b.json.ejs"), base, ".ejs") == Path("out/a/b.json")
    assert output_path_for(Path("a/b.json"), base, ".ejs") == Path("out/a/b.json")
    assert output_path_for(Path(".ejs"), base, ".ejs") == Path("out/.ejs")


class FakeProcess:
    instances = []

    def __init__(self, cmd, *, label, on_exit=None):
        self.args = list(cmd)
        self.label = label
        self.on_exit = on_exit
        FakeProcess.instances.append(self)

    def wait(self, timeout=None):
        return 0


@pytest.fixture
def fake_process(monkeypatch):
    FakeProcess.instances = []
    monkeypatch.setattr(materializer, "BackgroundProcess", FakeProcess)
    return FakeProcess


def test_icon_spawned_when_configured(tmp_path, write_config, glyph_svg, fake_process):
    config_dir = glyph_svg.parent
    write_config(config_dir, {"icon": {"background": ["#FF0000", "#0000FF"]}})
    out = tmp_path / "out"

    report = materialize(config_dir, tmp_path / "template", out)

    assert report.icon_job is fake_process.instances[0]
    args = report.icon_job.args
    assert args[1:3] == ["-m", "vsxgen.cli.icon"]
    assert args[3:] == ["#FF0000", "#0000FF", str(glyph_svg), str(out / "icon.png")]
    assert report.icon_job.label == "icon"


def test_icon_skipped_without_glyph(tmp_path, write_config, fake_process, caplog):
    config_dir = tmp_path / "config"
    write_config(config_dir, {"icon": {"background": ["#FF0000", "#0000FF"]}})

    with caplog.at_level("INFO"):
        report = materialize(config_dir, tmp_path / "template", tmp_path / "out")

    assert report.icon_job is None
    assert fake_process.instances == []
    assert "glyph.svg not found" in caplog.text


def test_icon_skipped_without_background(tmp_path, write_config, glyph_svg, fake_process, caplog):
    write_config(glyph_svg.parent, {"icon": {"background": ["#FF0000"]}})

    with caplog.at_level("INFO"):
        report = materialize(glyph_svg.parent, tmp_path / "template", tmp_path / "out")

    assert report.icon_job is None
    assert "icon background colors not found" in caplog.text
