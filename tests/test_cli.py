"""Tests for the nestedstruct command-line interface."""

import io
import json

import pytest

from nestedstruct.cli import main

SOURCE = """
#[derive(Clone)]
pub struct Config {
    @nested(#[derive(Clone)])
    pub server: {
        host: String,
        port: u16,
    },
}
"""


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "config.rs"
    path.write_text(SOURCE)
    return path


class TestCLI:
    """Command-line behaviour."""

    def test_prints_generated_code(self, source_file, capsys):
        main([str(source_file)])
        out = capsys.readouterr().out
        assert "pub struct Config {" in out
        assert "    pub server: ConfigServer," in out
        assert "#[derive(Clone)]\npub struct ConfigServer {" in out

    def test_reads_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("struct S { a: { b: u8 } }"))
        main([])
        out = capsys.readouterr().out
        assert "struct SA {" in out

    def test_json_output(self, source_file, capsys):
        main([str(source_file), "--json"])
        output = json.loads(capsys.readouterr().out)
        assert output["status"] == "success"
        assert output["struct"] == "Config"
        assert [d["name"] for d in output["declarations"]] == ["Config", "ConfigServer"]
        assert output["code"].startswith("#[derive(Clone)]")

    def test_output_file(self, source_file, tmp_path, capsys):
        target = tmp_path / "out" / "generated.rs"
        main([str(source_file), "--output", str(target), "--indent", "2"])
        assert capsys.readouterr().out == ""
        assert "  host: String," in target.read_text()

    def test_anonymous_nesting_flag(self, source_file, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([str(source_file), "--anonymous-nesting", "disabled"])
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert f"{source_file}:5:17: ConfigurationError:" in err

    def test_json_error(self, tmp_path, capsys):
        path = tmp_path / "bad.rs"
        path.write_text("struct S {\n    a u8\n}")
        with pytest.raises(SystemExit) as exc_info:
            main([str(path), "--json"])
        assert exc_info.value.code == 1
        output = json.loads(capsys.readouterr().out)
        assert output["status"] == "error"
        assert output["error_type"] == "StructSyntaxError"
        assert (output["line"], output["column"]) == (2, 7)
        assert output["field"] == "a"

    def test_marker_position_flag(self, tmp_path, capsys):
        path = tmp_path / "before.rs"
        path.write_text('struct S { @nested(#[derive(Clone)]) #[doc = "a"] x: X { y: u8 } }')
        with pytest.raises(SystemExit):
            main([str(path)])
        assert "AttributeOrderError" in capsys.readouterr().err

        main([str(path), "--marker-position", "before"])
        assert "#[derive(Clone)]\nstruct X {" in capsys.readouterr().out

    def test_missing_input_file(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "missing.rs")])
        assert exc_info.value.code == 1

    def test_invalid_config_file(self, source_file, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("output:\n  indent: 0\n")
        with pytest.raises(SystemExit) as exc_info:
            main([str(source_file), "--config", str(config_file)])
        assert exc_info.value.code == 2

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "nestedstruct 1.0.0" in capsys.readouterr().out
