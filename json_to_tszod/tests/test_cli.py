"""
Tests for the json_to_tszod command line interface.
"""

from __future__ import annotations

import json

from click.testing import CliRunner

from json_to_tszod.json_to_tszod import json_to_tszod
from json_to_tszod.samples import SAMPLES


class TestCli:
    """Test cases for the click command"""

    def test_sample_to_stdout(self):
        """Test converting a built-in sample to stdout"""
        result = CliRunner().invoke(json_to_tszod, ["--sample", "simple-user-profile"])

        assert result.exit_code == 0, result.output
        assert "// ---- types.ts ----" in result.output
        assert "// ---- schema.ts ----" in result.output
        assert "// ---- example.ts ----" in result.output
        assert "export type Root = {" in result.output
        assert "export const rootSchema = z.object({" in result.output

    def test_file_input(self, tmp_path):
        """Test converting a JSON file"""
        path = tmp_path / "user.json"
        path.write_text('{"id": 1, "tags": ["a"]}')

        result = CliRunner().invoke(json_to_tszod, [str(path), "--name", "User", "--style", "interface"])

        assert result.exit_code == 0, result.output
        assert "export interface User {" in result.output
        assert "  tags: string[];" in result.output

    def test_stdin_input(self):
        """Test reading JSON from stdin"""
        result = CliRunner().invoke(json_to_tszod, [], input='[{"id": 1}, {"id": 2, "name": "x"}]')

        assert result.exit_code == 0, result.output
        assert "  name?: string;" in result.output
        assert "export type Root = Item[];" in result.output

    def test_dash_reads_stdin(self):
        """Test that '-' reads stdin"""
        result = CliRunner().invoke(json_to_tszod, ["-"], input='{"id": 1}')
        assert result.exit_code == 0, result.output

    def test_invalid_json_fails(self, tmp_path):
        """Test that parse errors give a non-zero exit with diagnostics"""
        path = tmp_path / "broken.json"
        path.write_text("{invalid}")

        result = CliRunner().invoke(json_to_tszod, [str(path)])

        assert result.exit_code != 0
        assert "JSON parse error (line 1, column 2)" in result.output
        assert "Conversion failed" in result.output

    def test_primitive_root_fails(self):
        """Test that a primitive root is rejected"""
        result = CliRunner().invoke(json_to_tszod, [], input="42")

        assert result.exit_code != 0
        assert "Root value must be an object or array." in result.output

    def test_flags(self):
        """Test the generation flags"""
        result = CliRunner().invoke(
            json_to_tszod,
            ["--sample", "nullables-and-dates", "--detect-dates", "--strict", "--snake-to-camel"],
        )

        assert result.exit_code == 0, result.output
        assert "  createdAt: string;" in result.output
        assert "  created_at: z.string().datetime()," in result.output
        assert "}).strict();" in result.output
        assert "  deletedAt: unknown | null;" in result.output

    def test_config_file(self, tmp_path):
        """Test loading settings from a JSON config file"""
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"rootTypeName": "Payload", "strictObjects": True}))

        result = CliRunner().invoke(json_to_tszod, ["--config", str(config)], input='{"id": 1}')

        assert result.exit_code == 0, result.output
        assert "export type Payload = {" in result.output
        assert "}).strict();" in result.output

    def test_flags_override_config(self, tmp_path):
        """Test that command line flags win over the config file"""
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"rootTypeName": "Payload"}))

        result = CliRunner().invoke(json_to_tszod, ["--config", str(config), "--name", "Order"], input='{"id": 1}')

        assert result.exit_code == 0, result.output
        assert "export type Order = {" in result.output

    def test_output_dir(self, tmp_path):
        """Test writing the three files with a generation header"""
        out = tmp_path / "generated"

        result = CliRunner().invoke(json_to_tszod, ["--sample", "ecommerce-order", "--output-dir", str(out)])

        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in out.iterdir()) == ["example.ts", "schema.ts", "types.ts"]

        types = (out / "types.ts").read_text()
        assert types.startswith("// Generated by json_to_tszod: json_to_tszod")
        assert "--sample ecommerce-order" in types.splitlines()[0]
        assert "// Do not edit by hand." in types
        assert "export type Root = {" in types
        assert "Wrote 3 files to" in result.output

    def test_list_samples(self):
        """Test listing the built-in samples"""
        result = CliRunner().invoke(json_to_tszod, ["--list-samples"])

        assert result.exit_code == 0
        for sample in SAMPLES:
            assert f"{sample.name}: {sample.description}" in result.output

    def test_unknown_sample(self):
        """Test that unknown sample names are rejected by click"""
        result = CliRunner().invoke(json_to_tszod, ["--sample", "nope"])
        assert result.exit_code == 2

    def test_invalid_config_value(self, tmp_path):
        """Test that a bad setting in the config file is a usage error"""
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"outputStyle": "bogus"}))

        result = CliRunner().invoke(json_to_tszod, ["--config", str(config)], input='{"id": 1}')

        assert result.exit_code == 2
        assert "Invalid value" in result.output
        assert "--config" in result.output
        assert "'bogus' is not a valid OutputStyle" in result.output

    def test_config_with_unknown_formatter_keys(self, tmp_path):
        """Test that unrecognized formatter options do not break loading"""
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"formatter": {"enabled": False, "singleQuote": True}}))

        result = CliRunner().invoke(json_to_tszod, ["--config", str(config)], input='{"id": 1}')

        assert result.exit_code == 0, result.output
        assert "export type Root = {" in result.output
