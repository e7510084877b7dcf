import json
from pathlib import Path

import yaml
from click.testing import CliRunner

from har_openapi.cli import main

FIXTURES = Path(__file__).parent / "fixtures"


class TestCliGenerate:
    def test_generate_yaml(self, tmp_path):
        output_file = tmp_path / "openapi.yaml"
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(FIXTURES / "sample.har"),
            "-o", str(output_file),
        ])

        assert result.exit_code == 0, result.output
        doc = yaml.safe_load(output_file.read_text(encoding="utf-8"))
        assert doc["openapi"] == "3.0.3"
        assert doc["servers"] == [{"url": "https://app.example.com/api"}]
        assert doc["paths"]["/clients/{id}"]["get"]["operationId"] == "getClient"
        assert "GetClientResponse" in doc["components"]["schemas"]
        assert "security" not in doc

    def test_generate_json_with_cookie(self, tmp_path):
        output_file = tmp_path / "openapi.json"
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(FIXTURES / "sample.har"),
            "-o", str(output_file),
            "--cookie", "sessid",
        ])

        assert result.exit_code == 0, result.output
        doc = json.loads(output_file.read_text(encoding="utf-8"))
        assert doc["security"] == [{"Session": []}]
        assert doc["components"]["securitySchemes"]["Session"]["name"] == "sessid"

    def test_generate_with_rules_and_root_segments(self, tmp_path):
        rules_file = tmp_path / "rules.yaml"
        rules_file.write_text("plain_string_substrings: []\n")
        output_file = tmp_path / "openapi.yaml"
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(FIXTURES / "sample.har"),
            "-o", str(output_file),
            "--rules", str(rules_file),
            "--root-segments", "1",
        ])

        assert result.exit_code == 0, result.output
        doc = yaml.safe_load(output_file.read_text(encoding="utf-8"))
        assert "/api/clients/{id}" in doc["paths"]
        assert doc["components"]["schemas"]["Address"]["properties"]["zip"]["format"] == "decimal"

    def test_generate_default_output(self, tmp_path):
        runner = CliRunner()
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(main, ["generate", str(FIXTURES / "vendors.har")])
            assert result.exit_code == 0, result.output
            assert Path("openapi.yaml").exists()

    def test_generate_invalid_har(self, tmp_path):
        har_file = tmp_path / "broken.har"
        har_file.write_text("[]")
        runner = CliRunner()
        result = runner.invoke(main, ["generate", str(har_file), "-o", str(tmp_path / "out.yaml")])

        assert result.exit_code != 0
        assert "missing log.entries" in result.output

    def test_generate_invalid_rules(self, tmp_path):
        rules_file = tmp_path / "rules.yaml"
        rules_file.write_text("date_pattern: '(date'\n")
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(FIXTURES / "sample.har"),
            "-o", str(tmp_path / "out.yaml"),
            "--rules", str(rules_file),
        ])

        assert result.exit_code != 0
        assert "date_pattern" in result.output


class TestCliFilter:
    def test_filter_to_file(self, tmp_path):
        output_file = tmp_path / "api.har"
        runner = CliRunner()
        result = runner.invoke(main, [
            "filter", str(FIXTURES / "vendors.har"), "/api",
            "-e", "/api/vendors/2",
            "-o", str(output_file),
        ])

        assert result.exit_code == 0, result.output
        har = json.loads(output_file.read_text(encoding="utf-8"))
        assert [e["request"]["url"] for e in har["log"]["entries"]] == ["https://app.example.com/api/vendors/1"]

    def test_filter_to_stdout(self):
        runner = CliRunner()
        result = runner.invoke(main, ["filter", str(FIXTURES / "vendors.har"), "/static"])

        assert result.exit_code == 0
        har = json.loads(result.output)
        assert len(har["log"]["entries"]) == 1


class TestCliMerge:
    def test_merge_har(self, tmp_path):
        output_file = tmp_path / "all.har"
        runner = CliRunner()
        result = runner.invoke(main, [
            "merge", str(FIXTURES / "sample.har"), str(FIXTURES / "vendors.har"),
            "-o", str(output_file),
        ])

        assert result.exit_code == 0, result.output
        har = json.loads(output_file.read_text(encoding="utf-8"))
        assert len(har["log"]["entries"]) == 10

    def test_merge_requires_files(self):
        runner = CliRunner()
        result = runner.invoke(main, ["merge"])
        assert result.exit_code != 0


class TestCliSpecTools:
    def _generate(self, har_file: Path, output: Path) -> None:
        result = CliRunner().invoke(main, ["generate", str(har_file), "-o", str(output)])
        assert result.exit_code == 0, result.output

    def test_merge_spec(self, tmp_path):
        first = tmp_path / "sample.yaml"
        second = tmp_path / "vendors.yaml"
        self._generate(FIXTURES / "sample.har", first)
        self._generate(FIXTURES / "vendors.har", second)

        output_file = tmp_path / "merged.yaml"
        result = CliRunner().invoke(main, ["merge-spec", str(first), str(second), "-o", str(output_file)])

        assert result.exit_code == 0, result.output
        doc = yaml.safe_load(output_file.read_text(encoding="utf-8"))
        assert "/clients/{id}" in doc["paths"]
        assert "/vendors/{id}" in doc["paths"]
        assert doc["servers"] == [{"url": "https://app.example.com/api"}]

    def test_sort_in_place(self, tmp_path):
        spec_file = tmp_path / "openapi.yaml"
        self._generate(FIXTURES / "sample.har", spec_file)

        result = CliRunner().invoke(main, ["sort", str(spec_file)])

        assert result.exit_code == 0, result.output
        doc = yaml.safe_load(spec_file.read_text(encoding="utf-8"))
        assert list(doc["components"]["schemas"]) == sorted(doc["components"]["schemas"])
        assert list(doc["paths"]) == sorted(doc["paths"])

    def test_sort_rejects_non_document(self, tmp_path):
        spec_file = tmp_path / "openapi.yaml"
        spec_file.write_text("- not\n- a document\n")
        result = CliRunner().invoke(main, ["sort", str(spec_file)])

        assert result.exit_code != 0
        assert "not an OpenAPI document" in result.output
