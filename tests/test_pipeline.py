"""End-to-end tests for the tableau pipeline and its configuration."""

import json
from pathlib import Path

import pandas as pd
import pytest
from pydantic import ValidationError

from yoruba_ot.cli import build_config, main, parse_args
from yoruba_ot.config import Config, ConstraintConfig
from yoruba_ot.data import TableauWriter, read_forms_file
from yoruba_ot.models import DEFAULT_SEED, TableauRow
from yoruba_ot.pipeline import TableauPipeline

CONSTRAINT_COLUMNS = [
    "Max", "MaxInitialV", "MaxFinalV", "Dep", "Ident", "Onset", "Syllabify", "SonSeqPr",
]


def read_tableau(path: Path) -> pd.DataFrame:
    return pd.read_csv(path, keep_default_na=False)


class TestConfig:
    """Tests for configuration."""

    def test_defaults(self):
        """All constraints enabled, ranked one through eight."""
        config = Config()
        assert [c.rank for c in config.constraints] == list(range(1, 9))
        assert all(c.enabled for c in config.constraints)
        assert config.generation.seed == DEFAULT_SEED
        assert config.generation.max_deletions is None
        assert config.output.format == "csv"

    def test_config_from_yaml(self, tmp_path):
        """Test loading config from YAML."""
        yaml_content = """
input:
  forms: ["test"]
generation:
  max_deletions: 2
constraints:
  - {name: onset, rank: 1}
  - {name: max, rank: 2, enabled: false}
output:
  output_path: "output/t.json"
  format: json
"""
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml_content)

        config = Config.from_yaml(config_path)
        assert config.input.forms == ["test"]
        assert config.generation.max_deletions == 2
        assert [c.name for c in config.constraints] == ["onset", "max"]
        assert config.constraints[1].enabled is False
        assert config.output.output_path == Path("output/t.json")

    def test_yaml_round_trip(self, tmp_path):
        """Saved configs load back unchanged."""
        config = Config()
        config.input.forms = ["owoktwiowo"]
        config.input.input_file = Path("forms.txt")
        path = tmp_path / "saved.yaml"
        config.to_yaml(path)
        assert Config.from_yaml(path) == config

    def test_repository_config(self):
        """The sample config.yaml loads."""
        config_path = Path(__file__).parent.parent / "config.yaml"

        if config_path.exists():
            config = Config.from_yaml(config_path)
            assert len(config.constraints) == 8

    def test_duplicate_constraints_rejected(self):
        """A constraint can be listed once."""
        with pytest.raises(ValidationError):
            Config(constraints=[ConstraintConfig(name="onset"), ConstraintConfig(name="onset")])

    def test_unknown_constraint_rejected(self):
        """Only known constraint names validate."""
        with pytest.raises(ValidationError):
            ConstraintConfig(name="nocoda")

    def test_negative_seed_rejected(self):
        """Seeds are non-negative."""
        with pytest.raises(ValidationError):
            Config(generation={"seed": -1})


class TestInputReader:
    """Tests for reading underlying forms."""

    def test_txt(self, tmp_path):
        """One form per line, blank lines skipped."""
        path = tmp_path / "forms.txt"
        path.write_text("test\n\n  owoktwiowo \n", encoding="utf-8")
        assert read_forms_file(path) == ["test", "owoktwiowo"]

    def test_csv(self, tmp_path):
        """Forms come from the configured column."""
        path = tmp_path / "forms.csv"
        pd.DataFrame({"word": ["test", "tata"], "gloss": ["x", "y"]}).to_csv(path, index=False)
        assert read_forms_file(path, column="word") == ["test", "tata"]

    def test_csv_missing_column(self, tmp_path):
        """A missing column is reported."""
        path = tmp_path / "forms.csv"
        pd.DataFrame({"word": ["test"]}).to_csv(path, index=False)
        with pytest.raises(ValueError):
            read_forms_file(path)

    def test_json(self, tmp_path):
        """A JSON list of strings."""
        path = tmp_path / "forms.json"
        path.write_text(json.dumps(["test", "owoktwiowo"]), encoding="utf-8")
        assert read_forms_file(path) == ["test", "owoktwiowo"]

    def test_missing_file(self, tmp_path):
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            read_forms_file(tmp_path / "nope.txt")

    def test_unsupported_format(self, tmp_path):
        """Unknown extensions are rejected."""
        path = tmp_path / "forms.xml"
        path.write_text("<forms/>")
        with pytest.raises(ValueError):
            read_forms_file(path)


class TestWriter:
    """Tests for the tableau writer."""

    def test_columns(self, tmp_path):
        """Violations sit between the bookkeeping columns and the total."""
        output_path = tmp_path / "out" / "tableau.csv"
        row = TableauRow(
            input="ta", candidate="t", syllable_parse=".", deleted=1,
            violations={"Max": 4, "Syllabify": 1}, total=5,
        )
        with TableauWriter(output_path) as writer:
            writer.write_row(row)
            assert writer.count == 1

        df = read_tableau(output_path)
        assert list(df.columns) == [
            "input", "candidate", "syllable_parse", "deleted", "Max", "Syllabify", "total",
        ]

    def test_without_parse(self, tmp_path):
        """The parse column can be left out."""
        output_path = tmp_path / "tableau.csv"
        row = TableauRow(input="a", candidate="a", syllable_parse="N", deleted=0)
        with TableauWriter(output_path, include_parse=False) as writer:
            writer.write_row(row)
        assert "syllable_parse" not in read_tableau(output_path).columns

    def test_unsupported_format(self, tmp_path):
        """Unknown formats are rejected up front."""
        with pytest.raises(ValueError):
            TableauWriter(tmp_path / "t.xlsx", format="xlsx")


class TestPipeline:
    """Tests for the main pipeline."""

    def test_tableau(self, tmp_path):
        """One row per deletion subset with a flat-sum total."""
        output_path = tmp_path / "tableau.csv"
        config = Config()
        config.output.output_path = output_path

        row_count = TableauPipeline(config).run(["test"])

        assert row_count == 16
        df = read_tableau(output_path)
        assert len(df) == 16
        for column in ["input", "candidate", "syllable_parse", "deleted", "total"] + CONSTRAINT_COLUMNS:
            assert column in df.columns
        assert (df[CONSTRAINT_COLUMNS].sum(axis=1) == df["total"]).all()

        identity = df.iloc[0]
        assert identity["candidate"] == "test"
        assert identity["deleted"] == 0
        assert identity["total"] == 2  # one stranded t, one e

        emptied = df.iloc[-1]
        assert emptied["candidate"] == ""
        assert emptied["deleted"] == 4
        assert emptied["Max"] == 12
        assert emptied["total"] == 14

    def test_forms_from_config(self, tmp_path):
        """Forms listed in the config and the input file are both used."""
        forms_path = tmp_path / "forms.txt"
        forms_path.write_text("ta\n", encoding="utf-8")
        config = Config()
        config.input.forms = ["a"]
        config.input.input_file = forms_path
        config.output.output_path = tmp_path / "tableau.csv"

        assert TableauPipeline(config).run() == 2 + 4

    def test_disabled_constraints(self, tmp_path):
        """Disabled constraints get no column."""
        config = Config(constraints=[
            ConstraintConfig(name="onset", rank=1),
            ConstraintConfig(name="max", rank=2, enabled=False),
        ])
        config.output.output_path = tmp_path / "tableau.csv"
        TableauPipeline(config).run(["owoktwiowo"])

        df = read_tableau(config.output.output_path)
        assert "Onset" in df.columns
        assert "Max" not in df.columns
        assert df.iloc[0]["Onset"] == 6

    def test_max_deletions(self, tmp_path):
        """Competitors are capped by the number of deletions."""
        config = Config()
        config.generation.max_deletions = 1
        config.output.output_path = tmp_path / "tableau.csv"
        assert TableauPipeline(config).run(["test"]) == 5

    def test_large_form_warning(self, tmp_path, monkeypatch, caplog):
        """Uncapped long forms are flagged, capped ones are not."""
        monkeypatch.setattr("yoruba_ot.pipeline.LARGE_FORM_SEGMENTS", 3)
        config = Config()
        config.output.output_path = tmp_path / "tableau.csv"

        with caplog.at_level("WARNING", logger="yoruba_ot.pipeline"):
            TableauPipeline(config).run(["test"])
        assert "no max_deletions cap" in caplog.text

        caplog.clear()
        config.generation.max_deletions = 1
        with caplog.at_level("WARNING", logger="yoruba_ot.pipeline"):
            TableauPipeline(config).run(["test"])
        assert "no max_deletions cap" not in caplog.text

    def test_json_output(self, tmp_path):
        """JSON tableaux keep the row dictionaries."""
        config = Config()
        config.output.output_path = tmp_path / "tableau.json"
        config.output.format = "json"
        TableauPipeline(config).run(["owo\u0301"])

        with open(config.output.output_path, encoding="utf-8") as f:
            rows = json.load(f)
        assert len(rows) == 8
        assert rows[0]["candidate"] == "owo\u0301"

    def test_no_forms(self, tmp_path):
        """Nothing to evaluate is an error."""
        config = Config()
        config.output.output_path = tmp_path / "tableau.csv"
        with pytest.raises(ValueError):
            TableauPipeline(config).run()


class TestCli:
    """Tests for the command-line interface."""

    def test_default_command_is_evaluate(self):
        """Options without a subcommand go to evaluate."""
        args = parse_args(["--form", "test", "--seed", "3"])
        assert args.command == "evaluate"
        config = build_config(args)
        assert config.input.forms == ["test"]
        assert config.generation.seed == 3

    def test_config_file_then_overrides(self, tmp_path):
        """Command-line values override the config file."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("generation:\n  max_deletions: 3\n")
        args = parse_args(["--config", str(config_path), "--max-deletions", "1"])
        assert build_config(args).generation.max_deletions == 1

    def test_evaluate(self, tmp_path):
        """A full run writes the tableau and exits cleanly."""
        output_path = tmp_path / "tableau.csv"
        assert main(["evaluate", "--form", "ta", "--output", str(output_path)]) == 0
        assert len(read_tableau(output_path)) == 4

    def test_evaluate_without_forms(self, capsys):
        """No forms is a usage error."""
        assert main(["evaluate"]) == 1
        assert "Error" in capsys.readouterr().err

    def test_evaluate_missing_input(self, tmp_path):
        """A missing input file is reported, not raised."""
        assert main(["--input", str(tmp_path / "nope.txt"), "--output", str(tmp_path / "t.csv")]) == 1

    def test_syllabify(self, capsys):
        """Parses are printed one per line."""
        assert main(["syllabify", "test", "owoktwiowo"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == ["test\tONC.", "owoktwiowo\tNONC.ONNON"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
