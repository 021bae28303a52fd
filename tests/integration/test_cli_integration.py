from __future__ import annotations

from unittest.mock import patch

import pytest
import yaml
from click.testing import CliRunner

from readsieve import __version__
from readsieve.cli import cli
from readsieve.cli.exit_codes import EXIT_ERROR, EXIT_USAGE


def fastq_ids(text: str) -> list[str]:
    return [line.split()[0][1:] for line in text.splitlines()[::4]]


@pytest.fixture
def fastq_text(data_dir) -> str:
    return (data_dir / "test.fastq").read_text()


@pytest.mark.integration
def test_cli_version() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert result.output == f"readsieve {__version__}\n"


@pytest.mark.integration
def test_cli_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["-h"])
    assert result.exit_code == 0
    assert "Filtering and trimming of fastq files" in result.output
    for flag in ("--quality", "--minlength", "--maxlength", "--headcrop", "--tailcrop",
                 "--threads", "--contam"):
        assert flag in result.output


@pytest.mark.integration
def test_cli_trims_single_record() -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["-q", "0", "-l", "5", "--maxlength", "20", "--headcrop", "2", "--tailcrop", "2"],
        input="@r1\nACGTACGTAC\n+\n??????????\n",
    )
    assert result.exit_code == 0
    assert result.stdout == "@r1\nGTACGT\n+\n??????\n"


@pytest.mark.integration
def test_cli_defaults_pass_everything(fastq_text) -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["-t", "1"], input=fastq_text)
    assert result.exit_code == 0
    assert result.stdout == fastq_text


@pytest.mark.integration
def test_cli_filters_quality_and_length(fastq_text) -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["-q", "10", "-l", "10", "-t", "3"], input=fastq_text)
    assert result.exit_code == 0
    assert sorted(fastq_ids(result.stdout)) == ["read1", "read4", "read5"]
    assert "@read1 runid=a1 ch=12\n" in result.stdout


@pytest.mark.integration
def test_cli_verbose_summary_goes_to_stderr(fastq_text) -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["-v", "-q", "10"], input=fastq_text)
    assert result.exit_code == 0
    assert "Filtered: 4 kept, 1 removed" in result.output
    assert "Filtered:" not in result.stdout


@pytest.mark.integration
def test_cli_empty_input() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, [], input="")
    assert result.exit_code == 0
    assert result.stdout == ""


@pytest.mark.integration
def test_cli_malformed_input_fails() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, [], input="@r1\nACGT\n+\nII\n")
    assert result.exit_code == EXIT_ERROR
    assert "ERROR" in result.output


@pytest.mark.integration
def test_cli_missing_contam_file_is_usage_error(tmp_path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["-c", str(tmp_path / "missing.fa")], input="")
    assert result.exit_code == EXIT_USAGE
    assert "--contam" in result.output


@pytest.mark.integration
def test_cli_rejects_negative_crop() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--headcrop", "-1"], input="")
    assert result.exit_code == EXIT_USAGE


@pytest.mark.integration
def test_cli_screens_contaminants(data_dir, fastq_text, scripted_aligner) -> None:
    aligner = scripted_aligner(contaminants={"GATTACAGATTACA"})
    runner = CliRunner()
    with patch("readsieve.core.pipeline.MappyAligner", return_value=aligner):
        result = runner.invoke(
            cli, ["-c", str(data_dir / "contaminants.fasta"), "-t", "8"], input=fastq_text
        )
    assert result.exit_code == 0
    assert fastq_ids(result.stdout) == ["read1", "read2", "read3", "read5"]
    assert aligner.built == [data_dir / "contaminants.fasta"]


@pytest.mark.integration
def test_cli_config_file_values(tmp_path, fastq_text) -> None:
    config_path = tmp_path / "readsieve.yaml"
    config_path.write_text(yaml.dump({"filter": {"minqual": 10, "headcrop": 2}}))
    runner = CliRunner()

    result = runner.invoke(cli, ["--config", str(config_path), "-t", "1"], input=fastq_text)

    assert result.exit_code == 0
    assert fastq_ids(result.stdout) == ["read1", "read3", "read4", "read5"]
    assert "\nGTACGTACGTACGTACGT\n" in result.stdout


@pytest.mark.integration
def test_cli_flags_override_config_file(tmp_path, fastq_text) -> None:
    config_path = tmp_path / "readsieve.yaml"
    config_path.write_text(yaml.dump({"filter": {"minqual": 10, "headcrop": 2}}))
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["--config", str(config_path), "-q", "0", "--headcrop", "0", "-t", "1"],
        input=fastq_text,
    )

    assert result.exit_code == 0
    assert result.stdout == fastq_text


@pytest.mark.integration
def test_cli_config_file_with_missing_contam(tmp_path) -> None:
    config_path = tmp_path / "readsieve.yaml"
    config_path.write_text(yaml.dump({"filter": {"contam": str(tmp_path / "nope.fa")}}))
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(config_path)], input="")
    assert result.exit_code == EXIT_ERROR
    assert "is invalid" in result.output


@pytest.mark.integration
def test_cli_unknown_config_key(tmp_path) -> None:
    config_path = tmp_path / "readsieve.yaml"
    config_path.write_text("filter:\n  quality: 3\n")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(config_path)], input="")
    assert result.exit_code == EXIT_ERROR
    assert "filter.quality" in result.output


@pytest.mark.integration
def test_init_config_stdout() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["init-config", "--stdout"])
    assert result.exit_code == 0
    assert "filter:" in result.output
    assert "minqual:" in result.output


@pytest.mark.integration
def test_init_config_output_file() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        result = runner.invoke(cli, ["init-config", "--output-file", "custom.yaml"])
        assert result.exit_code == 0
        contents = open("custom.yaml", encoding="utf-8").read()
        assert "headcrop:" in contents


@pytest.mark.integration
def test_main_returns_exit_codes(tmp_path, capsys) -> None:
    from readsieve.cli.main import main

    assert main(["--version"]) == 0
    assert main(["-c", str(tmp_path / "missing.fa")]) == EXIT_USAGE
    capsys.readouterr()


@pytest.mark.integration
@pytest.mark.parametrize(
    "config_text,message",
    [
        ('filter:\n  minqual: "abc"\n', "minqual must be a number"),
        ("filter: 5\n", "must be a mapping"),
        ("filter:\n  threads: true\n", "threads must be an integer"),
    ],
)
def test_cli_bad_config_value_fails_before_reading(tmp_path, config_text, message) -> None:
    config_path = tmp_path / "readsieve.yaml"
    config_path.write_text(config_text)
    runner = CliRunner()
    result = runner.invoke(
        cli, ["--config", str(config_path)], input="@r1\nACGT\n+\nIIII\n"
    )
    assert result.exit_code == EXIT_ERROR
    assert result.stdout == ""
    assert message in result.output
    assert "Unexpected error" not in result.output
