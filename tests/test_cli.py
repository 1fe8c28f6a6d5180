import asyncio
import json

from third_party_summary.cli import main, parse_args

from conftest import GA_URL


def _artifacts(tmp_path):
    path = tmp_path / "artifacts.json"
    path.write_text(json.dumps({
        "networkRecords": [{"url": GA_URL, "transferSize": 2048, "resourceType": "Script"}],
        "mainThreadTasks": [{"selfTime": 25, "attributableURLs": [GA_URL]}],
    }))
    return path


def test_json_output(tmp_path, capsys):
    args = parse_args([
        str(_artifacts(tmp_path)), "--config", str(tmp_path / "config.yaml"),
        "--throttling-method", "simulate", "--cpu-multiplier", "2", "--json",
    ])
    assert asyncio.run(main(args)) == 0

    out = json.loads(capsys.readouterr().out)
    assert out["id"] == "third-party-summary"
    assert out["score"] == 0
    assert out["details"]["items"][0]["mainThreadTime"] == 50
    assert out["details"]["summary"]["wastedBytes"] == 2048


def test_table_output(tmp_path, capsys):
    args = parse_args([str(_artifacts(tmp_path)), "--config", str(tmp_path / "config.yaml")])
    assert asyncio.run(main(args)) == 0
    out = capsys.readouterr().out
    assert "Google Analytics" in out
    assert "2.0 KiB" in out


def test_missing_artifacts_exit_code(tmp_path):
    args = parse_args([str(tmp_path / "missing.json"), "--config", str(tmp_path / "config.yaml")])
    assert asyncio.run(main(args)) == 1


def test_bad_config_exit_code(tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text("audit:\n  throttling_method: turbo\n")
    args = parse_args([str(_artifacts(tmp_path)), "--config", str(config)])
    assert asyncio.run(main(args)) == 1


def test_non_mapping_config_exit_code(tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text("audit:\n  - simulate\n")
    args = parse_args([str(_artifacts(tmp_path)), "--config", str(config)])
    assert asyncio.run(main(args)) == 1


def test_undecodable_artifacts_exit_code(tmp_path):
    path = tmp_path / "artifacts.json"
    path.write_bytes(b'{"networkRecords": [{"url": "\xff\xfe"}], "mainThreadTasks": []}')
    args = parse_args([str(path), "--config", str(tmp_path / "config.yaml")])
    assert asyncio.run(main(args)) == 1
