import pytest

from third_party_summary.config import AuditSettings, load_config


def test_defaults_when_file_missing(tmp_path):
    config = load_config(tmp_path / "config.yaml")
    assert config.audit.throttling_method == "simulate"
    assert config.audit.cpu_slowdown_multiplier == 4.0
    assert config.entities.path is None
    assert config.project_root == tmp_path


def test_load_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "audit:\n"
        "  throttling_method: devtools\n"
        "  cpu_slowdown_multiplier: 6\n"
        "  unknown_key: ignored\n"
        "entities:\n"
        "  path: data/entities.json\n"
    )
    config = load_config(path)
    assert config.audit.throttling_method == "devtools"
    assert config.audit.cpu_slowdown_multiplier == 6
    assert config.resolve_path(config.entities.path) == tmp_path / "data" / "entities.json"


def test_multiplier_only_when_simulated():
    assert AuditSettings("simulate", 4).cpu_multiplier == 4
    assert AuditSettings("devtools", 4).cpu_multiplier == 1
    assert AuditSettings("provided", 4).cpu_multiplier == 1


def test_rejects_unknown_throttling_method():
    with pytest.raises(ValueError):
        AuditSettings(throttling_method="turbo")


def test_rejects_non_positive_multiplier():
    with pytest.raises(ValueError):
        AuditSettings(cpu_slowdown_multiplier=0)


def test_rejects_non_mapping_section(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("audit:\n  - simulate\n")
    with pytest.raises(ValueError):
        load_config(path)


def test_rejects_non_mapping_top_level(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- audit\n- entities\n")
    with pytest.raises(ValueError):
        load_config(path)
