from __future__ import annotations

import pytest
from pydantic import ValidationError

from afrotech.core.config.loader import DEFAULT_QUICK_ACTIONS, TenantConfig, load_config


def test_load_config_defaults_without_file() -> None:
    cfg = load_config()
    assert isinstance(cfg, TenantConfig)
    assert cfg.branding.agency_name == "Afro-Tech AI Command"
    assert [action.title for action in cfg.quick_actions] == [action.title for action in DEFAULT_QUICK_ACTIONS]


def test_load_config_from_yaml(tmp_path, monkeypatch) -> None:
    sample = tmp_path / "tenant.yaml"
    sample.write_text(
        "branding:\n"
        "  agency_name: Lagos Growth Co\n"
        "default_compliance_level: GDPR\n"
        "power_ups:\n"
        "  - name: Competitor scan\n"
        "    prompt_template: Research {competitor} in {market}\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("AFROTECH_CONFIG_PATH", str(sample))

    cfg = load_config()

    assert cfg.branding.agency_name == "Lagos Growth Co"
    assert cfg.default_compliance_level == "GDPR"
    assert cfg.power_ups[0].prompt_template == "Research {competitor} in {market}"
    assert cfg.quick_actions


def test_load_config_rejects_unknown_compliance_level(tmp_path) -> None:
    sample = tmp_path / "tenant.yaml"
    sample.write_text("default_compliance_level: ISO9001\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_config(str(sample))
