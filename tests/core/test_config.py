import pytest

from boagent import config
from boagent.common import ConfigurationError
from boagent.config import PROFILES, boagent_config, default_params


@pytest.fixture
def clean_config(monkeypatch):
    """Ignores user config files and BOAGENT_* environment variables"""
    monkeypatch.setattr(
        config,
        "BOAGENT_CONFIG",
        {config.CONFIG_KEY_PROFILE: "default", config.CONFIG_KEY_LOG_LEVEL: "WARNING"},
    )
    for key in list(PROFILES["default"].keys()) + ["PROFILE", "LOG_LEVEL"]:
        monkeypatch.delenv(f"BOAGENT_{key}", raising=False)
    return monkeypatch


def test_default_profile(clean_config):
    params = default_params()
    assert params == {
        "e": 0.2,
        "k": 0.2,
        "alpha": 0.3,
        "T": 1.0,
        "a": 1.0,
        "b": 0.0,
        "l": 0.2,
        "roundToUpdate": 4,
        "numberOfRounds": 3,
        "t": 1.1,
        "w": 0.5,
        "r": 0.1,
    }
    assert isinstance(params["roundToUpdate"], int)


def test_no_reservation_profile(clean_config):
    params = default_params("no-reservation")
    assert params["r"] == 0.0
    assert {k: v for k, v in params.items() if k != "r"} == {
        k: v for k, v in default_params("default").items() if k != "r"
    }


def test_unknown_profile(clean_config):
    with pytest.raises(ConfigurationError):
        default_params("aggressive")


def test_environment_overrides(clean_config):
    clean_config.setenv("BOAGENT_e", "0.5")
    clean_config.setenv("BOAGENT_roundToUpdate", "6")
    clean_config.setenv("BOAGENT_T", "0.9")
    params = default_params()
    assert params["e"] == 0.5
    assert params["roundToUpdate"] == 6
    assert params["T"] == 0.9
    # `t` and `T` are different parameters
    assert params["t"] == 1.1


def test_profile_from_environment(clean_config):
    clean_config.setenv("BOAGENT_PROFILE", "no-reservation")
    assert boagent_config(config.CONFIG_KEY_PROFILE, "default") == "no-reservation"
    assert default_params()["r"] == 0.0


def test_config_file_values(clean_config):
    config.BOAGENT_CONFIG["w"] = 0.8
    assert default_params()["w"] == 0.8


def test_invalid_values(clean_config):
    clean_config.setenv("BOAGENT_w", "heavy")
    with pytest.raises(ConfigurationError):
        default_params()


def test_unreadable_config_files_warn(tmp_path, clean_config):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    from boagent.warnings import BoagentIOWarning

    with pytest.warns(BoagentIOWarning):
        config._load(path)
    config._load(tmp_path / "missing.json")


def test_config_files_are_loaded(tmp_path, clean_config):
    path = tmp_path / "config.json"
    path.write_text('{"profile": "no-reservation", "e": 0.4}')
    config._load(path)
    params = default_params()
    assert params["e"] == 0.4
    assert params["r"] == 0.0
