import pytest
from omegaconf import OmegaConf

from cachematrix.config import SolverConfig
from cachematrix.matrix import DEFAULT_RCOND_TOLERANCE


def test_defaults():
    config = SolverConfig()

    assert config.as_dict() == {
        "method": "inv",
        "rcond_tolerance": DEFAULT_RCOND_TOLERANCE,
        "validate_on_set": True,
        "log_cache_hits": True,
    }


def test_from_omegaconf_casts_and_normalises():
    cfg = OmegaConf.create(
        {"method": " LU ", "rcond_tolerance": "1e-12", "validate_on_set": "no"}
    )

    config = SolverConfig.from_omegaconf(cfg)

    assert config.method == "lu"
    assert config.rcond_tolerance == pytest.approx(1e-12)
    assert config.validate_on_set is False
    assert config.log_cache_hits is True


def test_from_omegaconf_accepts_none_and_mappings():
    assert SolverConfig.from_omegaconf(None).method == "inv"
    assert SolverConfig.from_omegaconf({"method": "gauss_jordan"}).method == "gauss_jordan"


def test_from_omegaconf_rejects_non_mapping():
    with pytest.raises(TypeError):
        SolverConfig.from_omegaconf(["inv"])


@pytest.mark.parametrize(
    "overrides, fragment",
    [
        ({"method": "svd"}, "must be one of"),
        ({"method": True}, "must be a string"),
        ({"rcond_tolerance": -1.0}, "greater than or equal to 0.0"),
        ({"rcond_tolerance": "tiny"}, "must be a float"),
        ({"validate_on_set": "maybe"}, "must be a boolean"),
        ({"log_cache_hits": None}, "cannot be null"),
    ],
)
def test_invalid_values_are_reported(overrides, fragment):
    with pytest.raises(ValueError) as excinfo:
        SolverConfig(**overrides)

    message = str(excinfo.value)
    assert message.startswith("Invalid solver configuration: ")
    assert fragment in message


def test_unknown_keys_are_rejected():
    with pytest.raises(KeyError):
        SolverConfig(cache_size=10)

    config = SolverConfig()
    with pytest.raises(KeyError):
        config.apply_overrides(cache_size=10)


def test_apply_overrides_revalidates():
    config = SolverConfig()

    config.apply_overrides(method="LU", log_cache_hits=0)
    assert config.method == "lu"
    assert config.log_cache_hits is False

    with pytest.raises(ValueError):
        config.apply_overrides(method="qr")
    assert config.method == "lu"


def test_from_env(monkeypatch):
    monkeypatch.setenv("CACHEMATRIX_METHOD", "gauss_jordan")
    monkeypatch.setenv("CACHEMATRIX_LOG_CACHE_HITS", "off")
    monkeypatch.setenv("CACHEMATRIX_RCOND_TOLERANCE", "")
    monkeypatch.delenv("CACHEMATRIX_VALIDATE_ON_SET", raising=False)

    config = SolverConfig.from_env()

    assert config.method == "gauss_jordan"
    assert config.log_cache_hits is False
    assert config.rcond_tolerance == DEFAULT_RCOND_TOLERANCE
    assert config.validate_on_set is True


def test_from_env_with_explicit_mapping():
    config = SolverConfig.from_env({"CACHEMATRIX_VALIDATE_ON_SET": "false"})

    assert config.validate_on_set is False
