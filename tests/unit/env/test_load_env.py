import pydantic
import pytest

from ringroute.env import Env, load_env


def test_defaults():
    env = load_env(Env)

    assert env.RINGROUTE_VIRTUAL_NODES == 160
    assert env.RINGROUTE_HASH_FUNCTION == "md5"
    assert env.RINGROUTE_LOG_LEVEL == "info"
    assert env.RINGROUTE_LOG_OUTPUT == "stderr"


def test_process_environment(monkeypatch):
    monkeypatch.setenv("RINGROUTE_VIRTUAL_NODES", "200")
    monkeypatch.setenv("RINGROUTE_HASH_FUNCTION", "sha256")

    env = load_env(Env)

    assert env.RINGROUTE_VIRTUAL_NODES == 200
    assert env.RINGROUTE_HASH_FUNCTION == "sha256"


def test_env_file_overrides_process_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("RINGROUTE_VIRTUAL_NODES", "200")

    env_file = tmp_path / "ring.env"
    env_file.write_text("RINGROUTE_VIRTUAL_NODES=120\nRINGROUTE_LOG_LEVEL=debug\n")

    env = load_env(Env, env_file=str(env_file))

    assert env.RINGROUTE_VIRTUAL_NODES == 120
    assert env.RINGROUTE_LOG_LEVEL == "debug"


def test_default_env_file_in_working_directory(tmp_path):
    (tmp_path / ".env").write_text("RINGROUTE_LOG_OUTPUT=stdout\n")

    env = load_env(Env)

    assert env.RINGROUTE_LOG_OUTPUT == "stdout"


def test_override_wins(monkeypatch):
    monkeypatch.setenv("RINGROUTE_VIRTUAL_NODES", "200")
    monkeypatch.setenv("RINGROUTE_HASH_FUNCTION", "sha256")

    env = load_env(Env, override=Env(RINGROUTE_VIRTUAL_NODES=50))

    assert env.RINGROUTE_VIRTUAL_NODES == 50
    assert env.RINGROUTE_HASH_FUNCTION == "sha256"


def test_invalid_values_fail():
    with pytest.raises(pydantic.ValidationError):
        Env(RINGROUTE_VIRTUAL_NODES=0)

    with pytest.raises(pydantic.ValidationError):
        Env(RINGROUTE_HASH_FUNCTION="crc32")


def test_types_map_covers_fields():
    assert set(Env.types_map()) == set(Env.model_fields)
