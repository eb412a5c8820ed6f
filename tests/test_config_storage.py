import json

import pytest

from geotech.config import Settings, load_settings
from geotech.errors import PersistenceError
from geotech.storage import JsonFileStore, NullStore, build_store


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("GEOTECH_CONFIG", "GEOTECH_LOG_LEVEL", "GEOTECH_STORE_BACKEND", "GEOTECH_STORE_DIR"):
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_config_file(tmp_path):
    settings = load_settings(tmp_path / "missing.toml")
    assert settings == Settings()
    assert settings.log_level == "INFO"
    assert settings.store_backend == "none"


def test_config_file_table(tmp_path):
    path = tmp_path / "geotech.toml"
    path.write_text('[geotech]\nlog_level = "debug"\nstore_backend = "json"\nstore_dir = "out"\n', encoding="utf-8")

    settings = load_settings(path)
    assert settings.log_level == "DEBUG"
    assert settings.store_backend == "json"
    assert settings.store_dir == "out"


def test_config_path_from_env(tmp_path, monkeypatch):
    path = tmp_path / "custom.toml"
    path.write_text('store_backend = "json"\n', encoding="utf-8")
    monkeypatch.setenv("GEOTECH_CONFIG", str(path))

    assert load_settings().store_backend == "json"


def test_env_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "geotech.toml"
    path.write_text('[geotech]\nlog_level = "INFO"\nstore_dir = "out"\n', encoding="utf-8")
    monkeypatch.setenv("GEOTECH_LOG_LEVEL", "warning")
    monkeypatch.setenv("GEOTECH_STORE_DIR", str(tmp_path / "records"))

    settings = load_settings(path)
    assert settings.log_level == "WARNING"
    assert settings.store_dir == str(tmp_path / "records")


def test_invalid_backend_rejected(tmp_path):
    path = tmp_path / "geotech.toml"
    path.write_text('store_backend = "s3"\n', encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(path)


def test_build_store():
    assert isinstance(build_store(Settings()), NullStore)
    store = build_store(Settings(store_backend="json", store_dir="somewhere"))
    assert isinstance(store, JsonFileStore)
    assert str(store.directory) == "somewhere"


def test_json_store_writes_record(tmp_path):
    store = JsonFileStore(tmp_path / "results")
    record = {"test_id": "BH1", "test_type": "SPT", "computed_data": [{"n60": 9.0}], "raw_data": [], "metadata": {"site": "Север"}}
    store.save(record)

    saved = json.loads((tmp_path / "results" / "BH1.json").read_text(encoding="utf-8"))
    assert saved == record


def test_json_store_sanitizes_id(tmp_path):
    store = JsonFileStore(tmp_path)
    assert store.path_for("../etc/passwd").name == ".._etc_passwd.json"
    assert store.path_for("../etc/passwd").parent == tmp_path


def test_json_store_failure_raises_persistence_error(tmp_path):
    blocked = tmp_path / "blocked"
    blocked.write_text("not a directory", encoding="utf-8")

    with pytest.raises(PersistenceError):
        JsonFileStore(blocked).save({"test_id": "BH1"})


def test_json_store_failed_write_keeps_previous_file(tmp_path):
    store = JsonFileStore(tmp_path)
    store.save({"test_id": "BH1", "computed_data": [1]})

    with pytest.raises(PersistenceError):
        # Ключ-кортеж не сериализуется в JSON
        store.save({"test_id": "BH1", "computed_data": {(1, 2): "x"}})

    assert json.loads((tmp_path / "BH1.json").read_text(encoding="utf-8")) == {"test_id": "BH1", "computed_data": [1]}
    assert list(tmp_path.iterdir()) == [tmp_path / "BH1.json"]
