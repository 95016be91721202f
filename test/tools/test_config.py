import logging
from pathlib import Path

from pydantic import ValidationError
from pytest import raises

from note_forest import FOREST_KEY, TASKS_KEY, FileStore
from note_forest.tools.config import DEFAULT_STORE_PATH, Config


def test_defaults():
    config = Config()

    assert config.store_path == DEFAULT_STORE_PATH
    assert config.forest_key == FOREST_KEY
    assert config.tasks_key == TASKS_KEY


def test_yaml_round_trip(tmp_path: Path):
    config_path = tmp_path / "note-forest.yaml"

    model = Config(store_path=tmp_path / "store.json", forest_key="my_notes")
    model.dump_yaml(config_path)

    assert "store_path:" in config_path.read_text()

    loaded = Config.load_yaml(config_path)
    assert loaded.store_path == tmp_path / "store.json"
    assert loaded.forest_key == "my_notes"
    assert loaded.tasks_key == TASKS_KEY


def test_empty_yaml(tmp_path: Path):
    config_path = tmp_path / "empty.yaml"
    config_path.write_text("")

    assert Config.load_yaml(config_path).store_path == DEFAULT_STORE_PATH


def test_invalid(tmp_path: Path):
    config_path = tmp_path / "invalid.yaml"

    config_path.write_text("- a\n- list\n")
    with raises(ValueError):
        Config.load_yaml(config_path)

    # parent folder must exist
    with raises(ValidationError):
        Config(store_path=tmp_path / "nonexistent" / "store.json")

    # store must not be a folder
    with raises(ValidationError):
        Config(store_path=tmp_path)

    with raises(ValidationError):
        Config(forest_key="")


def test_create_workspace(tmp_path: Path):
    config = Config(store_path=tmp_path / "store.json", tasks_key="todo")
    workspace = config.create_workspace(logger=logging.getLogger("test"))

    workspace.tasks.add("a")

    assert isinstance(workspace.store, FileStore)
    assert workspace.store.get("todo") is not None
