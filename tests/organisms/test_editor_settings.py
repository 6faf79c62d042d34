"""
Tests for EditorSettings and the preference stores.
"""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from nvim_editor_bridge.atoms.errors.application_errors import UnknownPreferenceError
from nvim_editor_bridge.atoms.types.data_types import EditorRole
from nvim_editor_bridge.atoms.utils.config_constants import (
    CLIENT_CMD_KEY,
    CLIENT_PID_KEY,
    DEFAULT_BUILTIN_EXTENSIONS,
    DEFAULT_CLIENT_ARGS,
    DEFAULT_CLIENT_CMD,
    DEFAULT_REMOTE_ARGS,
    DEFAULT_REMOTE_CMD,
    DEFAULT_SERVER_ARGS,
    DEFAULT_SERVER_CMD,
    SERVER_CMD_KEY,
    USER_EXTENSIONS_KEY,
)
from nvim_editor_bridge.interfaces.preference_store import IPreferenceStore
from nvim_editor_bridge.organisms.preferences.settings import (
    EditorSettings,
    default_extensions,
    parse_extensions,
)
from nvim_editor_bridge.organisms.preferences.store import InMemoryPreferenceStore, JsonPreferenceStore

DEFAULTS = {
    "server_cmd": DEFAULT_SERVER_CMD,
    "server_args": DEFAULT_SERVER_ARGS,
    "client_cmd": DEFAULT_CLIENT_CMD,
    "client_args": DEFAULT_CLIENT_ARGS,
    "remote_cmd": DEFAULT_REMOTE_CMD,
    "remote_args": DEFAULT_REMOTE_ARGS,
}


class TestEditorSettings:
    def test_defaults_when_store_is_empty(self, settings: EditorSettings):
        for field, default in DEFAULTS.items():
            assert getattr(settings, field) == default
        assert settings.client_pid == 0

    def test_documented_default_strings(self, settings: EditorSettings):
        assert settings.server_cmd == "nvim"
        assert settings.server_args == "--headless --listen ${pipePath}"
        assert settings.client_cmd == "alacritty"
        assert settings.client_args == "-e nvim --server ${pipePath} --remote-ui"
        assert settings.remote_cmd == "nvr"
        assert settings.remote_args == '--servername ${pipePath} -c "n ${filePath} | call cursor(${line},${column})<CR>"'

    def test_values_are_read_from_the_store(self, store: InMemoryPreferenceStore):
        store.set(SERVER_CMD_KEY, "/opt/nvim/bin/nvim")

        assert EditorSettings(store).server_cmd == "/opt/nvim/bin/nvim"

    def test_assignment_writes_through(self, settings: EditorSettings, store: InMemoryPreferenceStore):
        settings.client_cmd = "kitty"

        assert store.get(CLIENT_CMD_KEY) == "kitty"
        assert settings.client_cmd == "kitty"

    def test_values_are_cached_after_first_read(self):
        store = MagicMock(spec=InMemoryPreferenceStore)
        store.get.return_value = "nvim"
        settings = EditorSettings(store)

        assert settings.server_cmd == "nvim"
        assert settings.server_cmd == "nvim"

        store.get.assert_called_once_with(SERVER_CMD_KEY, DEFAULT_SERVER_CMD)

    def test_reset_restores_every_command_field(self, store: InMemoryPreferenceStore):
        settings = EditorSettings(store)
        for field in DEFAULTS:
            setattr(settings, field, f"custom-{field}")

        settings.reset_arguments()

        for field, default in DEFAULTS.items():
            assert getattr(settings, field) == default
        reread = EditorSettings(store)
        for field, default in DEFAULTS.items():
            assert getattr(reread, field) == default

    def test_reset_writes_all_fields_in_one_update(self):
        store = MagicMock(spec=InMemoryPreferenceStore)
        settings = EditorSettings(store)

        settings.reset_arguments()

        store.update.assert_called_once()
        (written,) = store.update.call_args.args
        assert len(written) == 6
        store.set.assert_not_called()

    def test_reset_falls_back_to_individual_sets(self):
        class SetOnlyStore:
            def __init__(self):
                self.values = {}

            def get(self, key, default=None):
                return self.values.get(key, default)

            def set(self, key, value):
                self.values[key] = value

        store = SetOnlyStore()
        EditorSettings(store).reset_arguments()

        assert store.values[SERVER_CMD_KEY] == DEFAULT_SERVER_CMD
        assert len(store.values) == 6

    def test_reset_leaves_pid_and_extensions_alone(self, settings: EditorSettings, store: InMemoryPreferenceStore):
        settings.client_pid = 99
        settings.handled_extensions_string = "cs"

        settings.reset_arguments()

        assert settings.client_pid == 99
        assert store.get(USER_EXTENSIONS_KEY) == "cs"

    def test_command_template_per_role(self, settings: EditorSettings):
        template = settings.command_template(EditorRole.REMOTE)

        assert template.role == EditorRole.REMOTE
        assert template.command == DEFAULT_REMOTE_CMD
        assert template.arguments == DEFAULT_REMOTE_ARGS

    def test_client_pid_round_trip(self, settings: EditorSettings, store: InMemoryPreferenceStore):
        settings.client_pid = 31337

        assert EditorSettings(store).client_pid == 31337

    @pytest.mark.parametrize("stored", ["not-a-pid", "12.5x", [1, 2]])
    def test_invalid_stored_client_pid_reads_as_zero(self, store: InMemoryPreferenceStore, stored):
        store.set(CLIENT_PID_KEY, stored)

        assert EditorSettings(store).client_pid == 0

    def test_snapshot_and_update(self, settings: EditorSettings):
        settings.update(remote_cmd="nvim", handled_extensions="cs;lua")

        snapshot = settings.snapshot()
        assert snapshot["remote_cmd"] == "nvim"
        assert snapshot["handled_extensions"] == "cs;lua"
        assert settings.handled_extensions == ["cs", "lua"]

    def test_update_rejects_unknown_fields_without_writing(self, settings: EditorSettings, store):
        with pytest.raises(UnknownPreferenceError) as exc_info:
            settings.update(client_cmd="kitty", colour="blue")

        assert exc_info.value.error_code == "unknown_preference"
        assert store.get(CLIENT_CMD_KEY) is None


class TestHandledExtensions:
    def test_default_extensions_include_builtins_and_extras(self, settings: EditorSettings):
        extensions = settings.handled_extensions

        for extension in DEFAULT_BUILTIN_EXTENSIONS:
            assert extension in extensions
        for extension in ("json", "asmdef", "log"):
            assert extension in extensions

    def test_default_extensions_union_is_deduplicated_in_order(self):
        assert default_extensions(["cs", "json"], ["md", "cs"]) == ["cs", "json", "md", "asmdef", "log"]

    def test_host_extensions_replace_builtin_defaults(self, store):
        settings = EditorSettings(store, builtin_extensions=["py"], user_extensions=["toml"])

        assert settings.handled_extensions == ["py", "toml", "json", "asmdef", "log"]

    def test_parse_strips_dots_and_wildcards(self):
        assert parse_extensions("cs;.json;*.log;;*;") == ["cs", "json", "log"]

    def test_user_list_is_persisted(self, settings: EditorSettings, store):
        settings.handled_extensions_string = "lua;.vim"

        assert store.get(USER_EXTENSIONS_KEY) == "lua;.vim"
        assert settings.handled_extensions == ["lua", "vim"]

    @pytest.mark.parametrize(
        "path, supported",
        [
            ("Assets/Player.cs", True),
            ("Assets/Package.asmdef", True),
            ("Editor.log", True),
            ("Textures/hero.psd", False),
            ("Makefile", False),
            (".cs", False),
        ],
    )
    def test_supports_extension(self, settings: EditorSettings, path: str, supported: bool):
        assert settings.supports_extension(path) is supported


class TestJsonPreferenceStore:
    def test_satisfies_protocol(self, tmp_path: Path):
        assert isinstance(JsonPreferenceStore(tmp_path / "prefs.json"), IPreferenceStore)
        assert isinstance(InMemoryPreferenceStore(), IPreferenceStore)

    def test_missing_file_returns_defaults_without_creating_it(self, tmp_path: Path):
        path = tmp_path / "prefs.json"
        store = JsonPreferenceStore(path)

        assert store.get("nvim_server_cmd", "nvim") == "nvim"
        assert not path.exists()

    def test_set_persists_across_instances(self, tmp_path: Path):
        path = tmp_path / "nested" / "prefs.json"
        JsonPreferenceStore(path).set("nvim_pid", 1234)

        assert JsonPreferenceStore(path).get("nvim_pid") == 1234
        assert json.loads(path.read_text()) == {"nvim_pid": 1234}

    def test_update_writes_all_keys(self, tmp_path: Path):
        path = tmp_path / "prefs.json"
        store = JsonPreferenceStore(path)
        store.set("keep", "me")

        store.update({"a": "1", "b": "2"})

        assert json.loads(path.read_text()) == {"keep": "me", "a": "1", "b": "2"}
        assert store.get("b") == "2"

    def test_corrupt_file_is_treated_as_empty(self, tmp_path: Path):
        path = tmp_path / "prefs.json"
        path.write_text("{not json")

        assert JsonPreferenceStore(path).get("nvim_client_cmd", "alacritty") == "alacritty"

    def test_non_object_file_is_treated_as_empty(self, tmp_path: Path):
        path = tmp_path / "prefs.json"
        path.write_text("[1, 2, 3]")

        assert JsonPreferenceStore(path).get("nvim_pid", 0) == 0

    def test_no_temporary_files_left_behind(self, tmp_path: Path):
        store = JsonPreferenceStore(tmp_path / "prefs.json")
        store.set("a", 1)
        store.set("b", 2)

        assert [p.name for p in tmp_path.iterdir()] == ["prefs.json"]

    def test_writes_merge_changes_made_by_another_instance(self, tmp_path: Path):
        path = tmp_path / "prefs.json"
        long_lived = JsonPreferenceStore(path)
        assert long_lived.get("nvim_client_cmd", "alacritty") == "alacritty"

        JsonPreferenceStore(path).set("nvim_client_cmd", "kitty")
        long_lived.set("nvim_pid", 4242)

        assert json.loads(path.read_text()) == {"nvim_client_cmd": "kitty", "nvim_pid": 4242}

    def test_update_merges_changes_made_by_another_instance(self, tmp_path: Path):
        path = tmp_path / "prefs.json"
        long_lived = JsonPreferenceStore(path)
        long_lived.set("nvim_pid", 1)

        JsonPreferenceStore(path).set("nvim_userExtensions", "cs;lua")
        long_lived.update({"nvim_server_cmd": "nvim"})

        assert JsonPreferenceStore(path).get("nvim_userExtensions") == "cs;lua"

    def test_get_sees_changes_written_by_another_instance(self, tmp_path: Path):
        path = tmp_path / "prefs.json"
        reader = JsonPreferenceStore(path)
        assert reader.get("nvim_client_cmd") is None

        JsonPreferenceStore(path).set("nvim_client_cmd", "kitty")

        assert reader.get("nvim_client_cmd") == "kitty"

    def test_failed_write_leaves_values_unchanged(self, tmp_path: Path):
        path = tmp_path / "prefs.json"
        store = JsonPreferenceStore(path)
        store.set("nvim_client_cmd", "kitty")

        with patch.object(store, "_write", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                store.set("nvim_client_cmd", "wezterm")

        assert store.get("nvim_client_cmd") == "kitty"
        assert json.loads(path.read_text()) == {"nvim_client_cmd": "kitty"}

    def test_settings_survive_a_restart(self, tmp_path: Path):
        path = tmp_path / "prefs.json"
        EditorSettings(JsonPreferenceStore(path)).client_args = "-e nvim --server ${pipePath}"

        assert EditorSettings(JsonPreferenceStore(path)).client_args == "-e nvim --server ${pipePath}"
