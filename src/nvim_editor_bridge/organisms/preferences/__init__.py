from nvim_editor_bridge.organisms.preferences.settings import EditorSettings
from nvim_editor_bridge.organisms.preferences.store import InMemoryPreferenceStore, JsonPreferenceStore

__all__ = ["EditorSettings", "InMemoryPreferenceStore", "JsonPreferenceStore"]
