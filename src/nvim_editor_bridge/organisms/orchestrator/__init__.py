from nvim_editor_bridge.organisms.orchestrator.open_file import OpenFileOrchestrator

__all__ = ["OpenFileOrchestrator"]
