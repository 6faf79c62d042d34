from nvim_editor_bridge.molecules.process.launcher import ProcessLauncher
from nvim_editor_bridge.molecules.process.liveness import ClientLivenessTracker

__all__ = ["ClientLivenessTracker", "ProcessLauncher"]
