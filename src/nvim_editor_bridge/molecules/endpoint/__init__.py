from nvim_editor_bridge.molecules.endpoint.prober import (
    PipeNamespaceProber,
    SocketFileProber,
    endpoint_path,
    select_prober,
)

__all__ = ["PipeNamespaceProber", "SocketFileProber", "endpoint_path", "select_prober"]
