"""
Organisms: editor settings and the open-file orchestrator.
"""
