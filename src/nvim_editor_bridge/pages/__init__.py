"""
Pages: the host-facing editor integration.
"""
