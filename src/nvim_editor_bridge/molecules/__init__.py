"""
Molecules: endpoint probing, process launching and client tracking.
"""
