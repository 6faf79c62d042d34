"""
Atomic building blocks: constants, types, errors and logging.
"""
