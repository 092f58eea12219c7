"""Session state utilities.

Import :mod:`state.ensure_state` directly; it depends on :mod:`wizard`, which
in turn uses the value store and message bus defined here.
"""
