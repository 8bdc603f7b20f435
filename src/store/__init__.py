"""Cache and resolution layer.

This package owns the on-disk dataset cache, Arrow file persistence,
and the name resolution used by the SDK and CLI.
"""
