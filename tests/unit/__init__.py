"""
Unit tests for logsmith, one module per source module.

Facade records are observed through caplog, console output through in-memory
rich consoles.
"""
