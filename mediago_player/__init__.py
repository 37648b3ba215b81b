"""MediaGo Player: stream a local video library and serve the bundled web UI."""

__version__ = "1.0.0"
