"""Engine configuration shared by the API and the CLI."""

from albumdedupe.engine.config import EngineConfig

__all__ = ["EngineConfig"]
