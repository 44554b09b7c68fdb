"""Line-based O(NP) diff engine with slider-placement heuristics and a corpus evaluation command."""

__version__ = "0.1.0"
__all__ = ["types", "interner", "onp", "heuristics", "engine", "slider_eval", "cli"]