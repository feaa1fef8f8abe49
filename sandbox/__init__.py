"""Scene graph, transforms, input state and enemy wave logic for a dome-defence sandbox game."""

__version__ = "0.1.0"
__all__ = [
    "mathutil",
    "transform",
    "component",
    "frame_clock",
    "input_state",
    "node",
    "rotate",
    "top_layer_snap",
    "shovel",
    "enemy",
    "spawning",
    "enemies_manager",
]