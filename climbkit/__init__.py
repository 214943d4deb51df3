"""Scene, camera, lighting and rigid-body physics model for a first-person climbing game."""

__version__ = "0.1.0"

__all__ = [
    "aabb",
    "camera",
    "geometry",
    "lights",
    "mesh",
    "physics",
    "plane",
    "player",
    "scene",
    "scene_node",
    "transform",
]