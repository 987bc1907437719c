"""Scene module: scene description, nearest-hit search and scene files.

Components:
    scene: Scene, SphereSpec and DirectionalLight dataclasses
    intersection: Nearest hit over all spheres (Taichi function)
    reference: The reference single-sphere scene
    loader: JSON scene files
"""

from .intersection import intersect_spheres
from .loader import load_scene, save_scene, scene_from_dict, scene_to_dict
from .reference import (
    REFERENCE_HEIGHT,
    REFERENCE_WIDTH,
    ReferenceSceneParams,
    create_reference_scene,
)
from .scene import DirectionalLight, Scene, SphereSpec

__all__ = [
    "Scene",
    "SphereSpec",
    "DirectionalLight",
    "intersect_spheres",
    "create_reference_scene",
    "ReferenceSceneParams",
    "REFERENCE_WIDTH",
    "REFERENCE_HEIGHT",
    "load_scene",
    "save_scene",
    "scene_from_dict",
    "scene_to_dict",
]
