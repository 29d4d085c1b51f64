"""Operations: case table, mesher, sampler, volume walker."""

from .case_table import (
    CrossingVertex,
    CaseEdge,
    MarchingCubesCase,
    CASE_TABLE,
    build_case,
    build_case_table,
    get_case_table,
    should_flip,
)
from .mesher import VoxelMesher, case_index, case_indices, crossing_parameter
from .sampler import sample_field, score_points, find_layer_segments, point_segment_distance
from .walker import VolumeWalker, march_volume, layer_pair_corners
from .patterns import nested_frame_path, straight_segment_path, rectangle_path

__all__ = [
    "CrossingVertex",
    "CaseEdge",
    "MarchingCubesCase",
    "CASE_TABLE",
    "build_case",
    "build_case_table",
    "get_case_table",
    "should_flip",
    "VoxelMesher",
    "case_index",
    "case_indices",
    "crossing_parameter",
    "sample_field",
    "score_points",
    "find_layer_segments",
    "point_segment_distance",
    "VolumeWalker",
    "march_volume",
    "layer_pair_corners",
    "nested_frame_path",
    "straight_segment_path",
    "rectangle_path",
]
