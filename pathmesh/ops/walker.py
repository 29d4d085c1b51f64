"""
Layer-by-layer marching cubes over sampled coverage fields.
"""

from typing import Optional, Sequence
import numpy as np
from tqdm import tqdm

from ..core.field import ScalarField
from ..core.mesh import MeshBuffer
from ..core.path import PathLike, get_path_vertices
from .case_table import NUM_CORNERS, MarchingCubesCase
from .mesher import VoxelMesher, case_indices
from .sampler import sample_field


def layer_pair_corners(lower: np.ndarray, upper: np.ndarray) -> np.ndarray:
    """
    Gather the 8 corner values of every cube between two stacked layers.

    Layers are indexed ``[row, col]`` with rows along z and columns along x.
    Corner ``i`` comes from the upper layer when bit 1 is set, and is offset
    by one row when bit 2 is set and by one column when bit 0 is set.

    Returns
    -------
    np.ndarray
        Array of shape (rows - 1, cols - 1, 8)
    """
    if lower.shape != upper.shape:
        raise ValueError(f"Layer shapes differ: {lower.shape} vs {upper.shape}")

    rows, cols = lower.shape
    corners = []
    for i in range(NUM_CORNERS):
        dx = i & 1
        dy = (i >> 1) & 1
        dz = (i >> 2) & 1
        layer = upper if dy else lower
        corners.append(layer[dz:dz + rows - 1, dx:dx + cols - 1])
    return np.stack(corners, axis=-1)


def march_layer_pair(
    mesher: VoxelMesher,
    lower: np.ndarray,
    upper: np.ndarray,
    layer_index: int,
    threshold: float,
    sink,
) -> int:
    """
    Mesh every cube between two adjacent layers.

    Cubes that are fully inside or fully outside are skipped before any
    per-cube work. Returns the number of cubes written.
    """
    corners = layer_pair_corners(lower, upper)
    masks = case_indices(corners, threshold)
    rows, cols = np.nonzero((masks != 0) & (masks != 255))

    for row, col in zip(rows.tolist(), cols.tolist()):
        mesher.move_to_cube(col, layer_index, row)
        mesher.write(corners[row, col], threshold, sink)

    return len(rows)


def _check_resolution(name: str, value) -> int:
    if int(value) != value or int(value) < 1:
        raise ValueError(f"{name} must be an integer >= 1, got {value}")
    return int(value)


class VolumeWalker:
    """
    Builds a mesh from a path by sweeping sampled layers upward.

    The walker owns its scratch state: two layer buffers swapped after each
    step and the output mesh, which is cleared at the start of every
    ``build``. Use one walker per thread; the case table itself is shared.

    Example
    -------
    >>> from pathmesh.ops.patterns import nested_frame_path
    >>> walker = VolumeWalker()
    >>> mesh = walker.build(nested_frame_path(layers=2), origin=(0, 0, 0),
    ...                     capture_size=(1, 0.25, 1), horizontal_resolution=32,
    ...                     vertical_resolution=4)
    """

    def __init__(
        self,
        table: Optional[Sequence[MarchingCubesCase]] = None,
        weld_vertices: bool = False,
        show_progress: bool = False,
        prune_horizontal: bool = True,
    ):
        self.mesher = VoxelMesher(table=table)
        self.mesh = MeshBuffer(weld_vertices=weld_vertices)
        self.show_progress = show_progress
        self.prune_horizontal = prune_horizontal
        self._previous: Optional[ScalarField] = None
        self._current: Optional[ScalarField] = None

    def _ensure_buffers(self, resolution: int) -> None:
        if self._previous is None or self._previous.resolution != resolution:
            self._previous = ScalarField.empty(resolution)
            self._current = ScalarField.empty(resolution)

    def build(
        self,
        path: PathLike,
        origin: Sequence[float],
        capture_size: Sequence[float],
        horizontal_resolution: int,
        vertical_resolution: int,
        threshold: float = 0.5,
    ) -> MeshBuffer:
        """
        Sample the path layer by layer and extract the iso-surface.

        Parameters
        ----------
        path : Path or sequence of PathVertex
            Source path
        origin : sequence of 3 floats
            Minimum corner of the capture box
        capture_size : sequence of 3 floats
            Extent of the capture box along x, y, z
        horizontal_resolution : int
            Samples per side of every layer
        vertical_resolution : int
            Number of layers
        threshold : float
            Iso value

        Returns
        -------
        MeshBuffer
            The walker's own mesh buffer, valid until the next ``build``

        Raises
        ------
        ValueError
            On non-positive capture size or resolutions below 1
        """
        h = _check_resolution("horizontal_resolution", horizontal_resolution)
        v = _check_resolution("vertical_resolution", vertical_resolution)

        origin = np.asarray(origin, dtype=float).reshape(3)
        capture_size = np.asarray(capture_size, dtype=float).reshape(3)
        if np.any(capture_size <= 0.0):
            raise ValueError(f"capture_size must be positive, got {capture_size.tolist()}")

        cube_size = capture_size / np.array([h, v, h], dtype=float)
        size_xz = (capture_size[0], capture_size[2])

        self.mesh.clear()
        self.mesher.origin = tuple(origin.tolist())
        self.mesher.cube_size = tuple(cube_size.tolist())
        self._ensure_buffers(h)

        vertices = get_path_vertices(path)

        sample_field(vertices, origin, size_xz, h, out=self._previous,
                     prune_horizontal=self.prune_horizontal)

        layers = range(v - 1)
        if self.show_progress:
            layers = tqdm(layers, desc="Marching layers", unit="layer")

        for layer in layers:
            layer_origin = origin + np.array([0.0, (layer + 1) * cube_size[1], 0.0])
            sample_field(vertices, layer_origin, size_xz, h, out=self._current,
                         prune_horizontal=self.prune_horizontal)

            march_layer_pair(
                self.mesher,
                self._previous.values,
                self._current.values,
                layer,
                threshold,
                self.mesh,
            )

            self._previous, self._current = self._current, self._previous

        return self.mesh


def march_volume(
    volume: np.ndarray,
    threshold: float = 0.5,
    spacing: Sequence[float] = (1.0, 1.0, 1.0),
    origin: Sequence[float] = (0.0, 0.0, 0.0),
    weld_vertices: bool = False,
    table: Optional[Sequence[MarchingCubesCase]] = None,
) -> MeshBuffer:
    """
    Run the layer-pair marching over a dense volume.

    Parameters
    ----------
    volume : np.ndarray
        Scalar values of shape (nx, ny, nz); y is the sweep axis
    threshold : float
        Iso value
    spacing : sequence of 3 floats
        Distance between samples along x, y, z
    origin : sequence of 3 floats
        World position of ``volume[0, 0, 0]``
    weld_vertices : bool
        Reuse vertices shared between neighbouring cubes

    Returns
    -------
    MeshBuffer
        Newly allocated mesh
    """
    volume = np.asarray(volume, dtype=float)
    if volume.ndim != 3:
        raise ValueError(f"Volume must be 3D, got {volume.ndim}D")

    mesher = VoxelMesher(cube_size=spacing, origin=origin, table=table)
    mesh = MeshBuffer(weld_vertices=weld_vertices)

    # layers are stored [row=z, col=x]
    for layer in range(volume.shape[1] - 1):
        lower = volume[:, layer, :].T
        upper = volume[:, layer + 1, :].T
        march_layer_pair(mesher, lower, upper, layer, threshold, mesh)

    return mesh
