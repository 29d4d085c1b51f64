"""
Advanced example using individual functions from the pathmesh package.

This example demonstrates:
1. Building a path by hand and saving it to JSON
2. Sampling a single layer and inspecting it
3. Running the volume walker directly with vertex welding
4. Diagnostics and plots
"""

import matplotlib.pyplot as plt

from pathmesh import Path, MeshingParams, validate_and_warn, save_json
from pathmesh.ops import VolumeWalker, sample_field
from pathmesh.analysis import compute_diagnostics, compute_surface_quality, check_case_table
from pathmesh.visualization import plot_field, plot_mesh, save_field_image, plot_case_wireframe

print("Checking case table...")
report = check_case_table()
print(f"Valid cases: {report['num_valid']}/{report['num_cases']}")

print("Building path...")
path = Path(current_radius=0.05)
path.move_to(0.2, 0.2, 0.2)
path.line_to(0.8, 0.2, 0.2)
path.line_to(0.8, 0.2, 0.8)
path.current_radius = 0.08
path.line_to(0.5, 0.3, 0.5)
path.line_to(0.2, 0.2, 0.8)

params = validate_and_warn(MeshingParams(
    origin=(0.0, 0.0, 0.0),
    capture_size=(1.0, 0.5, 1.0),
    horizontal_resolution=96,
    vertical_resolution=48,
    weld_vertices=True,
    show_progress=True,
))
save_json(path, "zigzag.json", params=params)

print("Sampling one layer...")
field = sample_field(path, (0.0, 0.2, 0.0), (1.0, 1.0), 128)
save_field_image(field, "layer.png")
plot_field(field, threshold=params.threshold, show=False)

print("Marching...")
walker = VolumeWalker(weld_vertices=params.weld_vertices, show_progress=params.show_progress)
mesh = walker.build(
    path,
    origin=params.origin,
    capture_size=params.capture_size,
    horizontal_resolution=params.horizontal_resolution,
    vertical_resolution=params.vertical_resolution,
    threshold=params.threshold,
)

diag = compute_diagnostics(mesh)
quality = compute_surface_quality(mesh)
print(f"Vertices={diag.num_vertices}, Faces={diag.num_faces}, Watertight={diag.watertight}")
print(f"Components={diag.num_components}, Boundary edges={diag.boundary_edges}")
print(f"Max aspect ratio: {quality.max_aspect_ratio:.2f}")

plot_case_wireframe(0x09, show=False)
plot_mesh(mesh, title="zigzag", show=False)
plt.show()
