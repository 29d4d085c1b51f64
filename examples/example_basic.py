"""
Basic example of using the pathmesh package.

This example demonstrates:
1. Building the nested frame test path
2. Generating a mesh with a parameter preset
3. Exporting the result to STL
"""

from pathmesh import nested_frame_path, get_preset, generate_stl

print("Meshing nested frame path...")

path = nested_frame_path(layers=8)
params = get_preset("standard")

result = generate_stl(path, "frames.stl", params, verbose=True)

print("\n=== Meshing Results ===")
print(f"Status: {result.status.value}")
print(f"Message: {result.message}")
print(f"Triangles: {result.metadata.get('num_triangles')}")
for warning in result.warnings:
    print(f"Warning: {warning}")
