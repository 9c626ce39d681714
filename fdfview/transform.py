"""Matrix maths and the scene state that places a height map on screen."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import NamedTuple, Sequence

from fdfview.keys import KeyState
from fdfview.mapfile import FdfMap

Matrix = list[list[float]]
Vec4 = tuple[float, float, float, float]

STEP = 0.0005
GRID_SPACING = 0.1
NEAR_PLANE = 0.1
FAR_PLANE = 100.0


class Vec3(NamedTuple):
    x: float
    y: float
    z: float


def identity() -> Matrix:
    """Return a fresh 4x4 identity matrix."""
    return [[1.0 if row == col else 0.0 for col in range(4)] for row in range(4)]


def multiply(a: Sequence[Sequence[float]], b: Sequence[Sequence[float]]) -> Matrix:
    """Return the matrix product ``a @ b`` of two 4x4 matrices."""
    columns = list(zip(*b))
    return [[sum(x * y for x, y in zip(row, col)) for col in columns] for row in a]


def apply(matrix: Sequence[Sequence[float]], vec: Sequence[float]) -> Vec4:
    """Multiply a 4-component column vector by a 4x4 matrix."""
    x, y, z, w = (sum(m * v for m, v in zip(row, vec)) for row in matrix)
    return (x, y, z, w)


def scaling_matrix(scale: float) -> Matrix:
    """Uniform scaling in x, y and z."""
    matrix = identity()
    for axis in range(3):
        matrix[axis][axis] = scale
    return matrix


def rotation_x(angle: float) -> Matrix:
    """Rotation about the x axis by ``angle`` radians."""
    c, s = math.cos(angle), math.sin(angle)
    matrix = identity()
    matrix[1][1], matrix[1][2] = c, -s
    matrix[2][1], matrix[2][2] = s, c
    return matrix


def rotation_y(angle: float) -> Matrix:
    """Rotation about the y axis by ``angle`` radians."""
    c, s = math.cos(angle), math.sin(angle)
    matrix = identity()
    matrix[0][0], matrix[0][2] = c, s
    matrix[2][0], matrix[2][2] = -s, c
    return matrix


def rotation_z(angle: float) -> Matrix:
    """Rotation about the z axis by ``angle`` radians."""
    c, s = math.cos(angle), math.sin(angle)
    matrix = identity()
    matrix[0][0], matrix[0][1] = c, -s
    matrix[1][0], matrix[1][1] = s, c
    return matrix


def translation_matrix(dx: float, dy: float, dz: float) -> Matrix:
    """Translation by ``(dx, dy, dz)``."""
    matrix = identity()
    matrix[0][3], matrix[1][3], matrix[2][3] = dx, dy, dz
    return matrix


def orthographic_projection(near: float, far: float) -> Matrix:
    """Orthographic projection of the cube [-1, 1]^2 between the given planes."""
    left, right, bottom, top = -1.0, 1.0, -1.0, 1.0
    matrix = [[0.0] * 4 for _ in range(4)]
    matrix[0][0] = 2 / (right - left)
    matrix[0][3] = -(right + left) / (right - left)
    matrix[1][1] = 2 / (top - bottom)
    matrix[1][3] = -(top + bottom) / (top - bottom)
    matrix[2][2] = -2 / (far - near)
    matrix[2][3] = -(far + near) / (far - near)
    matrix[3][3] = 1.0
    return matrix


def grid_points(heights: Sequence[Sequence[int]]) -> list[list[Vec3]]:
    """Place each height on a grid with spacing 0.1 in every axis."""
    return [
        [
            Vec3(col * GRID_SPACING, row * GRID_SPACING, value * GRID_SPACING)
            for col, value in enumerate(line)
        ]
        for row, line in enumerate(heights)
    ]


def average_height(heights: Sequence[Sequence[int]]) -> int:
    """Midpoint of the lowest and highest heights, both clamped to include 0.

    The halving truncates toward zero.
    """
    values = [value for line in heights for value in line]
    lowest = min([0, *values])
    highest = max([0, *values])
    total = highest + lowest
    half = abs(total) // 2
    return half if total >= 0 else -half


@dataclass
class Scene:
    """The model's points together with the view transformation applied to them."""

    points: list[list[Vec3]]
    center: Vec3
    pos: Vec3 = Vec3(0.0, 0.0, 1.0)
    scale: float = 1.0
    x_angle: float = 0.0
    y_angle: float = 0.0
    z_angle: float = 0.0
    projection: Matrix = field(
        default_factory=lambda: orthographic_projection(NEAR_PLANE, FAR_PLANE)
    )
    rotation: Matrix = field(default_factory=identity)
    scaling: Matrix = field(default_factory=identity)
    translation_origin: Matrix = field(default_factory=identity)
    translation_back: Matrix = field(default_factory=identity)

    @classmethod
    def from_map(cls, fdf_map: FdfMap) -> "Scene":
        """Build a scene centred on the middle of the map."""
        points = grid_points(fdf_map.heights)
        middle = points[fdf_map.height // 2][fdf_map.width // 2]
        center = Vec3(
            middle.x, middle.y, average_height(fdf_map.heights) * GRID_SPACING
        )
        scene = cls(points=points, center=center)
        scene.rebuild()
        return scene

    def apply_keys(self, keys: KeyState) -> None:
        """Advance position, angles and scale by one step for each held key."""
        x, y, z = self.pos
        if keys.w:
            y += STEP
        if keys.s:
            y -= STEP
        if keys.d:
            x += STEP
        if keys.a:
            x -= STEP
        self.pos = Vec3(x, y, z)

        if keys.i:
            self.x_angle += STEP
        if keys.j:
            self.x_angle -= STEP
        if keys.o:
            self.y_angle -= STEP
        if keys.k:
            self.y_angle += STEP
        if keys.p:
            self.z_angle -= STEP
        if keys.l:
            self.z_angle += STEP

        if keys.q:
            self.scale += STEP
        if self.scale - STEP > STEP and keys.e:
            self.scale -= STEP

    def rebuild(self) -> None:
        """Recompute the rotation, scaling and translation matrices from the state."""
        self.rotation = multiply(
            multiply(rotation_x(self.x_angle), rotation_y(self.y_angle)),
            rotation_z(self.z_angle),
        )
        cx, cy, cz = self.center
        self.translation_origin = translation_matrix(-cx, -cy, -cz)
        self.translation_back = translation_matrix(
            cx + self.pos.x, cy + self.pos.y, cz + self.pos.z
        )
        self.scaling = scaling_matrix(self.scale)

    def project(self, point: Vec3) -> Vec4:
        """Transform a model point into normalised device coordinates."""
        vec: Vec4 = (point[0], point[1], point[2], 1.0)
        for matrix in (
            self.translation_origin,
            self.scaling,
            self.rotation,
            self.translation_back,
            self.projection,
        ):
            vec = apply(matrix, vec)
        return vec

    def screen_coords(self, width: int, height: int) -> list[list[tuple[int, int]]]:
        """Pixel position of every grid point on a screen of the given size."""
        coords = []
        for line in self.points:
            row = []
            for point in line:
                ndc_x, ndc_y, _, _ = self.project(point)
                row.append(
                    (
                        int((ndc_x + 1) * 0.5 * width),
                        int((1 - (ndc_y + 1) * 0.5) * height),
                    )
                )
            coords.append(row)
        return coords