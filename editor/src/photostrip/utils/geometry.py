"""Geometry kernel for hit-testing and transforming draggable objects.

All functions are pure. Anything with ``x, y, width, height, angle``
attributes (a draggable object or a transform snapshot) can be passed as
``obj``. Coordinates are strip pixels, Y-down, angles in radians (positive is
clockwise on screen).

Hit-testing never rotates the rectangle. The query point is rotated into the
object's local frame instead, so every comparison stays axis-aligned.
"""

import math

from photostrip.constants import HANDLE_SIZE, ROTATE_HANDLE_RADIUS, ROTATE_HANDLE_OFFSET
from photostrip.models.transform import InteractionKind


# Probe order for handle hit tests
HANDLE_KINDS = (
    InteractionKind.RESIZE_TOP_LEFT,
    InteractionKind.RESIZE_TOP_RIGHT,
    InteractionKind.RESIZE_BOTTOM_LEFT,
    InteractionKind.RESIZE_BOTTOM_RIGHT,
    InteractionKind.ROTATE,
)


def rotate_vector(x, y, angle):
    """Rotate vector (x, y) by angle radians."""
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return x * cos_a - y * sin_a, x * sin_a + y * cos_a


def signed_angle(ax, ay, bx, by):
    """Signed angle in radians that takes vector a onto vector b.

    Result is in (-pi, pi]. Zero-length vectors give 0.
    """
    cross = ax * by - ay * bx
    dot = ax * bx + ay * by
    return math.atan2(cross, dot)


def box_center(obj):
    """Center of the object's unrotated bounding box."""
    return obj.x + obj.width / 2, obj.y + obj.height / 2


def to_centered_local(px, py, obj):
    """Map a world point into the object's frame: origin at the box center, unrotated."""
    center_x, center_y = box_center(obj)
    return rotate_vector(px - center_x, py - center_y, -obj.angle)


def to_local(px, py, obj):
    """Map a world point into the object's local top-left-origin frame."""
    local_x, local_y = to_centered_local(px, py, obj)
    return local_x + obj.width / 2, local_y + obj.height / 2


def point_in_rotated_rect(px, py, obj):
    """Test whether (px, py) lies inside the object's rotated bounding box.

    Edges are inclusive. Exact comparisons are fine since this only gates
    selection.
    """
    if obj.angle == 0:
        return (obj.x <= px <= obj.x + obj.width and
                obj.y <= py <= obj.y + obj.height)

    local_x, local_y = to_centered_local(px, py, obj)
    half_w = obj.width / 2
    half_h = obj.height / 2
    return -half_w <= local_x <= half_w and -half_h <= local_y <= half_h


def handle_anchor(kind, width, height):
    """Center of a handle zone in local top-left-origin coordinates."""
    if kind == InteractionKind.RESIZE_TOP_LEFT:
        return 0.0, 0.0
    if kind == InteractionKind.RESIZE_TOP_RIGHT:
        return width, 0.0
    if kind == InteractionKind.RESIZE_BOTTOM_LEFT:
        return 0.0, height
    if kind == InteractionKind.RESIZE_BOTTOM_RIGHT:
        return width, height
    if kind == InteractionKind.ROTATE:
        return width / 2, -ROTATE_HANDLE_OFFSET
    raise ValueError(f"Not a handle kind: {kind!r}")


def in_handle_zone(kind, local_x, local_y, width, height):
    """Test a local point against one handle zone.

    Corner zones are squares of side HANDLE_SIZE centered on the corner, the
    rotate zone is a circle of radius ROTATE_HANDLE_RADIUS.
    """
    anchor_x, anchor_y = handle_anchor(kind, width, height)
    dx = local_x - anchor_x
    dy = local_y - anchor_y
    if kind == InteractionKind.ROTATE:
        return dx * dx + dy * dy <= ROTATE_HANDLE_RADIUS * ROTATE_HANDLE_RADIUS
    half = HANDLE_SIZE / 2
    return abs(dx) <= half and abs(dy) <= half


def hit_test_handle(px, py, obj):
    """Find the handle of obj under (px, py).

    Returns:
        InteractionKind for the hit handle, or None
    """
    local_x, local_y = to_local(px, py, obj)
    for kind in HANDLE_KINDS:
        if in_handle_zone(kind, local_x, local_y, obj.width, obj.height):
            return kind
    return None
