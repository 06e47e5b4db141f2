"""Distance calculations for the odd-row offset hex grid."""


def offset_to_cube(col: int, row: int) -> tuple[int, int, int]:
    """Convert an odd-row offset coordinate to cube coordinates.

    Odd rows sit half a cell to the right of even rows, matching the
    neighbor offsets used by the map generator.

    Args:
        col: Column index
        row: Row index

    Returns:
        Cube coordinate (x, y, z) with x + y + z == 0
    """
    x = col - (row - (row & 1)) // 2
    z = row
    return x, -x - z, z


def hex_distance(col1: int, row1: int, col2: int, row2: int) -> int:
    """Calculate the number of hex steps between two cells.

    Examples:
        >>> hex_distance(0, 0, 1, 0)
        1
        >>> hex_distance(2, 2, 1, 3)  # even row: lower-left neighbor
        1
        >>> hex_distance(2, 2, 3, 3)  # not adjacent from an even row
        2
    """
    x1, y1, z1 = offset_to_cube(col1, row1)
    x2, y2, z2 = offset_to_cube(col2, row2)
    return max(abs(x1 - x2), abs(y1 - y2), abs(z1 - z2))
