"""Anchor-constrained hex map generation.

Generation runs in fixed steps with no backtracking:

1. Rasterize zones into a coordinate -> zone lookup (later zones win)
2. Snap settlement anchors to the grid, relocating collisions by BFS
3. Fill terrain row-major by weighted sampling (zone weights override defaults)
4. Force the outer ring to sea when ``sea_edge`` is set
5. Turn anchors into settlements and apply zone starting control

Every random draw happens in step 3, in row-major order, so the same
config and RNG state always produce the same grid.
"""

import logging
import math
from collections import deque
from collections.abc import Mapping

from ..models import ALL_TERRAINS, Hex, HexCoord, Settlement, TerrainType
from ..themes.schema import BoundsShape, MapConfig, MapZone, SettlementAnchor
from ..utils import PRNG, InvalidInput, WeightedItem, weighted_choice

logger = logging.getLogger(__name__)

# Odd-row offset adjacency; odd rows sit half a cell to the right
EVEN_ROW_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1), (-1, -1), (-1, 1))
ODD_ROW_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1), (1, -1), (1, 1))

# Terrain types an anchor cell may never receive
ANCHOR_EXCLUDED_TERRAIN = frozenset({TerrainType.SEA, TerrainType.MOUNTAINS})


def get_neighbors(coord: HexCoord, cols: int, rows: int) -> list[HexCoord]:
    """Return the in-bounds neighbors of a cell in a fixed order.

    Args:
        coord: Cell to look around
        cols: Grid width
        rows: Grid height

    Returns:
        Up to six neighboring coordinates (fewer at edges and corners)
    """
    offsets = EVEN_ROW_OFFSETS if coord.row % 2 == 0 else ODD_ROW_OFFSETS
    neighbors = []
    for dc, dr in offsets:
        nc, nr = coord.col + dc, coord.row + dr
        if 0 <= nc < cols and 0 <= nr < rows:
            neighbors.append(HexCoord(nc, nr))
    return neighbors


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _build_zone_lookup(zones: list[MapZone], cols: int, rows: int) -> dict[HexCoord, MapZone]:
    lookup: dict[HexCoord, MapZone] = {}
    for zone in zones:
        shape = zone.shape
        if isinstance(shape, BoundsShape):
            for r in range(max(0, shape.min_row), min(rows - 1, shape.max_row) + 1):
                for c in range(max(0, shape.min_col), min(cols - 1, shape.max_col) + 1):
                    lookup[HexCoord(c, r)] = zone
        else:
            for cell in shape.hexes:
                if 0 <= cell.col < cols and 0 <= cell.row < rows:
                    lookup[HexCoord(cell.col, cell.row)] = zone
    return lookup


def _place_anchors(
    anchors: list[SettlementAnchor], cols: int, rows: int
) -> dict[HexCoord, SettlementAnchor]:
    """Resolve each anchor to a distinct cell, in input order.

    Raises:
        InvalidInput: If an anchor has no free cell left on the grid
    """
    placed: dict[HexCoord, SettlementAnchor] = {}

    for anchor in anchors:
        desired = HexCoord(
            _clamp(_round_half_up(anchor.approx_col), 0, cols - 1),
            _clamp(_round_half_up(anchor.approx_row), 0, rows - 1),
        )
        if desired not in placed:
            placed[desired] = anchor
            continue

        # BFS outward for the nearest free cell
        visited = {desired}
        queue = deque([desired])
        found = None
        while queue and found is None:
            current = queue.popleft()
            for neighbor in get_neighbors(current, cols, rows):
                if neighbor in visited:
                    continue
                visited.add(neighbor)
                if neighbor not in placed:
                    found = neighbor
                    break
                queue.append(neighbor)

        if found is None:
            raise InvalidInput(f"Could not place anchor {anchor.id!r}: no free hex found")

        logger.debug(
            f"Anchor {anchor.id} relocated from ({desired.col},{desired.row}) "
            f"to ({found.col},{found.row})"
        )
        placed[found] = anchor

    return placed


def _terrain_candidates(
    defaults: Mapping[str, float], overrides: Mapping[str, float], is_anchor: bool
) -> list[WeightedItem]:
    merged = {**defaults, **overrides}
    items = []
    for terrain in ALL_TERRAINS:
        if is_anchor and terrain in ANCHOR_EXCLUDED_TERRAIN:
            continue
        weight = merged.get(terrain.value, 0)
        if weight > 0:
            items.append(WeightedItem(terrain, weight))
    return items


def generate_map(config: MapConfig, rng: PRNG) -> list[list[Hex]]:
    """Generate the initial hex grid for a game.

    Args:
        config: Map section of the theme
        rng: Generator to draw terrain from (advanced once per sampled cell)

    Returns:
        Grid indexed as ``grid[row][col]``

    Raises:
        InvalidInput: If an anchor cannot be placed
    """
    cols, rows = config.cols, config.rows

    zone_lookup = _build_zone_lookup(config.zones, cols, rows)
    anchor_placement = _place_anchors(config.settlement_anchors, cols, rows)

    terrain: dict[HexCoord, TerrainType] = {}
    for r in range(rows):
        for c in range(cols):
            coord = HexCoord(c, r)
            zone = zone_lookup.get(coord)
            candidates = _terrain_candidates(
                config.default_terrain_weights,
                zone.terrain_weights if zone is not None else {},
                coord in anchor_placement,
            )
            if candidates:
                terrain[coord] = weighted_choice(candidates, rng)
            else:
                terrain[coord] = TerrainType.PLAINS

    if config.sea_edge:
        for coord in terrain:
            if coord.row in (0, rows - 1) or coord.col in (0, cols - 1):
                terrain[coord] = TerrainType.SEA

    grid: list[list[Hex]] = []
    for r in range(rows):
        row = []
        for c in range(cols):
            coord = HexCoord(c, r)
            anchor = anchor_placement.get(coord)
            if anchor is not None:
                settlement = Settlement(
                    id=anchor.id,
                    name=anchor.name,
                    type=anchor.type,
                    population=anchor.starting_population,
                    stability=anchor.starting_stability,
                    buildings=list(anchor.starting_buildings),
                    is_capital=anchor.is_capital,
                )
                controlled_by = anchor.civilization_id
            else:
                settlement = None
                zone = zone_lookup.get(coord)
                controlled_by = zone.initial_controlled_by if zone is not None else None
            row.append(
                Hex(
                    coord=coord,
                    terrain=terrain[coord],
                    settlement=settlement,
                    controlled_by=controlled_by,
                )
            )
        grid.append(row)

    logger.debug(
        f"Generated {cols}x{rows} map with {len(anchor_placement)} settlements "
        f"and {len(config.zones)} zones"
    )
    return grid


def initialize_map(config: MapConfig, rng: PRNG) -> list[list[Hex]]:
    """Generate the map for a new game (alias of ``generate_map``)."""
    return generate_map(config, rng)
