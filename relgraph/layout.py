# /relgraph/layout.py

import math
from typing import List, Optional, Tuple

from relgraph.config import LayoutConfig
from relgraph.models import Edge, Node, Viewport
from relgraph.logger import get_logger

logger = get_logger(__name__)

def default_viewport(config: LayoutConfig) -> Viewport:
    return Viewport(min_x=0.0, min_y=0.0, width=config.width, height=config.height)


def initial_radius(node_count: int, config: LayoutConfig) -> float:
    return min(
        config.initial_radius_max,
        max(config.initial_radius_min, node_count * config.initial_radius_per_node),
    )


def initial_positions(node_count: int, config: LayoutConfig) -> Tuple[List[float], List[float]]:
    """Spaces nodes evenly on a circle, starting at the top."""
    center_x, center_y = config.center
    radius = initial_radius(node_count, config)
    xs, ys = [], []
    for index in range(node_count):
        angle = (2 * math.pi * index) / max(1, node_count) - math.pi / 2
        xs.append(center_x + radius * math.cos(angle))
        ys.append(center_y + radius * math.sin(angle))
    return xs, ys


def bounding_viewport(xs: List[float], ys: List[float], padding: float) -> Viewport:
    min_x = min(xs) - padding
    min_y = min(ys) - padding
    max_x = max(xs) + padding
    max_y = max(ys) + padding
    return Viewport(min_x=min_x, min_y=min_y, width=max_x - min_x, height=max_y - min_y)


class ForceDirectedLayout:
    """
    Fruchterman-Reingold style placement over a fixed number of iterations.

    No randomness is involved: initial positions come from each node's index,
    so identical nodes and edges in identical order give identical coordinates.
    """
    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()

    def run(self, nodes: List[Node], edges: List[Edge]) -> Tuple[List[Node], Viewport]:
        config = self.config
        if not nodes:
            return [], default_viewport(config)

        count = len(nodes)
        k = math.sqrt((config.width * config.height) / count)
        xs, ys = initial_positions(count, config)

        index_by_id = {node.id: index for index, node in enumerate(nodes)}
        springs = [
            (index_by_id[edge.source], index_by_id[edge.target])
            for edge in edges
            if edge.source in index_by_id and edge.target in index_by_id and edge.source != edge.target
        ]

        alpha = config.initial_alpha
        for _ in range(config.iterations):
            force_x = [0.0] * count
            force_y = [0.0] * count
            self._apply_repulsion(xs, ys, force_x, force_y, k)
            self._apply_attraction(xs, ys, force_x, force_y, springs, k)
            self._move(xs, ys, force_x, force_y, alpha * config.max_step)
            alpha *= (1 - config.alpha_decay)

        self._recenter(xs, ys)
        logger.debug(f"Layout settled for {count} node(s) and {len(springs)} spring(s).")

        placed = [
            node.model_copy(update={"x": xs[index], "y": ys[index]})
            for index, node in enumerate(nodes)
        ]
        return placed, bounding_viewport(xs, ys, config.padding)

    @staticmethod
    def _apply_repulsion(xs, ys, force_x, force_y, k):
        count = len(xs)
        for i in range(count):
            for j in range(i + 1, count):
                dx = xs[j] - xs[i]
                dy = ys[j] - ys[i]
                distance = math.sqrt(dx * dx + dy * dy) or 1.0
                force = (k * k) / distance
                fx = (dx / distance) * force
                fy = (dy / distance) * force
                force_x[i] -= fx
                force_y[i] -= fy
                force_x[j] += fx
                force_y[j] += fy

    @staticmethod
    def _apply_attraction(xs, ys, force_x, force_y, springs, k):
        for a, b in springs:
            dx = xs[b] - xs[a]
            dy = ys[b] - ys[a]
            distance = math.sqrt(dx * dx + dy * dy) or 1.0
            force = (distance * distance) / k
            fx = (dx / distance) * force
            fy = (dy / distance) * force
            force_x[a] += fx
            force_y[a] += fy
            force_x[b] -= fx
            force_y[b] -= fy

    def _move(self, xs, ys, force_x, force_y, step_limit):
        margin = self.config.bounds_margin
        max_x = self.config.width - margin
        max_y = self.config.height - margin
        for i in range(len(xs)):
            magnitude = math.sqrt(force_x[i] * force_x[i] + force_y[i] * force_y[i])
            if magnitude > 0:
                step = min(magnitude, step_limit)
                xs[i] += (force_x[i] / magnitude) * step
                ys[i] += (force_y[i] / magnitude) * step
            xs[i] = max(margin, min(max_x, xs[i]))
            ys[i] = max(margin, min(max_y, ys[i]))

    def _recenter(self, xs, ys):
        center_x, center_y = self.config.center
        offset_x = center_x - sum(xs) / len(xs)
        offset_y = center_y - sum(ys) / len(ys)
        for i in range(len(xs)):
            xs[i] += offset_x
            ys[i] += offset_y


def compute_layout(
    nodes: List[Node],
    edges: List[Edge],
    config: Optional[LayoutConfig] = None,
) -> Tuple[List[Node], Viewport]:
    return ForceDirectedLayout(config).run(nodes, edges)
