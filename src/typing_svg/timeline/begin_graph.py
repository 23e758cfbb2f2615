"""Dependency graph over animation end events.

Each line timeline is a node. An edge ``a -> b`` means "``b`` starts when ``a``
ends", optionally after a delay. A node's begin expression is the list of its
alternative triggers: document load and/or the end events of its predecessors.
"""

from dataclasses import dataclass, field

from ..constants import ANIMATION_ID_PREFIX


@dataclass(frozen=True)
class LoadTrigger:
    """Start when the document loads."""

    def serialize(self, id_prefix: str = ANIMATION_ID_PREFIX) -> str:
        del id_prefix
        return "0s"


@dataclass(frozen=True)
class EndTrigger:
    """Start when another timeline's end event fires."""

    index: int
    delay_ms: float = 0

    def serialize(self, id_prefix: str = ANIMATION_ID_PREFIX) -> str:
        reference = f"{id_prefix}{self.index}.end"
        if self.delay_ms > 0:
            return f"{reference}+{_format_ms(self.delay_ms)}ms"
        return reference


Trigger = LoadTrigger | EndTrigger


def _format_ms(value: float) -> str:
    if abs(value - round(value)) < 1e-9:
        return str(int(round(value)))
    return f"{value:.3f}".rstrip("0").rstrip(".")


@dataclass(frozen=True)
class BeginExpression:
    """Alternative start triggers for one timeline, in evaluation order."""

    triggers: tuple[Trigger, ...]

    def serialize(self, id_prefix: str = ANIMATION_ID_PREFIX) -> str:
        return ";".join(trigger.serialize(id_prefix) for trigger in self.triggers)


@dataclass
class BeginGraph:
    """Start-after edges between line timelines."""

    node_count: int
    _roots: set[int] = field(default_factory=set)
    _edges: dict[int, list[tuple[int, float]]] = field(default_factory=dict)

    def start_at_load(self, index: int) -> None:
        self._check_node(index)
        self._roots.add(index)

    def start_after(self, index: int, predecessor: int, delay_ms: float = 0) -> None:
        """Add an edge so ``index`` starts when ``predecessor`` ends."""
        self._check_node(index)
        self._check_node(predecessor)
        self._edges.setdefault(index, []).append((predecessor, max(0.0, delay_ms)))

    def begin_expression(self, index: int) -> BeginExpression:
        self._check_node(index)
        triggers: list[Trigger] = []
        if index in self._roots:
            triggers.append(LoadTrigger())
        for predecessor, delay_ms in self._edges.get(index, []):
            triggers.append(EndTrigger(predecessor, delay_ms))
        if not triggers:
            raise ValueError(f"Timeline {index} has no start trigger")
        return BeginExpression(tuple(triggers))

    def _check_node(self, index: int) -> None:
        if not 0 <= index < self.node_count:
            raise ValueError(
                f"Timeline index {index} out of range for {self.node_count} timelines"
            )


def chained_graph(count: int, repeat: bool, cycle_pause_ms: float) -> BeginGraph:
    """Each timeline starts after the previous one; the first restarts the cycle."""
    graph = BeginGraph(count)
    graph.start_at_load(0)
    for index in range(1, count):
        graph.start_after(index, index - 1)
    if repeat:
        graph.start_after(0, count - 1, cycle_pause_ms)
    return graph


def block_graph(count: int, repeat: bool, cycle_pause_ms: float) -> BeginGraph:
    """All timelines start together and restart together after the last one ends."""
    graph = BeginGraph(count)
    for index in range(count):
        graph.start_at_load(index)
        if repeat:
            graph.start_after(index, count - 1, cycle_pause_ms)
    return graph
