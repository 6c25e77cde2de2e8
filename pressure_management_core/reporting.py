from __future__ import annotations

import typing as t
from pathlib import Path

from pressure_management_core.network.network import ValveNetwork
from pressure_management_core.utils.time import format_clock_time


class ActuatorPositionRecorder:
    """Keeps the actuator position of every dynamic valve after each converged step, and writes
    them as lines of ``<h:mm:ss> <valve name> <position>`` to ``output`` when given. A path is
    opened (and truncated) on the first record and closed by ``close``.
    """

    def __init__(self, output: t.Union[str, Path, t.TextIO, None] = None):
        self.history: t.Dict[str, t.List[t.Tuple[int, float]]] = {}
        self._path: t.Optional[Path] = None
        self._stream: t.Optional[t.TextIO] = None
        self._owns_stream = False
        if isinstance(output, (str, Path)):
            self._path = Path(output)
        else:
            self._stream = output

    def record(self, time: int, network: ValveNetwork):
        for valve in network.dynamic_valves():
            position = valve.actuator.position
            self.history.setdefault(valve.name, []).append((time, position))
            self.write_line(f"{format_clock_time(time)} {valve.name} {position:.6g}")

    def write_line(self, line: str):
        stream = self._get_stream()
        if stream is not None:
            stream.write(line + "\n")

    def _get_stream(self):
        if self._stream is None and self._path is not None:
            self._stream = open(self._path, "w")
            self._owns_stream = True
        return self._stream

    def positions(self, valve: str) -> t.List[float]:
        return [position for _, position in self.history.get(valve, [])]

    def close(self):
        if self._owns_stream and self._stream is not None:
            self._stream.close()
            self._stream = None
            self._path = None
            self._owns_stream = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
