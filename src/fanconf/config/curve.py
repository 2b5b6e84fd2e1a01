"""Fan curves: the ordered points a fan's speed is derived from."""

import logging
from typing import Iterable, Iterator, List, TextIO, Union

from pydantic import BaseModel, ConfigDict, Field

from .point import Point

logger = logging.getLogger(__name__)

Source = Union[str, Iterable[str]]


def iter_lines(source: Source) -> Iterator[str]:
    """Yield lines from a block of text, a text stream or a list of lines."""
    if isinstance(source, str):
        yield from source.splitlines()
    else:
        for line in source:
            yield line.rstrip("\r\n")


class Curve(BaseModel):
    """List of points, one per line, kept in file order.

    I/O is sequential: reading consumes lines until the source is
    exhausted. Lines that don't yield a valid point are logged and
    skipped so one typo doesn't discard the rest of the curve. Ordering
    and monotonicity are the control loop's concern.
    """

    model_config = ConfigDict(frozen=True)

    points: List[Point] = Field(
        default_factory=list, description="Points in evaluation order"
    )

    @classmethod
    def decode(cls, source: Source) -> "Curve":
        points = []
        for line in iter_lines(source):
            if not line.strip():
                continue
            point = Point.decode(line)
            if point.valid():
                points.append(point)
            else:
                logger.error(f"Invalid point: {line.strip()}")
        return cls(points=points)

    @classmethod
    def read(cls, stream: TextIO) -> "Curve":
        return cls.decode(stream)

    def encode(self) -> str:
        return "".join(f"{point.encode()}\n" for point in self.points)

    def write(self, stream: TextIO) -> None:
        stream.write(self.encode())

    def valid(self) -> bool:
        """A curve is usable for control only if it has a point."""
        return bool(self.points)

    def count(self) -> int:
        return len(self.points)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:  # type: ignore[override]
        return iter(self.points)
