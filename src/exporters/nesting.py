"""Hand-off between generated patterns and an external nesting optimiser.

The optimiser itself lives outside this package. This module prepares one
job per fabric colour (cut outlines with seam allowance plus the sewing
outlines they came from), describes the asynchronous backend contract and
joins the returned placements back onto the pieces.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Protocol, Sequence

from tessellation.geometry import polygon_area
from tessellation.layout import group_by_color
from tessellation.model import Piece, TessellationResult
from tessellation.seam_offset import offset_pieces

__all__ = [
    "NestingBackend",
    "NestingError",
    "NestingJob",
    "PackedPiece",
    "PackedResult",
    "PackingProgress",
    "Placement",
    "ProgressCallback",
    "build_nesting_jobs",
    "run_nesting",
]


class NestingError(RuntimeError):
    """Raised when a backend produces no usable placement."""


@dataclass(frozen=True, slots=True)
class PackingProgress:
    iteration: int
    utilization: float
    is_running: bool


ProgressCallback = Callable[[PackingProgress], None]


@dataclass(frozen=True, slots=True)
class Placement:
    """Translation and rotation (degrees) the optimiser chose for one piece."""

    piece_id: str
    x: float
    y: float
    rotation: float = 0.0


@dataclass(slots=True)
class NestingJob:
    """All pieces of one colour, ready to be placed on a sheet."""

    color_index: int | None
    pieces: list[Piece]
    sewing_pieces: list[Piece]
    sheet_width: float
    sheet_height: float
    spacing: float

    @property
    def piece_area(self) -> float:
        return sum(polygon_area(piece.polygon) for piece in self.pieces)


@dataclass(frozen=True, slots=True)
class PackedPiece:
    piece: Piece
    original_piece: Piece
    x: float
    y: float
    rotation: float


@dataclass(slots=True)
class PackedResult:
    pieces: list[PackedPiece] = field(default_factory=list)
    sheet_width: float = 0.0
    sheet_height: float = 0.0
    efficiency: float = 0.0


class NestingBackend(Protocol):
    """Asynchronous, cancellable optimiser contract."""

    async def nest(
        self, job: NestingJob, on_progress: ProgressCallback | None = None
    ) -> Sequence[Placement]:  # pragma: no cover - interface definition
        """Place ``job.pieces`` on the sheet, reporting progress periodically."""

    def stop(self) -> None:  # pragma: no cover - interface definition
        """Ask a running ``nest`` call to finish with its best result so far."""


def build_nesting_jobs(
    result: TessellationResult,
    *,
    sheet_width: float,
    sheet_height: float,
    spacing: float,
    seam_allowance: float | None = None,
) -> list[NestingJob]:
    """Group ``result`` by colour and grow every piece by the seam allowance."""

    distance = result.config.seam_allowance if seam_allowance is None else seam_allowance
    jobs: list[NestingJob] = []
    for color_index, pieces in group_by_color(result.pieces).items():
        jobs.append(
            NestingJob(
                color_index=color_index,
                pieces=offset_pieces(pieces, distance),
                sewing_pieces=list(pieces),
                sheet_width=float(sheet_width),
                sheet_height=float(sheet_height),
                spacing=float(spacing),
            )
        )
    return jobs


async def run_nesting(
    job: NestingJob,
    backend: NestingBackend,
    on_progress: ProgressCallback | None = None,
) -> PackedResult:
    """Run ``backend`` on ``job`` and attach its placements to the pieces."""

    placements = await backend.nest(job, on_progress)
    if not placements:
        raise NestingError(f"No valid placement found for colour {job.color_index}.")

    cut_by_id = {piece.id: piece for piece in job.pieces}
    sewing_by_id = {piece.id: piece for piece in job.sewing_pieces}
    packed: list[PackedPiece] = []
    for placement in placements:
        cut = cut_by_id.get(placement.piece_id)
        sewing = sewing_by_id.get(placement.piece_id)
        if cut is None or sewing is None:
            continue
        packed.append(
            PackedPiece(
                piece=cut,
                original_piece=sewing,
                x=placement.x,
                y=placement.y,
                rotation=placement.rotation,
            )
        )

    sheet_area = job.sheet_width * job.sheet_height
    efficiency = job.piece_area / sheet_area * 100 if sheet_area > 0 else 0.0
    return PackedResult(
        pieces=packed,
        sheet_width=job.sheet_width,
        sheet_height=job.sheet_height,
        efficiency=efficiency,
    )
