"""
Pyramid Seeder

Drives a bounded-memory walk over a zoom range and hands each batch of
packed coordinates to a downstream sink, such as a tile index or a work
queue. Only one batch is ever held in memory.
"""

import time
from typing import Any, Callable, Dict, List, Optional

import structlog

from .tile_enumerator import CoordinateGroup, EnumerationCursor, for_zoom_range_batch, n_for_zoom
from ..coordinates.encoding import encode
from ..monitoring.metrics import MetricsCollector
from ..utils.config import Config
from ..utils.exceptions import ValidationError

EncodedSink = Callable[[List[int]], None]


class PyramidSeeder:
    """
    Feeds packed tile coordinates to a sink in fixed-size batches.

    A seeding run can be stopped and picked up later by passing the cursor
    it left behind back into :meth:`seed`.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        metrics_collector: Optional[MetricsCollector] = None
    ):
        """
        Initialize the seeder.

        Args:
            config: Configuration, read from the environment if omitted
            metrics_collector: Optional metrics collector
        """
        self.config = config or Config.from_env()
        self.config.validate()
        self.metrics = metrics_collector or MetricsCollector(
            enable_prometheus=self.config.metrics_enabled
        )

        self.logger = structlog.get_logger(
            seeder_type=self.__class__.__name__,
            config_env=self.config.environment
        )

        self.stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, Any]:
        return {
            'batches_emitted': 0,
            'coords_emitted': 0,
            'processing_time': 0.0,
            'errors': []
        }

    def _check_zoom_range(self, zoom_start: int, zoom_until: int) -> None:
        if zoom_start < 0 or zoom_until > self.config.max_zoom:
            raise ValidationError(
                f"Zoom range must lie within 0..{self.config.max_zoom}, "
                f"got {zoom_start}..{zoom_until}"
            )

    def seed(
        self,
        sink: EncodedSink,
        zoom_start: int = 0,
        zoom_until: int = 0,
        batch_size: Optional[int] = None,
        cursor: Optional[EnumerationCursor] = None,
        max_batches: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Walk a zoom range and pass each batch of encoded tiles to ``sink``.

        Args:
            sink: Called once per batch with the encoded coordinates
            zoom_start: First zoom level, ignored when ``cursor`` is given
            zoom_until: Last zoom level, inclusive, ignored when ``cursor``
                is given
            batch_size: Tiles per batch, defaults to the configured size
            cursor: Resume an earlier run from this position
            max_batches: Stop after this many batches, leaving the cursor
                at the next unvisited tile

        Returns:
            Dictionary with the run results and the cursor to resume from
        """
        start_time = time.time()
        if batch_size is None:
            batch_size = self.config.batch_size

        if cursor is None:
            self._check_zoom_range(zoom_start, zoom_until)
            cursor = EnumerationCursor(z=zoom_start, zoom_until=zoom_until)
        else:
            self._check_zoom_range(0, cursor.zoom_until)

        group = CoordinateGroup(capacity=batch_size)
        resume_from = (cursor.x, cursor.y, cursor.z)
        batches = 0
        total_coords = 0
        complete = False

        self.logger.info(
            "Starting pyramid seeding",
            resume_from=f"{cursor.z}/{cursor.x}/{cursor.y}",
            zoom_until=cursor.zoom_until,
            batch_size=batch_size,
            estimated_total=n_for_zoom(cursor.zoom_until)
        )

        try:
            while max_batches is None or batches < max_batches:
                resume_from = (cursor.x, cursor.y, cursor.z)
                complete = for_zoom_range_batch(cursor, group)
                if group.n:
                    sink([encode(coord) for coord in group.coords])
                    batches += 1
                    total_coords += group.n
                    self.metrics.increment_counter(
                        'tile_pyramid_batches_total', labels={'mode': 'zoom_range'}
                    )
                    self.metrics.increment_counter(
                        'tile_pyramid_coords_total', group.n, labels={'mode': 'zoom_range'}
                    )
                    self.metrics.record_histogram('tile_pyramid_batch_size', group.n)
                if complete:
                    break

        except Exception as e:
            # rewind to the first tile of the undelivered batch
            cursor.x, cursor.y, cursor.z = resume_from
            error_msg = f"Pyramid seeding failed: {str(e)}"
            self.logger.error(
                error_msg,
                next_coord=f"{cursor.z}/{cursor.x}/{cursor.y}",
                batches=batches
            )
            self.stats['errors'].append(error_msg)
            self.metrics.increment_counter('tile_pyramid_seed_failures_total')
            self._update_stats(batches, total_coords, start_time)

            return {
                'success': False,
                'error': error_msg,
                'batches': batches,
                'total_coords': total_coords,
                'cursor': cursor,
                'processing_time': time.time() - start_time
            }

        processing_time = self._update_stats(batches, total_coords, start_time)
        self.metrics.record_histogram('tile_pyramid_seed_duration_seconds', processing_time)

        self.logger.info(
            "Pyramid seeding finished",
            complete=complete,
            batches=batches,
            total_coords=total_coords,
            processing_time=processing_time
        )

        return {
            'success': True,
            'complete': complete,
            'batches': batches,
            'total_coords': total_coords,
            'cursor': cursor,
            'processing_time': processing_time
        }

    def _update_stats(self, batches: int, total_coords: int, start_time: float) -> float:
        processing_time = time.time() - start_time
        self.stats['batches_emitted'] += batches
        self.stats['coords_emitted'] += total_coords
        self.stats['processing_time'] += processing_time
        return processing_time

    def get_seeding_stats(self) -> Dict[str, Any]:
        """Get seeding statistics."""
        return self.stats.copy()

    def reset_stats(self) -> None:
        """Reset seeding statistics."""
        self.stats = self._empty_stats()
