# --- mazecam_lib/pipeline.py ---
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from mazecam_lib import constants
from mazecam_lib.analysis import EdgeMask, FrameProcessor, detect_edges
from mazecam_lib.capture import FrameSource
from mazecam_lib.rendering import FrameSink
from mazecam_lib.schema import FrameResult

log = logging.getLogger("mazecam.main")

FrameHook = Callable[[np.ndarray, Optional[EdgeMask], FrameResult], None]


@dataclass
class PipelineStats:
    """Counters describing one run of the pipeline."""

    frames_processed: int = 0
    frames_skipped: int = 0
    stop_reason: str = ""


class NavigationPipeline:
    """
    Pulls frames from a source, analyzes them and pushes results to a sink,
    strictly one frame at a time. A fixed delay follows every cycle; slow
    frames are not compensated and nothing is dropped to catch up.
    """

    def __init__(
        self,
        source: FrameSource,
        sink: FrameSink,
        processor: Optional[FrameProcessor] = None,
        canny_low: int = constants.CANNY_LOW,
        canny_high: int = constants.CANNY_HIGH,
        delay_ms: int = constants.FRAME_DELAY_MS,
        on_frame: Optional[FrameHook] = None,
    ):
        self.source = source
        self.sink = sink
        self.processor = processor or FrameProcessor()
        self.canny_low = canny_low
        self.canny_high = canny_high
        self.delay_ms = delay_ms
        self.on_frame = on_frame
        self.latest_result: Optional[FrameResult] = None
        self._stop_event = threading.Event()
        self._shut_down = False
        self._shutdown_lock = threading.Lock()

    def stop(self):
        """Requests the loop to finish after the current cycle."""
        self._stop_event.set()

    @property
    def stopping(self) -> bool:
        return self._stop_event.is_set()

    def _cycle(self, stats: PipelineStats) -> bool:
        """Runs one capture/analysis/display cycle. Returns False to stop."""
        frame = self.source.read()
        if frame is None or frame.size == 0:
            stats.frames_skipped += 1
            log.debug("No frame this cycle; keeping the previous result.")
            return True

        mask = detect_edges(frame, self.canny_low, self.canny_high)
        result = self.processor.process(frame, mask)
        # Published as one reference swap so readers never see a partial result.
        self.latest_result = result
        stats.frames_processed += 1
        if self.on_frame is not None:
            self.on_frame(frame, mask, result)

        if not self.sink.show(frame, result):
            stats.stop_reason = "sink closed"
            return False
        return True

    def run(self, max_frames: Optional[int] = None) -> PipelineStats:
        """
        Opens the source and loops until it closes, the sink asks to stop,
        stop() is called or max_frames frames were processed. Raises
        CaptureUnavailableError if the source cannot be opened.
        """
        stats = PipelineStats()
        self.source.open()
        log.info("Pipeline started (delay %d ms).", self.delay_ms)
        try:
            while True:
                if self.stopping:
                    stats.stop_reason = "stop requested"
                    break
                if not self.source.is_open:
                    stats.stop_reason = "source closed"
                    break
                if not self._cycle(stats):
                    break
                if max_frames is not None and stats.frames_processed >= max_frames:
                    stats.stop_reason = "frame limit reached"
                    break
                # Interruptible pacing wait.
                self._stop_event.wait(self.delay_ms / 1000.0)
        finally:
            self.shutdown()

        log.info(
            "Pipeline finished (%s): %d processed, %d skipped.",
            stats.stop_reason,
            stats.frames_processed,
            stats.frames_skipped,
        )
        return stats

    def shutdown(self):
        """Releases the source and the sink exactly once."""
        with self._shutdown_lock:
            if self._shut_down:
                return
            self._shut_down = True
        self._stop_event.set()
        try:
            self.source.release()
        finally:
            self.sink.close()
        log.debug("Pipeline resources released.")
