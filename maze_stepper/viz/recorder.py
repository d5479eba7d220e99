import logging
import os
from datetime import datetime
from typing import Optional

import cv2
import numpy as np
import pygame

logger = logging.getLogger(__name__)


def default_output_path(prefix: str = "maze", directory: str = "recordings") -> str:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    os.makedirs(directory, exist_ok=True)
    return os.path.join(directory, f"{prefix}_{ts}.mp4")


class VideoRecorder:
    """
    Writes the pygame window to an mp4 file.

    frame_stride keeps one window frame out of N, which shortens long
    animations without changing the playback fps.
    """

    def __init__(self, active=False, output_file: Optional[str] = None, fps=30, frame_stride=1):
        self.active = active
        self.output_file = output_file
        self.fps = fps
        self.frame_stride = max(1, frame_stride)
        self.writer = None
        self.frames_seen = 0
        self.frame_count = 0

    def capture_frame(self, surface: pygame.Surface):
        if not self.active:
            return

        self.frames_seen += 1
        if (self.frames_seen - 1) % self.frame_stride:
            return

        if self.writer is None:
            if not self.output_file:
                self.output_file = default_output_path()
            fourcc = cv2.VideoWriter_fourcc(*'mp4v')
            self.writer = cv2.VideoWriter(self.output_file, fourcc, self.fps, surface.get_size())
            logger.info(f"Recording started: {self.output_file}")

        self.writer.write(self.surface_to_bgr(surface))
        self.frame_count += 1

    @staticmethod
    def surface_to_bgr(surface: pygame.Surface) -> np.ndarray:
        # surfarray is (width, height, 3) RGB, OpenCV wants (height, width, 3) BGR
        rgb = np.ascontiguousarray(np.transpose(pygame.surfarray.array3d(surface), (1, 0, 2)))
        return cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)

    def stop(self):
        if self.writer:
            self.writer.release()
            logger.info(f"Video saved: {self.output_file} ({self.frame_count} frames)")
            self.writer = None
