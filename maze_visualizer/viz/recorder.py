import logging
import os
from datetime import datetime
import cv2
import numpy as np
import pygame

logger = logging.getLogger(__name__)

RECORDINGS_DIR = "recordings"


def default_output_file(prefix: str = "maze") -> str:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    fname = f"{prefix}_{ts}.mp4"
    if os.path.isdir(RECORDINGS_DIR):
        return os.path.join(RECORDINGS_DIR, fname)
    return fname


def surface_to_bgr(surface: pygame.Surface) -> np.ndarray:
    # surfarray is (width, height, 3) RGB; OpenCV wants (height, width, 3) BGR
    frame = np.transpose(pygame.surfarray.array3d(surface), (1, 0, 2))
    return cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)


class VideoRecorder:
    def __init__(self, active=False, output_file=None, fps=30):
        self.active = active
        self.output_file = output_file
        self.fps = fps
        self.writer = None
        self.frame_size = None
        self.frame_count = 0

        if self.active and not self.output_file:
            self.output_file = default_output_file()

    def write_frame(self, frame: np.ndarray):
        if not self.active:
            return

        height, width = frame.shape[:2]
        if self.writer is None:
            self.frame_size = (width, height)
            fourcc = cv2.VideoWriter_fourcc(*'mp4v')
            self.writer = cv2.VideoWriter(self.output_file, fourcc, self.fps, self.frame_size)
            logger.info(f"Recording started: {self.output_file}")
        elif (width, height) != self.frame_size:
            # Window was resized; the codec needs a fixed frame size
            frame = cv2.resize(frame, self.frame_size)

        self.writer.write(frame)
        self.frame_count += 1

    def capture_frame(self, surface: pygame.Surface):
        if self.active:
            self.write_frame(surface_to_bgr(surface))

    def stop(self):
        if self.writer:
            self.writer.release()
            logger.info(f"Video saved: {self.output_file} ({self.frame_count} frames)")
            self.writer = None
