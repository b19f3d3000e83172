from dataclasses import dataclass
from typing import Optional, Tuple
from maze_visualizer.core.stats import ALGORITHMS, ASTAR

# ==========================================
# HOST LIMITS
# The core accepts any positive size/speed; these bound what the CLI and the
# viewer let a user pick.
# ==========================================
MIN_SIZE = 5
MAX_SIZE = 50
MIN_GENERATION_SPEED = 1
MAX_GENERATION_SPEED = 50
MIN_SOLVING_SPEED = 1
MAX_SOLVING_SPEED = 100


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


@dataclass
class MazeConfig:
    width: int = 25
    height: int = 25
    generation_speed: int = 10   # steps per frame: lower = more frames = slower
    solving_speed: int = 50      # higher = shorter pause per frame = faster
    algorithm: str = ASTAR
    seed: Optional[int] = None
    window_width: int = 1280
    window_height: int = 720
    fps: int = 60
    record: bool = False
    start_point: Optional[Tuple[int, int]] = None  # None = top-left corner
    end_point: Optional[Tuple[int, int]] = None    # None = bottom-right corner

    def clamp(self) -> "MazeConfig":
        """Pulls user-facing values back into the host's ranges."""
        if self.algorithm not in ALGORITHMS:
            raise ValueError(f"Unknown algorithm '{self.algorithm}', expected one of {ALGORITHMS}")
        self.width = _clamp(self.width, MIN_SIZE, MAX_SIZE)
        self.height = _clamp(self.height, MIN_SIZE, MAX_SIZE)
        self.generation_speed = _clamp(self.generation_speed, MIN_GENERATION_SPEED, MAX_GENERATION_SPEED)
        self.solving_speed = _clamp(self.solving_speed, MIN_SOLVING_SPEED, MAX_SOLVING_SPEED)
        if self.start_point is not None:
            self.start_point = self._clamp_point(self.start_point)
        if self.end_point is not None:
            self.end_point = self._clamp_point(self.end_point)
        return self

    def _clamp_point(self, point: Tuple[int, int]) -> Tuple[int, int]:
        x, y = point
        return _clamp(x, 0, self.width - 1), _clamp(y, 0, self.height - 1)

    @property
    def start(self) -> Tuple[int, int]:
        return self.start_point if self.start_point is not None else (0, 0)

    @property
    def end(self) -> Tuple[int, int]:
        return self.end_point if self.end_point is not None else (self.width - 1, self.height - 1)
