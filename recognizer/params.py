import math
from dataclasses import dataclass


@dataclass(frozen=True)
class RecognizerParams:
    num_points: int = 64
    square_size: float = 250.0
    min_point_distance: float = 2.0
    min_points: int = 5

    # 旋转修正窗口：正常窗口 [-r, r]，翻转窗口 [c-r, c+r]
    angle_range_deg: float = 25.0
    flip_center_deg: float = 180.0
    angle_precision_deg: float = 2.0

    score_threshold: float = 0.6

    @property
    def normal_window(self):
        return -self.angle_range_deg, self.angle_range_deg

    @property
    def flipped_window(self):
        return (self.flip_center_deg - self.angle_range_deg,
                self.flip_center_deg + self.angle_range_deg)

    @property
    def half_diagonal(self) -> float:
        return 0.5 * math.sqrt(2.0 * self.square_size ** 2)


DEFAULT_PARAMS = RecognizerParams()
