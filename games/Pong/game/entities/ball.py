"""Ball entity with per-tick kinematics.

Velocity is in pixels per tick. Every change returns a new Ball.
"""

from dataclasses import dataclass, replace
import math

from models import Rectangle


@dataclass(frozen=True)
class Ball:
    """Ball centred on (x, y).

    Attributes:
        x: Center X position
        y: Center Y position
        vx: X velocity (pixels/tick)
        vy: Y velocity (pixels/tick)
        radius: Ball radius
    """
    x: float
    y: float
    vx: float
    vy: float
    radius: float = 8.0

    @property
    def speed(self) -> float:
        """Get current ball speed."""
        return math.hypot(self.vx, self.vy)

    @property
    def bounds(self) -> Rectangle:
        """Bounding box used for AABB tests."""
        return Rectangle(x=self.x - self.radius, y=self.y - self.radius,
                         width=2 * self.radius, height=2 * self.radius)

    def moved(self) -> 'Ball':
        """Advance one tick along the velocity."""
        return replace(self, x=self.x + self.vx, y=self.y + self.vy)

    def bounce_vertical(self) -> 'Ball':
        """Bounce off horizontal surface (reverse Y velocity)."""
        return replace(self, vy=-self.vy)

    def with_velocity(self, vx: float, vy: float) -> 'Ball':
        return replace(self, vx=vx, vy=vy)
