"""Ground-plane vector utilities module, providing the Vector class used for world positions."""
import math
from dataclasses import dataclass


@dataclass
class Vector:
    """Two-dimensional vector on the ground plane.

    World positions in UrbanSim live on the X/Z plane (Y is up and is left to
    the renderer), so the components are named ``x`` and ``z``.

    Attributes:
        x: X coordinate.
        z: Z coordinate.
    """

    x: float
    z: float

    def __init__(self, x, z=None):
        """Initialize the vector.

        Args:
            x: X coordinate, or a list/tuple/dict holding both coordinates.
            z: Z coordinate.
        """
        if z is None and isinstance(x, (list, tuple)):
            self.x = float(x[0])
            self.z = float(x[1])
        elif z is None and isinstance(x, dict):
            self.x = float(x.get('x', 0))
            self.z = float(x.get('z', 0))
        else:
            self.x = float(x)
            self.z = float(z) if z is not None else 0.0

        self.x = round(self.x, 4)
        self.z = round(self.z, 4)

    def normalize(self) -> 'Vector':
        """Normalize the vector.

        Returns:
            Normalized vector, or the zero vector for a zero-length input.
        """
        magnitude = math.hypot(self.x, self.z)
        if magnitude == 0:
            return Vector(0, 0)
        return Vector(self.x / magnitude, self.z / magnitude)

    def __sub__(self, other: 'Vector') -> 'Vector':
        """Vector subtraction."""
        return Vector(self.x - other.x, self.z - other.z)

    def distance(self, other: 'Vector') -> float:
        """Calculate distance to another vector.

        Args:
            other: Another vector.

        Returns:
            Euclidean distance between the two vectors.
        """
        return math.hypot(self.x - other.x, self.z - other.z)

    def lerp(self, other: 'Vector', t: float) -> 'Vector':
        """Linearly interpolate towards another vector.

        Args:
            other: Target vector.
            t: Interpolation factor, 0 returns self and 1 returns other.

        Returns:
            The interpolated vector.
        """
        return Vector(self.x + (other.x - self.x) * t, self.z + (other.z - self.z) * t)

    def yaw(self) -> float:
        """Heading angle of the vector in degrees, measured from +X towards +Z."""
        return round(math.degrees(math.atan2(self.z, self.x)), 4)

    def __eq__(self, other: 'Vector') -> bool:
        """Check if two vectors are equal within a small tolerance."""
        if not isinstance(other, Vector):
            return NotImplemented
        return abs(self.x - other.x) < 1e-3 and abs(self.z - other.z) < 1e-3

    def __hash__(self) -> int:
        """Calculate hash value of the vector."""
        return hash((self.x, self.z))

    def to_dict(self):
        """Convert the vector to dictionary representation."""
        return {'x': self.x, 'z': self.z}

    def to_tuple(self):
        """Return the vector as an ``(x, z)`` tuple."""
        return (self.x, self.z)
