"""Vehicle agent module for the traffic overlay."""
from urbansim.citygen.dataclass import Route
from urbansim.utils.vector import Vector


class Vehicle:
    """Vehicle travelling along arterial routes.

    ``progress`` is the fractional position along the current route and is
    always kept in [0, 1).
    """

    _id_counter = 0

    def __init__(self, route: Route, progress: float, speed: float, color: str, vehicle_id: int = None):
        """Initialize a vehicle.

        Args:
            route: Route the vehicle starts on.
            progress: Initial progress, renormalized into [0, 1).
            speed: Progress gained per unit of tick delta, must be positive.
            color: Display colour.
            vehicle_id: Explicit id; taken from the class counter when omitted.

        Raises:
            ValueError: If speed is not positive.
        """
        if speed <= 0:
            raise ValueError(f'Vehicle speed must be positive, got {speed}')
        if vehicle_id is None:
            vehicle_id = Vehicle._id_counter
            Vehicle._id_counter += 1
        self.id = vehicle_id
        self.route = route
        self.progress = progress % 1.0
        self.speed = speed
        self.color = color

        self.position = Vector(0, 0)
        self.heading = Vector(0, 0)
        self.update_pose()

    @classmethod
    def reset_id_counter(cls):
        """Reset the vehicle ID counter to zero."""
        cls._id_counter = 0

    @property
    def yaw(self) -> float:
        """Heading angle in degrees."""
        return self.heading.yaw()

    def update_pose(self):
        """Recompute position and heading from the current route and progress."""
        if self.route is None:
            return
        self.position = self.route.point_at(self.progress)
        self.heading = self.route.direction

    def __repr__(self):
        """Return a detailed string representation of the vehicle."""
        route_id = self.route.id if self.route is not None else None
        return f'Vehicle(id={self.id}, route={route_id}, progress={self.progress:.4f}, speed={self.speed}, position={self.position})'

    def to_dict(self):
        """Convert the vehicle to dictionary representation."""
        return {
            'id': self.id,
            'route': self.route.id if self.route is not None else None,
            'progress': self.progress,
            'speed': self.speed,
            'color': self.color,
            'position': self.position.to_dict(),
            'yaw': self.yaw,
        }
