class MazeError(Exception):
    """Base class for engine errors."""


class InvalidDimensions(MazeError, ValueError):
    def __init__(self, width, height):
        super().__init__(f"Invalid grid dimensions {width}x{height} (both must be >= 1)")
        self.width = width
        self.height = height


class OutOfRange(MazeError, IndexError):
    def __init__(self, x, y, width, height, what="Coordinate"):
        super().__init__(f"{what} ({x}, {y}) out of range for {width}x{height} grid")
        self.x = x
        self.y = y


class NoActiveGeneration(MazeError, RuntimeError):
    def __init__(self):
        super().__init__("No generation in progress; call start_generation() first")
