from dataclasses import dataclass


@dataclass(frozen=True)
class GridSizeConfig:
    min_size: int = 5
    max_size: int = 200
    default_width: int = 30
    default_height: int = 30


@dataclass(frozen=True)
class AnimationConfig:
    min_speed: int = 1
    max_speed: int = 100
    default_speed: int = 50
    # steps/sec = speed_base ** speed  (speed 50 -> ~29 steps/sec, 100 -> ~868)
    speed_base: float = 1.07
    # Cap so one frame never stalls the window
    max_steps_per_frame: int = 150
    fps: int = 60


GRID_SIZE = GridSizeConfig()
ANIMATION = AnimationConfig()


def check_grid_size(value: int, config: GridSizeConfig = GRID_SIZE) -> int:
    """Range check for user-supplied sizes."""
    if not (config.min_size <= value <= config.max_size):
        raise ValueError(f"Grid size {value} outside [{config.min_size}, {config.max_size}]")
    return value


def steps_per_second(speed: int, config: AnimationConfig = ANIMATION) -> float:
    speed = max(config.min_speed, min(config.max_speed, speed))
    return config.speed_base ** speed
