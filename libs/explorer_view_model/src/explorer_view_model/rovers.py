"""Mars rover catalog and the checks run on rover/sol/camera selections."""

from __future__ import annotations

from dataclasses import dataclass

from explorer_view_model.validation import InputValidationError


@dataclass(frozen=True)
class RoverInfo:
    name: str
    landing_date: str
    max_sol: int
    cameras: tuple[str, ...]


ROVERS: dict[str, RoverInfo] = {
    "curiosity": RoverInfo(
        name="Curiosity",
        landing_date="2012-08-05",
        max_sol=3000,
        cameras=("FHAZ", "RHAZ", "MAST", "CHEMCAM", "MAHLI", "MARDI", "NAVCAM"),
    ),
    "opportunity": RoverInfo(
        name="Opportunity",
        landing_date="2004-01-25",
        max_sol=5111,
        cameras=("FHAZ", "RHAZ", "NAVCAM", "PANCAM", "MINITES"),
    ),
    "spirit": RoverInfo(
        name="Spirit",
        landing_date="2004-01-04",
        max_sol=2208,
        cameras=("FHAZ", "RHAZ", "NAVCAM", "PANCAM", "MINITES"),
    ),
}

DEFAULT_ROVER = "curiosity"


def get_rover(rover: str) -> RoverInfo:
    try:
        return ROVERS[rover]
    except KeyError:
        raise InputValidationError(
            f"Unknown rover: {rover}. Choose one of: {', '.join(ROVERS)}"
        ) from None


def validate_sol(rover: str, sol: str | int) -> int:
    info = get_rover(rover)
    try:
        value = int(sol)
    except (TypeError, ValueError):
        raise InputValidationError(f"Sol must be a whole number, got {sol!r}") from None
    if value < 0:
        raise InputValidationError("Sol cannot be negative")
    if value > info.max_sol:
        raise InputValidationError(f"Sol cannot exceed {info.max_sol} for {info.name}")
    return value


def validate_camera(rover: str, camera: str | None) -> str | None:
    """``None``/empty means all cameras; otherwise the camera must belong to ``rover``."""
    info = get_rover(rover)
    if not camera:
        return None
    normalized = camera.upper()
    if normalized not in info.cameras:
        raise InputValidationError(f"{info.name} has no {camera} camera")
    return normalized
