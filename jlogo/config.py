# jlogo/config.py
import os
from dataclasses import dataclass
from typing import Tuple

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


# --- Configuration ---
class AppConfig:
    """Centralized configuration for the application."""
    PACKAGE_ROOT = os.path.dirname(os.path.abspath(__file__))
    GRAMMAR_FILE = os.path.join("language", "grammar.lark")

    LOG_LEVEL = os.getenv("JLOGO_LOG_LEVEL", "INFO")
    LOG_FILE = os.getenv("JLOGO_LOG_FILE", "")
    USE_PI = _env_flag("JLOGO_USE_PI")

    PI_BLASTER_DEVICE = os.getenv("JLOGO_PI_BLASTER", "/dev/pi-blaster")
    GPIO_ROOT = os.getenv("JLOGO_GPIO_ROOT", "/sys/class/gpio")

    @staticmethod
    def get_grammar_path(grammar_file: str = None) -> str:
        """Constructs the full path to a grammar file shipped with the package."""
        return os.path.join(AppConfig.PACKAGE_ROOT, grammar_file or AppConfig.GRAMMAR_FILE)


@dataclass(frozen=True)
class PiTurtleConfig:
    """Wiring and calibration of the two-wheeled pen robot."""
    pen_servo_pin: int = 18
    left_wheel_pins: Tuple[int, ...] = (6, 13, 19, 26)
    right_wheel_pins: Tuple[int, ...] = (21, 20, 16, 12)

    # Servo travel and the duty cycles at both ends of it
    min_angle: float = 0.0
    max_angle: float = 90.0
    min_duty_cycle: float = 0.05
    max_duty_cycle: float = 0.2
    pen_up_angle: float = 0.0
    pen_down_angle: float = 90.0

    # Phase advances per logical step / degree
    move_scale: float = 100.0
    rotate_scale: float = 23.0

    # Seconds
    step_delay: float = 0.002
    stepper_delay: float = 0.001

    pi_blaster_device: str = AppConfig.PI_BLASTER_DEVICE
    gpio_root: str = AppConfig.GPIO_ROOT

    @classmethod
    def from_env(cls) -> "PiTurtleConfig":
        return cls(
            pi_blaster_device=os.getenv("JLOGO_PI_BLASTER", AppConfig.PI_BLASTER_DEVICE),
            gpio_root=os.getenv("JLOGO_GPIO_ROOT", AppConfig.GPIO_ROOT),
        )
