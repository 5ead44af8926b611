"""
Device-file backends for the Raspberry Pi: pi-blaster for PWM and the sysfs
GPIO interface for digital output lines.
"""
import os
import subprocess
from typing import List, Sequence

from ..config import AppConfig
from ..errors import DeviceError, GPIOUnavailableError, PinUninitializedError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class PiBlaster:
    """One PWM channel of the pi-blaster daemon."""

    def __init__(self, pin: int, device_path: str = None):
        self.pin = pin
        self.device_path = device_path or AppConfig.PI_BLASTER_DEVICE
        try:
            self.handle = open(self.device_path, "w")
        except OSError as e:
            raise DeviceError(f"could not open {self.device_path}: {e}") from e
        logger.info(f"PWM on pin {pin} via {self.device_path}")

    def _write(self, command: str):
        try:
            self.handle.write(command + "\n")
            self.handle.flush()
        except OSError as e:
            raise DeviceError(f"write to {self.device_path} failed: {e}") from e

    def duty_cycle(self, dc: float):
        self._write(f"{self.pin}={dc:f}")

    def release(self):
        self._write(f"release {self.pin}")

    def close(self):
        self.handle.close()


class PiGPIO:
    """A single GPIO line exported as an output."""

    def __init__(self, pin: int, gpio_root: str = None):
        self.pin = pin
        self.handle = None
        gpio_root = gpio_root or AppConfig.GPIO_ROOT

        cmd = ["gpio", "export", str(pin), "out"]
        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True, timeout=10)
        except (OSError, subprocess.SubprocessError) as e:
            logger.error(f"Failed to run gpio: {e} ({' '.join(cmd)})")
            raise GPIOUnavailableError(pin) from e

        value_path = os.path.join(gpio_root, f"gpio{pin}", "value")
        try:
            self.handle = open(value_path, "w")
        except OSError as e:
            logger.error(f"Failed to open gpio pin: {e}")
            raise PinUninitializedError(pin) from e

    def enable(self, value: bool):
        if self.handle is None:
            raise PinUninitializedError(self.pin)
        try:
            self.handle.write("1" if value else "0")
            self.handle.flush()
        except OSError as e:
            raise DeviceError(f"write to gpio{self.pin} failed: {e}") from e

    def close(self):
        if self.handle is not None:
            self.handle.close()
            self.handle = None


def init_gpio_pins(pins: Sequence[int], gpio_root: str = None) -> List[PiGPIO]:
    """Exports every pin in order; the first failure closes the lines opened so far and is raised."""
    lines = []
    try:
        for pin in pins:
            lines.append(PiGPIO(pin, gpio_root))
    except DeviceError:
        for line in lines:
            line.close()
        raise
    return lines
