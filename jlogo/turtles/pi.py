# jlogo/turtles/pi.py
import math
import time
from typing import Callable, Sequence, TextIO

from ..config import PiTurtleConfig
from ..errors import LogoError, TurtleError
from ..hardware import STANDARD_STEPPER_PATTERN, GPIOStepper, PiBlaster, PWMServo, init_gpio_pins
from ..utils.logger import get_logger
from .base import Turtle
from .text import TextTurtle

logger = get_logger(__name__)


class ServoPen:
    def __init__(self, servo, up_angle: float, down_angle: float):
        self.servo = servo
        self.up_angle = up_angle
        self.down_angle = down_angle

    def up(self):
        self.servo.angle(self.up_angle)

    def down(self):
        self.servo.angle(self.down_angle)


class PiTurtle(Turtle):
    """
    A two-wheeled robot. Straight moves turn both wheels the same way, rotations
    turn them in opposite directions. Once the hardware has finished, the
    wrapped turtle records the new position; if the hardware fails it is left
    untouched.
    """

    def __init__(self, pen: ServoPen, left_wheel, right_wheel, turtle: Turtle = None,
                 config: PiTurtleConfig = None, sleep: Callable[[float], None] = time.sleep,
                 devices: Sequence = ()):
        config = config or PiTurtleConfig()
        self.turtle = turtle if turtle is not None else TextTurtle()
        self.pen = pen
        self.left_wheel = left_wheel
        self.right_wheel = right_wheel
        self.move_scale = config.move_scale
        self.rotate_scale = config.rotate_scale
        self.delay = config.step_delay
        self.sleep = sleep
        # device handles released on close
        self.devices = list(devices)

    def _drive(self, count: int, left_dir: int, right_dir: int):
        for _ in range(count):
            self.left_wheel.step_one(left_dir)
            self.right_wheel.step_one(right_dir)
            self.sleep(self.delay)

    @staticmethod
    def _phases(value: float, scale: float):
        """Direction and number of phase advances needed for value."""
        count = abs(value) * scale
        if not math.isfinite(count):
            raise TurtleError(f"cannot drive the wheels through {value}")
        return (-1 if value < 0 else 1), math.ceil(count)

    def move(self, steps):
        direction, count = self._phases(steps, self.move_scale)
        # TODO calibrate move_scale against the real wheel circumference
        self._drive(count, direction, direction)
        return self.turtle.move(steps)

    def rotate(self, deg):
        direction, count = self._phases(deg, self.rotate_scale)
        self._drive(count, direction, -direction)
        return self.turtle.rotate(deg)

    def pen_up(self, state):
        if state:
            self.pen.up()
        else:
            self.pen.down()
        self.sleep(self.delay)
        return self.turtle.pen_up(state)

    def state(self):
        return self.turtle.state()

    def close(self):
        """Lifts the pen so the robot never drags it after shutdown."""
        try:
            self.pen_up(True)
        finally:
            try:
                self.turtle.close()
            finally:
                close_devices(self.devices)
                self.devices = []


def close_devices(devices):
    for device in devices:
        device.close()


def new_wheel(pins, config: PiTurtleConfig) -> GPIOStepper:
    lines = init_gpio_pins(pins, config.gpio_root)
    try:
        return GPIOStepper(lines, STANDARD_STEPPER_PATTERN, delay=config.stepper_delay)
    except LogoError:
        close_devices(lines)
        raise


def init_pi_turtle(config: PiTurtleConfig = None, output: TextIO = None) -> PiTurtle:
    """
    Builds the pen servo, both wheels and the turtle from the wiring in config.
    If any device fails, the ones already opened are closed again.
    """
    config = config or PiTurtleConfig.from_env()
    devices = []
    try:
        pwm = PiBlaster(config.pen_servo_pin, config.pi_blaster_device)
        devices.append(pwm)
        servo = PWMServo(pwm, config.min_angle, config.max_angle,
                         config.min_duty_cycle, config.max_duty_cycle)
        logger.info(f"Servo: {servo!r}")
        pen = ServoPen(servo, config.pen_up_angle, config.pen_down_angle)

        left_wheel = new_wheel(config.left_wheel_pins, config)
        devices.extend(left_wheel.lines)
        right_wheel = new_wheel(config.right_wheel_pins, config)
        devices.extend(right_wheel.lines)
    except LogoError as e:
        logger.error(f"Could not initialise the pi turtle: {e}")
        close_devices(devices)
        raise

    return PiTurtle(pen, left_wheel, right_wheel, turtle=TextTurtle(output), config=config,
                    devices=devices)
