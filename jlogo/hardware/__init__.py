from .devices import PiBlaster, PiGPIO, init_gpio_pins
from .servo import PWMServo
from .stepper import STANDARD_STEPPER_PATTERN, GPIOStepper
