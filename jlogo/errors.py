# jlogo/errors.py
from typing import Optional


class LogoError(Exception):
    """Base class for every user-facing failure while parsing or running a program."""

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self):
        if self.line is not None:
            return f"line {self.line}: {self.message}"
        return self.message


class ParseError(LogoError):
    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None, context: str = ""):
        super().__init__(message, line)
        self.column = column
        self.context = context

    def __str__(self):
        if self.line is not None and self.column is not None:
            return f"line {self.line}, column {self.column}: {self.message}"
        return super().__str__()


# --- Evaluation ---
class EvalError(LogoError):
    pass


class UnknownVariable(EvalError):
    def __init__(self, name: str, line: Optional[int] = None):
        super().__init__(f"unknown variable {name!r}", line)
        self.name = name


class EvalTypeError(EvalError):
    pass


# --- Turtle and hardware ---
class TurtleError(LogoError):
    pass


class DeviceError(TurtleError):
    pass


class RangeError(DeviceError):
    def __init__(self, value, low, high):
        super().__init__(f"value {value} out of range [{low}, {high}]")
        self.value = value


class AngleRangeError(DeviceError):
    def __init__(self):
        super().__init__("max angle not greater than min")


class DutyCycleRangeError(DeviceError):
    def __init__(self):
        super().__init__("max duty cycle not greater than min")


class NoPinsError(DeviceError):
    def __init__(self):
        super().__init__("no pins")


class BadPatternError(DeviceError):
    def __init__(self):
        super().__init__("pattern doesn't match pins")


class GPIOUnavailableError(DeviceError):
    def __init__(self, pin: int):
        super().__init__(f"gpio not available for pin {pin}, please install wiringpi")
        self.pin = pin


class PinUninitializedError(DeviceError):
    def __init__(self, pin: int):
        super().__init__(f"pin {pin} not initialized")
        self.pin = pin
