# jlogo/hardware/servo.py
from ..errors import AngleRangeError, DutyCycleRangeError, RangeError


class PWMServo:
    """Maps an angle in [min_angle, max_angle] linearly onto a PWM duty cycle."""

    def __init__(self, pwm, min_angle: float, max_angle: float, min_duty_cycle: float, max_duty_cycle: float):
        if max_angle <= min_angle:
            raise AngleRangeError()
        if max_duty_cycle <= min_duty_cycle:
            raise DutyCycleRangeError()
        self.pwm = pwm
        self.min_angle = min_angle
        self.max_angle = max_angle
        self.min_duty_cycle = min_duty_cycle
        self.max_duty_cycle = max_duty_cycle
        self._duty_per_degree = (max_duty_cycle - min_duty_cycle) / (max_angle - min_angle)

    def duty_cycle_for(self, deg: float) -> float:
        return self.min_duty_cycle + (deg - self.min_angle) * self._duty_per_degree

    def angle(self, deg: float):
        if deg < self.min_angle or deg > self.max_angle:
            raise RangeError(deg, self.min_angle, self.max_angle)
        self.pwm.duty_cycle(self.duty_cycle_for(deg))

    def __repr__(self):
        return (f"PWMServo(angle=[{self.min_angle}, {self.max_angle}], "
                f"duty_cycle=[{self.min_duty_cycle}, {self.max_duty_cycle}])")
