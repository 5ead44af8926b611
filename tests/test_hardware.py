import subprocess

import pytest

from jlogo.errors import (
    AngleRangeError,
    BadPatternError,
    DeviceError,
    DutyCycleRangeError,
    GPIOUnavailableError,
    NoPinsError,
    PinUninitializedError,
    RangeError,
)
from jlogo.hardware import STANDARD_STEPPER_PATTERN, GPIOStepper, PiBlaster, PiGPIO, PWMServo, init_gpio_pins

from conftest import FakeLine, FakePWM, FakeSleep

PATTERN = (
    (True, False),
    (False, True),
    (False, False),
)


class TestStepperConstruction:
    def test_no_pins(self) -> None:
        with pytest.raises(NoPinsError):
            GPIOStepper([], PATTERN)

    def test_empty_pattern(self) -> None:
        with pytest.raises(BadPatternError):
            GPIOStepper([FakeLine(), FakeLine()], ())

    def test_row_length_mismatch(self) -> None:
        with pytest.raises(BadPatternError):
            GPIOStepper([FakeLine(), FakeLine(), FakeLine()], PATTERN)

    def test_standard_pattern_fits_four_lines(self) -> None:
        stepper = GPIOStepper([FakeLine() for _ in range(4)])
        assert stepper.pattern == STANDARD_STEPPER_PATTERN


class TestStepper:
    def setup_method(self) -> None:
        self.lines = [FakeLine(), FakeLine()]
        self.sleep = FakeSleep()
        self.stepper = GPIOStepper(self.lines, PATTERN, delay=0.01, sleep=self.sleep)

    def test_step_one_writes_next_phase(self) -> None:
        self.stepper.step_one(1)
        assert self.stepper.current_step == 1
        assert [line.values for line in self.lines] == [[False], [True]]

    def test_step_one_backwards_wraps(self) -> None:
        self.stepper.step_one(-1)
        assert self.stepper.current_step == 2
        assert [line.values[-1] for line in self.lines] == [False, False]

    def test_step_wraps_forward(self) -> None:
        self.stepper.step(4)
        assert self.stepper.current_step == 1
        assert self.sleep.calls == [0.01] * 4

    def test_negative_step(self) -> None:
        self.stepper.step(-2)
        assert self.stepper.current_step == 1
        assert len(self.sleep.calls) == 2

    def test_forward_and_backward(self) -> None:
        self.stepper.forward()
        self.stepper.forward()
        self.stepper.backward()
        assert self.stepper.current_step == 1

    def test_failure_aborts_without_rollback(self) -> None:
        self.lines[1].fail_after = 2
        with pytest.raises(DeviceError):
            self.stepper.step(5)
        # third phase advance reached the index before the write failed
        assert self.stepper.current_step == 0
        assert len(self.sleep.calls) == 2


class TestServo:
    def test_angle_range_must_increase(self) -> None:
        with pytest.raises(AngleRangeError):
            PWMServo(FakePWM(), 90, 90, 0.05, 0.2)

    def test_duty_cycle_range_must_increase(self) -> None:
        with pytest.raises(DutyCycleRangeError):
            PWMServo(FakePWM(), 0, 90, 0.2, 0.05)

    def test_linear_mapping(self) -> None:
        pwm = FakePWM()
        servo = PWMServo(pwm, 0, 90, 0.05, 0.2)
        servo.angle(0)
        servo.angle(45)
        servo.angle(90)
        assert pwm.duty_cycles == [pytest.approx(0.05), pytest.approx(0.125), pytest.approx(0.2)]

    def test_mapping_with_offset_range(self) -> None:
        pwm = FakePWM()
        PWMServo(pwm, -45, 45, 0.1, 0.2).angle(0)
        assert pwm.duty_cycles == [pytest.approx(0.15)]

    @pytest.mark.parametrize("angle", [-1, 90.5])
    def test_out_of_range_writes_nothing(self, angle) -> None:
        pwm = FakePWM()
        servo = PWMServo(pwm, 0, 90, 0.05, 0.2)
        with pytest.raises(RangeError):
            servo.angle(angle)
        assert pwm.duty_cycles == []


class TestPiBlaster:
    def test_writes_commands(self, tmp_path) -> None:
        device = tmp_path / "pi-blaster"
        device.write_text("")
        pwm = PiBlaster(18, str(device))
        pwm.duty_cycle(0.125)
        pwm.release()
        pwm.close()
        assert device.read_text() == "18=0.125000\nrelease 18\n"

    def test_missing_device(self, tmp_path) -> None:
        with pytest.raises(DeviceError):
            PiBlaster(18, str(tmp_path / "missing" / "pi-blaster"))


class TestPiGPIO:
    def _gpio_root(self, tmp_path, pins):
        for pin in pins:
            (tmp_path / f"gpio{pin}").mkdir()
            (tmp_path / f"gpio{pin}" / "value").write_text("")
        return str(tmp_path)

    def test_export_and_write(self, tmp_path, monkeypatch) -> None:
        commands = []
        monkeypatch.setattr(subprocess, "run", lambda cmd, **kwargs: commands.append(cmd))
        root = self._gpio_root(tmp_path, [6])

        line = PiGPIO(6, root)
        line.enable(True)
        line.enable(False)
        line.close()

        assert commands == [["gpio", "export", "6", "out"]]
        assert (tmp_path / "gpio6" / "value").read_text() == "10"

    def test_gpio_utility_missing(self, tmp_path, monkeypatch) -> None:
        def missing(cmd, **kwargs):
            raise FileNotFoundError("gpio")

        monkeypatch.setattr(subprocess, "run", missing)
        with pytest.raises(GPIOUnavailableError):
            PiGPIO(6, str(tmp_path))

    def test_value_file_missing(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setattr(subprocess, "run", lambda cmd, **kwargs: None)
        with pytest.raises(PinUninitializedError):
            PiGPIO(6, str(tmp_path))

    def test_write_after_close(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setattr(subprocess, "run", lambda cmd, **kwargs: None)
        line = PiGPIO(6, self._gpio_root(tmp_path, [6]))
        line.close()
        with pytest.raises(PinUninitializedError):
            line.enable(True)

    def test_init_gpio_pins_stops_at_first_failure(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setattr(subprocess, "run", lambda cmd, **kwargs: None)
        root = self._gpio_root(tmp_path, [6, 13])
        assert [line.pin for line in init_gpio_pins([6, 13], root)] == [6, 13]
        with pytest.raises(PinUninitializedError):
            init_gpio_pins([6, 19, 13], root)
