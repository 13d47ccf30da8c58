import pytest

from app_driver.core.binding import ManualBinding, SchedulerBinding


@pytest.fixture()
def binding():
    b = ManualBinding()
    SchedulerBinding.install(b)
    yield b
    SchedulerBinding.reset()
