import pytest

from c8vm.runtime.vm import VM


@pytest.fixture
def vm():
    yield VM(seed=1234)


@pytest.fixture
def slow_vm():
    # 600 instructions per second, 10 per timer tick
    yield VM(cycles_per_second=600, seed=1234)
