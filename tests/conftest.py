import io

import pytest

from fanconf import UID


@pytest.fixture
def fan_uid() -> UID:
    """Provides a generic fan UID."""
    return UID(chipname="it8728", hw_id=2, dev_name="fan1")


@pytest.fixture
def sensor_uid() -> UID:
    """Provides a generic temperature sensor UID."""
    return UID(chipname="coretemp", hw_id=1, dev_name="temp1_input")


@pytest.fixture
def nvidia_sensor_uid() -> UID:
    """Provides an NVIDIA temperature sensor UID."""
    return UID(chipname="nvidia", hw_id=0, dev_name="temp1_input")


@pytest.fixture
def config_text() -> str:
    """Provides a configuration file with two profiles."""
    return (
        "interval=1000\n"
        "threads=4\n"
        "profile=quiet\n"
        "dynamic=true\n"
        ">default\n"
        "it8728#2:fan1 coretemp#1:temp1_input\n"
        "30:0%\n"
        "50:1200\n"
        "70;255\n"
        ">quiet\n"
        "it8728#2:fan2 nvidia#0:temp1_input\n"
        "40;64\n"
        "80;200\n"
    )


@pytest.fixture
def config_stream(config_text: str) -> io.StringIO:
    """Provides the configuration file as a text stream."""
    return io.StringIO(config_text)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
