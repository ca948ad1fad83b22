import pytest

from urbansim.agent.vehicle import Vehicle
from urbansim.config import Config


@pytest.fixture
def config():
    return Config()


@pytest.fixture(autouse=True)
def reset_vehicle_ids():
    Vehicle.reset_id_counter()
    yield
    Vehicle.reset_id_counter()
