import pytest

from eddsa_poseidon import BN254_FR, poseidon_config


# Constant generation takes a moment in pure Python, share one config
@pytest.fixture(scope="session")
def config():
  return poseidon_config(BN254_FR)
