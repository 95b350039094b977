import pytest

from hangman.backend.security import generate_private_key


@pytest.fixture(scope="session")
def private_key():
    return generate_private_key(bits=2048)


@pytest.fixture(scope="session")
def other_private_key():
    return generate_private_key(bits=2048)
