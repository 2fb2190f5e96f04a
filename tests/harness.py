"""Test harness for unit and E2E tests.

Settings are loaded from environment variables (configure via .env or export).
"""

import pytest_asyncio

from threadline.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - in-memory item source seeded with the sample story
        unit_env = create_env_fixture()

        @pytest.mark.asyncio
        async def test_open_thread(unit_env):
            use_case = await unit_env.get(OpenThreadUseCase)
            response = await use_case.execute(OpenThreadRequest(story_id=100))
            assert response.snapshot.is_open
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment
