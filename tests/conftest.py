from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from homefinder.api.deps import create_access_token, get_store
from homefinder.api.main import app
from homefinder.models import User, UserRoleEnum
from tests.factories import InMemoryPropertyStore, make_user


@pytest.fixture
def store() -> InMemoryPropertyStore:
    return InMemoryPropertyStore()


@pytest.fixture
def user(store: InMemoryPropertyStore) -> User:
    return store.add_user(make_user())


@pytest.fixture
def admin_user(store: InMemoryPropertyStore) -> User:
    return store.add_user(make_user(UserRoleEnum.ADMIN))


@pytest.fixture
def auth_headers(user: User) -> dict:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    token = create_access_token({"sub": str(admin_user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def client(store: InMemoryPropertyStore) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_store] = lambda: store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
