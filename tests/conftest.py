import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient, Response
from pydantic import SecretStr

from narrator.core.deps import get_llm, get_store
from narrator.main import app
from narrator.plugins.llm.adapter import ResponsesChatModel
from narrator.plugins.store.http_client import DataStoreHTTPClient

COMPLETION_URL = "http://completion.test/v1"
STORE_URL = "http://store.test/rest/v1"
TEST_MODEL = "gpt-4o-mini"


@pytest.fixture
def llm():
    return ResponsesChatModel(
        base_url=COMPLETION_URL,
        api_key=SecretStr("sk-test"),
        model=TEST_MODEL,
    )


@pytest.fixture
def store():
    return DataStoreHTTPClient(base_url=STORE_URL, service_key="service-role-test")


@pytest.fixture(autouse=True)
def override_dependencies(llm, store):
    """
    외부 서비스 클라이언트를 테스트용 URL로 고정합니다.
    lifespan을 건너뛰므로 app.state.store, app.state.llm도 직접 설정합니다.
    """
    app.dependency_overrides[get_llm] = lambda: llm
    app.dependency_overrides[get_store] = lambda: store
    app.state.store = store
    app.state.llm = llm
    yield
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def mock_external_services(respx_mock):
    """
    외부 서비스 호출을 가로챕니다. 기본 응답은 각 테스트에서 덮어쓸 수 있습니다.
    """
    respx_mock.post(f"{COMPLETION_URL}/responses", name="completion").mock(
        return_value=Response(
            200, json={"output_text": "The door creaks open, revealing a dim corridor."}
        )
    )
    return respx_mock


@pytest_asyncio.fixture(scope="function")
async def client():
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as c:
        yield c
