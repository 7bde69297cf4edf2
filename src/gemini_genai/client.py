"""
Gemini Developer API / Vertex AI 최상위 클라이언트
- 생성 시점에 백엔드를 한 번 결정 (Developer API 또는 Vertex AI)
- httpx.AsyncClient 하나를 수명 동안 공유 (내부 락 없음, 호출 중 상태 변경 없음)
- client.models 로 generateContent 호출
- async context manager 지원
"""

from __future__ import annotations

import asyncio
import logging
import os
import threading
from collections.abc import Coroutine
from typing import Any, TypeVar

import httpx

from ._types import Backend, DeveloperApiBackend, HttpOptions, VertexAIBackend
from .errors import ConfigurationError
from .models import Models

logger = logging.getLogger(__name__)

# 앞에 있는 환경변수가 우선
API_KEY_ENV_VARS = ("GOOGLE_API_KEY", "GEMINI_API_KEY")

T = TypeVar("T")


def api_key_from_env() -> str | None:
    """GOOGLE_API_KEY → GEMINI_API_KEY 순서로 처음 설정된 값"""
    for name in API_KEY_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return None


def resolve_backend(
    api_key: str | None = None,
    vertexai: bool = False,
    project: str | None = None,
    location: str | None = None,
) -> Backend:
    """
    생성자 인자로부터 백엔드를 결정한다.

    - vertexai=True: project, location 필수. api_key와 함께 쓸 수 없음
    - project/location만 있고 vertexai=False: ConfigurationError
    - 그 외: Developer API (api_key 또는 환경변수, 없어도 허용)
    """
    if vertexai:
        if api_key:
            raise ConfigurationError(
                "api_key와 vertexai=True는 함께 사용할 수 없습니다."
            )
        if not project or not location:
            raise ConfigurationError(
                "Vertex AI 모드에는 project와 location이 모두 필요합니다."
            )
        return VertexAIBackend(project=project, location=location)

    if project or location:
        raise ConfigurationError(
            "project/location을 사용하려면 vertexai=True가 필요합니다."
        )

    return DeveloperApiBackend(api_key=api_key or api_key_from_env())


class Client:
    """
    Google Generative AI 클라이언트

    사용법:
        # Developer API (GOOGLE_API_KEY / GEMINI_API_KEY 환경변수 fallback)
        async with Client(api_key="...") as client:
            response = await client.models.generate_content(
                "gemini-2.0-flash-001", "안녕"
            )

        # Vertex AI (인증 헤더는 HttpOptions.headers로 주입)
        client = Client(vertexai=True, project="my-project", location="us-central1")
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        vertexai: bool = False,
        project: str | None = None,
        location: str | None = None,
        http_options: HttpOptions | None = None,
    ):
        self._backend = resolve_backend(api_key, vertexai, project, location)
        if isinstance(self._backend, DeveloperApiBackend) and not self._backend.api_key:
            # 호출 시점에 서버가 거절하면 TransportError로 전파된다
            logger.warning(
                "[gemini] API 키가 없습니다. "
                f"{' 또는 '.join(API_KEY_ENV_VARS)} 환경변수를 설정하세요."
            )

        self._http_options = http_options or HttpOptions()
        self._http = self._create_http(self._http_options)
        self._models = Models(self)
        self._sync_loop: asyncio.AbstractEventLoop | None = None
        self._sync_thread: threading.Thread | None = None
        self._sync_lock = threading.Lock()

        logger.debug(f"[gemini] client created: backend={type(self._backend).__name__}")

    @staticmethod
    def _create_http(options: HttpOptions) -> httpx.AsyncClient:
        kwargs: dict[str, Any] = {
            "headers": {"Content-Type": "application/json", **options.headers},
            "timeout": httpx.Timeout(options.timeout, connect=10.0),
        }
        if options.transport is not None:
            kwargs["transport"] = options.transport
        return httpx.AsyncClient(**kwargs)

    @property
    def backend(self) -> Backend:
        return self._backend

    @property
    def vertexai(self) -> bool:
        return isinstance(self._backend, VertexAIBackend)

    @property
    def http(self) -> httpx.AsyncClient:
        return self._http

    @property
    def http_options(self) -> HttpOptions:
        return self._http_options

    @property
    def models(self) -> Models:
        return self._models

    @property
    def sync_loop(self) -> asyncio.AbstractEventLoop | None:
        """동기 호출용 전용 루프 (첫 동기 호출 전에는 None)"""
        return self._sync_loop

    def _ensure_sync_loop(self) -> asyncio.AbstractEventLoop:
        with self._sync_lock:
            if self._sync_loop is None:
                loop = asyncio.new_event_loop()
                thread = threading.Thread(
                    target=loop.run_forever,
                    name="gemini-genai-sync",
                    daemon=True,
                )
                thread.start()
                self._sync_loop = loop
                self._sync_thread = thread
            return self._sync_loop

    def run_sync(self, coro: Coroutine[Any, Any, T]) -> T:
        """
        코루틴을 클라이언트 전용 이벤트 루프에서 완료까지 실행

        httpx 커넥션은 루프에 묶이므로 동기 호출은 항상 같은 루프를 재사용한다.
        루프는 백그라운드 스레드에서 돌고 있어 여러 스레드가 동시에 호출할 수 있다.
        """
        loop = self._ensure_sync_loop()
        return asyncio.run_coroutine_threadsafe(coro, loop).result()

    async def close(self) -> None:
        """HTTP 클라이언트 종료 (여러 번 호출해도 안전)"""
        if not self._http.is_closed:
            await self._http.aclose()
            logger.debug("[gemini] http client closed")

    def close_sync(self) -> None:
        """close()의 동기 버전. 동기 호출용 루프와 스레드도 함께 정리한다."""
        self.run_sync(self.close())

        with self._sync_lock:
            loop, thread = self._sync_loop, self._sync_thread
            self._sync_loop = None
            self._sync_thread = None

        if loop is not None:
            loop.call_soon_threadsafe(loop.stop)
            thread.join()
            loop.close()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc) -> None:
        self.close_sync()
