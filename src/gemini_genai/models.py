"""
Models: generateContent 호출 클라이언트
- contents 입력 정규화 → 요청 body 생성 → POST → GenerateContentResponse 파싱
- 백엔드(Developer API / Vertex AI)는 Client 생성 시점에 결정됨
- 재시도 없음, 실패는 TransportError / DeserializationError로 전파
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Union

import httpx
from pydantic import ValidationError

from .errors import (
    CancellationError,
    DeserializationError,
    InvalidArgumentError,
    TransportError,
)
from .types import Content, GenerateContentConfig, GenerateContentResponse, Part

if TYPE_CHECKING:
    from .client import Client

logger = logging.getLogger(__name__)

ContentsInput = Union[str, Content, Sequence[str], Sequence[Content]]


def normalize_contents(contents: Any) -> list[Content]:
    """
    지원하는 contents 입력을 list[Content]로 변환

    - str → user Content 1개 (text part 1개)
    - Content → 그대로
    - list[str] → user Content 1개 (문자열마다 part 1개, 순서 유지)
    - list[Content] → 그대로 (순서 유지)
    - dict → Content로 검증 (API 포맷 또는 필드명 포맷)
    """
    if isinstance(contents, str):
        return [Content.from_text(contents)]
    if isinstance(contents, Content):
        return [contents]
    if isinstance(contents, dict):
        return [_content_from_dict(contents)]

    if isinstance(contents, Sequence) and not isinstance(contents, (bytes, bytearray)):
        items = list(contents)
        if all(isinstance(item, str) for item in items) and items:
            return [Content(role="user", parts=[Part.from_text(t) for t in items])]
        if all(isinstance(item, (Content, dict)) for item in items):
            return [
                item if isinstance(item, Content) else _content_from_dict(item)
                for item in items
            ]

    raise InvalidArgumentError(
        f"지원하지 않는 contents 형태입니다: {type(contents).__name__}"
    )


def _content_from_dict(data: dict) -> Content:
    try:
        return Content.model_validate(data)
    except ValidationError as e:
        raise InvalidArgumentError(f"잘못된 Content dict: {e}") from e


def _error_message(response: httpx.Response) -> str:
    """Google API 에러 포맷 {"error": {"message": ...}} 에서 메시지 추출"""
    try:
        data = response.json()
    except ValueError:
        return response.reason_phrase or "HTTP error"
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return response.reason_phrase or "HTTP error"


class Models:
    """
    모델 관련 API (generateContent)

    Client.models 로 접근한다. 직접 생성하지 않는다.

    사용법:
        async with Client(api_key="...") as client:
            response = await client.models.generate_content(
                "gemini-2.0-flash-001", "하늘은 왜 파란가요?"
            )
            print(response.text)
    """

    def __init__(self, api_client: Client):
        self._api_client = api_client

    def build_url(self, model: str, method: str = "generateContent") -> str:
        """백엔드별 엔드포인트 URL (쿼리 파라미터 제외)"""
        return self._api_client.backend.url(model, method)

    @staticmethod
    def build_request(
        contents: Any,
        config: GenerateContentConfig | None = None,
    ) -> dict[str, Any]:
        """
        generateContent 요청 body 생성

        Gemini:
            {"contents": [...],
             "generationConfig": {...},        # 설정된 필드가 있을 때만
             "systemInstruction": {"parts": [{"text": "..."}]}}
        """
        body: dict[str, Any] = {
            "contents": [c.to_api_dict() for c in normalize_contents(contents)],
        }

        if config is not None:
            generation_config = config.generation_config()
            if generation_config:
                body["generationConfig"] = generation_config

            if config.system_instruction is not None:
                body["systemInstruction"] = {
                    "parts": [{"text": config.system_instruction}],
                }

        return body

    async def generate_content(
        self,
        model: str,
        contents: ContentsInput,
        config: GenerateContentConfig | None = None,
        *,
        cancellation: asyncio.Event | None = None,
    ) -> GenerateContentResponse:
        """
        generateContent API 호출

        Args:
            model: 모델 ID (예: "gemini-2.0-flash-001")
            contents: str / Content / list[str] / list[Content]
            config: 생성 파라미터
            cancellation: set 되면 진행 중인 요청을 중단하고 CancellationError 발생

        Returns:
            GenerateContentResponse

        Raises:
            InvalidArgumentError: model이 비었거나 contents 형태가 잘못됨
            TransportError: 2xx가 아닌 응답, 네트워크 오류
            DeserializationError: 응답 본문 파싱 실패
            CancellationError: cancellation 신호로 중단됨
        """
        if not isinstance(model, str) or not model:
            raise InvalidArgumentError("model이 필요합니다.")

        body = self.build_request(contents, config)
        url = self.build_url(model)
        log_context = self._log_context(model)

        logger.debug(
            f"[gemini] generateContent request: model={model}, "
            f"contents={len(body['contents'])}",
            extra=log_context,
        )

        response = await self._post(url, body, cancellation, log_context)
        result = self._parse_response(response)

        logger.debug(
            f"[gemini] response: candidates={len(result.candidates)}, "
            f"finish_reason="
            f"{result.candidates[0].finish_reason if result.candidates else None}",
            extra=log_context,
        )
        return result

    def _log_context(self, model: str) -> dict[str, str]:
        """JSON 로그에 실릴 호출 정보 (logging.CONTEXT_FIELDS)"""
        return {
            "model": model,
            "backend": self._api_client.backend.provider_name,
        }

    def generate_content_sync(
        self,
        model: str,
        contents: ContentsInput,
        config: GenerateContentConfig | None = None,
        *,
        cancellation: asyncio.Event | None = None,
    ) -> GenerateContentResponse:
        """
        generate_content()의 동기 버전 (완료될 때까지 블록)

        cancellation은 전용 루프에서 대기하므로 다른 스레드에서는
        client.sync_loop.call_soon_threadsafe(cancellation.set)으로 set 한다.
        """
        return self._api_client.run_sync(
            self.generate_content(model, contents, config, cancellation=cancellation)
        )

    async def _post(
        self,
        url: str,
        body: dict[str, Any],
        cancellation: asyncio.Event | None,
        log_context: dict[str, str],
    ) -> httpx.Response:
        if cancellation is None:
            return await self._send(url, body, log_context)

        if cancellation.is_set():
            raise CancellationError("요청 전에 취소되었습니다.")

        request_task = asyncio.ensure_future(self._send(url, body, log_context))
        cancel_task = asyncio.ensure_future(cancellation.wait())
        try:
            done, _ = await asyncio.wait(
                {request_task, cancel_task},
                return_when=asyncio.FIRST_COMPLETED,
            )
        except asyncio.CancelledError:
            request_task.cancel()
            raise
        finally:
            cancel_task.cancel()

        if request_task in done:
            return request_task.result()

        request_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await request_task
        logger.debug("[gemini] request cancelled by caller", extra=log_context)
        raise CancellationError("요청이 취소되었습니다.")

    async def _send(
        self,
        url: str,
        body: dict[str, Any],
        log_context: dict[str, str],
    ) -> httpx.Response:
        http = self._api_client.http
        try:
            response = await http.post(
                url,
                json=body,
                params=self._api_client.backend.params(),
            )
        except httpx.RequestError as e:
            raise TransportError(None, f"{type(e).__name__}: {e}") from e

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            message = _error_message(e.response)
            logger.warning(
                f"[gemini] API error {status}: {message}",
                extra={**log_context, "status_code": status},
            )
            raise TransportError(
                status_code=status,
                message=message,
                body=e.response.text,
            ) from e

        return response

    def _parse_response(self, response: httpx.Response) -> GenerateContentResponse:
        try:
            data = response.json()
        except ValueError as e:
            raise DeserializationError(
                f"JSON이 아닌 응답: {e}", body=response.text
            ) from e

        if not isinstance(data, dict):
            raise DeserializationError(
                f"응답이 JSON 객체가 아닙니다: {type(data).__name__}",
                body=response.text,
            )

        try:
            return GenerateContentResponse.from_api_response(data)
        except ValidationError as e:
            raise DeserializationError(str(e), body=response.text) from e
