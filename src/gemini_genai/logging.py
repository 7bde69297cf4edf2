"""
로깅 설정 유틸
- setup_logging()으로 gemini_genai 전체 로거 설정
- JSON 포맷 옵션 (구조화 로깅)
- Developer API URL의 ?key= 값은 로그에 남기지 않는다 (RedactApiKeyFilter)
- 라이브러리는 import 시점에 로깅을 설정하지 않는다
"""

from __future__ import annotations

import json
import logging
import re
import sys
from typing import Literal

GENAI_LOGGER_NAME = "gemini_genai"

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Models가 extra로 남기는 호출 정보
CONTEXT_FIELDS = ("model", "backend", "status_code")

# httpx는 INFO 레벨에서 요청 URL 전체를 남긴다
_API_KEY_PATTERN = re.compile(r"([?&]key=)[^&\s\"']+")


def redact_api_key(text: str) -> str:
    """URL 쿼리의 key= 값을 ***로 치환"""
    return _API_KEY_PATTERN.sub(r"\1***", text)


class RedactApiKeyFilter(logging.Filter):
    """로그 메시지에서 API 키를 가리는 필터"""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_api_key(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


class JSONFormatter(logging.Formatter):
    """
    JSON 구조화 로그 포매터

    logger.debug(..., extra={"model": ..., "backend": ...})로 넘긴
    호출 정보(CONTEXT_FIELDS)는 최상위 키로 함께 기록된다.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": self.formatTime(record, DEFAULT_DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_entry[field] = value
        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, ensure_ascii=False)


def setup_logging(
    level: int | str = logging.INFO,
    format: Literal["text", "json"] = "text",
    stream: object = None,
    include_http: bool = False,
) -> logging.Logger:
    """
    gemini_genai 루트 로거를 설정한다.

    Args:
        level: 로그 레벨 (예: logging.DEBUG, "DEBUG")
        format: 로그 포맷 ("text" 또는 "json")
        stream: 출력 스트림 (기본: sys.stderr)
        include_http: True면 httpx 로거도 같은 핸들러로 출력 (키는 가려짐)

    Returns:
        설정된 gemini_genai 루트 로거
    """
    logger = logging.getLogger(GENAI_LOGGER_NAME)

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level)

    # 기존 핸들러 제거 (중복 방지)
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.addFilter(RedactApiKeyFilter())

    if format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT)
        )

    logger.addHandler(handler)

    if include_http:
        http_logger = logging.getLogger("httpx")
        http_logger.setLevel(level)
        http_logger.handlers = [
            h for h in http_logger.handlers
            if not any(isinstance(f, RedactApiKeyFilter) for f in h.filters)
        ]
        http_logger.addHandler(handler)

    return logger
