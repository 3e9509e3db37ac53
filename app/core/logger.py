"""표준화된 로거 모듈.

`configure_logging()` 이전에 import되는 모듈도 같은 형식으로 출력하도록
로거 단위 핸들러를 보장합니다.
"""

import logging
import sys

from app.core.logging_config import LOG_DATE_FORMAT, LOG_FORMAT, resolve_log_level


def get_logger(name: str) -> logging.Logger:
    """표준화된 로거를 반환합니다.

    `app` 패키지 하위 로거는 dictConfig의 `app` 핸들러로 전파되므로 별도 핸들러를
    붙이지 않습니다. 그 외 로거(스크립트, 테스트 등)에만 stdout 핸들러를 추가합니다.

    Args:
        name: 로거 이름 (일반적으로 __name__ 사용).

    Returns:
        설정된 로거 인스턴스.
    """
    logger = logging.getLogger(name)

    if name == "app" or name.startswith("app."):
        return logger

    if not logger.handlers:
        level = resolve_log_level()
        logger.setLevel(level)

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)

    return logger
