"""
로깅 설정

모듈별 logger = logging.getLogger(__name__) 를 사용하고,
레벨/포맷은 앱 기동 시 한 번만 설정한다.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO"):
    """루트 로거 설정"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    # SQL 로그는 DEBUG 설정(engine echo)으로만 출력
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
