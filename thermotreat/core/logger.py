# thermotreat/core/logger.py
import sys

from loguru import logger

from thermotreat.core.config import settings

LOG_FILE_NAME = "thermotreat_server.log"


def setup_logging() -> str:
    """
    Loguru 로그 설정을 초기화합니다.
    - Console: settings.LOG_LEVEL 이상
    - File: DEBUG 이상 (계산 단계별 디버그 로그 포함)
    """
    log_dir = settings.log_dir_path
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    # 기존 핸들러 제거 (중복 방지)
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.LOG_LEVEL,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
    )

    # 매일 자정 회전, 10일 보관, zip 압축
    logger.add(
        str(log_file),
        rotation="00:00",
        retention="10 days",
        compression="zip",
        level="DEBUG",
        enqueue=True,
        encoding="utf-8",
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{line} - {message}",
    )

    return str(log_file)
