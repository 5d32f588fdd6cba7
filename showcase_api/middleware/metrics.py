"""
Prometheus Metrics

API 메트릭 수집 및 노출

참조:
- prometheus-fastapi-instrumentator: https://github.com/trallnag/prometheus-fastapi-instrumentator
"""

import logging

from fastapi import FastAPI
from prometheus_client import Counter, Info
from prometheus_fastapi_instrumentator import Instrumentator, metrics

from ..config import settings

logger = logging.getLogger(__name__)

# ============================================================
# 커스텀 메트릭 정의
# ============================================================

# 인증 메트릭
AUTH_COUNTER = Counter(
    "showcase_auth_attempts_total",
    "Discord token resolution attempts",
    ["status"]  # success/failure
)

# 프로젝트 변경 메트릭
PROJECT_MUTATION_COUNTER = Counter(
    "showcase_project_mutations_total",
    "Project create/update/delete operations",
    ["action", "status"]  # action: create/update/delete
)

# 앱 정보
APP_INFO = Info(
    "showcase_api",
    "Application information"
)


def setup_metrics(app: FastAPI):
    """
    Prometheus 메트릭 설정

    ENABLE_METRICS가 켜진 경우 /metrics 엔드포인트 노출
    """
    if not settings.ENABLE_METRICS:
        return None

    APP_INFO.info({"version": settings.APP_VERSION})

    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        excluded_handlers=["/health", "/metrics", "/docs", "/redoc", "/openapi.json"],
    )
    instrumentator.add(
        metrics.default(
            metric_namespace="showcase",
            metric_subsystem="api",
        )
    )
    instrumentator.instrument(app)
    instrumentator.expose(app, include_in_schema=False, tags=["monitoring"])

    logger.info("Prometheus metrics initialized at /metrics")
    return instrumentator


# ============================================================
# 메트릭 기록 헬퍼 함수
# ============================================================

def record_auth_attempt(success: bool):
    """인증 시도 메트릭 기록"""
    AUTH_COUNTER.labels(status="success" if success else "failure").inc()


def record_project_mutation(action: str, success: bool):
    """프로젝트 변경 메트릭 기록"""
    PROJECT_MUTATION_COUNTER.labels(action=action, status="success" if success else "failure").inc()
