"""
Global test configuration and fixtures
"""

import time

import pytest

from multibuild.config.settings import MultiBuildSettings
from tests.fakes import FakeBundler

# 느린 테스트 임계값 (초)
SLOW_TEST_THRESHOLD = 5.0
WARNING_TEST_THRESHOLD = 2.0


@pytest.fixture(autouse=True)
def track_test_duration(request):
    """모든 테스트의 실행 시간을 추적하고 느린 테스트 경고"""
    start_time = time.time()

    yield

    duration = time.time() - start_time
    test_name = request.node.nodeid

    if duration > SLOW_TEST_THRESHOLD:
        print(f"\nSLOW TEST ({duration:.2f}s): {test_name}")
        print("   Consider marking with @pytest.mark.slow or optimizing")
    elif duration > WARNING_TEST_THRESHOLD:
        print(f"\nSlow ({duration:.2f}s): {test_name}")


@pytest.fixture
def settings() -> MultiBuildSettings:
    """환경 변수와 무관한 기본 설정"""
    return MultiBuildSettings(_env_file=None, task_prefix="js", output_suffix=".js")


@pytest.fixture
def bundler() -> FakeBundler:
    """모듈 구성이 비어 있는 FakeBundler"""
    return FakeBundler()


# Pytest hooks
def pytest_configure(config):
    """pytest 설정"""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (medium speed)")
    config.addinivalue_line("markers", "slow: Slow tests (>5s)")


def pytest_collection_modifyitems(config, items):
    """테스트 수집 후 처리"""
    for item in items:
        # 경로 기반 자동 마커 추가
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
